"""Pricers: discounting pricers for swaps and Monte Carlo pricers for options.

Product pricers live in the submodules: ``swap`` (discounting), ``swaption``,
``cms`` and ``ratchet`` (LMM-DDD Monte Carlo).
"""
