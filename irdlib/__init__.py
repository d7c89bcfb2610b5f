"""Interest Rate Derivatives Pricing Library.

This package prices interest rate derivatives by Monte Carlo simulation in a
Libor Market Model with displaced diffusion and deterministic multiplicative
spreads (LMM-DDD), on top of discounting and projection curves.

Key modules:
- conventions: Day counts, calendars, indices and leg conventions
- schedule: Payment schedule generation
- curves: Discount and projection curves, rates provider
- instruments: Swaps, swaptions, CMS and ratchet products
- models: LMM-DDD parameters and path evolution
- pricer: Multi-curve decomposition, discounting and Monte Carlo pricers
"""

__version__ = "0.1.0"
