"""Product model: rate computations, resolved swaps, swaptions and CMS coupons."""
