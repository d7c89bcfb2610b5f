"""Discount factors rebased by the terminal numeraire."""

import numpy as np


def rebased_discount_factors(forwards: np.ndarray, accrual_factors: np.ndarray) -> np.ndarray:
    """Discount factors to each grid date divided by the one to the last date.

    The last entry is 1 and each earlier entry is the next one times
    ``1 + accrual * forward``.

    Args:
        forwards: Forwards, shape ``(..., periods)``
        accrual_factors: Accrual factor of each period

    Returns:
        Rebased discount factors, shape ``(..., periods + 1)``
    """
    forwards = np.asarray(forwards, dtype=float)
    nb_periods = forwards.shape[-1]
    if len(accrual_factors) != nb_periods:
        raise ValueError(
            f"{len(accrual_factors)} accrual factors for {nb_periods} forwards"
        )
    rebased = np.empty(forwards.shape[:-1] + (nb_periods + 1,))
    rebased[..., nb_periods] = 1.0
    for i in range(nb_periods - 1, -1, -1):
        rebased[..., i] = rebased[..., i + 1] * (1.0 + forwards[..., i] * accrual_factors[i])
    return rebased
