"""Fixed price bands used to bucket purchases.

Ten ordered, non-overlapping bands cover every non-negative price. Band
identity is positional: index ``0`` is the cheapest band. The labels are
the ones shown by the reporting front end and must not be changed.
"""

from __future__ import annotations

import math
from bisect import bisect_left
from dataclasses import dataclass


@dataclass(frozen=True)
class PriceBand:
    """A single price interval.

    The upper bound is always inclusive. The lower bound is exclusive
    except where ``lower_inclusive`` is set (the first and last bands).
    """

    lower: float
    upper: float
    label: str
    lower_inclusive: bool = False

    def contains(self, price: float) -> bool:
        above = price >= self.lower if self.lower_inclusive else price > self.lower
        return above and price <= self.upper


PRICE_BANDS: tuple[PriceBand, ...] = (
    PriceBand(0, 20000, "2만원 이하", lower_inclusive=True),
    PriceBand(20000, 30000, "2만원 초과 ~ 3만원"),
    PriceBand(30000, 40000, "3만원 초과 ~ 4만원"),
    PriceBand(40000, 50000, "4만원 초과 ~ 5만원"),
    PriceBand(50000, 60000, "5만원 초과 ~ 6만원"),
    PriceBand(60000, 70000, "6만원 초과 ~ 7만원"),
    PriceBand(70000, 80000, "7만원 초과 ~ 8만원"),
    PriceBand(80000, 90000, "8만원 초과 ~ 9만원"),
    PriceBand(90000, 99999, "9만원 초과 ~ 10만원 미만"),
    PriceBand(100000, math.inf, "10만원 이상", lower_inclusive=True),
)

PRICE_BAND_LABELS: tuple[str, ...] = tuple(band.label for band in PRICE_BANDS)

_UPPER_BOUNDS = tuple(band.upper for band in PRICE_BANDS)


def _table_is_well_formed(bands: tuple[PriceBand, ...]) -> bool:
    if len(bands) != 10:
        return False
    if bands[0].lower != 0 or not bands[0].lower_inclusive:
        return False
    if bands[-1].upper != math.inf:
        return False
    for previous, current in zip(bands, bands[1:]):
        if current.lower_inclusive:
            # Integer prices: [n, ...) follows (..., n - 1] with no gap.
            contiguous = current.lower == previous.upper + 1
        else:
            contiguous = current.lower == previous.upper
        if not contiguous or current.upper <= current.lower:
            return False
    return True


assert _table_is_well_formed(PRICE_BANDS), "price band table is not contiguous"


def classify_price(price: float) -> int:
    """Return the index of the band containing ``price``.

    Examples
    --------
    >>> classify_price(20000)
    0
    >>> classify_price(20001)
    1
    >>> classify_price(99999)
    8
    >>> classify_price(100000)
    9
    """

    if price < 0:
        raise ValueError(f"Price cannot be negative: {price}")
    # First band whose inclusive upper bound reaches the price.
    return bisect_left(_UPPER_BOUNDS, price)
