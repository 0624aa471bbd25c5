"""Purchase frequency by price band.

Answers "how many units were bought in each price band?", optionally
restricted to an inclusive date window. Counts are quantity-weighted:
a purchase of three units adds three to its band.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from purchase_insights.foundation.date_range import DateRange
from purchase_insights.foundation.errors import IntegrityError
from purchase_insights.foundation.price_bands import PRICE_BANDS, classify_price
from purchase_insights.foundation.records import Product, Purchase


@dataclass(frozen=True)
class PurchaseFrequencyBucket:
    """Accumulated quantity for one price band.

    Attributes
    ----------
    range:
        Label of the price band.
    count:
        Sum of purchase quantities whose product price falls in the band.
    """

    range: str
    count: int

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError(f"Bucket count cannot be negative: {self.count}")


def calculate_purchase_frequency(
    purchases: Iterable[Purchase],
    products: Iterable[Product],
    date_range: DateRange | None = None,
) -> list[PurchaseFrequencyBucket]:
    """Distribute purchased quantities across the fixed price bands.

    Parameters
    ----------
    purchases:
        Raw purchase records.
    products:
        Raw product records, used to resolve each purchase's price.
    date_range:
        Optional inclusive window from
        :func:`~purchase_insights.foundation.date_range.parse_date_range`.
        ``None`` counts every purchase.

    Returns
    -------
    list[PurchaseFrequencyBucket]
        Exactly one bucket per band, in band order, including empty bands.

    Raises
    ------
    IntegrityError
        A purchase inside the window references a product that does not
        exist. The whole query fails; no partial histogram is returned.

    Examples
    --------
    >>> from datetime import date
    >>> products = [Product("P1", "Mug", 20000), Product("P2", "Kettle", 25000)]
    >>> purchases = [
    ...     Purchase("1", "C1", "P1", 3, date(2024, 1, 1)),
    ...     Purchase("2", "C1", "P2", 2, date(2024, 1, 2)),
    ... ]
    >>> [b.count for b in calculate_purchase_frequency(purchases, products)][:3]
    [3, 2, 0]
    """

    prices = {product.id: product.price for product in products}
    counts = [0] * len(PRICE_BANDS)

    for purchase in purchases:
        if date_range is not None and not date_range.contains(purchase.date):
            continue
        price = prices.get(purchase.product_id)
        if price is None:
            raise IntegrityError("product", purchase.product_id, purchase.id)
        counts[classify_price(price)] += purchase.quantity

    return [
        PurchaseFrequencyBucket(range=band.label, count=count)
        for band, count in zip(PRICE_BANDS, counts)
    ]
