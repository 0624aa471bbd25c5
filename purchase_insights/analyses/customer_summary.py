"""Per-customer purchase count and spend, with name search and sorting.

Units differ from the frequency query on purpose: ``total_purchases``
counts purchase *records* and ``total_amount`` adds the product's unit
price once per record. Quantities are not applied here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from purchase_insights.foundation.errors import IntegrityError, ValidationError
from purchase_insights.foundation.records import Customer, Product, Purchase


class SortOrder(str, Enum):
    """Supported orderings of the customer summary."""

    ID = "id"
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class CustomerSummary:
    """Aggregated purchase activity for one customer."""

    id: str
    name: str
    total_purchases: int
    total_amount: int

    def __post_init__(self) -> None:
        if self.total_purchases < 0:
            raise ValueError(
                f"Total purchases cannot be negative: {self.total_purchases} (customer_id={self.id})"
            )
        if self.total_amount < 0:
            raise ValueError(
                f"Total amount cannot be negative: {self.total_amount} (customer_id={self.id})"
            )


def parse_sort_order(value: SortOrder | str | None) -> SortOrder:
    """Normalise a sort parameter; ``None`` and ``""`` mean :attr:`SortOrder.ID`."""

    if value is None or value == "":
        return SortOrder.ID
    try:
        return SortOrder(value)
    except ValueError as exc:
        choices = ", ".join(order.value for order in SortOrder)
        raise ValidationError(
            "invalid sort order", f"{value!r} is not one of {choices}"
        ) from exc


def summarize_customers(
    customers: Iterable[Customer],
    purchases: Iterable[Purchase],
    products: Iterable[Product],
    *,
    name_filter: str | None = None,
    sort_order: SortOrder | str | None = SortOrder.ID,
) -> list[CustomerSummary]:
    """Summarise purchase count and spend for every customer.

    Parameters
    ----------
    customers, purchases, products:
        Raw entity collections.
    name_filter:
        Keep only customers whose name contains this text. The match is
        case-sensitive and unanchored. ``None`` or ``""`` disables it.
    sort_order:
        ``"id"`` sorts by customer id; ``"asc"``/``"desc"`` sort by total
        amount, ties broken by id ascending.

    Returns
    -------
    list[CustomerSummary]
        One entry per retained customer, including customers with no
        purchases (reported with zero totals).

    Raises
    ------
    ValidationError
        ``sort_order`` is not one of the supported values.
    IntegrityError
        A purchase references an unknown product or customer.
    """

    order = parse_sort_order(sort_order)
    customer_list = list(customers)
    known_customers = {customer.id for customer in customer_list}
    prices = {product.id: product.price for product in products}

    counts: dict[str, int] = {}
    amounts: dict[str, int] = {}
    for purchase in purchases:
        if purchase.customer_id not in known_customers:
            raise IntegrityError("customer", purchase.customer_id, purchase.id)
        price = prices.get(purchase.product_id)
        if price is None:
            raise IntegrityError("product", purchase.product_id, purchase.id)
        counts[purchase.customer_id] = counts.get(purchase.customer_id, 0) + 1
        amounts[purchase.customer_id] = amounts.get(purchase.customer_id, 0) + price

    summaries = [
        CustomerSummary(
            id=customer.id,
            name=customer.name,
            total_purchases=counts.get(customer.id, 0),
            total_amount=amounts.get(customer.id, 0),
        )
        for customer in customer_list
        if not name_filter or name_filter in customer.name
    ]

    if order is SortOrder.ID:
        summaries.sort(key=lambda summary: summary.id)
    elif order is SortOrder.ASC:
        summaries.sort(key=lambda summary: (summary.total_amount, summary.id))
    else:
        summaries.sort(key=lambda summary: (-summary.total_amount, summary.id))
    return summaries
