"""Itemised purchase history of a single customer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from purchase_insights.foundation.errors import IntegrityError, NotFoundError
from purchase_insights.foundation.records import Customer, Product, Purchase


@dataclass(frozen=True)
class CustomerPurchaseDetail:
    """A purchase joined with the product it refers to.

    ``price`` is the product's unit price, the same figure the customer
    summary adds per purchase record.
    """

    id: str
    customer_id: str
    product_id: str
    product_name: str
    price: int
    purchase_date: date
    thumbnail: str


def get_customer_purchase_details(
    customer_id: str,
    customers: Iterable[Customer],
    purchases: Iterable[Purchase],
    products: Iterable[Product],
) -> list[CustomerPurchaseDetail]:
    """Return one detail record per purchase made by ``customer_id``.

    Records are ordered by purchase date, then purchase id, so repeated
    calls return the same sequence regardless of storage order.

    Raises
    ------
    NotFoundError
        No customer has the given id. A known customer without purchases
        yields an empty list instead.
    IntegrityError
        One of the customer's purchases references an unknown product.
    """

    if not any(customer.id == customer_id for customer in customers):
        raise NotFoundError("customer", customer_id)

    product_index = {product.id: product for product in products}
    own_purchases = sorted(
        (purchase for purchase in purchases if purchase.customer_id == customer_id),
        key=lambda purchase: (purchase.date, purchase.id),
    )

    details: list[CustomerPurchaseDetail] = []
    for purchase in own_purchases:
        product = product_index.get(purchase.product_id)
        if product is None:
            raise IntegrityError("product", purchase.product_id, purchase.id)
        details.append(
            CustomerPurchaseDetail(
                id=purchase.id,
                customer_id=purchase.customer_id,
                product_id=product.id,
                product_name=product.name,
                price=product.price,
                purchase_date=purchase.date,
                thumbnail=product.thumbnail,
            )
        )
    return details
