"""Entity records and the raw-record contract for purchase datasets.

The query engine works on three read-only collections: customers,
products and purchases. Raw records arrive from the data source as
JSON-like mappings using the source system's camelCase keys
(``customerId``, ``productId``); :func:`load_dataset` validates them and
returns an immutable :class:`Dataset` snapshot.

Referential integrity between purchases and the other two collections
is deliberately *not* checked here. It is enforced at query time so that
a dangling reference fails the affected query rather than the load.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterable, Mapping


@dataclass(frozen=True)
class Customer:
    """A customer as supplied by the data source."""

    id: str
    name: str


@dataclass(frozen=True)
class Product:
    """A catalogue product.

    Attributes
    ----------
    id:
        Unique product identifier.
    name:
        Display name, used by the purchase detail query.
    price:
        Unit price in whole currency units (KRW in the source system).
    thumbnail:
        Reference to the product image; empty when the source has none.
    """

    id: str
    name: str
    price: int
    thumbnail: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.price, bool) or not isinstance(self.price, int):
            raise TypeError(
                f"Product price must be an integer: {self.price!r} (product_id={self.id})"
            )
        if self.price < 0:
            raise ValueError(
                f"Product price cannot be negative: {self.price} (product_id={self.id})"
            )


@dataclass(frozen=True)
class Purchase:
    """A single purchase record referencing a customer and a product."""

    id: str
    customer_id: str
    product_id: str
    quantity: int
    date: date

    def __post_init__(self) -> None:
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise TypeError(
                f"Purchase quantity must be an integer: {self.quantity!r} (purchase_id={self.id})"
            )
        if self.quantity < 1:
            raise ValueError(
                f"Purchase quantity must be at least 1: {self.quantity} (purchase_id={self.id})"
            )
        if isinstance(self.date, datetime) or not isinstance(self.date, date):
            raise TypeError(
                f"Purchase date must be a date instance: {self.date!r} (purchase_id={self.id})"
            )


@dataclass(frozen=True)
class Dataset:
    """Immutable snapshot of the three entity collections."""

    customers: tuple[Customer, ...] = field(default_factory=tuple)
    products: tuple[Product, ...] = field(default_factory=tuple)
    purchases: tuple[Purchase, ...] = field(default_factory=tuple)

    def customer_index(self) -> dict[str, Customer]:
        return {customer.id: customer for customer in self.customers}

    def product_index(self) -> dict[str, Product]:
        return {product.id: product for product in self.products}


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = data.get(key)
        if value is not None and value != "":
            return value
    return None


def _require(
    data: Mapping[str, Any], collection: str, idx: int, *keys: str
) -> Any:
    value = _pick(data, *keys)
    if value is None:
        raise ValueError(
            f"Record missing required field '{keys[0]}'",
            {"collection": collection, "record_index": idx},
        )
    return value


def _coerce_int(value: Any, name: str, collection: str, idx: int) -> int:
    if isinstance(value, bool):
        raise TypeError(
            f"{name} must be an integer",
            {"collection": collection, "record_index": idx, "value": value},
        )
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise TypeError(
        f"{name} must be an integer",
        {"collection": collection, "record_index": idx, "value": value},
    )


def parse_purchase_date(value: Any) -> date:
    """Reduce a date, datetime or ISO 8601 string to a calendar date.

    A date-time with an offset keeps the calendar day at that offset.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            return datetime.fromisoformat(text).date()
    raise TypeError(f"Unsupported purchase date value: {value!r}")


def _check_unique(ids: Iterable[str], collection: str) -> None:
    seen: set[str] = set()
    for idx, item_id in enumerate(ids):
        if item_id in seen:
            raise ValueError(
                f"Duplicate id in {collection}",
                {"collection": collection, "record_index": idx, "id": item_id},
            )
        seen.add(item_id)


def load_customers(records: Iterable[Mapping[str, Any]]) -> tuple[Customer, ...]:
    customers: list[Customer] = []
    for idx, record in enumerate(records):
        # Blank names are allowed.
        name = record.get("name")
        if name is None:
            raise ValueError(
                "Record missing required field 'name'",
                {"collection": "customers", "record_index": idx},
            )
        customers.append(
            Customer(id=str(_require(record, "customers", idx, "id")), name=str(name))
        )
    _check_unique((c.id for c in customers), "customers")
    return tuple(customers)


def load_products(records: Iterable[Mapping[str, Any]]) -> tuple[Product, ...]:
    products: list[Product] = []
    for idx, record in enumerate(records):
        price = _coerce_int(
            _require(record, "products", idx, "price"), "price", "products", idx
        )
        if price < 0:
            raise ValueError(
                "Product price cannot be negative",
                {"collection": "products", "record_index": idx, "price": price},
            )
        products.append(
            Product(
                id=str(_require(record, "products", idx, "id")),
                name=str(_pick(record, "name") or ""),
                price=price,
                thumbnail=str(_pick(record, "thumbnail", "imageUrl") or ""),
            )
        )
    _check_unique((p.id for p in products), "products")
    return tuple(products)


def load_purchases(records: Iterable[Mapping[str, Any]]) -> tuple[Purchase, ...]:
    purchases: list[Purchase] = []
    for idx, record in enumerate(records):
        quantity = _coerce_int(
            _require(record, "purchases", idx, "quantity"),
            "quantity",
            "purchases",
            idx,
        )
        if quantity < 1:
            raise ValueError(
                "Purchase quantity must be at least 1",
                {"collection": "purchases", "record_index": idx, "quantity": quantity},
            )

        raw_date = _require(record, "purchases", idx, "date", "purchaseDate")
        try:
            purchase_date = parse_purchase_date(raw_date)
        except (TypeError, ValueError) as exc:
            raise ValueError(
                "Purchase date is not a valid ISO 8601 date",
                {"collection": "purchases", "record_index": idx, "value": raw_date},
            ) from exc

        purchases.append(
            Purchase(
                id=str(_require(record, "purchases", idx, "id")),
                customer_id=str(
                    _require(record, "purchases", idx, "customerId", "customer_id")
                ),
                product_id=str(
                    _require(record, "purchases", idx, "productId", "product_id")
                ),
                quantity=quantity,
                date=purchase_date,
            )
        )
    _check_unique((p.id for p in purchases), "purchases")
    return tuple(purchases)


def load_dataset(payload: Mapping[str, Any]) -> Dataset:
    """Validate a raw payload and return a :class:`Dataset` snapshot.

    Parameters
    ----------
    payload:
        Mapping with ``customers``, ``products`` and ``purchases`` lists of
        raw records. A missing collection is treated as empty.

    Raises
    ------
    ValueError
        A record is missing a required field, repeats an id, has a
        non-positive quantity, a negative price or an unparseable date.
    TypeError
        A numeric field is not an integer, or ``payload`` is not a mapping.
    """

    if not isinstance(payload, Mapping):
        raise TypeError(
            f"Dataset payload must be a mapping, got {type(payload).__name__}"
        )
    return Dataset(
        customers=load_customers(payload.get("customers") or ()),
        products=load_products(payload.get("products") or ()),
        purchases=load_purchases(payload.get("purchases") or ()),
    )


def dataset_to_payload(dataset: Dataset) -> dict[str, list[dict[str, Any]]]:
    """Convert a dataset into the JSON-serialisable document :func:`load_dataset` reads."""

    return {
        "customers": [{"id": c.id, "name": c.name} for c in dataset.customers],
        "products": [
            {"id": p.id, "name": p.name, "price": p.price, "thumbnail": p.thumbnail}
            for p in dataset.products
        ],
        "purchases": [
            {
                "id": p.id,
                "customerId": p.customer_id,
                "productId": p.product_id,
                "quantity": p.quantity,
                "date": p.date.isoformat(),
            }
            for p in dataset.purchases
        ],
    }
