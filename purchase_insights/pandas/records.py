"""Pandas DataFrame adapters for raw entity collections."""

import pandas as pd  # type: ignore

from purchase_insights.foundation.records import (
    Dataset,
    load_customers,
    load_products,
    load_purchases,
)
from ._utils import reject_nulls, require_columns

CUSTOMER_COLUMNS = ["id", "name"]
PRODUCT_COLUMNS = ["id", "name", "price"]
PURCHASE_COLUMNS = ["id", "customerId", "productId", "quantity", "date"]


def dataframes_to_dataset(
    customers_df: pd.DataFrame,
    products_df: pd.DataFrame,
    purchases_df: pd.DataFrame,
) -> Dataset:
    """Build a :class:`Dataset` from three DataFrames.

    Args:
        customers_df: Columns ``id``, ``name``
        products_df: Columns ``id``, ``name``, ``price`` and optionally ``thumbnail``
        purchases_df: Columns ``id``, ``customerId``, ``productId``,
            ``quantity``, ``date`` (datetime64 or ISO strings)

    Returns:
        Validated dataset; the same rules as
        :func:`~purchase_insights.foundation.records.load_dataset` apply.

    Raises:
        ValueError: If a frame misses required columns or has null values

    Example:
        >>> dataset = dataframes_to_dataset(
        ...     pd.read_csv("customers.csv"),
        ...     pd.read_csv("products.csv"),
        ...     pd.read_csv("purchases.csv", parse_dates=["date"]),
        ... )
    """
    require_columns(customers_df, CUSTOMER_COLUMNS, "customers")
    require_columns(products_df, PRODUCT_COLUMNS, "products")
    require_columns(purchases_df, PURCHASE_COLUMNS, "purchases")

    reject_nulls(customers_df, CUSTOMER_COLUMNS, "customers")
    reject_nulls(products_df, ["id", "price"], "products")
    reject_nulls(purchases_df, PURCHASE_COLUMNS, "purchases")

    return Dataset(
        customers=load_customers(_records(customers_df)),
        products=load_products(_records(products_df.fillna({"name": "", "thumbnail": ""}))),
        purchases=load_purchases(_records(purchases_df)),
    )


def dataset_to_dataframes(dataset: Dataset) -> dict[str, pd.DataFrame]:
    """Split a dataset into one DataFrame per collection.

    Args:
        dataset: Dataset snapshot

    Returns:
        Mapping of collection name to DataFrame, using the same column
        names :func:`dataframes_to_dataset` reads
    """
    return {
        "customers": pd.DataFrame(
            [{"id": c.id, "name": c.name} for c in dataset.customers],
            columns=CUSTOMER_COLUMNS,
        ),
        "products": pd.DataFrame(
            [
                {"id": p.id, "name": p.name, "price": p.price, "thumbnail": p.thumbnail}
                for p in dataset.products
            ],
            columns=PRODUCT_COLUMNS + ["thumbnail"],
        ),
        "purchases": pd.DataFrame(
            [
                {
                    "id": p.id,
                    "customerId": p.customer_id,
                    "productId": p.product_id,
                    "quantity": p.quantity,
                    "date": pd.Timestamp(p.date),
                }
                for p in dataset.purchases
            ],
            columns=PURCHASE_COLUMNS,
        ),
    }


def _records(frame: pd.DataFrame) -> list[dict]:
    return frame.to_dict("records")
