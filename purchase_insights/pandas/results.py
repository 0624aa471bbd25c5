"""Pandas DataFrame adapters for query results."""

from typing import Sequence

import pandas as pd  # type: ignore

from purchase_insights.analyses.customer_purchases import CustomerPurchaseDetail
from purchase_insights.analyses.customer_summary import CustomerSummary
from purchase_insights.analyses.purchase_frequency import PurchaseFrequencyBucket

FREQUENCY_COLUMNS = ["range", "count"]
CUSTOMER_SUMMARY_COLUMNS = ["id", "name", "total_purchases", "total_amount"]
PURCHASE_DETAIL_COLUMNS = [
    "id",
    "customer_id",
    "product_id",
    "product_name",
    "price",
    "purchase_date",
    "thumbnail",
]


def frequency_to_dataframe(buckets: Sequence[PurchaseFrequencyBucket]) -> pd.DataFrame:
    """Convert price band buckets to a DataFrame, keeping band order.

    Example:
        >>> buckets = calculate_purchase_frequency(purchases, products)
        >>> frequency_to_dataframe(buckets).plot.bar(x="range", y="count")
    """
    return pd.DataFrame(
        [{"range": bucket.range, "count": bucket.count} for bucket in buckets],
        columns=FREQUENCY_COLUMNS,
    )


def customer_summaries_to_dataframe(
    summaries: Sequence[CustomerSummary],
) -> pd.DataFrame:
    """Convert customer summaries to a DataFrame.

    Row order is preserved so the query's sort order survives export.
    """
    rows = [
        {
            "id": summary.id,
            "name": summary.name,
            "total_purchases": summary.total_purchases,
            "total_amount": summary.total_amount,
        }
        for summary in summaries
    ]
    return pd.DataFrame(rows, columns=CUSTOMER_SUMMARY_COLUMNS)


def purchase_details_to_dataframe(
    details: Sequence[CustomerPurchaseDetail],
) -> pd.DataFrame:
    """Convert purchase detail records to a DataFrame.

    ``purchase_date`` is exported as an ISO ``YYYY-MM-DD`` string.
    """
    rows = [
        {
            "id": detail.id,
            "customer_id": detail.customer_id,
            "product_id": detail.product_id,
            "product_name": detail.product_name,
            "price": detail.price,
            "purchase_date": detail.purchase_date.isoformat(),
            "thumbnail": detail.thumbnail,
        }
        for detail in details
    ]
    return pd.DataFrame(rows, columns=PURCHASE_DETAIL_COLUMNS)
