"""Query analyses over a purchase dataset.

- Purchase frequency: quantity-weighted histogram over fixed price bands
- Customer summary: per-customer purchase count and spend, searchable and sortable
- Customer purchases: one customer's purchase history joined with products
"""

from .customer_purchases import CustomerPurchaseDetail, get_customer_purchase_details
from .customer_summary import (
    CustomerSummary,
    SortOrder,
    parse_sort_order,
    summarize_customers,
)
from .purchase_frequency import PurchaseFrequencyBucket, calculate_purchase_frequency

__all__ = [
    "PurchaseFrequencyBucket",
    "calculate_purchase_frequency",
    "CustomerSummary",
    "SortOrder",
    "parse_sort_order",
    "summarize_customers",
    "CustomerPurchaseDetail",
    "get_customer_purchase_details",
]
