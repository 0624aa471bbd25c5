"""Request and response models for the purchase query service.

Field aliases carry the wire names used by the reporting front end
(``totalPurchases``, ``purchaseDate``, ...). Serialise with
:func:`dump_response` so the aliases are used.
"""

from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field

from purchase_insights.analyses.customer_purchases import CustomerPurchaseDetail
from purchase_insights.analyses.customer_summary import CustomerSummary, SortOrder
from purchase_insights.analyses.purchase_frequency import PurchaseFrequencyBucket


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class PurchaseFrequencyRequest(_WireModel):
    """Request for the price band histogram."""

    from_: str | None = Field(
        default=None,
        alias="from",
        description="Window start (ISO 8601 date or date-time); requires 'to'",
    )
    to: str | None = Field(
        default=None,
        description="Window end, inclusive (ISO 8601 date or date-time); requires 'from'",
    )


class CustomerSummaryRequest(_WireModel):
    """Request for the customer summary list."""

    sort_by: str = Field(
        default=SortOrder.ID.value,
        alias="sortBy",
        description="'id', 'asc' or 'desc' (by total amount)",
    )
    name: str | None = Field(
        default=None, description="Case-sensitive substring filter on customer name"
    )


class CustomerPurchasesRequest(_WireModel):
    """Request for one customer's purchase history."""

    customer_id: str = Field(alias="customerId", min_length=1)


class PurchaseFrequencyResponse(_WireModel):
    range: str
    count: int

    @classmethod
    def from_bucket(cls, bucket: PurchaseFrequencyBucket) -> "PurchaseFrequencyResponse":
        return cls(range=bucket.range, count=bucket.count)


class CustomerSummaryResponse(_WireModel):
    id: str
    name: str
    total_purchases: int = Field(alias="totalPurchases")
    total_amount: int = Field(alias="totalAmount")

    @classmethod
    def from_summary(cls, summary: CustomerSummary) -> "CustomerSummaryResponse":
        return cls(
            id=summary.id,
            name=summary.name,
            total_purchases=summary.total_purchases,
            total_amount=summary.total_amount,
        )


class CustomerPurchaseResponse(_WireModel):
    id: str
    customer_id: str = Field(alias="customerId")
    product_id: str = Field(alias="productId")
    product_name: str = Field(alias="productName")
    price: int
    purchase_date: str = Field(alias="purchaseDate", description="ISO YYYY-MM-DD")
    thumbnail: str

    @classmethod
    def from_detail(cls, detail: CustomerPurchaseDetail) -> "CustomerPurchaseResponse":
        return cls(
            id=detail.id,
            customer_id=detail.customer_id,
            product_id=detail.product_id,
            product_name=detail.product_name,
            price=detail.price,
            purchase_date=detail.purchase_date.isoformat(),
            thumbnail=detail.thumbnail,
        )


class ErrorResponse(_WireModel):
    """Error body: message, error kind and the matching HTTP-style status."""

    error: str
    kind: str
    status: int


def dump_response(models: Iterable[BaseModel]) -> list[dict]:
    """Serialise response models using their wire aliases."""
    return [model.model_dump(by_alias=True) for model in models]
