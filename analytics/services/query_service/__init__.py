"""Purchase query service.

Async facade exposing the purchase frequency, customer summary and
customer purchase queries with the field names used on the wire.
"""

from analytics.services.query_service.config import ServiceSettings
from analytics.services.query_service.observability import configure_logging
from analytics.services.query_service.schemas import (
    CustomerPurchaseResponse,
    CustomerPurchasesRequest,
    CustomerSummaryRequest,
    CustomerSummaryResponse,
    ErrorResponse,
    PurchaseFrequencyRequest,
    PurchaseFrequencyResponse,
    dump_response,
)
from analytics.services.query_service.service import (
    PurchaseQueryService,
    build_service,
    error_response,
)

__all__ = [
    "ServiceSettings",
    "configure_logging",
    "PurchaseQueryService",
    "build_service",
    "error_response",
    "dump_response",
    "PurchaseFrequencyRequest",
    "PurchaseFrequencyResponse",
    "CustomerSummaryRequest",
    "CustomerSummaryResponse",
    "CustomerPurchasesRequest",
    "CustomerPurchaseResponse",
    "ErrorResponse",
]
