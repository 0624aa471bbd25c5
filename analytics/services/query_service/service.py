"""Purchase query service.

Async facade over the three purchase queries. Each call retrieves one
dataset snapshot from the data source (the only suspension point, run in
a worker thread) and then computes the answer in memory. Nothing is
cached between calls.
"""

import asyncio

import structlog

from purchase_insights.analyses.customer_purchases import (
    get_customer_purchase_details,
)
from purchase_insights.analyses.customer_summary import summarize_customers
from purchase_insights.analyses.purchase_frequency import calculate_purchase_frequency
from purchase_insights.foundation import (
    DataSource,
    IntegrityError,
    JsonFileDataSource,
    NotFoundError,
    QueryError,
    ValidationError,
    parse_date_range,
)
from purchase_insights.foundation.records import Dataset

from analytics.services.query_service.config import ServiceSettings
from analytics.services.query_service.schemas import (
    CustomerPurchaseResponse,
    CustomerPurchasesRequest,
    CustomerSummaryRequest,
    CustomerSummaryResponse,
    ErrorResponse,
    PurchaseFrequencyRequest,
    PurchaseFrequencyResponse,
)

logger = structlog.get_logger(__name__)


class PurchaseQueryService:
    """Answer purchase frequency, customer summary and purchase detail queries."""

    def __init__(self, data_source: DataSource):
        self._data_source = data_source

    async def _snapshot(self) -> Dataset:
        return await asyncio.to_thread(self._data_source.snapshot)

    async def purchase_frequency(
        self, request: PurchaseFrequencyRequest
    ) -> list[PurchaseFrequencyResponse]:
        """Quantity-weighted purchase counts for each of the ten price bands."""
        log = logger.bind(query="purchase_frequency", date_from=request.from_, date_to=request.to)
        try:
            # Validate before touching the data source.
            date_range = parse_date_range(request.from_, request.to)
            dataset = await self._snapshot()
            buckets = calculate_purchase_frequency(
                dataset.purchases, dataset.products, date_range
            )
        except QueryError as exc:
            log.warning("query_failed", error=str(exc), kind=_error_kind(exc))
            raise

        log.info(
            "query_completed",
            purchases_counted=sum(bucket.count for bucket in buckets),
        )
        return [PurchaseFrequencyResponse.from_bucket(bucket) for bucket in buckets]

    async def customer_summaries(
        self, request: CustomerSummaryRequest
    ) -> list[CustomerSummaryResponse]:
        """Per-customer purchase count and total amount, filtered and sorted."""
        log = logger.bind(query="customer_summaries", sort_by=request.sort_by, name=request.name)
        try:
            dataset = await self._snapshot()
            summaries = summarize_customers(
                dataset.customers,
                dataset.purchases,
                dataset.products,
                name_filter=request.name,
                sort_order=request.sort_by,
            )
        except QueryError as exc:
            log.warning("query_failed", error=str(exc), kind=_error_kind(exc))
            raise

        log.info("query_completed", customers=len(summaries))
        return [CustomerSummaryResponse.from_summary(summary) for summary in summaries]

    async def customer_purchase_details(
        self, request: CustomerPurchasesRequest
    ) -> list[CustomerPurchaseResponse]:
        """Purchase history of one customer, joined with product details."""
        log = logger.bind(query="customer_purchase_details", customer_id=request.customer_id)
        try:
            dataset = await self._snapshot()
            details = get_customer_purchase_details(
                request.customer_id,
                dataset.customers,
                dataset.purchases,
                dataset.products,
            )
        except QueryError as exc:
            log.warning("query_failed", error=str(exc), kind=_error_kind(exc))
            raise

        log.info("query_completed", purchases=len(details))
        return [CustomerPurchaseResponse.from_detail(detail) for detail in details]


def _error_kind(exc: QueryError) -> str:
    if isinstance(exc, ValidationError):
        return "validation"
    if isinstance(exc, IntegrityError):
        return "integrity"
    if isinstance(exc, NotFoundError):
        return "not_found"
    return "query"


_STATUS_BY_KIND = {"validation": 400, "integrity": 400, "not_found": 404, "query": 500}


def error_response(exc: QueryError) -> ErrorResponse:
    """Map a query failure to an error body with an HTTP-style status code."""
    kind = _error_kind(exc)
    return ErrorResponse(error=str(exc), kind=kind, status=_STATUS_BY_KIND[kind])


def build_service(settings: ServiceSettings | None = None) -> PurchaseQueryService:
    """Create a service reading the dataset file named in ``settings``."""
    settings = settings or ServiceSettings.from_env()
    logger.info("service_configured", dataset_path=settings.dataset_path)
    return PurchaseQueryService(JsonFileDataSource(settings.dataset_path))
