"""Tests for the async purchase query service.

Covers the wire shapes of the three responses, request alias handling,
error propagation and error body mapping.
"""

import json
from datetime import date

import pytest
from pydantic import ValidationError as PydanticValidationError

from analytics.services.query_service import (
    CustomerPurchasesRequest,
    CustomerSummaryRequest,
    PurchaseFrequencyRequest,
    PurchaseQueryService,
    ServiceSettings,
    build_service,
    dump_response,
    error_response,
)
from purchase_insights.foundation import (
    Customer,
    Dataset,
    InMemoryDataSource,
    IntegrityError,
    NotFoundError,
    Product,
    Purchase,
    ValidationError,
)


def create_sample_dataset():
    """Small dataset: two customers, one without purchases."""
    return Dataset(
        customers=(Customer("1", "김철수"), Customer("2", "이영희")),
        products=(
            Product("P1", "머그컵", 20000, "p1.png"),
            Product("P2", "원두", 25000, "p2.png"),
        ),
        purchases=(
            Purchase("O1", "1", "P1", 3, date(2024, 1, 1)),
            Purchase("O2", "1", "P2", 2, date(2024, 1, 15)),
        ),
    )


class CountingDataSource:
    """Data source that records how often a snapshot was taken."""

    def __init__(self, dataset):
        self.dataset = dataset
        self.calls = 0

    def snapshot(self):
        self.calls += 1
        return self.dataset


@pytest.fixture
def service():
    return PurchaseQueryService(InMemoryDataSource(create_sample_dataset()))


@pytest.mark.asyncio
async def test_purchase_frequency_shape(service):
    result = await service.purchase_frequency(PurchaseFrequencyRequest())
    payload = dump_response(result)

    assert len(payload) == 10
    assert payload[0] == {"range": "2만원 이하", "count": 3}
    assert payload[1] == {"range": "2만원 초과 ~ 3만원", "count": 2}
    assert all(row["count"] == 0 for row in payload[2:])


@pytest.mark.asyncio
async def test_purchase_frequency_accepts_wire_names(service):
    request = PurchaseFrequencyRequest.model_validate(
        {"from": "2024-01-10", "to": "2024-01-31"}
    )
    result = await service.purchase_frequency(request)
    assert [r.count for r in result][:2] == [0, 2]


@pytest.mark.asyncio
async def test_purchase_frequency_validates_before_loading_data():
    source = CountingDataSource(create_sample_dataset())
    service = PurchaseQueryService(source)

    with pytest.raises(ValidationError):
        await service.purchase_frequency(PurchaseFrequencyRequest(to="2024-01-31"))
    assert source.calls == 0


@pytest.mark.asyncio
async def test_purchase_frequency_integrity_error_propagates():
    dataset = create_sample_dataset()
    broken = Dataset(
        customers=dataset.customers,
        products=dataset.products[:1],
        purchases=dataset.purchases,
    )
    service = PurchaseQueryService(InMemoryDataSource(broken))

    with pytest.raises(IntegrityError) as excinfo:
        await service.purchase_frequency(PurchaseFrequencyRequest())
    assert excinfo.value.entity_id == "P2"


@pytest.mark.asyncio
async def test_customer_summaries_shape(service):
    request = CustomerSummaryRequest.model_validate({"sortBy": "asc"})
    payload = dump_response(await service.customer_summaries(request))

    assert payload == [
        {"id": "2", "name": "이영희", "totalPurchases": 0, "totalAmount": 0},
        {"id": "1", "name": "김철수", "totalPurchases": 2, "totalAmount": 45000},
    ]


@pytest.mark.asyncio
async def test_customer_summaries_name_filter(service):
    request = CustomerSummaryRequest(name="영")
    result = await service.customer_summaries(request)
    assert [r.id for r in result] == ["2"]


@pytest.mark.asyncio
async def test_customer_summaries_invalid_sort(service):
    with pytest.raises(ValidationError):
        await service.customer_summaries(CustomerSummaryRequest(sort_by="amount"))


@pytest.mark.asyncio
async def test_customer_purchase_details_shape(service):
    request = CustomerPurchasesRequest.model_validate({"customerId": "1"})
    payload = dump_response(await service.customer_purchase_details(request))

    assert payload[0] == {
        "id": "O1",
        "customerId": "1",
        "productId": "P1",
        "productName": "머그컵",
        "price": 20000,
        "purchaseDate": "2024-01-01",
        "thumbnail": "p1.png",
    }
    assert [row["id"] for row in payload] == ["O1", "O2"]


@pytest.mark.asyncio
async def test_customer_purchase_details_unknown_customer(service):
    with pytest.raises(NotFoundError):
        await service.customer_purchase_details(CustomerPurchasesRequest(customer_id="9"))


@pytest.mark.asyncio
async def test_customer_without_purchases_returns_empty_list(service):
    result = await service.customer_purchase_details(
        CustomerPurchasesRequest(customer_id="2")
    )
    assert result == []


@pytest.mark.asyncio
async def test_each_call_takes_a_fresh_snapshot():
    source = CountingDataSource(create_sample_dataset())
    service = PurchaseQueryService(source)

    await service.purchase_frequency(PurchaseFrequencyRequest())
    await service.customer_summaries(CustomerSummaryRequest())
    await service.customer_purchase_details(CustomerPurchasesRequest(customer_id="1"))
    assert source.calls == 3


def test_customer_purchases_request_requires_id():
    with pytest.raises(PydanticValidationError):
        CustomerPurchasesRequest(customer_id="")


@pytest.mark.parametrize(
    "exc, kind, status",
    [
        (ValidationError("from after to"), "validation", 400),
        (IntegrityError("product", "P9", "O1"), "integrity", 400),
        (NotFoundError("customer", "404"), "not_found", 404),
    ],
)
def test_error_response_mapping(exc, kind, status):
    body = error_response(exc)
    assert body.kind == kind
    assert body.status == status
    assert body.error == str(exc)


def test_build_service_reads_dataset_file(tmp_path):
    path = tmp_path / "dataset.json"
    path.write_text(
        json.dumps({"customers": [{"id": "1", "name": "김철수"}]}, ensure_ascii=False),
        encoding="utf-8",
    )
    service = build_service(ServiceSettings(dataset_path=str(path)))
    assert isinstance(service, PurchaseQueryService)


@pytest.mark.asyncio
async def test_build_service_end_to_end(tmp_path):
    path = tmp_path / "dataset.json"
    path.write_text(
        json.dumps(
            {
                "customers": [{"id": "1", "name": "김철수"}],
                "products": [{"id": "P1", "name": "머그컵", "price": 100000}],
                "purchases": [
                    {"id": "O1", "customerId": "1", "productId": "P1", "quantity": 4, "date": "2024-05-01"}
                ],
            },
            ensure_ascii=False,
        ),
        encoding="utf-8",
    )
    service = build_service(ServiceSettings(dataset_path=str(path)))

    result = await service.purchase_frequency(PurchaseFrequencyRequest())
    assert result[9].count == 4
