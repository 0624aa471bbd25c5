from datetime import date

import pytest

from purchase_insights.analyses import (
    CustomerSummary,
    SortOrder,
    parse_sort_order,
    summarize_customers,
)
from purchase_insights.foundation import (
    Customer,
    IntegrityError,
    Product,
    Purchase,
    ValidationError,
)


@pytest.fixture
def customers():
    return [
        Customer("3", "박민준"),
        Customer("1", "김철수"),
        Customer("2", "이영희"),
        Customer("4", "김서연"),
    ]


@pytest.fixture
def products():
    return [
        Product("P1", "머그컵", 10000),
        Product("P2", "케틀", 45000),
    ]


@pytest.fixture
def purchases():
    return [
        Purchase("O1", "1", "P1", 3, date(2024, 1, 1)),
        Purchase("O2", "1", "P2", 1, date(2024, 1, 5)),
        Purchase("O3", "2", "P2", 2, date(2024, 1, 7)),
        Purchase("O4", "3", "P1", 1, date(2024, 2, 1)),
    ]


def test_counts_records_and_sums_unit_prices(customers, purchases, products):
    summaries = summarize_customers(customers, purchases, products)

    by_id = {s.id: s for s in summaries}
    # Quantity is not applied: O1 has quantity 3 but counts once at unit price.
    assert by_id["1"] == CustomerSummary("1", "김철수", 2, 55000)
    assert by_id["2"] == CustomerSummary("2", "이영희", 1, 45000)
    assert by_id["3"] == CustomerSummary("3", "박민준", 1, 10000)


def test_customers_without_purchases_have_zero_totals(customers, purchases, products):
    summaries = summarize_customers(customers, purchases, products)
    assert CustomerSummary("4", "김서연", 0, 0) in summaries


def test_id_sort_ignores_spend(customers, purchases, products):
    summaries = summarize_customers(customers, purchases, products, sort_order="id")
    assert [s.id for s in summaries] == ["1", "2", "3", "4"]


def test_default_sort_is_id(customers, purchases, products):
    assert summarize_customers(customers, purchases, products) == summarize_customers(
        customers, purchases, products, sort_order=SortOrder.ID
    )


def test_amount_sorts(customers, purchases, products):
    asc = summarize_customers(customers, purchases, products, sort_order="asc")
    desc = summarize_customers(customers, purchases, products, sort_order="desc")

    assert [s.id for s in asc] == ["4", "3", "2", "1"]
    assert [s.id for s in desc] == ["1", "2", "3", "4"]
    assert [s.id for s in desc] == [s.id for s in reversed(asc)]


def test_amount_ties_break_by_id_in_both_directions(products):
    customers = [Customer("b", "B"), Customer("a", "A"), Customer("c", "C")]
    purchases = [
        Purchase("O1", "b", "P1", 1, date(2024, 1, 1)),
        Purchase("O2", "a", "P1", 1, date(2024, 1, 1)),
        Purchase("O3", "c", "P2", 1, date(2024, 1, 1)),
    ]
    asc = summarize_customers(customers, purchases, products, sort_order="asc")
    desc = summarize_customers(customers, purchases, products, sort_order="desc")

    assert [s.id for s in asc] == ["a", "b", "c"]
    assert [s.id for s in desc] == ["c", "a", "b"]


def test_name_filter_is_case_sensitive_substring(customers, purchases, products):
    summaries = summarize_customers(customers, purchases, products, name_filter="김")
    assert [s.name for s in summaries] == ["김철수", "김서연"]

    latin = [Customer("1", "Alice"), Customer("2", "alice")]
    filtered = summarize_customers(latin, [], products, name_filter="Ali")
    assert [s.id for s in filtered] == ["1"]


def test_name_filter_matches_inside_name(customers, purchases, products):
    summaries = summarize_customers(customers, purchases, products, name_filter="영")
    assert [s.name for s in summaries] == ["이영희"]


def test_empty_name_filter_keeps_everyone(customers, purchases, products):
    summaries = summarize_customers(customers, purchases, products, name_filter="")
    assert len(summaries) == 4


def test_invalid_sort_order_is_rejected(customers, purchases, products):
    with pytest.raises(ValidationError):
        summarize_customers(customers, purchases, products, sort_order="amount")


def test_parse_sort_order_defaults_to_id():
    assert parse_sort_order(None) is SortOrder.ID
    assert parse_sort_order("") is SortOrder.ID
    assert parse_sort_order("desc") is SortOrder.DESC


def test_unknown_product_is_an_integrity_error(customers, products):
    purchases = [Purchase("O9", "1", "GHOST", 1, date(2024, 1, 1))]
    with pytest.raises(IntegrityError) as excinfo:
        summarize_customers(customers, purchases, products)
    assert excinfo.value.entity == "product"


def test_unknown_customer_is_an_integrity_error(customers, products):
    purchases = [Purchase("O9", "999", "P1", 1, date(2024, 1, 1))]
    with pytest.raises(IntegrityError) as excinfo:
        summarize_customers(customers, purchases, products)
    assert excinfo.value.entity == "customer"
    assert excinfo.value.entity_id == "999"
