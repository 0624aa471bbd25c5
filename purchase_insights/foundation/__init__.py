"""Foundational building blocks for the purchase query engine.

This package exposes the entity records and raw-record contract, the
data source abstraction, the error kinds surfaced by queries, and the
two parameter helpers shared by the analyses: date range validation and
price band classification.
"""

from .data_source import DataSource, InMemoryDataSource, JsonFileDataSource
from .date_range import DateRange, parse_date_range
from .errors import IntegrityError, NotFoundError, QueryError, ValidationError
from .price_bands import PRICE_BAND_LABELS, PRICE_BANDS, PriceBand, classify_price
from .records import (
    Customer,
    Dataset,
    Product,
    Purchase,
    dataset_to_payload,
    load_dataset,
)

__all__ = [
    "Customer",
    "Dataset",
    "Product",
    "Purchase",
    "dataset_to_payload",
    "load_dataset",
    "DataSource",
    "InMemoryDataSource",
    "JsonFileDataSource",
    "DateRange",
    "parse_date_range",
    "QueryError",
    "ValidationError",
    "NotFoundError",
    "IntegrityError",
    "PRICE_BANDS",
    "PRICE_BAND_LABELS",
    "PriceBand",
    "classify_price",
]
