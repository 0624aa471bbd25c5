"""Pandas DataFrame adapters for purchase insights components."""

from .records import (
    dataframes_to_dataset,
    dataset_to_dataframes,
)
from .results import (
    frequency_to_dataframe,
    customer_summaries_to_dataframe,
    purchase_details_to_dataframe,
)

__all__ = [
    # Raw collection adapters
    "dataframes_to_dataset",
    "dataset_to_dataframes",
    # Query result adapters
    "frequency_to_dataframe",
    "customer_summaries_to_dataframe",
    "purchase_details_to_dataframe",
]
