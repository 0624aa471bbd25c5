"""Synthetic data generation utilities.

This package produces realistic-but-fake purchase datasets to exercise
the queries and the command line without accessing production data.
"""

from .generator import (
    SyntheticConfig,
    generate_customers,
    generate_dataset,
    generate_products,
    generate_purchases,
)

__all__ = [
    "SyntheticConfig",
    "generate_customers",
    "generate_products",
    "generate_purchases",
    "generate_dataset",
]
