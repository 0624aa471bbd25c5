"""Shared utilities for pandas conversion operations."""

from typing import Sequence

import pandas as pd  # type: ignore


def require_columns(frame: pd.DataFrame, columns: Sequence[str], frame_name: str) -> None:
    """Raise ``ValueError`` if ``frame`` lacks any of ``columns``.

    Example:
        >>> require_columns(pd.DataFrame({"id": []}), ["id", "name"], "customers")
        Traceback (most recent call last):
        ...
        ValueError: customers DataFrame missing required columns: ['name']
    """
    missing = sorted(set(columns) - set(frame.columns))
    if missing:
        raise ValueError(f"{frame_name} DataFrame missing required columns: {missing}")


def reject_nulls(frame: pd.DataFrame, columns: Sequence[str], frame_name: str) -> None:
    """Raise ``ValueError`` if any of ``columns`` holds a null/NaN value."""
    null_cols = frame[list(columns)].isnull().any()
    if null_cols.any():
        null_col_names = null_cols[null_cols].index.tolist()
        raise ValueError(
            f"Null/NaN values found in {frame_name} columns: {null_col_names}"
        )
