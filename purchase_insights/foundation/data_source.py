"""Read-only access to the customer, product and purchase collections.

Storage format, persistence and refresh policy belong to whoever owns
the data; the query engine only needs a :class:`Dataset` snapshot.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from purchase_insights.foundation.records import Dataset, load_dataset

logger = logging.getLogger(__name__)


MAX_DATASET_BYTES = 25 * 1024 * 1024  # 25 MiB cap to avoid accidental OOM


@runtime_checkable
class DataSource(Protocol):
    """Anything that can hand out an immutable dataset snapshot."""

    def snapshot(self) -> Dataset: ...


class InMemoryDataSource:
    """Serve a dataset that is already loaded."""

    def __init__(self, dataset: Dataset) -> None:
        self._dataset = dataset

    def snapshot(self) -> Dataset:
        return self._dataset


class JsonFileDataSource:
    """Read the dataset from a JSON document on every snapshot.

    The document holds ``customers``, ``products`` and ``purchases`` lists
    as accepted by :func:`~purchase_insights.foundation.records.load_dataset`.
    Re-reading per call means edits to the file are picked up without a
    restart and nothing derived is kept between queries.
    """

    def __init__(self, path: str | Path, max_bytes: int = MAX_DATASET_BYTES) -> None:
        self.path = Path(path)
        self.max_bytes = max_bytes

    def snapshot(self) -> Dataset:
        resolved = self.path.resolve()
        if not resolved.exists():
            raise FileNotFoundError(f"Dataset file not found: {resolved}")
        size = resolved.stat().st_size
        if size > self.max_bytes:
            raise ValueError(
                f"Dataset file {resolved} is {size} bytes; exceeds limit of {self.max_bytes} bytes"
            )
        with resolved.open("r", encoding="utf-8") as fh:
            payload = json.load(fh)

        dataset = load_dataset(payload)
        logger.debug(
            "Loaded dataset from %s: %d customers, %d products, %d purchases",
            resolved,
            len(dataset.customers),
            len(dataset.products),
            len(dataset.purchases),
        )
        return dataset
