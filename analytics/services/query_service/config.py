"""Environment-driven configuration for the purchase query service."""

import os
from typing import Literal

from pydantic import BaseModel, Field, field_validator

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ServiceSettings(BaseModel):
    """Settings for :class:`~analytics.services.query_service.service.PurchaseQueryService`."""

    dataset_path: str = Field(
        default="purchase_dataset.json",
        description="JSON document with customers, products and purchases",
    )
    log_level: str = Field(default="INFO", description="Minimum log level")
    log_format: Literal["json", "console"] = Field(
        default="json",
        description="structlog renderer: JSON lines or human-readable console output",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got {value!r}")
        return level

    @classmethod
    def from_env(cls) -> "ServiceSettings":
        """Read settings from ``PURCHASE_INSIGHTS_DATASET``, ``LOG_LEVEL`` and ``LOG_FORMAT``."""
        return cls(
            dataset_path=os.getenv("PURCHASE_INSIGHTS_DATASET", "purchase_dataset.json"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "json").lower(),
        )
