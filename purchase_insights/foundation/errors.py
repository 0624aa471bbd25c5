"""Error kinds raised by the purchase query engine.

Three kinds reach callers:

- :class:`ValidationError` for malformed or contradictory query parameters.
  The caller can correct these.
- :class:`NotFoundError` when a queried identifier has no matching record.
- :class:`IntegrityError` when a purchase references a product or customer
  that is absent from the dataset. This is upstream data corruption and a
  retry will not succeed without a data fix.
"""

from __future__ import annotations


class QueryError(Exception):
    """Base class for every failure surfaced by a query."""


class ValidationError(QueryError, ValueError):
    """Query parameters are malformed or contradictory."""

    def __init__(self, reason: str, detail: str | None = None) -> None:
        self.reason = reason
        self.detail = detail
        message = reason if detail is None else f"{reason}: {detail}"
        super().__init__(message)


class NotFoundError(QueryError, LookupError):
    """A record looked up by identifier does not exist."""

    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity.capitalize()} with ID {entity_id} not found")


class IntegrityError(QueryError, LookupError):
    """A purchase references a record that is missing from the dataset.

    Deliberately not a :class:`NotFoundError`.
    """

    def __init__(self, entity: str, entity_id: str, purchase_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        self.purchase_id = purchase_id
        super().__init__(
            f"{entity.capitalize()} with ID {entity_id} not found "
            f"(referenced by purchase {purchase_id})"
        )
