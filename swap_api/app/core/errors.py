"""
Error taxonomy shared by the store, the services and the HTTP layer.

Services raise these exceptions; ``main.create_app`` registers one
handler per type that turns them into a status code and a JSON body.
Keeping the mapping in a single place means the services never deal
with HTTP concerns.
"""

from typing import Any, Dict, List, Optional


class SwapApiError(Exception):
    """Base class for all errors raised by the application."""


class ValidationError(SwapApiError):
    """One or more fields failed validation.

    ``errors`` is a list of ``{"field", "msg", "value"}`` dictionaries,
    one per violated rule.
    """

    def __init__(self, errors: List[Dict[str, Any]]):
        self.errors = errors
        super().__init__("; ".join(f"{e['field']}: {e['msg']}" for e in errors))

    @classmethod
    def single(cls, field: str, msg: str, value: Any = None) -> "ValidationError":
        return cls([{"field": field, "msg": msg, "value": value}])


class NotFoundError(SwapApiError):
    """No record with the given identity exists."""

    def __init__(self, entity: str, identity: Any):
        self.entity = entity
        self.identity = identity
        super().__init__(f"{entity} {identity} not found")


class UniqueConstraintViolation(SwapApiError):
    """A write would duplicate a value that must be unique (``users.email``)."""

    def __init__(self, field: str, value: Any = None):
        self.field = field
        self.value = value
        super().__init__(f"Duplicate value for unique field '{field}'")


class CascadeDeleteError(SwapApiError):
    """The entity was deleted but removing its swap orders failed.

    The swap orders that referenced ``record`` are left dangling.
    """

    def __init__(self, entity: str, record: Optional[dict], cause: BaseException):
        self.entity = entity
        self.record = record
        self.cause = cause
        identity = record.get("_id") if record else None
        super().__init__(f"{entity} {identity} deleted but cascade to swap orders failed: {cause}")
