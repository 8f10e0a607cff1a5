"""
Reusable field rules for the request schemas.

Each rule is a plain function that either returns the value unchanged
or raises ``PydanticCustomError`` with the user facing message.  The
schemas attach them to fields with ``BeforeValidator``/``AfterValidator``
so that every entity declares its constraints next to its fields.
E-mail and URL syntax is left to pydantic's ``EmailStr`` and ``AnyUrl``
(``email-validator`` underneath); ``with_message`` replaces their error
text with the message clients expect.  ``format_errors`` turns
pydantic's error list into the ``{"field", "msg", "value"}`` entries
carried by :class:`~swap_api.app.core.errors.ValidationError`.
"""

from typing import Annotated, Any, Callable, Dict, Iterable, List, Optional, Sequence

import email_validator
from pydantic import AnyUrl, EmailStr, TypeAdapter, UrlConstraints, WrapValidator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

URL_PROTOCOLS = ("http", "https", "ftp")

# Quoted local parts ("john doe"@example.com) are valid addresses.
email_validator.ALLOW_QUOTED_LOCAL = True

ImageLink = Annotated[AnyUrl, UrlConstraints(allowed_schemes=list(URL_PROTOCOLS))]

_email_adapter = TypeAdapter(EmailStr)
_url_adapter = TypeAdapter(ImageLink)


def has_duplicates(values: Iterable[Any]) -> bool:
    """Return ``True`` when ``values`` contains the same item twice."""
    items = list(values)
    return len(set(items)) != len(items)


def is_valid_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        _email_adapter.validate_python(value)
    except PydanticValidationError:
        return False
    return True


def is_valid_url(value: Any) -> bool:
    """Check that ``value`` is an absolute ``http``, ``https`` or ``ftp`` URL."""
    if not isinstance(value, str):
        return False
    try:
        _url_adapter.validate_python(value)
    except PydanticValidationError:
        return False
    return True


def with_message(code: str, message: str) -> WrapValidator:
    """Run the annotated type's own validation, reporting ``message`` on failure."""

    def check(value: Any, handler: Callable[[Any], Any]) -> Any:
        try:
            return handler(value)
        except PydanticValidationError:
            raise PydanticCustomError(code, message) from None

    return WrapValidator(check)


def require_text(message: str) -> Callable[[Any], str]:
    """Rule: the value is a non-empty string."""

    def check(value: Any) -> str:
        if not isinstance(value, str) or value == "":
            raise PydanticCustomError("not_empty", message)
        return value

    return check


def require_url(message: str) -> Callable[[Any], str]:
    """Rule: the value is a URL string; it is kept exactly as sent."""

    def check(value: Any) -> str:
        if not is_valid_url(value):
            raise PydanticCustomError("url", message)
        return value

    return check


def require_list(message: str, min_length: int, max_length: Optional[int] = None) -> Callable[[Any], list]:
    """Rule: the value is a JSON array whose size lies within the bounds."""

    def check(value: Any) -> list:
        if not isinstance(value, list) or len(value) < min_length:
            raise PydanticCustomError("array_size", message)
        if max_length is not None and len(value) > max_length:
            raise PydanticCustomError("array_size", message)
        return value

    return check


def require_unique(message: str) -> Callable[[List[Any]], List[Any]]:
    def check(value: List[Any]) -> List[Any]:
        if has_duplicates(value):
            raise PydanticCustomError("duplicates", message)
        return value

    return check


def format_errors(errors: Sequence[Dict[str, Any]], skip: Sequence[str] = ("body",)) -> List[Dict[str, Any]]:
    """Convert pydantic error dictionaries into field level messages.

    The leading ``body`` location segment added by FastAPI is dropped
    and the remaining path is joined with dots (``image.1``).  Missing
    fields report ``None`` as their value instead of the whole payload.
    """
    formatted: List[Dict[str, Any]] = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        while loc and loc[0] in skip:
            loc.pop(0)
        value = None if error.get("type") == "missing" else error.get("input")
        formatted.append({"field": ".".join(loc), "msg": error.get("msg", ""), "value": value})
    return formatted
