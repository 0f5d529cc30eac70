"""
Storefront API - Customer Input Validation
============================================

What:  Checks and normalizes incoming customer fields before they reach the
       repository operations.
How:   Pure functions over the request schemas. Every problem found in one
       request is collected and raised together as a single ValidationError
       carrying `[{field, message}, ...]`.
Who:   Called by the customer routes before any database access.

Field rules:
    cust_code  trimmed; required and non-empty; immutable after creation
    cust_name  trimmed; required on create/replace, optional on patch but
               never empty when supplied; title-cased
    cust_city  trimmed, HTML-escaped, title-cased when present; blank or
               null means absent (NULL)
"""

import html
import re
from typing import Dict, List, Optional, Tuple

from storefront_api.exceptions import ValidationError
from storefront_api.schemas.customer import (
    CustomerCreate,
    CustomerPatch,
    CustomerRecord,
    CustomerReplace,
)

# Columns a PATCH may touch, in SET-list order
UPDATABLE_FIELDS = ("cust_name", "cust_city")

_WORD_START = re.compile(r"(^|\s)(\S)")


def _upper_first(match: "re.Match[str]") -> str:
    lead, char = match.group(1), match.group(2)
    upper = char.upper()
    # Characters whose uppercase form expands (e.g. "ß" -> "SS") stay as-is
    return lead + (upper if len(upper) == 1 else char)


def title_case(value: str) -> str:
    """
    Lowercase the whole string, then uppercase the first letter of each
    whitespace-delimited word.

    Idempotent: title_case(title_case(s)) == title_case(s).

    >>> title_case("jane DOE")
    'Jane Doe'
    >>> title_case("o'brien")
    "O'brien"
    """
    return _WORD_START.sub(_upper_first, value.lower())


def sanitize_markup(value: str) -> str:
    """Escape HTML metacharacters so stored text can't inject markup."""
    return html.escape(value, quote=True)


class _FieldErrors:
    """Accumulates field-level errors for one request."""

    def __init__(self) -> None:
        self.errors: List[Dict[str, str]] = []

    def add(self, field: str, message: str) -> None:
        self.errors.append({"field": field, "message": message})

    def raise_if_any(self) -> None:
        if self.errors:
            raise ValidationError(message=self.errors[0]["message"], errors=self.errors)


def _required_text(raw: Optional[str], field: str, errors: _FieldErrors) -> Optional[str]:
    trimmed = raw.strip() if isinstance(raw, str) else ""
    if not trimmed:
        errors.add(field, f"{field} required")
        return None
    return trimmed


def _normalize_city(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    trimmed = raw.strip()
    if not trimmed:
        return None
    return title_case(sanitize_markup(trimmed))


def _check_immutable_code(path_code: str, body_code: Optional[str], errors: _FieldErrors) -> None:
    if body_code is not None and body_code.strip() != path_code:
        errors.add("cust_code", "cust_code cannot be changed")


def validate_code(raw: Optional[str]) -> str:
    """Trim a business key taken from a path or body; it must be non-empty."""
    errors = _FieldErrors()
    code = _required_text(raw, "cust_code", errors)
    errors.raise_if_any()
    return code


def validate_create(payload: CustomerCreate) -> CustomerRecord:
    """Validate a POST body and return the normalized record to insert."""
    errors = _FieldErrors()
    code = _required_text(payload.cust_code, "cust_code", errors)
    name = _required_text(payload.cust_name, "cust_name", errors)
    errors.raise_if_any()

    return CustomerRecord(
        cust_code=code,
        cust_name=title_case(name),
        cust_city=_normalize_city(payload.cust_city),
    )


def validate_replace(path_code: str, payload: CustomerReplace) -> CustomerRecord:
    """
    Validate a PUT body.

    The returned record is the full new state of the row: an omitted city
    comes back as None and will be written as NULL.
    """
    errors = _FieldErrors()
    code = _required_text(path_code, "cust_code", errors)
    name = _required_text(payload.cust_name, "cust_name", errors)
    if code:
        _check_immutable_code(code, payload.cust_code, errors)
    errors.raise_if_any()

    return CustomerRecord(
        cust_code=code,
        cust_name=title_case(name),
        cust_city=_normalize_city(payload.cust_city),
    )


def validate_patch(
    path_code: str, payload: CustomerPatch
) -> Tuple[str, Dict[str, Optional[str]]]:
    """
    Validate a PATCH body.

    Returns the trimmed code and a mapping holding only the updatable fields
    the client actually sent. Raises ValidationError when that mapping would
    be empty.
    """
    errors = _FieldErrors()
    code = _required_text(path_code, "cust_code", errors)
    supplied = payload.model_fields_set

    fields: Dict[str, Optional[str]] = {}
    if "cust_name" in supplied:
        name = _required_text(payload.cust_name, "cust_name", errors)
        if name:
            fields["cust_name"] = title_case(name)
    if "cust_city" in supplied:
        fields["cust_city"] = _normalize_city(payload.cust_city)
    if code and "cust_code" in supplied:
        _check_immutable_code(code, payload.cust_code, errors)
    errors.raise_if_any()

    if not fields:
        raise ValidationError(message="No updatable fields", field="body")
    return code, fields
