"""
Noteful Backend — Validation Layer
====================================

What:  Pure functions that check identifiers and required fields.
Why:   A malformed id reaching the store produces a driver error that says
       nothing useful to the client. Checking first turns it into a 400 with
       a message naming the offending field, and guarantees no store I/O
       happens for a rejected request.
Who:   Called by every service method before it builds a query.

Reference format:
    A reference is the store's 12-byte identifier, written either as 24 hex
    characters ("5b2d6c1e9a7f3c0012345678") or as any string that is exactly
    12 bytes of UTF-8 ("DOESNOTEXIST"). Both spellings are accepted on input;
    the canonical form stored and returned is lowercase hex.
"""

import os
import re
import time
from typing import Any, Iterable, List, Mapping, Optional

from noteful.exceptions import FieldTooLongError, InvalidReferenceError, MissingFieldError

REFERENCE_BYTES = 12

# Column width of note titles and folder/tag names
MAX_FIELD_LENGTH = 255

_HEX_REFERENCE = re.compile(r"^[0-9a-fA-F]{24}$")


def is_valid_reference(value: Any) -> bool:
    """True iff value is a 24-char hex string or a string of exactly 12 UTF-8 bytes."""
    if not isinstance(value, str):
        return False
    if _HEX_REFERENCE.match(value):
        return True
    return len(value.encode("utf-8")) == REFERENCE_BYTES


def to_reference(value: Any, field: str = "id") -> str:
    """
    Canonical (lowercase 24-hex) form of a reference.

    Raises:
        InvalidReferenceError: value is not a well-formed reference.
    """
    if not is_valid_reference(value):
        raise InvalidReferenceError(field=field, value=value if isinstance(value, str) else None)
    if _HEX_REFERENCE.match(value):
        return value.lower()
    return value.encode("utf-8").hex()


def to_references(values: Iterable[Any], field: str = "tags") -> List[str]:
    """
    Canonical references for a list field, duplicates removed (first wins).

    One bad element rejects the whole list.
    """
    refs: List[str] = []
    for value in values:
        if not is_valid_reference(value):
            raise InvalidReferenceError(
                field=field,
                value=value if isinstance(value, str) else None,
                message=f"The `{field}` array contains an invalid id",
            )
        ref = to_reference(value, field)
        if ref not in refs:
            refs.append(ref)
    return refs


def new_reference() -> str:
    """Server-assigned reference: 4-byte seconds timestamp + 8 random bytes, hex."""
    return int(time.time()).to_bytes(4, "big").hex() + os.urandom(8).hex()


def require_field(body: Any, field: str, max_length: int = MAX_FIELD_LENGTH) -> str:
    """
    Trimmed value of a required string field.

    body is a parsed JSON mapping or a request model; model attributes use
    the snake_case name.

    Raises:
        MissingFieldError: field absent, None, or blank after trimming.
        FieldTooLongError: trimmed value longer than max_length.
    """
    if isinstance(body, Mapping):
        value = body.get(field)
    else:
        value = getattr(body, field, None)
    if value is None:
        raise MissingFieldError(field)
    value = str(value).strip()
    if not value:
        raise MissingFieldError(field)
    if len(value) > max_length:
        raise FieldTooLongError(field, max_length)
    return value


def optional_reference(value: Optional[str], field: str) -> Optional[str]:
    """None for an absent or empty value, otherwise the canonical reference."""
    if value is None or value == "":
        return None
    return to_reference(value, field)
