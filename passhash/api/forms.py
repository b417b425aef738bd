# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Request decoding and field validation for the hashing endpoints.

Fields come from the URL query string and from a form-encoded body. A body
value replaces a query value of the same name.

Assumptions:
- Only string fields are used; uploaded files are ignored
- Malformed percent-encoding is a decode failure, not a validation failure
"""
import re
from typing import Dict, List, Optional, Sequence
from urllib.parse import unquote_plus

from fastapi import Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

FORM_URLENCODED = "application/x-www-form-urlencoded"
FORM_MULTIPART = "multipart/form-data"

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_INTEGER = re.compile(r"[+-]?[0-9]+")


class DecodeError(Exception):
    """Raised when the query string or body cannot be parsed."""


class ValidationError(Exception):
    """Raised when a required field is missing or malformed.
    
    Attributes:
        missing: Names of absent or empty fields
        field: Name of the malformed field, if any
        reason: Why the field was rejected
    """
    
    def __init__(
        self,
        missing: Optional[List[str]] = None,
        field: Optional[str] = None,
        reason: Optional[str] = None,
    ):
        self.missing = missing or []
        self.field = field
        self.reason = reason
        if self.missing:
            message = f"missing fields: {', '.join(self.missing)}"
        else:
            message = f"{field}: {reason}"
        super().__init__(message)


def _check_encoding(encoded: str) -> None:
    """Reject percent-encoded text that does not decode cleanly."""
    if _BAD_ESCAPE.search(encoded):
        raise DecodeError("invalid percent escape")
    try:
        unquote_plus(encoded, errors="strict")
    except UnicodeDecodeError as e:
        raise DecodeError("percent escapes are not valid UTF-8") from e


async def decode_fields(request: Request) -> Dict[str, str]:
    """Collect form fields from the query string and request body.
    
    Args:
        request: Incoming request
        
    Returns:
        dict: Field name to first string value
        
    Raises:
        DecodeError: If the query string or body is malformed
    """
    _check_encoding(request.scope.get("query_string", b"").decode("latin-1"))
    
    fields: Dict[str, str] = {}
    for key, value in request.query_params.multi_items():
        fields.setdefault(key, value)
    
    content_type = request.headers.get("content-type", "")
    media_type = content_type.split(";")[0].strip().lower()
    if media_type not in (FORM_URLENCODED, FORM_MULTIPART):
        return fields
    
    if media_type == FORM_URLENCODED:
        body = await request.body()
        _check_encoding(body.decode("latin-1"))
    
    try:
        form = await request.form()
    except (MultiPartException, StarletteHTTPException) as e:
        raise DecodeError(str(e)) from e
    
    body_fields: Dict[str, str] = {}
    for key, value in form.multi_items():
        if isinstance(value, str):
            body_fields.setdefault(key, value)
    fields.update(body_fields)
    return fields


def require_fields(fields: Dict[str, str], names: Sequence[str]) -> Dict[str, str]:
    """Return the named fields, failing if any is absent or empty.
    
    Raises:
        ValidationError: With ``missing`` listing the offending names
    """
    missing = [name for name in names if not fields.get(name)]
    if missing:
        raise ValidationError(missing=missing)
    return {name: fields[name] for name in names}


def parse_cost(value: str, max_cost: Optional[int] = None) -> int:
    """Parse a base-10 cost factor.
    
    Args:
        value: Raw field value
        max_cost: Optional upper bound; None leaves the range to bcrypt
        
    Returns:
        int: Parsed cost
        
    Raises:
        ValidationError: If value is not a 64-bit integer or exceeds max_cost
    """
    if not _INTEGER.fullmatch(value):
        raise ValidationError(field="cost", reason="not an integer")
    cost = int(value)
    if not INT64_MIN <= cost <= INT64_MAX:
        raise ValidationError(field="cost", reason="not an integer")
    if max_cost is not None and cost > max_cost:
        raise ValidationError(field="cost", reason="exceeds maximum")
    return cost
