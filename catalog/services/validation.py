"""Payload validation against the pydantic schemas.

Pydantic reports every violated field; the write pipeline surfaces the first
one to the client and keeps the full list on the raised exception.
"""
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from catalog.errors import ErrorType, format_errors
from catalog.exceptions import AppException

T = TypeVar("T", bound=BaseModel)


def validate_payload(schema: type[T], payload: Any) -> T:
    """Validate a raw request body, raising AppException(VALIDATION) on failure."""
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        messages = format_errors(e.errors())
        raise AppException(ErrorType.VALIDATION, messages[0], details=messages)
