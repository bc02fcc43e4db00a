from enum import Enum
from typing import Any, Iterable


class ErrorType(Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    ROUTE_NOT_FOUND = "route_not_found"
    INTERNAL_ERROR = "internal_error"


# Map error types to HTTP status codes
ERROR_STATUS_MAP = {
    ErrorType.VALIDATION: 400,
    ErrorType.NOT_FOUND: 404,
    # Duplicate unique fields are reported as bad requests, not 409
    ErrorType.CONFLICT: 400,
    ErrorType.ROUTE_NOT_FOUND: 404,
    ErrorType.INTERNAL_ERROR: 500,
}


def _bound(value: Any) -> str:
    # 0.0 and 100.0 read as 0 and 100
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def _describe(error: dict[str, Any]) -> str:
    error_type = error.get("type")
    ctx = error.get("ctx") or {}

    if error_type == "missing":
        return "is required"
    if error_type == "extra_forbidden":
        return "is not allowed"
    if error_type == "string_too_short":
        return "is not allowed to be empty"
    if error_type == "greater_than":
        return f"must be greater than {_bound(ctx.get('gt'))}"
    if error_type == "greater_than_equal":
        return f"must be greater than or equal to {_bound(ctx.get('ge'))}"
    if error_type == "less_than_equal":
        return f"must be less than or equal to {_bound(ctx.get('le'))}"
    if error_type == "finite_number":
        return "must be a finite number"
    if error_type == "string_type":
        return "must be a string"
    if error_type == "value_error" and "error" in ctx:
        return str(ctx["error"])
    return error.get("msg", "is invalid")


def format_errors(errors: Iterable[dict[str, Any]], skip_prefix: str | None = None) -> list[str]:
    """Turn pydantic error dicts into messages like '"variants.0.price" must be greater than 0'."""
    messages = []
    for error in errors:
        loc = list(error.get("loc", ()))
        if skip_prefix and loc and loc[0] == skip_prefix:
            loc = loc[1:]
        field = ".".join(str(part) for part in loc) or "body"
        messages.append(f'"{field}" {_describe(error)}')
    return messages
