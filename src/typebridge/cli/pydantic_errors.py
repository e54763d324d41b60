"""Translate configuration errors to user-friendly messages."""

from __future__ import annotations

from pydantic_core import ErrorDetails

# Translation map for Pydantic error types
ERROR_TRANSLATIONS: dict[str, str] = {
    "extra_forbidden": "Unknown configuration key",
    "int_type": "Must be an integer",
    "int_parsing": "Must be an integer",
    "bool_type": "Must be true or false",
    "bool_parsing": "Must be true or false",
    "string_type": "Must be a string",
    "string_too_long": "String is too long",
    "greater_than_equal": "Value is too small",
    "less_than_equal": "Value is too large",
    "value_error": "Invalid value",
}


def translate_pydantic_error(error: ErrorDetails) -> str:
    """Translate a Pydantic error to a user-friendly message.

    Args:
    ----
        error: The Pydantic error details.

    Returns:
    -------
        User-friendly error message.

    """
    error_type = error["type"]
    ctx = error.get("ctx") or {}

    base_msg = ERROR_TRANSLATIONS.get(error_type, error["msg"])

    if error_type == "greater_than_equal":
        base_msg = f"Must be at least {ctx.get('ge', 0)}"
    elif error_type == "less_than_equal":
        base_msg = f"Must be at most {ctx.get('le', 0)}"
    elif error_type == "string_too_long":
        base_msg = f"Must be at most {ctx.get('max_length', 0)} characters"
    elif error_type == "value_error":
        base_msg = error["msg"].removeprefix("Value error, ")

    return base_msg


def format_pydantic_location(loc: tuple[str | int, ...]) -> str:
    """Format Pydantic location tuple to readable path.

    Args:
    ----
        loc: Location tuple from Pydantic error.

    Returns:
    -------
        Formatted path string.

    """
    parts: list[str] = []
    for part in loc:
        if isinstance(part, int):
            parts.append(f"[{part}]")
        else:
            if parts:
                parts.append(".")
            parts.append(str(part))

    return "".join(parts) or "<config>"
