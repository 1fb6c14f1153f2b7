"""Common types and validators for Pydantic models."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator

UINT64_MAX = 0xFFFFFFFFFFFFFFFF


def parse_uint(value: Any) -> int:
    """Parse a value that can be either an integer or a decimal string.

    Args:
    ----
        value: Input value - int or str of decimal digits (e.g., "20180101")

    Returns:
    -------
        Parsed integer value

    Raises:
    ------
        ValueError: If the value is not an unsigned decimal integer

    Examples:
    --------
        >>> parse_uint(2)
        2
        >>> parse_uint("20180101")
        20180101

    """
    if value is None:
        raise ValueError("Value cannot be None")

    # bool is an int subclass but never a valid version
    if isinstance(value, bool):
        raise ValueError(f"Cannot parse bool as integer: {value}")

    if isinstance(value, int):
        return value

    if isinstance(value, str):
        text = value.strip()
        if not text.isascii() or not text.isdigit():
            raise ValueError(f"Invalid unsigned integer string: {value!r}")
        return int(text)

    raise ValueError(f"Cannot parse {type(value).__name__} as integer: {value}")


def validate_uint64(value: int) -> int:
    """Validate that value fits in uint64 range."""
    if not 0 <= value <= UINT64_MAX:
        raise ValueError(f"Value {value} out of uint64 range")
    return value


UInt64 = Annotated[
    int,
    BeforeValidator(parse_uint),
    AfterValidator(validate_uint64),
]
