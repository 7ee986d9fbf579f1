"""
Input checks shared by the domain services.

They run before any unit of work is opened, so an invalid call never
touches the store.
"""

from typing import Any


def require_positive_int(value: Any, name: str) -> int:
    """Return ``value`` if it is a positive integer, raise ValueError otherwise."""
    if value is None:
        raise ValueError(f"{name} mustn't be null")
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def require_text(value: Any, name: str) -> str:
    """Return ``value`` if it is a non-blank string, raise ValueError otherwise."""
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} is null or empty")
    return value
