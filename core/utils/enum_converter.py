"""
Enum conversion utilities.

Provides standardized methods for converting between enums and strings,
with support for case-insensitive parsing and fallback defaults.
"""

from typing import Any, Optional, Type, TypeVar

T = TypeVar("T")


def parse_enum(value: Any, enum_class: Type[T], default: Optional[T], normalize: bool = False):
    """
    Parse value to enum with fallback to default.

    Args:
        value: Value to parse (string, enum, or None)
        enum_class: Enum class to parse to
        default: Default enum value if parsing fails
        normalize: Whether to uppercase string before parsing
            (for case-insensitive matching of upper-case values)

    Returns:
        Parsed enum value or default

    Example:
        >>> parse_enum("success", RunResult, None, normalize=True)
        <RunResult.SUCCESS: 'SUCCESS'>
    """
    if isinstance(value, enum_class):
        return value

    if value is None:
        return default

    try:
        str_value = value.upper() if normalize else value
        return enum_class(str_value)
    except (ValueError, AttributeError):
        return default


def enum_to_string(value: Any) -> Any:
    """
    Convert enum to its value, or pass through anything else.

    Example:
        >>> enum_to_string(OptionKind.GEOMETRY)
        'geometry'
    """
    return value.value if hasattr(value, "value") else value
