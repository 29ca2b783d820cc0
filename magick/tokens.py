"""
Token formatting helpers shared by the formatters and the option registry.
"""

from numbers import Number
from typing import Any, Iterable, List

from core.constants import CommandConstants
from core.utils.enum_converter import enum_to_string

ArgumentToken = List[str]


def format_value(value: Any) -> str:
    """
    Render a scalar the way it appears on the command line.

    Integral floats drop their fraction, so 1.0 renders as "1" and
    0.05 stays "0.05". Booleans render lowercase.

    Example:
        >>> format_value(1.0)
        '1'
        >>> format_value("128x128")
        '128x128'
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if not isinstance(value, Number):
        value = enum_to_string(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def signed(value: Any) -> str:
    """Format an offset as +N or -N"""
    if isinstance(value, str):
        value = float(value) if "." in value else int(value)
    sign = "-" if value < 0 else "+"
    return f"{sign}{format_value(abs(value))}"


def quote(value: Any) -> str:
    """Wrap value in single quotes for the shell"""
    text = format_value(value).replace(CommandConstants.QUOTE, CommandConstants.ESCAPED_QUOTE)
    return f"{CommandConstants.QUOTE}{text}{CommandConstants.QUOTE}"


def join_tokens(tokens: Iterable[ArgumentToken]) -> str:
    """Flatten tokens and join them with single spaces"""
    return CommandConstants.TOKEN_SEPARATOR.join(part for token in tokens for part in token)


def reset_flag(flag: str) -> str:
    """Turn -flag into its +flag reset form"""
    if flag.startswith(CommandConstants.FLAG_PREFIX):
        return CommandConstants.RESET_PREFIX + flag[len(CommandConstants.FLAG_PREFIX) :]
    return flag
