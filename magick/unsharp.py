"""
Unsharp formatter - normalizes a sigma or a parameter mapping into the
``{radius}x{sigma}+{gain}+{threshold}`` argument of ``-unsharp``.
"""

from typing import Any, Mapping, Union

from schemas.geometry import UnsharpSpec
from magick.tokens import format_value


def unsharp(spec: Union[int, float, str, Mapping[str, Any], UnsharpSpec]) -> str:
    """
    Format unsharp parameters, filling defaults for missing fields.

    Example:
        >>> unsharp(0.5)
        '0x0.5+1+0.05'
        >>> unsharp({"radius": 2, "sigma": 1.5, "gain": 0.7})
        '2x1.5+0.7+0.05'
    """
    if isinstance(spec, UnsharpSpec):
        params = spec
    elif isinstance(spec, Mapping):
        params = UnsharpSpec(**{k: v for k, v in spec.items() if v is not None})
    else:
        params = UnsharpSpec(sigma=spec)

    return (
        f"{format_value(params.radius)}x{format_value(params.sigma)}"
        f"+{format_value(params.gain)}+{format_value(params.threshold)}"
    )
