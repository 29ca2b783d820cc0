"""
Definition formatter - flattens nested ``-define`` mappings into
``key:subkey=value`` tokens.
"""

from typing import Any, List, Mapping

from core.constants import GeometryConstants
from magick.geometry import geometry
from magick.tokens import format_value


def define(definitions: Mapping[str, Any]) -> List[str]:
    """
    Flatten definitions in insertion order.

    Nested ``size`` and ``offset`` values are rendered as geometries.

    Example:
        >>> define({"jpeg": {"size": {"width": 128, "height": 128}}, "showkernel": 1})
        ['jpeg:size=128x128', 'showkernel=1']
    """
    tokens = []
    for key, value in definitions.items():
        if isinstance(value, Mapping):
            for subkey, subvalue in value.items():
                if subkey in GeometryConstants.GEOMETRY_SUBKEYS:
                    subvalue = geometry(subvalue)
                tokens.append(f"{key}:{subkey}={format_value(subvalue)}")
        else:
            tokens.append(f"{key}={format_value(value)}")
    return tokens
