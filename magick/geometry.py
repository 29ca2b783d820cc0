"""
Geometry formatter - converts size/offset descriptions to ImageMagick
geometry strings such as ``128x128>+10+5``.
"""

import re
from typing import Any, Mapping

from core.constants import GeometryConstants as G
from core.exceptions import UnrecognizedGeometryOption
from magick.tokens import format_value, signed
from schemas.geometry import GeometrySpec

_SNAKE_SEGMENT = re.compile(r"_([a-z])")


def _camelize(key: str) -> str:
    return _SNAKE_SEGMENT.sub(lambda m: m.group(1).upper(), key)


def _normalize(spec: Any) -> Mapping[str, Any]:
    """Return a camelCase mapping without None values"""
    if isinstance(spec, GeometrySpec):
        return spec.to_dict()
    return {_camelize(str(k)): v for k, v in spec.items() if v is not None}


def _size(options: Mapping[str, Any], original_keys) -> str:
    has = options.__contains__
    fmt = format_value
    x = G.SIZE_SEPARATOR

    if has("opacity") and has("sigma"):
        return f"{fmt(options['opacity'])}{x}{fmt(options['sigma'])}"
    if has("opacity"):
        return fmt(options["opacity"])
    if has("scale"):
        return f"{fmt(options['scale'])}{G.PERCENT}"
    if has("area"):
        return f"{fmt(options['area'])}{G.AREA}"
    if has("scaleWidth") and has("scaleHeight"):
        return (
            f"{fmt(options['scaleWidth'])}{G.PERCENT}{x}"
            f"{fmt(options['scaleHeight'])}{G.PERCENT}"
        )
    if has("width") and not has("height"):
        return fmt(options["width"])
    if has("height") and not has("width"):
        return f"{x}{fmt(options['height'])}"
    if has("width") and has("height"):
        size = f"{fmt(options['width'])}{x}{fmt(options['height'])}"
        if options.get("preserveAspect") is False:
            return size + G.IGNORE_ASPECT
        if options.get("onlyShrink"):
            return size + G.ONLY_SHRINK
        if options.get("onlyEnlarge"):
            return size + G.ONLY_ENLARGE
        if options.get("fill"):
            return size + G.FILL_AREA
        return size

    raise UnrecognizedGeometryOption(original_keys)


def _offset(options: Mapping[str, Any]) -> str:
    if "offsetX" not in options and "offsetY" not in options:
        return ""

    offset_x = options.get("offsetX", G.DEFAULT_OFFSET)
    offset_y = options.get("offsetY", G.DEFAULT_OFFSET)
    offset = signed(offset_x) + signed(offset_y)
    if options.get("usePercentage"):
        offset += G.PERCENT
    return offset


def geometry(spec: Any) -> str:
    """
    Format a geometry description.

    Args:
        spec: Mapping or GeometrySpec describing one shape plus an optional
            offset, or any other value which is passed through as a string

    Returns:
        Geometry string, size first then offset

    Raises:
        UnrecognizedGeometryOption: If a mapping matches none of the shapes

    Example:
        >>> geometry({"width": 20, "height": 30, "fill": True, "offsetX": 30, "offsetY": -20})
        '20x30^+30-20'
        >>> geometry({"scale": 20})
        '20%'
    """
    if not isinstance(spec, (Mapping, GeometrySpec)):
        return format_value(spec)

    original_keys = list(spec.keys()) if isinstance(spec, Mapping) else list(_normalize(spec))
    options = _normalize(spec)
    return _size(options, original_keys) + _offset(options)
