"""
Option registry - maps option names to the argument tokens they produce.

Every entry is an ``Option`` that knows its ImageMagick flag and how its
value is rendered (see ``OptionKind``). The table is closed and built once
at import time; ``get_option`` is the only lookup path.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Sequence

from core.constants import CommandConstants
from core.enums import OptionKind
from core.exceptions import UnknownOption
from magick.definitions import define
from magick.geometry import geometry
from magick.tokens import ArgumentToken, format_value, quote
from magick.unsharp import unsharp

logger = logging.getLogger(__name__)


def _present(values: Sequence[Any]) -> List[Any]:
    return [v for v in values if v is not None]


def _render_flag(flag: str, values: Sequence[Any]) -> List[ArgumentToken]:
    return [[flag]]


def _render_value(flag: str, values: Sequence[Any]) -> List[ArgumentToken]:
    return [[flag] + [format_value(v) for v in _present(values)]]


def _render_quoted(flag: str, values: Sequence[Any]) -> List[ArgumentToken]:
    return [[flag] + [quote(v) for v in _present(values)]]


def _render_geometry(flag: str, values: Sequence[Any]) -> List[ArgumentToken]:
    return [[flag] + [quote(geometry(v)) for v in _present(values)]]


def _render_unsharp(flag: str, values: Sequence[Any]) -> List[ArgumentToken]:
    return [[flag] + [quote(unsharp(v)) for v in _present(values)]]


def _render_define(flag: str, values: Sequence[Any]) -> List[ArgumentToken]:
    definitions = _present(values)
    if not definitions:
        return [[flag]]

    tokens = []
    for value in definitions:
        entries = define(value) if isinstance(value, Mapping) else [format_value(value)]
        tokens.extend([flag, quote(entry)] for entry in entries)
    return tokens


def _render_passthrough(flag: str, values: Sequence[Any]) -> List[ArgumentToken]:
    present = _present(values)
    if not present:
        return []
    return [[format_value(v) for v in present]]


_RENDERERS: Dict[OptionKind, Callable[[str, Sequence[Any]], List[ArgumentToken]]] = {
    OptionKind.FLAG: _render_flag,
    OptionKind.VALUE: _render_value,
    OptionKind.QUOTED: _render_quoted,
    OptionKind.GEOMETRY: _render_geometry,
    OptionKind.UNSHARP: _render_unsharp,
    OptionKind.DEFINE: _render_define,
    OptionKind.PASSTHROUGH: _render_passthrough,
}


@dataclass(frozen=True)
class Option:
    """A single command-line option and its rendering rule"""

    name: str
    flag: str
    kind: OptionKind

    def __call__(self, *values: Any) -> List[ArgumentToken]:
        """
        Render the option.

        Value kinds called without a value (or with None) render the
        bare flag, which is also how the reset form obtains its flag.
        """
        return _RENDERERS[self.kind](self.flag, values)

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "flag": self.flag, "kind": self.kind.value}


def _option(flag: str, kind: OptionKind, name: str = None) -> Option:
    if name is None:
        name = flag.lstrip(CommandConstants.FLAG_PREFIX).replace("-", "_")
    return Option(name=name, flag=flag, kind=kind)


def _flags(*flags: str) -> List[Option]:
    return [_option(f, OptionKind.FLAG) for f in flags]


def _values(*flags: str) -> List[Option]:
    return [_option(f, OptionKind.VALUE) for f in flags]


def _quoted(*flags: str) -> List[Option]:
    return [_option(f, OptionKind.QUOTED) for f in flags]


def _geometries(*flags: str) -> List[Option]:
    return [_option(f, OptionKind.GEOMETRY) for f in flags]


_TABLE: List[Option] = [
    # Options without a value
    *_flags(
        "-adjoin",
        "-antialias",
        "-append",
        "-auto-gamma",
        "-auto-level",
        "-auto-orient",
        "-black-point-compensation",
        "-clamp",
        "-clip",
        "-clut",
        "-coalesce",
        "-combine",
        "-composite",
        "-contrast",
        "-deconstruct",
        "-despeckle",
        "-enhance",
        "-equalize",
        "-fft",
        "-flatten",
        "-flip",
        "-flop",
        "-hald-clut",
        "-ift",
        "-magnify",
        "-minify",
        "-monitor",
        "-monochrome",
        "-mosaic",
        "-negate",
        "-noop",
        "-normalize",
        "-ping",
        "-quiet",
        "-respect-parentheses",
        "-reverse",
        "-separate",
        "-strip",
        "-transpose",
        "-transverse",
        "-trim",
        "-unique-colors",
        "-verbose",
    ),
    # Bare values (numbers and single words)
    *_values(
        "-alpha",
        "-auto-threshold",
        "-blue-shift",
        "-channel",
        "-charcoal",
        "-clone",
        "-colors",
        "-colorspace",
        "-compose",
        "-compress",
        "-connected-components",
        "-cycle",
        "-debug",
        "-delay",
        "-delete",
        "-depth",
        "-direction",
        "-dispose",
        "-dither",
        "-duplicate",
        "-emboss",
        "-encoding",
        "-endian",
        "-evaluate",
        "-evaluate-sequence",
        "-filter",
        "-fuzz",
        "-gamma",
        "-gravity",
        "-grayscale",
        "-implode",
        "-insert",
        "-intensity",
        "-intent",
        "-interlace",
        "-interline-spacing",
        "-interpolate",
        "-interword-spacing",
        "-kerning",
        "-layers",
        "-limit",
        "-loop",
        "-metric",
        "-noise",
        "-orient",
        "-paint",
        "-pointsize",
        "-polaroid",
        "-posterize",
        "-precision",
        "-quality",
        "-quantize",
        "-seed",
        "-smush",
        "-spread",
        "-stretch",
        "-strokewidth",
        "-swap",
        "-swirl",
        "-treedepth",
        "-type",
        "-units",
        "-virtual-pixel",
        "-weight",
    ),
    # Quoted values (colors, expressions, free text, paths)
    *_quoted(
        "-background",
        "-black-threshold",
        "-bordercolor",
        "-brightness-contrast",
        "-color-matrix",
        "-colorize",
        "-comment",
        "-contrast-stretch",
        "-convolve",
        "-deskew",
        "-distort",
        "-draw",
        "-family",
        "-fill",
        "-font",
        "-format",
        "-function",
        "-fx",
        "-label",
        "-level",
        "-level-colors",
        "-linear-stretch",
        "-mattecolor",
        "-modulate",
        "-morphology",
        "-opaque",
        "-profile",
        "-random-threshold",
        "-rotate",
        "-sampling-factor",
        "-sepia-tone",
        "-set",
        "-sigmoidal-contrast",
        "-solarize",
        "-stroke",
        "-style",
        "-threshold",
        "-tile",
        "-tint",
        "-title",
        "-transparent",
        "-transparent-color",
        "-undercolor",
        "-white-point",
        "-white-threshold",
        "-write",
    ),
    # Geometry values
    *_geometries(
        "-adaptive-blur",
        "-adaptive-resize",
        "-adaptive-sharpen",
        "-annotate",
        "-blur",
        "-border",
        "-canny",
        "-chop",
        "-clahe",
        "-crop",
        "-density",
        "-extent",
        "-extract",
        "-frame",
        "-gaussian-blur",
        "-geometry",
        "-kuwahara",
        "-liquid-rescale",
        "-median",
        "-mode",
        "-motion-blur",
        "-page",
        "-region",
        "-repage",
        "-resample",
        "-resize",
        "-roll",
        "-rotational-blur",
        "-sample",
        "-scale",
        "-selective-blur",
        "-shadow",
        "-sharpen",
        "-shave",
        "-shear",
        "-size",
        "-sketch",
        "-splice",
        "-statistic",
        "-thumbnail",
        "-vignette",
        "-wave",
    ),
    _option("-raise", OptionKind.GEOMETRY, name="raise_"),
    _option("-unsharp", OptionKind.UNSHARP),
    _option("-define", OptionKind.DEFINE),
    _option("", OptionKind.PASSTHROUGH, name="add"),
]

OPTIONS: Dict[str, Option] = {option.name: option for option in _TABLE}

# Spellings that cannot be used as Python attribute names
ALIASES: Dict[str, str] = {"raise": "raise_"}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def normalize_name(name: str) -> str:
    """
    Map any accepted spelling of an option name to its registry key.

    Example:
        >>> normalize_name("autoOrient")
        'auto_orient'
        >>> normalize_name("-auto-orient")
        'auto_orient'
    """
    key = _CAMEL_BOUNDARY.sub("_", name.lstrip(CommandConstants.FLAG_PREFIX)).lower()
    key = key.replace("-", "_")
    return ALIASES.get(key, key)


def get_option(name: str) -> Option:
    """
    Look up an option by name.

    Raises:
        UnknownOption: If the name is not registered
    """
    if not isinstance(name, str):
        raise UnknownOption(str(name))
    option = OPTIONS.get(normalize_name(name))
    if option is None:
        raise UnknownOption(name)
    return option


def has_option(name: str) -> bool:
    """Check if name resolves to a registered option"""
    return isinstance(name, str) and normalize_name(name) in OPTIONS


def list_options() -> List[Dict[str, str]]:
    """Registry metadata sorted by name"""
    return [OPTIONS[name].to_dict() for name in sorted(OPTIONS)]
