"""
ImageMagick argument building.

- geometry: size/offset descriptions to geometry strings
- definitions: nested -define mappings to key:subkey=value tokens
- unsharp: -unsharp parameter normalization
- options: option registry
- command: chainable command builder and runner
"""

from magick.command import CallbackSink, Command, EventSink
from magick.definitions import define
from magick.geometry import geometry
from magick.options import OPTIONS, Option, get_option, list_options
from magick.unsharp import unsharp

__all__ = [
    "Command",
    "CallbackSink",
    "EventSink",
    "define",
    "geometry",
    "unsharp",
    "OPTIONS",
    "Option",
    "get_option",
    "list_options",
]
