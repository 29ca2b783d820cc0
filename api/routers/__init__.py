"""
API Routers for Magick Flow
"""

from . import command, history, system

__all__ = ["command", "history", "system"]
