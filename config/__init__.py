"""Configuration and version information."""

from config.__version__ import __version__, get_display_version, get_version

__all__ = ["__version__", "get_display_version", "get_version"]
