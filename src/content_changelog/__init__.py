"""Content change-log reader."""

__version__ = "0.1.0"
