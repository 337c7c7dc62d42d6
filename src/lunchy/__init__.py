"""Lunchy - the friendly launchctl wrapper."""

__version__ = "0.3.0"
