"""Logging helpers package."""

__all__ = [
    "logging_utils",
]
