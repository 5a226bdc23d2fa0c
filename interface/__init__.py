"""Interface package initializer.

Groups the command-line surface: argument parsing, catalog persistence and
console rendering.
"""

__all__ = [
    "cli",
    "persistence",
    "render",
]
