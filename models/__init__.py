"""Models package initializer.

Mark `models` as a package so imports and type-checking resolve to
`models.*` module names consistently.
"""

__all__ = [
    "errors",
    "ingredient",
    "kinds",
    "recipe",
    "sandwich",
]
