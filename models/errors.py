"""Exceptions raised for malformed catalog data."""


class IngredientDataError(ValueError):
    """An ingredient violates a model invariant.

    Parameters
    ----------
    name : str
        Ingredient name (or id when the name itself is the problem).
    field : str
        Offending field.
    reason : str
        Human-readable description.
    """

    def __init__(
        self,
        name: str,
        field: str,
        reason: str,
    ):
        self.name = name
        self.field = field
        self.reason = reason
        super().__init__(f"{name!r}: {field} {reason}")


class CatalogError(ValueError):
    """A catalog entry could not be decoded into a model."""
