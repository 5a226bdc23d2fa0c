"""Preset recipe and restaurant meal records.

Exports
-------
RecipeEffect
Recipe
Meal

Notes
-----
Declared effects are catalog ground truth used for browsing and target
lookup; they are never recalculated.
"""

from dataclasses import (
    dataclass,
)

from models.errors import (
    CatalogError,
)
from models.kinds import (
    MealPower,
    PokemonType,
)


@dataclass(frozen=True)
class RecipeEffect:
    """A declared effect: power, type (or wildcard) and level 1..3."""

    power: MealPower
    type: PokemonType
    level: int

    @classmethod
    def from_dict(
        cls,
        data: dict,
    ) -> "RecipeEffect":
        """Decode ``{"name": "Egg Power", "type": "", "level": "2"}``.

        An empty type means all types. Level may be an int or a numeric
        string; a missing level means 1.

        Raises
        ------
        CatalogError
            Unknown power or type, or a level that is not 1, 2 or 3.
        """
        try:
            power = MealPower.parse(data["name"])
            kind = PokemonType.parse(data.get("type", "") or "")
        except (KeyError, ValueError) as exc:
            raise CatalogError(f"bad effect {data!r} ({exc})") from exc
        raw_level = data.get("level", 1)
        try:
            level = int(raw_level)
        except (TypeError, ValueError):
            level = None
        if level not in (1, 2, 3):
            raise CatalogError(
                f"effect {data.get('name')!r}: level must be 1, 2 or 3, got {raw_level!r}"
            )
        return cls(power, kind, level)

    def to_dict(
        self,
    ) -> dict:
        return {
            "name": self.power.full_name,
            "type": "" if self.type is PokemonType.ALL_TYPES else self.type.value,
            "level": self.level,
        }


def _decode_effects(
    data: dict,
    label: str,
) -> tuple[RecipeEffect, ...]:
    try:
        return tuple(RecipeEffect.from_dict(entry) for entry in data.get("effects", []) or [])
    except CatalogError as exc:
        raise CatalogError(f"{label}: {exc}") from exc


@dataclass(frozen=True)
class Recipe:
    """A preset sandwich recipe.

    Attributes
    ----------
    number : str
        Catalog number; a leading ``-`` marks hidden recipes.
    name : str
        Recipe name.
    fillings : tuple[str, ...]
        Filling names, in catalog order (repeats allowed).
    condiments : tuple[str, ...]
        Condiment names, in catalog order (repeats allowed).
    effects : tuple[RecipeEffect, ...]
        Declared effects.
    description : str
        Flavor text.
    location : str
        Where the recipe is unlocked; ``"Unavailable"`` for hidden ones.
    """

    number: str
    name: str
    fillings: tuple[str, ...] = ()
    condiments: tuple[str, ...] = ()
    effects: tuple[RecipeEffect, ...] = ()
    description: str = ""
    location: str = ""

    @property
    def is_hidden(
        self,
    ) -> bool:
        return self.location == "Unavailable" or self.number.startswith("-")

    @property
    def ingredient_names(
        self,
    ) -> tuple[str, ...]:
        """Fillings followed by condiments."""
        return self.fillings + self.condiments

    @property
    def total_ingredients(
        self,
    ) -> int:
        return len(self.fillings) + len(self.condiments)

    @classmethod
    def from_dict(
        cls,
        data: dict,
    ) -> "Recipe":
        """Create a ``Recipe`` from a ``sandwiches.json`` entry.

        Raises
        ------
        CatalogError
            Missing ``number``/``name`` or an undecodable effect.
        """
        try:
            number = str(data["number"])
            name = data["name"]
        except KeyError as exc:
            raise CatalogError(f"recipe {data.get('name', '<unnamed>')!r}: missing {exc}") from exc
        label = f"recipe #{number} {name!r}"
        return cls(
            number=number,
            name=name,
            fillings=tuple(data.get("fillings", []) or []),
            condiments=tuple(data.get("condiments", []) or []),
            effects=_decode_effects(data, label),
            description=data.get("description", ""),
            location=data.get("location", ""),
        )


@dataclass(frozen=True)
class Meal:
    """A restaurant meal with fixed declared effects."""

    number: str
    name: str
    cost: int = 0
    shop: str = ""
    towns: tuple[str, ...] = ()
    effects: tuple[RecipeEffect, ...] = ()
    description: str = ""

    def is_available_in(
        self,
        town: str,
    ) -> bool:
        return town in self.towns

    @classmethod
    def from_dict(
        cls,
        data: dict,
    ) -> "Meal":
        """Create a ``Meal`` from a ``meals.json`` entry.

        Cost may be an int or a numeric string; missing or blank means 0.

        Raises
        ------
        CatalogError
            Missing ``number``/``name``, an unreadable cost, or a bad effect.
        """
        try:
            number = str(data["number"])
            name = data["name"]
        except KeyError as exc:
            raise CatalogError(f"meal {data.get('name', '<unnamed>')!r}: missing {exc}") from exc
        raw_cost = data.get("cost", 0)
        try:
            cost = int(raw_cost or 0)
        except (TypeError, ValueError) as exc:
            raise CatalogError(f"meal #{number} {name!r}: bad cost {raw_cost!r}") from exc
        return cls(
            number=number,
            name=name,
            cost=cost,
            shop=data.get("shop", ""),
            towns=tuple(data.get("towns", []) or []),
            effects=_decode_effects(data, f"meal #{number} {name!r}"),
            description=data.get("description", ""),
        )
