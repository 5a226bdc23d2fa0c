"""Closed vocabularies shared by ingredients, recipes, and effects.

Exports
-------
Flavor
MealPower
PokemonType
IngredientCategory

Notes
-----
Declaration order is significant: it is the tie-break order used whenever
two kinds share the same aggregated total (flavor ranking, power ranking,
type ranking).
"""

from enum import Enum


class Flavor(Enum):
    """The five sandwich flavors. Catalog data spells spicy as ``"Hot"``."""

    SWEET = "Sweet"
    SALTY = "Salty"
    SOUR = "Sour"
    BITTER = "Bitter"
    SPICY = "Hot"

    @property
    def display_name(self) -> str:
        return "Spicy" if self is Flavor.SPICY else self.value

    @classmethod
    def parse(cls, text: str) -> "Flavor":
        """Look up a flavor by data value or display name (case-insensitive)."""
        key = text.strip().casefold()
        for flavor in cls:
            if key in (flavor.value.casefold(), flavor.display_name.casefold()):
                return flavor
        raise ValueError(f"Unknown flavor: {text!r}")


class MealPower(Enum):
    """Meal powers in the order the reference tables index them (1-based)."""

    EGG = "Egg"
    CATCHING = "Catch"
    EXP = "Exp"
    ITEM = "Item"
    RAID = "Raid"
    SPARKLING = "Sparkling"
    TITLE = "Title"
    HUMUNGO = "Humungo"
    TEENSY = "Teensy"
    ENCOUNTER = "Encounter"

    @property
    def full_name(self) -> str:
        """Display name such as ``"Egg Power"`` or ``"Exp. Point Power"``."""
        special = {
            MealPower.CATCHING: "Catching Power",
            MealPower.EXP: "Exp. Point Power",
            MealPower.ITEM: "Item Drop Power",
        }
        return special.get(self, f"{self.value} Power")

    @classmethod
    def parse(cls, text: str) -> "MealPower":
        """Look up a power by value, enum name, or full name.

        Full names are matched by substring the way recipe effect names
        (``"Catching Power"``, ``"Exp. Point Power"``) are written in the
        catalogs.
        """
        key = text.strip().casefold()
        for power in cls:
            if key in (power.value.casefold(), power.name.casefold()):
                return power
        for power in cls:
            if power.value.casefold() in key:
                return power
        raise ValueError(f"Unknown meal power: {text!r}")


class PokemonType(Enum):
    """The eighteen elemental types plus the ``ALL_TYPES`` wildcard."""

    NORMAL = "Normal"
    FIGHTING = "Fighting"
    FLYING = "Flying"
    POISON = "Poison"
    GROUND = "Ground"
    ROCK = "Rock"
    BUG = "Bug"
    GHOST = "Ghost"
    STEEL = "Steel"
    FIRE = "Fire"
    WATER = "Water"
    GRASS = "Grass"
    ELECTRIC = "Electric"
    PSYCHIC = "Psychic"
    ICE = "Ice"
    DRAGON = "Dragon"
    DARK = "Dark"
    FAIRY = "Fairy"
    ALL_TYPES = "All Types"

    @classmethod
    def parse(cls, text: str) -> "PokemonType":
        """Look up a type by value; blank, ``"any"`` and ``"all"`` mean wildcard."""
        key = text.strip().casefold()
        if key in ("", "any", "all", "all types"):
            return cls.ALL_TYPES
        for kind in cls:
            if key == kind.value.casefold():
                return kind
        raise ValueError(f"Unknown type: {text!r}")


class IngredientCategory(Enum):
    FILLING = "filling"
    CONDIMENT = "condiment"
