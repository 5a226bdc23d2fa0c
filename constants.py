"""Game rule tables for the sandwich effect calculation (immutable).

Conventions
-----------
- Power/type amounts are plain integers; levels are ``1..3``.
- Deliciousness tiers are ``0..3``; the modifier table keeps six entries
  because the reference data reserves tiers 4 and 5.

Notes
-----
Every table is exposed through a single frozen `RuleTables` instance,
`DEFAULT_RULES`, whose mappings are read-only views (`MappingProxyType`).
Engine functions receive it as an explicit argument.
"""

from dataclasses import (
    dataclass,
)
from types import (
    MappingProxyType,
)
from typing import (
    Final,
    Mapping,
)

from models.kinds import (
    Flavor,
    MealPower,
)

# --- Flavor-combination rules ------------------------------------------------

# Five smallest primes, one per flavor. A product of primes identifies an
# unordered set of flavors.
_FLAVOR_PRIMES_DICT: Final[dict[Flavor, int]] = {
    Flavor.SPICY: 2,
    Flavor.SWEET: 3,
    Flavor.SALTY: 5,
    Flavor.SOUR: 7,
    Flavor.BITTER: 11,
}


@dataclass(frozen=True)
class FlavorRule:
    """Award ``bonus`` to ``power`` when ``flavors`` are the top-ranked ones.

    Attributes
    ----------
    flavors : tuple[Flavor, ...]
        One or two flavors compared against the same number of top ranks.
    power : MealPower
        Power receiving the bonus.
    bonus : int
        Amount added.
    """

    flavors: tuple[Flavor, ...]
    power: MealPower
    bonus: int = 100


# Table order matters: only the first matching rule applies.
_FLAVOR_RULES: Final[tuple[FlavorRule, ...]] = (
    FlavorRule((Flavor.SWEET, Flavor.SPICY), MealPower.RAID),
    FlavorRule((Flavor.SWEET, Flavor.SOUR), MealPower.CATCHING),
    FlavorRule((Flavor.BITTER, Flavor.SALTY), MealPower.EXP),
    FlavorRule((Flavor.SWEET,), MealPower.EGG),
    FlavorRule((Flavor.SPICY,), MealPower.HUMUNGO),
    FlavorRule((Flavor.SALTY,), MealPower.ENCOUNTER),
    FlavorRule((Flavor.SOUR,), MealPower.TEENSY),
    FlavorRule((Flavor.BITTER,), MealPower.ITEM),
)

# --- Levels and deliciousness ------------------------------------------------

# [Lv 1, Lv 2, Lv 3] minimum type values
POWER_LEVEL_THRESHOLDS: Final[tuple[int, int, int]] = (1, 200, 400)

# Added to every type total, indexed by deliciousness tier 0..5
DELICIOUSNESS_TYPE_MODIFIERS: Final[tuple[int, ...]] = (-500, 0, 20, 100, 0, 0)

# All five flavors at or above this make a sandwich "excellent" (tier 3)
EXCELLENT_FLAVOR_MINIMUM: Final[int] = 100

# Pieces of a single filling at which the sandwich turns "bad" (tier 0)
_INGREDIENT_LIMITS_DICT: Final[dict[int, int]] = {
    1: 13,
    2: 13,
    3: 19,
    4: 25,
}
DEFAULT_INGREDIENT_LIMIT: Final[int] = 13

# --- Rare ingredients --------------------------------------------------------

# Case-insensitive name marker for rare condiments
RARE_NAME_MARKER: Final[str] = "herba mystica"

TITLE_RARE_BONUS: Final[int] = 10000  # >= 1 rare condiment
SPARKLING_RARE_BONUS: Final[int] = 20000  # >= 2 rare condiments

# --- Per-player plate limits -------------------------------------------------

FILLINGS_PER_PLAYER: Final[int] = 6
CONDIMENTS_PER_PLAYER: Final[int] = 4

# Pieces assumed when a filling entry omits maxPiecesOnDish
DEFAULT_MAX_PIECES_ON_DISH: Final[int] = 6


@dataclass(frozen=True)
class RuleTables:
    """Bundle of every table the engine reads. Construct once, never mutate."""

    flavor_primes: Mapping[Flavor, int]
    flavor_rules: tuple[FlavorRule, ...]
    level_thresholds: tuple[int, int, int]
    deliciousness_modifiers: tuple[int, ...]
    excellent_flavor_minimum: int
    ingredient_limits: Mapping[int, int]
    default_ingredient_limit: int
    title_rare_bonus: int
    sparkling_rare_bonus: int


DEFAULT_RULES: Final[RuleTables] = RuleTables(
    flavor_primes=MappingProxyType(_FLAVOR_PRIMES_DICT),
    flavor_rules=_FLAVOR_RULES,
    level_thresholds=POWER_LEVEL_THRESHOLDS,
    deliciousness_modifiers=DELICIOUSNESS_TYPE_MODIFIERS,
    excellent_flavor_minimum=EXCELLENT_FLAVOR_MINIMUM,
    ingredient_limits=MappingProxyType(_INGREDIENT_LIMITS_DICT),
    default_ingredient_limit=DEFAULT_INGREDIENT_LIMIT,
    title_rare_bonus=TITLE_RARE_BONUS,
    sparkling_rare_bonus=SPARKLING_RARE_BONUS,
)

# --- Reverse search ----------------------------------------------------------

# Hard ceiling on sandwiches returned by one search
MAX_SEARCH_RESULTS: Final[int] = 20
