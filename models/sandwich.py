from dataclasses import (
    dataclass,
    field,
)
from typing import (
    Optional,
)

from constants import (
    CONDIMENTS_PER_PLAYER,
    FILLINGS_PER_PLAYER,
    POWER_LEVEL_THRESHOLDS,
)
from models.ingredient import (
    Selection,
)
from models.kinds import (
    IngredientCategory,
    MealPower,
    PokemonType,
)
from models.recipe import (
    Recipe,
)


def level_for(
    type_value: int,
    thresholds: tuple[int, int, int] = POWER_LEVEL_THRESHOLDS,
) -> int:
    """Map a raw type value to a power level.

    Returns
    -------
    int
        3, 2 or 1 by threshold; 0 when below the first threshold.
    """
    if type_value >= thresholds[2]:
        return 3
    if type_value >= thresholds[1]:
        return 2
    if type_value >= thresholds[0]:
        return 1
    return 0


@dataclass(frozen=True)
class Effect:
    """One computed sandwich effect.

    The level is derived from ``raw_type`` on every access, so it can never
    drift from the threshold table it was computed with.

    Attributes
    ----------
    power : MealPower
        Meal power.
    type : PokemonType
        Paired type; ``ALL_TYPES`` for Egg power.
    raw_power : int
        Aggregated power total.
    raw_type : int
        Aggregated type total of the paired type.
    """

    power: MealPower
    type: PokemonType
    raw_power: int
    raw_type: int
    thresholds: tuple[int, int, int] = field(
        default=POWER_LEVEL_THRESHOLDS,
        repr=False,
        compare=False,
    )

    @property
    def level(
        self,
    ) -> int:
        return level_for(self.raw_type, self.thresholds)

    @property
    def display_name(
        self,
    ) -> str:
        return f"{self.power.full_name}: {self.type.value} Lv. {self.level}"


@dataclass(frozen=True)
class SearchTarget:
    """A requested effect for the reverse search.

    Attributes
    ----------
    power : MealPower
        Required power.
    type : PokemonType
        Required type, or ``ALL_TYPES`` to accept any.
    min_level : int
        Minimum acceptable level (1..3).
    """

    power: MealPower
    type: PokemonType = PokemonType.ALL_TYPES
    min_level: int = 1

    def __post_init__(
        self,
    ):
        if self.min_level not in (1, 2, 3):
            raise ValueError(f"min_level must be 1, 2 or 3, got {self.min_level!r}")

    def is_satisfied_by(
        self,
        power: MealPower,
        kind: PokemonType,
        level: int,
    ) -> bool:
        """Whether an effect with these attributes meets this target."""
        return (
            power == self.power
            and level >= self.min_level
            and (self.type is PokemonType.ALL_TYPES or kind == self.type)
        )

    @property
    def display_name(
        self,
    ) -> str:
        return f"{self.power.full_name} - {self.type.value} Lv.{self.min_level}+"


@dataclass(frozen=True)
class SandwichResult:
    """Complete output of one effect calculation.

    Attributes
    ----------
    fillings : tuple[Selection, ...]
        Filling selections, in insertion order.
    condiments : tuple[Selection, ...]
        Condiment selections, in insertion order.
    effects : tuple[Effect, ...]
        At most three effects, strongest power first.
    deliciousness : int
        Quality tier 0..3.
    matched_recipe : Recipe or None
        Preset recipe with exactly these ingredients, if any.
    players : int
        Player count used for the ingredient limit.
    has_bread : bool
        Whether bread was present.
    """

    fillings: tuple[Selection, ...] = ()
    condiments: tuple[Selection, ...] = ()
    effects: tuple[Effect, ...] = ()
    deliciousness: int = 1
    matched_recipe: Optional[Recipe] = None
    players: int = 1
    has_bread: bool = True

    @property
    def total_filling_pieces(
        self,
    ) -> int:
        return sum(selection.quantity for selection in self.fillings)

    @property
    def total_condiments(
        self,
    ) -> int:
        return len(self.condiments)

    @property
    def max_fillings(
        self,
    ) -> int:
        return self.players * FILLINGS_PER_PLAYER

    @property
    def max_condiments(
        self,
    ) -> int:
        return self.players * CONDIMENTS_PER_PLAYER

    @property
    def is_valid(
        self,
    ) -> bool:
        """Whether the plate respects the per-player filling/condiment limits."""
        return self.validation_message is None

    @property
    def validation_message(
        self,
    ) -> Optional[str]:
        if self.total_filling_pieces > self.max_fillings:
            return (
                f"Too many fillings! Max: {self.max_fillings} "
                f"(You have: {self.total_filling_pieces})"
            )
        if self.total_condiments > self.max_condiments:
            return (
                f"Too many condiments! Max: {self.max_condiments} "
                f"(You have: {self.total_condiments})"
            )
        return None

    @property
    def rare_count(
        self,
    ) -> int:
        return sum(1 for selection in self.condiments if selection.ingredient.is_rare)

    @property
    def ingredient_keys(
        self,
    ) -> frozenset[tuple[IngredientCategory, str]]:
        """Identity set of all used ingredients (quantities ignored)."""
        return frozenset(
            selection.ingredient.key for selection in self.fillings + self.condiments
        )

    @property
    def ingredient_count(
        self,
    ) -> int:
        return len(self.fillings) + len(self.condiments)

    def satisfies(
        self,
        targets,
    ) -> bool:
        """Whether every target is met by at least one computed effect."""
        return all(
            any(
                target.is_satisfied_by(effect.power, effect.type, effect.level)
                for effect in self.effects
            )
            for target in targets
        )
