"""Pure effect calculation for sandwiches.

Contains the deterministic pipeline that turns filling and condiment
selections into ranked effects: vector aggregation, deliciousness,
flavor-combination bonus, power/type totals, effect pairing, and preset
recipe matching.

Exports
-------
sum_vector
sum_tastes
sum_powers
sum_types
ingredient_limit
get_deliciousness
get_top_flavors
get_flavor_bonus
count_rare
calculate_power_totals
calculate_type_totals
rank_totals
determine_effects
match_preset_recipe
calculate_sandwich

Notes
-----
All functions are side-effect free; inputs are treated as read-only and
every total is a fresh dict.
"""

import logging
from collections import (
    Counter,
)
from typing import (
    Iterable,
    Optional,
    Sequence,
)

from constants import (
    DEFAULT_RULES,
    RuleTables,
)
from models.ingredient import (
    Selection,
)
from models.kinds import (
    Flavor,
    MealPower,
    PokemonType,
)
from models.recipe import (
    Recipe,
)
from models.sandwich import (
    Effect,
    SandwichResult,
    level_for,
)

logger = logging.getLogger(__name__)

# Effect determination never pairs more than this many power/type ranks
MAX_EFFECTS = 3


def sum_vector(
    fillings: Iterable[Selection],
    condiments: Iterable[Selection],
    attr: str,
) -> dict:
    """Sum one contribution vector over a sandwich.

    Parameters
    ----------
    fillings : iterable of Selection
        Filling selections; amounts are multiplied by quantity.
    condiments : iterable of Selection
        Condiment selections; amounts count once regardless of quantity.
    attr : str
        Vector attribute name: ``"tastes"``, ``"powers"`` or ``"types"``.

    Returns
    -------
    dict
        Kind to summed amount. Kinds nobody contributes are absent.
    """
    totals: dict = {}
    for selection in fillings:
        for kind, amount in getattr(selection.ingredient, attr).items():
            totals[kind] = totals.get(kind, 0) + amount * selection.quantity
    for selection in condiments:
        for kind, amount in getattr(selection.ingredient, attr).items():
            totals[kind] = totals.get(kind, 0) + amount
    return totals


def sum_tastes(
    fillings,
    condiments,
) -> dict[Flavor, int]:
    """Flavor totals with every flavor present (zero when unused)."""
    summed = sum_vector(fillings, condiments, "tastes")
    return {flavor: summed.get(flavor, 0) for flavor in Flavor}


def sum_powers(
    fillings,
    condiments,
) -> dict[MealPower, int]:
    """Raw power totals (no bonuses), in `MealPower` declaration order."""
    summed = sum_vector(fillings, condiments, "powers")
    return {power: summed.get(power, 0) for power in MealPower}


def sum_types(
    fillings,
    condiments,
) -> dict[PokemonType, int]:
    """Raw type totals (no modifier), in `PokemonType` declaration order."""
    summed = sum_vector(fillings, condiments, "types")
    return {kind: summed.get(kind, 0) for kind in PokemonType}


def ingredient_limit(
    players: int,
    rules: RuleTables = DEFAULT_RULES,
) -> int:
    """Pieces of one filling that make the sandwich inedible.

    Unknown player counts fall back to the single-player limit.
    """
    return rules.ingredient_limits.get(players, rules.default_ingredient_limit)


def get_deliciousness(
    taste_totals: dict[Flavor, int],
    fillings: Sequence[Selection],
    has_bread: bool,
    players: int,
    rules: RuleTables = DEFAULT_RULES,
) -> int:
    """Classify sandwich quality (0 bad, 1 ok, 2 good, 3 excellent).

    A priority cascade; the first matching branch wins.

    Parameters
    ----------
    taste_totals : dict[Flavor, int]
        Aggregated flavors.
    fillings : sequence of Selection
        Filling selections.
    has_bread : bool
        Bread counts as one placed piece.
    players : int
        Player count selecting the ingredient limit.
    rules : RuleTables, optional
        Rule tables, by default `DEFAULT_RULES`.

    Returns
    -------
    int
        Tier in ``0..3``.
    """
    # 0) Too many pieces of one filling (grouped by name)
    pieces_by_name: dict[str, int] = {}
    for selection in fillings:
        pieces_by_name[selection.name] = pieces_by_name.get(selection.name, 0) + selection.quantity
    limit = ingredient_limit(players, rules)
    if any(pieces >= limit for pieces in pieces_by_name.values()):
        return 0

    # 3) Every flavor reaches the minimum
    if all(taste_totals.get(flavor, 0) >= rules.excellent_flavor_minimum for flavor in Flavor):
        return 3

    # 2) Few pieces dropped off the plate; needs at least one filling
    if fillings:
        placed = sum(pieces_by_name.values()) + (1 if has_bread else 0)
        declared = sum(selection.ingredient.pieces for selection in fillings)
        distinct = len({selection.ingredient.id for selection in fillings})
        if declared - placed <= distinct:
            return 2

    return 1


def get_top_flavors(
    taste_totals: dict[Flavor, int],
) -> list[Flavor]:
    """All flavors ranked by total, highest first.

    Ties keep `Flavor` declaration order (sorted() is stable).
    """
    return sorted(
        Flavor,
        key=lambda flavor: taste_totals.get(flavor, 0),
        reverse=True,
    )


def _prime_product(
    flavors: Iterable[Flavor],
    rules: RuleTables,
) -> int:
    product = 1
    for flavor in flavors:
        product *= rules.flavor_primes[flavor]
    return product


def get_flavor_bonus(
    taste_totals: dict[Flavor, int],
    rules: RuleTables = DEFAULT_RULES,
) -> Optional[tuple[MealPower, int]]:
    """Flavor-combination bonus from the first matching rule.

    Each rule's flavor set is compared with the same number of top-ranked
    flavors by prime product, so order inside the pair does not matter.

    Returns
    -------
    tuple[MealPower, int] or None
        ``(power, bonus)`` of the first matching rule in table order.
    """
    top_flavors = get_top_flavors(taste_totals)
    for rule in rules.flavor_rules:
        wanted = _prime_product(rule.flavors, rules)
        actual = _prime_product(top_flavors[: len(rule.flavors)], rules)
        if wanted == actual:
            return rule.power, rule.bonus
    return None


def count_rare(
    condiments: Iterable[Selection],
) -> int:
    """Number of rare condiment selections."""
    return sum(1 for selection in condiments if selection.ingredient.is_rare)


def calculate_power_totals(
    fillings: Sequence[Selection],
    condiments: Sequence[Selection],
    taste_totals: dict[Flavor, int],
    rules: RuleTables = DEFAULT_RULES,
) -> dict[MealPower, int]:
    """Power totals including rare-condiment and flavor bonuses.

    Returns
    -------
    dict[MealPower, int]
        Every power, in declaration order.
    """
    totals = sum_powers(fillings, condiments)

    rare = count_rare(condiments)
    if rare >= 1:
        totals[MealPower.TITLE] += rules.title_rare_bonus
    if rare >= 2:
        totals[MealPower.SPARKLING] += rules.sparkling_rare_bonus

    bonus = get_flavor_bonus(taste_totals, rules)
    if bonus is not None:
        power, amount = bonus
        totals[power] += amount
        logger.debug("Flavor bonus: %s +%d", power.value, amount)

    return totals


def calculate_type_totals(
    fillings: Sequence[Selection],
    condiments: Sequence[Selection],
    deliciousness: int,
    rules: RuleTables = DEFAULT_RULES,
) -> dict[PokemonType, int]:
    """Type totals with the deliciousness modifier applied.

    The modifier is added to every type except the ``ALL_TYPES`` wildcard.
    """
    totals = sum_types(fillings, condiments)
    modifier = rules.deliciousness_modifiers[deliciousness]
    for kind in totals:
        if kind is not PokemonType.ALL_TYPES:
            totals[kind] += modifier
    return totals


def rank_totals(
    totals: dict,
) -> list[tuple]:
    """Positive entries sorted by value, highest first (stable on ties)."""
    return sorted(
        ((kind, value) for kind, value in totals.items() if value > 0),
        key=lambda item: item[1],
        reverse=True,
    )


def determine_effects(
    power_totals: dict[MealPower, int],
    type_totals: dict[PokemonType, int],
    rules: RuleTables = DEFAULT_RULES,
) -> list[Effect]:
    """Pair ranked powers with ranked types into at most three effects.

    The i-th strongest power pairs with the i-th strongest type. Pairing
    stops when either ranking runs out, when a paired type value is below
    the first level threshold, or after three effects.

    Parameters
    ----------
    power_totals : dict[MealPower, int]
        Final power totals.
    type_totals : dict[PokemonType, int]
        Final type totals.
    rules : RuleTables, optional
        Supplies the level thresholds.

    Returns
    -------
    list[Effect]
        Effects in power-rank order.
    """
    effects: list[Effect] = []
    ranked_types = rank_totals(type_totals)
    for (power, power_value), (kind, type_value) in zip(rank_totals(power_totals), ranked_types):
        if level_for(type_value, rules.level_thresholds) < 1:
            break
        # Egg power applies to every type
        effect_type = PokemonType.ALL_TYPES if power is MealPower.EGG else kind
        effects.append(
            Effect(
                power=power,
                type=effect_type,
                raw_power=power_value,
                raw_type=type_value,
                thresholds=rules.level_thresholds,
            )
        )
        if len(effects) >= MAX_EFFECTS:
            break
    return effects


def match_preset_recipe(
    fillings: Sequence[Selection],
    condiments: Sequence[Selection],
    has_bread: bool,
    recipes: Iterable[Recipe],
) -> Optional[Recipe]:
    """Find the preset recipe made of exactly these ingredients.

    Names are compared as a multiset (order-free, repeats counted). Each
    filling must also use exactly the catalog's declared piece count.

    Parameters
    ----------
    fillings, condiments : sequence of Selection
        Current sandwich.
    has_bread : bool
        Presets always include bread; without it nothing matches.
    recipes : iterable of Recipe
        Catalog, searched in order.

    Returns
    -------
    Recipe or None
        First matching recipe.
    """
    if not has_bread:
        return None
    if any(selection.quantity != selection.ingredient.pieces for selection in fillings):
        return None

    names = Counter(selection.name for selection in fillings)
    names.update(selection.name for selection in condiments)
    for recipe in recipes:
        if Counter(recipe.ingredient_names) != names:
            continue
        # Names balance overall; fillings must also be fillings in the recipe
        if Counter(recipe.fillings) == Counter(selection.name for selection in fillings):
            return recipe
    return None


def calculate_sandwich(
    fillings: Sequence[Selection],
    condiments: Sequence[Selection],
    has_bread: bool = True,
    players: int = 1,
    recipes: Iterable[Recipe] = (),
    rules: RuleTables = DEFAULT_RULES,
) -> SandwichResult:
    """Compute the full result record for a sandwich.

    Parameters
    ----------
    fillings : sequence of Selection
        Filling selections (quantity = pieces).
    condiments : sequence of Selection
        Condiment selections.
    has_bread : bool, optional
        Whether bread is present, by default ``True``.
    players : int, optional
        Player count, by default 1.
    recipes : iterable of Recipe, optional
        Preset catalog for recipe matching.
    rules : RuleTables, optional
        Rule tables, by default `DEFAULT_RULES`.

    Returns
    -------
    SandwichResult
        Fresh, immutable result.
    """
    fillings = tuple(fillings)
    condiments = tuple(condiments)

    taste_totals = sum_tastes(fillings, condiments)
    deliciousness = get_deliciousness(
        taste_totals,
        fillings,
        has_bread,
        players,
        rules,
    )
    power_totals = calculate_power_totals(
        fillings,
        condiments,
        taste_totals,
        rules,
    )
    type_totals = calculate_type_totals(
        fillings,
        condiments,
        deliciousness,
        rules,
    )
    effects = determine_effects(
        power_totals,
        type_totals,
        rules,
    )
    matched = match_preset_recipe(
        fillings,
        condiments,
        has_bread,
        recipes,
    )
    logger.debug(
        "Sandwich %s | tier %d | %d effects | recipe %s",
        [selection.name for selection in fillings + condiments],
        deliciousness,
        len(effects),
        matched.name if matched else None,
    )
    return SandwichResult(
        fillings=fillings,
        condiments=condiments,
        effects=tuple(effects),
        deliciousness=deliciousness,
        matched_recipe=matched,
        players=players,
        has_bread=has_bread,
    )
