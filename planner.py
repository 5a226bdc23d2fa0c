"""Reverse-lookup search for sandwiches that produce requested effects.

Provides the bounded heuristic that scores ingredients by relevance to the
targets, enumerates capped combinations of the best candidates, and keeps
the distinct sandwiches whose calculated effects meet every target. Also
looks targets up in the preset recipe and meal catalogs.

Exports
-------
search_sandwiches
required_rare_count
score_fillings
score_condiments
bounded_combinations
find_matching_recipes
find_matching_meals

Notes
-----
The search is advisory: it is not exhaustive and does not look for a
global optimum.
"""

import logging
from itertools import (
    combinations,
    islice,
)
from typing import (
    Callable,
    Iterable,
    Optional,
    Sequence,
)

from calculations import (
    calculate_sandwich,
)
from config import (
    SearchConfig,
)
from constants import (
    DEFAULT_RULES,
    MAX_SEARCH_RESULTS,
    RuleTables,
)
from models.ingredient import (
    Condiment,
    Filling,
    Selection,
)
from models.kinds import (
    MealPower,
    PokemonType,
)
from models.recipe import (
    Meal,
    Recipe,
)
from models.sandwich import (
    SandwichResult,
    SearchTarget,
)

logger = logging.getLogger(__name__)


def required_rare_count(
    targets: Iterable[SearchTarget],
) -> int:
    """Rare condiments needed: 2 for Sparkling, 1 for Title, else 0."""
    powers = {target.power for target in targets}
    if MealPower.SPARKLING in powers:
        return 2
    if MealPower.TITLE in powers:
        return 1
    return 0


def score_fillings(
    fillings: Iterable[Filling],
    targets: Iterable[SearchTarget],
) -> list[tuple[Filling, int]]:
    """Rank fillings by type amounts that match the target types.

    Parameters
    ----------
    fillings : iterable of Filling
        Candidate catalog.
    targets : iterable of SearchTarget
        Requested effects; wildcard types are ignored.

    Returns
    -------
    list[tuple[Filling, int]]
        ``(filling, score)`` pairs, best first; ties keep catalog order.
    """
    wanted = {target.type for target in targets} - {PokemonType.ALL_TYPES}
    scored = [
        (filling, sum(amount for kind, amount in filling.types.items() if kind in wanted))
        for filling in fillings
    ]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored


def score_condiments(
    condiments: Iterable[Condiment],
    targets: Iterable[SearchTarget],
) -> list[tuple[Condiment, int]]:
    """Rank condiments by power amounts that match the target powers.

    Returns
    -------
    list[tuple[Condiment, int]]
        ``(condiment, score)`` pairs, best first; ties keep catalog order.
    """
    wanted = {target.power for target in targets}
    scored = [
        (condiment, sum(amount for kind, amount in condiment.powers.items() if kind in wanted))
        for condiment in condiments
    ]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored


def bounded_combinations(
    items: Sequence,
    size: int,
    cap: Optional[int] = None,
) -> list[tuple]:
    """First ``cap`` size-``size`` combinations of ``items`` (lexicographic).

    A size of 0 yields a single empty combination; a size larger than the
    pool yields none.
    """
    return list(islice(combinations(items, size), cap))


def _is_duplicate(
    result: SandwichResult,
    accepted: Iterable[SandwichResult],
) -> bool:
    keys = result.ingredient_keys
    return any(keys == other.ingredient_keys for other in accepted)


def _sort_results(
    results: list[SandwichResult],
) -> list[SandwichResult]:
    # Fewer ingredients first; stable so discovery order breaks ties
    return sorted(results, key=lambda result: result.ingredient_count)


def _filling_selections(
    pool: Sequence[Filling],
    settings: SearchConfig,
):
    """Yield filling selection tuples in search order.

    Pieces are spread uniformly: each filling gets ``total // size`` pieces
    and any remainder is dropped.
    """
    upper = min(settings.max_filling_types, len(pool))
    for size in range(settings.min_filling_types, upper + 1):
        max_total = min(size * settings.max_pieces_per_filling, settings.max_total_pieces)
        for filling_set in bounded_combinations(pool, size, settings.filling_combo_cap):
            for total in range(size, max_total + 1):
                pieces = total // size
                yield tuple(Selection(filling, pieces) for filling in filling_set)


def search_sandwiches(
    fillings: Sequence[Filling],
    condiments: Sequence[Condiment],
    targets: Sequence[SearchTarget],
    recipes: Sequence[Recipe] = (),
    *,
    settings: Optional[SearchConfig] = None,
    rules: RuleTables = DEFAULT_RULES,
    calculator: Callable[..., SandwichResult] = calculate_sandwich,
) -> list[SandwichResult]:
    """Find distinct sandwiches whose effects meet every target.

    Parameters
    ----------
    fillings : sequence of Filling
        Filling catalog.
    condiments : sequence of Condiment
        Condiment catalog (rare ones included).
    targets : sequence of SearchTarget
        Requested effects; all must be met.
    recipes : sequence of Recipe, optional
        Preset catalog, forwarded to the calculator for recipe matching.
    settings : SearchConfig, optional
        Enumeration bounds; defaults to `SearchConfig()`. The result cap
        never exceeds `MAX_SEARCH_RESULTS`.
    rules : RuleTables, optional
        Rule tables forwarded to the calculator.
    calculator : callable, optional
        Effect calculation engine, by default `calculate_sandwich`.

    Returns
    -------
    list[SandwichResult]
        At most ``settings.max_results`` (and never more than
        `MAX_SEARCH_RESULTS`) results with pairwise distinct ingredient
        sets, fewest ingredients first. An empty target list accepts every
        candidate. Empty when too few rare condiments exist.
    """
    if settings is None:
        settings = SearchConfig()
    targets = list(targets)
    max_results = min(settings.max_results, MAX_SEARCH_RESULTS)

    logger.info(
        "Searching for %s",
        ", ".join(target.display_name for target in targets) or "any effect",
    )

    # 1) Rare condiments required by the targets
    rare_needed = required_rare_count(targets)
    rares = [condiment for condiment in condiments if condiment.is_rare]
    regulars = [condiment for condiment in condiments if not condiment.is_rare]
    if rare_needed > len(rares):
        logger.info(
            "Not enough rare condiments (%d available, need %d)",
            len(rares),
            rare_needed,
        )
        return []

    # 2-3) Candidate pools by relevance
    filling_pool = [
        filling
        for filling, _score in score_fillings(fillings, targets)[: settings.filling_pool_size]
    ]
    condiment_pool = [
        condiment
        for condiment, _score in score_condiments(regulars, targets)[: settings.condiment_pool_size]
    ]

    # 4) Rare subsets (one empty subset when none are needed)
    rare_subsets = bounded_combinations(rares, rare_needed, settings.rare_subset_cap)

    # Condiment combinations do not depend on the fillings; build them once
    condiment_sets = [
        regular_set
        for size in range(settings.min_condiments, settings.max_condiments + 1)
        for regular_set in bounded_combinations(condiment_pool, size, settings.condiment_combo_cap)
    ]

    results: list[SandwichResult] = []
    evaluated = 0
    # 5-8) Enumerate until the cap is reached
    for filling_selection in _filling_selections(filling_pool, settings):
        for rare_set in rare_subsets:
            for regular_set in condiment_sets:
                condiment_selection = tuple(
                    Selection(condiment, 1) for condiment in rare_set + regular_set
                )
                result = calculator(
                    filling_selection,
                    condiment_selection,
                    has_bread=True,
                    players=settings.players,
                    recipes=recipes,
                    rules=rules,
                )
                evaluated += 1
                if not result.satisfies(targets) or _is_duplicate(result, results):
                    continue
                results.append(result)
                logger.debug(
                    "Match: %s",
                    ", ".join(effect.display_name for effect in result.effects),
                )
                if len(results) >= max_results:
                    logger.info(
                        "Result cap (%d) reached after %d candidates",
                        max_results,
                        evaluated,
                    )
                    return _sort_results(results)

    logger.info(
        "Found %d unique sandwiches from %d candidates",
        len(results),
        evaluated,
    )
    return _sort_results(results)


def _effects_satisfy(
    effects,
    targets: Iterable[SearchTarget],
) -> bool:
    return all(
        any(target.is_satisfied_by(effect.power, effect.type, effect.level) for effect in effects)
        for target in targets
    )


def find_matching_recipes(
    recipes: Iterable[Recipe],
    targets: Sequence[SearchTarget],
) -> list[Recipe]:
    """Preset recipes whose declared effects meet every target."""
    return [recipe for recipe in recipes if _effects_satisfy(recipe.effects, targets)]


def find_matching_meals(
    meals: Iterable[Meal],
    targets: Sequence[SearchTarget],
) -> list[Meal]:
    """Restaurant meals whose declared effects meet every target."""
    return [meal for meal in meals if _effects_satisfy(meal.effects, targets)]
