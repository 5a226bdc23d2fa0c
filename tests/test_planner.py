"""Tests for the reverse-lookup search and catalog target lookup."""

import yaml

from config import SearchConfig, get_cached_config, set_config_path
from conftest import make_condiment, make_filling, make_recipe
from models.kinds import MealPower, PokemonType
from models.recipe import Meal, RecipeEffect
from models.sandwich import SandwichResult, SearchTarget
from planner import (
    _filling_selections,
    bounded_combinations,
    find_matching_meals,
    find_matching_recipes,
    required_rare_count,
    score_condiments,
    score_fillings,
    search_sandwiches,
)


class TestRequiredRareCount:
    def test_sparkling_needs_two(self) -> None:
        targets = [SearchTarget(MealPower.TITLE), SearchTarget(MealPower.SPARKLING)]
        assert required_rare_count(targets) == 2

    def test_title_needs_one(self) -> None:
        assert required_rare_count([SearchTarget(MealPower.TITLE)]) == 1

    def test_other_powers_need_none(self) -> None:
        assert required_rare_count([SearchTarget(MealPower.EGG)]) == 0


class TestScoring:
    """Tests for candidate pool scoring."""

    def test_fillings_scored_by_target_types(self) -> None:
        water = make_filling("Cucumber", types={PokemonType.WATER: 20})
        fire = make_filling("Red Pepper", types={PokemonType.FIRE: 25, PokemonType.WATER: 1})
        targets = [SearchTarget(MealPower.ENCOUNTER, PokemonType.FIRE)]
        scored = score_fillings([water, fire], targets)
        assert scored == [(fire, 25), (water, 0)]

    def test_wildcard_type_scores_nothing(self) -> None:
        fire = make_filling("Red Pepper", types={PokemonType.FIRE: 25})
        assert score_fillings([fire], [SearchTarget(MealPower.EGG)]) == [(fire, 0)]

    def test_condiments_scored_by_target_powers(self) -> None:
        salt = make_condiment("Salt", powers={MealPower.ENCOUNTER: 200})
        jam = make_condiment("Jam", powers={MealPower.EGG: 21})
        scored = score_condiments([salt, jam], [SearchTarget(MealPower.EGG)])
        assert scored == [(jam, 21), (salt, 0)]

    def test_ties_keep_catalog_order(self) -> None:
        first = make_condiment("A")
        second = make_condiment("B")
        scored = score_condiments([first, second], [SearchTarget(MealPower.EGG)])
        assert [condiment for condiment, _ in scored] == [first, second]


class TestBoundedCombinations:
    def test_cap_keeps_lexicographic_prefix(self) -> None:
        assert bounded_combinations("abcd", 2, 3) == [("a", "b"), ("a", "c"), ("a", "d")]

    def test_no_cap(self) -> None:
        assert len(bounded_combinations(range(5), 2)) == 10

    def test_size_zero_is_one_empty_combination(self) -> None:
        assert bounded_combinations(["x"], 0, 5) == [()]

    def test_size_above_pool_is_empty(self) -> None:
        assert bounded_combinations(["x"], 2, 5) == []


class TestFillingSelections:
    def test_uniform_pieces_drop_remainder(self) -> None:
        """Five pieces over two fillings gives two each."""
        pool = [make_filling("A"), make_filling("B")]
        settings = SearchConfig(min_filling_types=2, max_filling_types=2)
        selections = list(_filling_selections(pool, settings))
        # totals 2..6 for a single pair
        assert [[s.quantity for s in selection] for selection in selections] == [
            [1, 1],
            [1, 1],
            [2, 2],
            [2, 2],
            [3, 3],
        ]

    def test_total_capped_at_twelve(self) -> None:
        pool = [make_filling(name) for name in "ABCDE"]
        settings = SearchConfig(min_filling_types=4, max_filling_types=4, filling_combo_cap=1)
        selections = list(_filling_selections(pool, settings))
        # totals 4..12 for one 4-combination
        assert len(selections) == 9
        assert max(sum(s.quantity for s in selection) for selection in selections) == 12


class TestSearchSandwiches:
    """Tests for search_sandwiches()."""

    def test_encounter_fire_results_satisfy_targets(self, catalog_factory) -> None:
        fillings, condiments = catalog_factory()
        targets = [SearchTarget(MealPower.ENCOUNTER, PokemonType.FIRE, 1)]
        results = search_sandwiches(fillings, condiments, targets, settings=SearchConfig())
        assert results
        assert len(results) <= 20
        assert all(result.satisfies(targets) for result in results)

    def test_results_are_unique_by_ingredient_set(self, catalog_factory) -> None:
        fillings, condiments = catalog_factory()
        targets = [SearchTarget(MealPower.ENCOUNTER)]
        results = search_sandwiches(fillings, condiments, targets, settings=SearchConfig())
        keys = [result.ingredient_keys for result in results]
        assert len(keys) == len(set(keys))

    def test_results_sorted_by_ingredient_count(self, catalog_factory) -> None:
        fillings, condiments = catalog_factory()
        targets = [SearchTarget(MealPower.ENCOUNTER)]
        results = search_sandwiches(fillings, condiments, targets, settings=SearchConfig())
        counts = [result.ingredient_count for result in results]
        assert counts == sorted(counts)

    def test_result_cap(self, catalog_factory) -> None:
        fillings, condiments = catalog_factory()
        targets = [SearchTarget(MealPower.ENCOUNTER)]
        results = search_sandwiches(
            fillings, condiments, targets, settings=SearchConfig(max_results=3)
        )
        assert len(results) == 3

    def test_search_uses_bread_and_single_player(self, catalog_factory) -> None:
        fillings, condiments = catalog_factory()
        targets = [SearchTarget(MealPower.ENCOUNTER)]
        results = search_sandwiches(fillings, condiments, targets, settings=SearchConfig())
        assert all(result.has_bread and result.players == 1 for result in results)

    def test_title_results_include_one_rare(self, catalog_factory) -> None:
        fillings, condiments = catalog_factory()
        targets = [SearchTarget(MealPower.TITLE)]
        results = search_sandwiches(fillings, condiments, targets, settings=SearchConfig())
        assert results
        assert all(result.rare_count == 1 for result in results)

    def test_sparkling_with_two_rares(self, catalog_factory) -> None:
        fillings, condiments = catalog_factory()
        targets = [SearchTarget(MealPower.SPARKLING, PokemonType.FIRE)]
        results = search_sandwiches(fillings, condiments, targets, settings=SearchConfig())
        assert results
        assert all(result.rare_count == 2 for result in results)

    def test_not_enough_rares_is_empty(self, catalog_factory) -> None:
        fillings, condiments = catalog_factory()
        one_rare = [condiment for condiment in condiments if condiment.name != "Sweet Herba Mystica"]
        targets = [SearchTarget(MealPower.SPARKLING)]
        assert search_sandwiches(fillings, one_rare, targets, settings=SearchConfig()) == []

    def test_no_targets_accepts_any_sandwich(self, catalog_factory) -> None:
        """An empty target list is satisfied by every candidate."""
        fillings, condiments = catalog_factory()
        results = search_sandwiches(fillings, condiments, [], settings=SearchConfig())
        assert len(results) == 20
        assert len({result.ingredient_keys for result in results}) == 20

    def test_max_results_never_exceeds_twenty(self, catalog_factory) -> None:
        fillings, condiments = catalog_factory()
        results = search_sandwiches(
            fillings, condiments, [], settings=SearchConfig(max_results=40)
        )
        assert len(results) == 20

    def test_default_settings_ignore_loaded_config(self, catalog_factory, tmp_path) -> None:
        """Omitting settings uses SearchConfig(), not the cached config file."""
        config_file = tmp_path / "tiny.yml"
        config_file.write_text(yaml.dump({"search": {"max_results": 1}}))
        fillings, condiments = catalog_factory()
        set_config_path(config_file)
        try:
            assert get_cached_config().search.max_results == 1
            results = search_sandwiches(fillings, condiments, [])
        finally:
            set_config_path(None)
        assert len(results) == 20

    def test_unreachable_target_is_empty(self, catalog_factory) -> None:
        """No catalog entry gives Ghost types, so nothing qualifies."""
        fillings, condiments = catalog_factory()
        targets = [SearchTarget(MealPower.ENCOUNTER, PokemonType.GHOST, 3)]
        assert search_sandwiches(fillings, condiments, targets, settings=SearchConfig()) == []

    def test_enumeration_is_bounded(self) -> None:
        """Every candidate is handed to the calculator exactly once."""
        fillings = [make_filling(name) for name in ("A", "B", "C")]
        condiments = [make_condiment("X"), make_condiment("Y")]
        calls = []

        def fake_calculator(filling_sel, condiment_sel, **kwargs):
            calls.append((filling_sel, condiment_sel, kwargs))
            return SandwichResult(fillings=filling_sel, condiments=condiment_sel)

        results = search_sandwiches(
            fillings,
            condiments,
            [SearchTarget(MealPower.EGG)],
            settings=SearchConfig(),
            calculator=fake_calculator,
        )
        assert results == []
        # sizes 2 (3 combos x totals 2..6) + 3 (1 combo x totals 3..9), one condiment pair
        assert len(calls) == 3 * 5 + 1 * 7
        assert all(kwargs["has_bread"] is True and kwargs["players"] == 1 for *_, kwargs in calls)

    def test_recipes_forwarded_to_calculator(self, catalog_factory) -> None:
        fillings, condiments = catalog_factory()
        recipes = [make_recipe(1, "Spicy Pair", ["Red Pepper", "Tomato"], ["Salt", "Pepper"])]
        seen = []

        def recording_calculator(filling_sel, condiment_sel, **kwargs):
            seen.append(kwargs["recipes"])
            return SandwichResult(fillings=filling_sel, condiments=condiment_sel)

        search_sandwiches(
            fillings,
            condiments,
            [SearchTarget(MealPower.ENCOUNTER)],
            recipes,
            settings=SearchConfig(),
            calculator=recording_calculator,
        )
        assert seen and all(forwarded is recipes for forwarded in seen)


class TestCatalogLookup:
    """Tests for preset recipe and meal target lookup."""

    def test_find_matching_recipes(self) -> None:
        recipes = [
            make_recipe(1, "Egg Toast", effects=[(MealPower.EGG, PokemonType.ALL_TYPES, 2)]),
            make_recipe(2, "Fire Toast", effects=[(MealPower.ENCOUNTER, PokemonType.FIRE, 1)]),
        ]
        found = find_matching_recipes(recipes, [SearchTarget(MealPower.EGG, min_level=2)])
        assert [recipe.name for recipe in found] == ["Egg Toast"]
        assert find_matching_recipes(recipes, [SearchTarget(MealPower.EGG, min_level=3)]) == []

    def test_find_matching_meals(self) -> None:
        meals = [
            Meal(
                number="1",
                name="Jam Sandwich",
                effects=(RecipeEffect(MealPower.RAID, PokemonType.FIRE, 1),),
            ),
        ]
        fire = [SearchTarget(MealPower.RAID, PokemonType.FIRE)]
        water = [SearchTarget(MealPower.RAID, PokemonType.WATER)]
        assert find_matching_meals(meals, fire) == meals
        assert find_matching_meals(meals, water) == []
