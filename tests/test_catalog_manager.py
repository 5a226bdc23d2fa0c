"""Tests for CatalogManager lookups and selection building."""

import pytest

from catalog_manager import CatalogManager, normalize_name
from conftest import make_condiment, make_filling, make_recipe


@pytest.fixture
def manager():
    fillings = [make_filling("Ham", pieces=3), make_filling("Tomato", pieces=3)]
    condiments = [make_condiment("Mayonnaise"), make_condiment("Salt")]
    recipes = [
        make_recipe(1, "Ham Sandwich", ["Ham"], ["Mayonnaise"]),
        make_recipe(-2, "Ghost Sandwich", ["Ham", "Bacon"], ["Salt"]),
    ]
    return CatalogManager(fillings, condiments, recipes)


class TestLookup:
    def test_normalize_name(self) -> None:
        assert normalize_name("  Red Pepper ") == "red pepper"

    def test_case_insensitive(self, manager) -> None:
        assert manager.get_filling("ham").name == "Ham"
        assert manager.get_condiment("SALT").name == "Salt"
        assert manager.get_filling("Salt") is None

    def test_get_ingredient_prefers_fillings(self) -> None:
        both = CatalogManager([make_filling("Egg")], [make_condiment("Egg")])
        assert both.get_ingredient("egg") is both.fillings[0]

    def test_get_recipe_by_number_or_name(self, manager) -> None:
        assert manager.get_recipe("1").name == "Ham Sandwich"
        assert manager.get_recipe("ham sandwich").number == "1"
        assert manager.get_recipe("99") is None

    def test_visible_recipes_hide_negative_numbers(self, manager) -> None:
        assert [recipe.number for recipe in manager.visible_recipes()] == ["1"]

    def test_suggest(self, manager) -> None:
        assert manager.suggest("Mayonaise") == ["Mayonnaise"]
        assert manager.suggest("zzz") == []


class TestSelections:
    def test_select_filling_defaults_to_catalog_pieces(self, manager) -> None:
        assert manager.select("Ham").quantity == 3
        assert manager.select("Ham", 1).quantity == 1

    def test_select_condiment_is_once(self, manager) -> None:
        assert manager.select("Salt", 4).quantity == 1

    def test_select_unknown_raises(self, manager) -> None:
        with pytest.raises(KeyError):
            manager.select("Bacon")

    def test_parse_selection(self, manager) -> None:
        selection = manager.parse_selection("Tomato:2")
        assert selection.name == "Tomato"
        assert selection.quantity == 2
        assert manager.parse_selection("Tomato").quantity == 3

    def test_selections_for_recipe(self, manager) -> None:
        fillings, condiments = manager.selections_for_recipe(manager.get_recipe("1"))
        assert [(s.name, s.quantity) for s in fillings] == [("Ham", 3)]
        assert [(s.name, s.quantity) for s in condiments] == [("Mayonnaise", 1)]

    def test_unknown_recipe_ingredients_skipped(self, manager, caplog) -> None:
        fillings, condiments = manager.selections_for_recipe(manager.get_recipe("-2"))
        assert [s.name for s in fillings] == ["Ham"]
        assert [s.name for s in condiments] == ["Salt"]
        assert "Bacon" in caplog.text
