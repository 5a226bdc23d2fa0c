import json
import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402

from models.ingredient import (  # noqa: E402
    Condiment,
    Filling,
    Selection,
)
from models.kinds import (  # noqa: E402
    Flavor,
    MealPower,
    PokemonType,
)
from models.recipe import (  # noqa: E402
    Recipe,
    RecipeEffect,
)


def make_filling(
    name,
    tastes=None,
    powers=None,
    types=None,
    pieces=1,
    max_pieces_on_dish=6,
    id=None,
):
    """Filling with an id derived from its name unless given."""
    return Filling(
        id=id or name.lower().replace(" ", "-"),
        name=name,
        tastes=tastes or {},
        powers=powers or {},
        types=types or {},
        pieces=pieces,
        max_pieces_on_dish=max_pieces_on_dish,
    )


def make_condiment(
    name,
    tastes=None,
    powers=None,
    types=None,
    id=None,
):
    return Condiment(
        id=id or name.lower().replace(" ", "-"),
        name=name,
        tastes=tastes or {},
        powers=powers or {},
        types=types or {},
    )


def make_recipe(
    number,
    name,
    fillings=(),
    condiments=(),
    effects=(),
):
    """Recipe; ``effects`` are ``(power, type, level)`` tuples."""
    return Recipe(
        number=str(number),
        name=name,
        fillings=tuple(fillings),
        condiments=tuple(condiments),
        effects=tuple(RecipeEffect(*effect) for effect in effects),
    )


def use(ingredient, quantity=None):
    """Selection at the catalog piece count (fillings) or once (condiments)."""
    if quantity is None:
        quantity = getattr(ingredient, "pieces", 1)
    return Selection(ingredient, quantity)


@pytest.fixture
def catalog_factory():
    """Small catalog aimed at Encounter/Fire and Title searches."""

    def _make():
        fillings = [
            make_filling("Red Pepper", {Flavor.SPICY: 12}, {MealPower.ENCOUNTER: 12}, {PokemonType.FIRE: 25}),
            make_filling("Tomato", {Flavor.SOUR: 12}, {MealPower.ENCOUNTER: 7}, {PokemonType.FIRE: 18}),
            make_filling("Chorizo", {Flavor.SALTY: 8}, {MealPower.RAID: 4}, {PokemonType.FIRE: 10, PokemonType.DARK: 5}),
            make_filling("Cucumber", {Flavor.SOUR: 6}, {MealPower.EXP: 6}, {PokemonType.WATER: 20}),
            make_filling("Lettuce", {Flavor.BITTER: 4}, {MealPower.ITEM: 2}, {PokemonType.GRASS: 15}),
        ]
        condiments = [
            make_condiment("Salt", {Flavor.SALTY: 20}, {MealPower.ENCOUNTER: 200}),
            make_condiment("Pepper", {Flavor.SPICY: 12}, {MealPower.ENCOUNTER: 120}),
            make_condiment("Mayonnaise", {Flavor.SOUR: 4}, {MealPower.EXP: 30}),
            make_condiment("Jam", {Flavor.SWEET: 16}, {MealPower.EGG: 21}),
            make_condiment("Spicy Herba Mystica", {Flavor.SPICY: 500}, {MealPower.TITLE: 1000}),
            make_condiment("Sweet Herba Mystica", {Flavor.SWEET: 500}, {MealPower.TITLE: 1000}),
        ]
        return fillings, condiments

    return _make


@pytest.fixture
def data_dir(tmp_path):
    """Catalog directory in the export's JSON shapes."""
    fillings = [
        {
            "name": "Ham",
            "id": 1,
            "pieces": 3,
            "maxPiecesOnDish": 6,
            "tastes": [{"flavor": "Salty", "amount": 5}],
            "powers": [{"type": "Encounter", "amount": 7}],
            "types": [{"type": "Ground", "amount": 7}],
        },
        {
            "name": "Red Pepper",
            "id": 2,
            "pieces": 3,
            "tastes": [{"flavor": "Hot", "amount": 12}],
            "powers": [{"type": "Encounter", "amount": 12}],
            "types": [{"type": "Fire", "amount": 25}],
        },
        {
            "name": "Tomato",
            "id": 3,
            "pieces": 3,
            "tastes": [{"flavor": "Sour", "amount": 12}],
            "powers": [{"type": "Encounter", "amount": 7}],
            "types": [{"type": "Fire", "amount": 18}],
        },
    ]
    condiments = [
        {
            "name": "Mayonnaise",
            "cid": "c1",
            "tastes": [{"flavor": "Sour", "amount": 4}],
            "powers": [{"type": "Exp", "amount": 30}],
            "types": [],
        },
        {
            "name": "Salt",
            "cid": "c2",
            "tastes": [{"flavor": "Salty", "amount": 20}],
            "powers": [{"type": "Encounter", "amount": 200}],
            "types": [],
        },
        {
            "name": "Pepper",
            "cid": "c3",
            "tastes": [{"flavor": "Hot", "amount": 12}],
            "powers": [{"type": "Encounter", "amount": 120}],
            "types": [],
        },
    ]
    sandwiches = [
        {
            "number": "1",
            "name": "Ham Sandwich",
            "fillings": ["Ham"],
            "condiments": ["Mayonnaise"],
            "effects": [{"name": "Encounter Power", "type": "Ground", "level": "1"}],
            "location": "Mesagoza",
        },
    ]
    meals = [
        {
            "number": "1",
            "name": "Fire Curry",
            "cost": "900",
            "shop": "Curry Shop",
            "towns": ["Levincia"],
            "effects": [{"name": "Encounter Power", "type": "Fire", "level": "2"}],
        },
    ]
    for filename, payload in (
        ("fillings.json", fillings),
        ("condiments.json", condiments),
        ("sandwiches.json", sandwiches),
        ("meals.json", meals),
    ):
        (tmp_path / filename).write_text(json.dumps(payload), encoding="utf-8")
    return tmp_path
