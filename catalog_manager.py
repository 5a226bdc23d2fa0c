"""Lookup layer over the loaded ingredient, recipe and meal catalogs.

Holds the read-only catalogs, resolves names typed by the user into
selections, and rebuilds a preset recipe as selections.

Exports
-------
CatalogManager

Notes
-----
Computations are delegated to `calculations` and `planner`; the manager
never mutates a catalog after construction.
"""

import difflib
import logging

from models.ingredient import (
    Condiment,
    Filling,
    Selection,
)
from models.recipe import (
    Meal,
    Recipe,
)

logger = logging.getLogger(__name__)


def normalize_name(
    text: str,
) -> str:
    """Lowercase + trim for robust name matching."""
    return text.strip().casefold()


class CatalogManager:
    """Case-insensitive access to fillings, condiments, recipes and meals.

    Parameters
    ----------
    fillings : list of Filling
        Filling catalog.
    condiments : list of Condiment
        Condiment catalog.
    recipes : list of Recipe, optional
        Preset recipe catalog.
    meals : list of Meal, optional
        Restaurant meal catalog.

    Attributes
    ----------
    fillings, condiments, recipes, meals : tuple
        Catalogs in load order.
    """

    def __init__(
        self,
        fillings: list[Filling],
        condiments: list[Condiment],
        recipes: list[Recipe] | None = None,
        meals: list[Meal] | None = None,
    ):
        self.fillings = tuple(fillings)
        self.condiments = tuple(condiments)
        self.recipes = tuple(recipes or ())
        self.meals = tuple(meals or ())
        # First entry wins when two catalog entries share a name
        self._fillings_by_name: dict[str, Filling] = {}
        for filling in self.fillings:
            self._fillings_by_name.setdefault(normalize_name(filling.name), filling)
        self._condiments_by_name: dict[str, Condiment] = {}
        for condiment in self.condiments:
            self._condiments_by_name.setdefault(normalize_name(condiment.name), condiment)

    def get_filling(
        self,
        name: str,
    ) -> Filling | None:
        return self._fillings_by_name.get(normalize_name(name))

    def get_condiment(
        self,
        name: str,
    ) -> Condiment | None:
        return self._condiments_by_name.get(normalize_name(name))

    def get_ingredient(
        self,
        name: str,
    ) -> Filling | Condiment | None:
        """Look up an ingredient by name, fillings first."""
        return self.get_filling(name) or self.get_condiment(name)

    def get_recipe(
        self,
        key: str,
    ) -> Recipe | None:
        """Look up a recipe by catalog number or (case-insensitive) name."""
        wanted = normalize_name(key)
        for recipe in self.recipes:
            if recipe.number == key.strip() or normalize_name(recipe.name) == wanted:
                return recipe
        return None

    def suggest(
        self,
        name: str,
        limit: int = 3,
    ) -> list[str]:
        """Close catalog names for a misspelled ingredient."""
        names = {
            ingredient.name
            for ingredient in self.fillings + self.condiments
        }
        by_key = {normalize_name(known): known for known in names}
        guesses = difflib.get_close_matches(
            normalize_name(name),
            list(by_key),
            n=limit,
            cutoff=0.6,
        )
        return [by_key[guess] for guess in guesses]

    def select(
        self,
        name: str,
        quantity: int | None = None,
    ) -> Selection:
        """Build a selection for a named ingredient.

        Parameters
        ----------
        name : str
            Ingredient name (case-insensitive).
        quantity : int, optional
            Pieces for fillings (defaults to the catalog pieces); condiments
            always use 1.

        Returns
        -------
        Selection
            The selection.

        Raises
        ------
        KeyError
            No ingredient with that name.
        """
        ingredient = self.get_ingredient(name)
        if ingredient is None:
            raise KeyError(name)
        if isinstance(ingredient, Filling):
            return Selection(ingredient, quantity if quantity is not None else ingredient.pieces)
        return Selection(ingredient, 1)

    def parse_selection(
        self,
        text: str,
    ) -> Selection:
        """Parse ``"Name"`` or ``"Name:3"`` into a selection."""
        name, sep, quantity = text.rpartition(":")
        if sep and quantity.strip().isdigit():
            return self.select(name, int(quantity))
        return self.select(text)

    def selections_for_recipe(
        self,
        recipe: Recipe,
    ) -> tuple[list[Selection], list[Selection]]:
        """Rebuild a preset recipe as ``(fillings, condiments)`` selections.

        Fillings use their catalog piece count and condiments are applied
        once. Names missing from the catalogs are skipped with a warning.
        """
        fillings = []
        for name in recipe.fillings:
            filling = self.get_filling(name)
            if filling is None:
                logger.warning("Recipe %s: unknown filling %r", recipe.number, name)
                continue
            fillings.append(Selection(filling, filling.pieces))
        condiments = []
        for name in recipe.condiments:
            condiment = self.get_condiment(name)
            if condiment is None:
                logger.warning("Recipe %s: unknown condiment %r", recipe.number, name)
                continue
            condiments.append(Selection(condiment, 1))
        return fillings, condiments

    def visible_recipes(
        self,
    ) -> list[Recipe]:
        """Recipes that are obtainable in game (hidden ones excluded)."""
        return [recipe for recipe in self.recipes if not recipe.is_hidden]
