"""Catalog loading from JSON files.

Reads the ingredient, recipe and meal catalogs and decodes each entry into
its model, skipping (and logging) entries that cannot be decoded so one
bad record never blocks the rest of the catalog.

Exports
-------
DATA_DIR
read_catalog
load_catalogs

Notes
-----
JSON I/O is UTF-8. File names follow the catalog export:
``fillings.json``, ``condiments.json``, ``sandwiches.json``, ``meals.json``.
"""

import json
import logging
from pathlib import (
    Path,
)

from catalog_manager import CatalogManager
from models.ingredient import (
    Condiment,
    Filling,
)
from models.recipe import (
    Meal,
    Recipe,
)

logger = logging.getLogger(__name__)

# Catalog files next to the project root (works when run as a module)
ROOT_DIR = Path(__file__).resolve().parents[1]  # project root (one level up)
DATA_DIR = ROOT_DIR / "data"

FILLINGS_FILE = "fillings.json"
CONDIMENTS_FILE = "condiments.json"
RECIPES_FILE = "sandwiches.json"
MEALS_FILE = "meals.json"


def read_catalog(
    path,
    decoder,
) -> list:
    """Load a JSON list and decode every entry.

    Parameters
    ----------
    path : str | os.PathLike
        Path to the JSON file.
    decoder : callable
        ``from_dict``-style factory, e.g. ``Filling.from_dict``.

    Returns
    -------
    list
        Decoded models in file order. Malformed entries are skipped with a
        warning naming the entry index, its name and the reason.

    Raises
    ------
    FileNotFoundError
        The file does not exist.
    ValueError
        The file is not valid JSON or its top level is not a list.
    """
    with open(
        path,
        "r",
        encoding="utf-8",
    ) as in_file:
        data = json.load(in_file)
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON list, got {type(data).__name__}")

    result = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            logger.warning("%s[%d]: skipped non-object entry %r", Path(path).name, index, entry)
            continue
        try:
            result.append(decoder(entry))
        except ValueError as exc:
            # CatalogError and IngredientDataError are both ValueErrors
            logger.warning(
                "%s[%d] %r: skipped (%s)",
                Path(path).name,
                index,
                entry.get("name", "<unnamed>"),
                exc,
            )
    logger.info("Loaded %d/%d entries from %s", len(result), len(data), Path(path).name)
    return result


def _read_optional(
    path: Path,
    decoder,
) -> list:
    if not path.exists():
        logger.info("%s not found; continuing without it", path.name)
        return []
    return read_catalog(path, decoder)


def load_catalogs(
    data_dir=None,
) -> CatalogManager:
    """Load every catalog from a directory into a ``CatalogManager``.

    Parameters
    ----------
    data_dir : str | os.PathLike, optional
        Directory holding the catalog files; defaults to `DATA_DIR`.

    Returns
    -------
    CatalogManager
        Manager over the decoded catalogs.

    Raises
    ------
    FileNotFoundError
        The fillings or condiments file is missing. Recipes and meals are
        optional.
    """
    base = Path(data_dir) if data_dir is not None else DATA_DIR
    fillings = read_catalog(base / FILLINGS_FILE, Filling.from_dict)
    condiments = read_catalog(base / CONDIMENTS_FILE, Condiment.from_dict)
    recipes = _read_optional(base / RECIPES_FILE, Recipe.from_dict)
    meals = _read_optional(base / MEALS_FILE, Meal.from_dict)
    return CatalogManager(fillings, condiments, recipes, meals)
