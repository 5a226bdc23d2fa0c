"""Command-line interface for the sandwich calculator.

Wires together catalog loading, name resolution, the effect calculator and
the reverse search, and prints the results.

Exports
-------
parse_target
cmd_simulate
cmd_recipe
cmd_search
main

Notes
-----
Use `python main.py simulate -f "Tomato" -k "Mayonnaise"` from the shell, or
the ``picnic`` console script once installed.
"""

import logging
import sys

from calculations import (
    calculate_sandwich,
)
from catalog_manager import (
    CatalogManager,
)
from config import (
    get_cached_config,
    set_config_path,
)
from interface.cli import (
    build_parser,
)
from interface.persistence import (
    load_catalogs,
)
from interface.render import (
    display_sandwich,
    display_search_results,
)
from logs.logging_utils import (
    setup_logging,
)
from models.ingredient import (
    Selection,
)
from models.kinds import (
    MealPower,
    PokemonType,
)
from models.sandwich import (
    SearchTarget,
)
from planner import (
    find_matching_meals,
    find_matching_recipes,
    search_sandwiches,
)

logger = logging.getLogger(__name__)


def parse_target(
    text: str,
) -> SearchTarget:
    """Parse ``"POWER[:TYPE[:LEVEL]]"`` into a search target.

    Examples: ``"Egg"``, ``"Encounter:Fire"``, ``"Title:Dragon:3"``. A blank
    or ``any`` type means every type.

    Raises
    ------
    ValueError
        Unknown power or type, or a level outside 1..3.
    """
    parts = [part.strip() for part in text.split(":")]
    if len(parts) > 3 or not parts[0]:
        raise ValueError(f"Bad target {text!r}; expected POWER[:TYPE[:LEVEL]]")
    power = MealPower.parse(parts[0])
    kind = PokemonType.parse(parts[1]) if len(parts) > 1 else PokemonType.ALL_TYPES
    try:
        level = int(parts[2]) if len(parts) > 2 and parts[2] else 1
    except ValueError:
        raise ValueError(f"Bad level in target {text!r}") from None
    return SearchTarget(power, kind, level)


def _resolve(
    manager: CatalogManager,
    text: str,
    expect_filling: bool,
) -> Selection:
    """Resolve a user-typed ingredient; unknown names list close matches."""
    try:
        selection = manager.parse_selection(text)
    except KeyError:
        name = text.rpartition(":")[0] or text
        suggestions = manager.suggest(name)
        hint = f" (did you mean: {', '.join(suggestions)})" if suggestions else ""
        raise ValueError(f"Unknown ingredient {name!r}{hint}") from None
    if selection.is_filling != expect_filling:
        kind = "filling" if expect_filling else "condiment"
        raise ValueError(f"{selection.name!r} is not a {kind}")
    return selection


def cmd_simulate(
    args,
    manager: CatalogManager | None = None,
) -> None:
    """Execute the ``simulate`` subcommand.

    Resolves the requested fillings and condiments, calculates the sandwich
    and prints it.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed CLI arguments.
    manager : CatalogManager, optional
        Preloaded catalogs; loaded from ``args.data_dir`` when omitted.
    """
    manager = manager or load_catalogs(args.data_dir)

    fillings = [_resolve(manager, text, expect_filling=True) for text in args.filling]
    condiments = [_resolve(manager, text, expect_filling=False) for text in args.condiment]

    result = calculate_sandwich(
        fillings,
        condiments,
        has_bread=not args.no_bread,
        players=args.players,
        recipes=manager.recipes,
    )
    display_sandwich(result, get_cached_config().display)


def cmd_recipe(
    args,
    manager: CatalogManager | None = None,
) -> None:
    """Execute the ``recipe`` subcommand.

    Rebuilds a preset recipe from the catalog, prints its calculated effects
    and, when they differ, the catalog's declared effects.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed CLI arguments.
    manager : CatalogManager, optional
        Preloaded catalogs; loaded from ``args.data_dir`` when omitted.
    """
    manager = manager or load_catalogs(args.data_dir)

    recipe = manager.get_recipe(args.recipe)
    if recipe is None:
        raise ValueError(f"Unknown recipe {args.recipe!r}")

    fillings, condiments = manager.selections_for_recipe(recipe)
    result = calculate_sandwich(
        fillings,
        condiments,
        has_bread=True,
        players=1,
        recipes=manager.recipes,
    )
    display_sandwich(
        result,
        get_cached_config().display,
        title=f"#{recipe.number} {recipe.name}".upper(),
    )

    calculated = [(effect.power, effect.type, effect.level) for effect in result.effects]
    declared = [(effect.power, effect.type, effect.level) for effect in recipe.effects]
    if calculated != declared:
        logger.info("Recipe #%s: calculated effects differ from catalog", recipe.number)
        print("Catalog lists:")
        for effect in recipe.effects:
            print(f"  {effect.power.full_name}: {effect.type.value} Lv. {effect.level}")


def cmd_search(
    args,
    manager: CatalogManager | None = None,
) -> None:
    """Execute the ``search`` subcommand.

    Parses the targets, runs the reverse search and prints the sandwiches
    found, together with preset recipes and meals that already provide the
    targets unless ``--no-catalog`` is given.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed CLI arguments.
    manager : CatalogManager, optional
        Preloaded catalogs; loaded from ``args.data_dir`` when omitted.
    """
    targets = [parse_target(text) for text in args.target]
    manager = manager or load_catalogs(args.data_dir)

    results = search_sandwiches(
        manager.fillings,
        manager.condiments,
        targets,
        manager.recipes,
        settings=get_cached_config().search,
    )
    recipes = []
    meals = []
    if not args.no_catalog:
        recipes = find_matching_recipes(manager.visible_recipes(), targets)
        meals = find_matching_meals(manager.meals, targets)
    display_search_results(
        results,
        recipes,
        meals,
        get_cached_config().display,
    )


def main(
    argv: list[str] | None = None,
) -> None:
    """CLI entry point.

    Parses args, applies the config path, configures logging, and dispatches
    to the selected subcommand. Bad input ends the program through
    ``parser.error`` (exit status 2).
    """

    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.log_file)
    if args.config:
        set_config_path(args.config)

    commands = {
        "simulate": cmd_simulate,
        "recipe": cmd_recipe,
        "search": cmd_search,
    }
    command = commands.get(args.cmd)
    if command is None:
        parser.error(f"Unknown command: {args.cmd}")
    try:
        command(args)
    except FileNotFoundError as exc:
        parser.error(f"Catalog file not found: {exc.filename}")
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main(sys.argv[1:])
