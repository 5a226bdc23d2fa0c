"""Command-line argument builder (parser only)."""

import argparse


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line argument parser.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser with subcommands (``simulate``, ``recipe``,
        ``search``) and global options (verbosity, config, data dir).
    """
    parser = argparse.ArgumentParser(
        prog="picnic",
        description="Sandwich effect calculator",
    )
    subparsers = parser.add_subparsers(
        dest="cmd",
        required=True,
    )

    # Global -v/--verbose for all commands (counting flag)
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="-v for INFO, -vv for DEBUG",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Path to a YAML config file",
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Directory with fillings.json, condiments.json, sandwiches.json, meals.json",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write logs to this file",
    )

    # Subcommand: calculate effects for hand-picked ingredients
    simulate_parser = subparsers.add_parser(
        "simulate",
        help="Calculate effects for a set of ingredients",
    )
    simulate_parser.add_argument(
        "-f",
        "--filling",
        action="append",
        default=[],
        metavar="NAME[:PIECES]",
        help="Filling to add (repeatable); pieces default to the catalog value",
    )
    simulate_parser.add_argument(
        "-k",
        "--condiment",
        action="append",
        default=[],
        metavar="NAME",
        help="Condiment to add (repeatable)",
    )
    simulate_parser.add_argument(
        "-p",
        "--players",
        type=int,
        default=1,
        choices=(1, 2, 3, 4),
        help="Number of players",
    )
    simulate_parser.add_argument(
        "--no-bread",
        action="store_true",
        help="Leave the bread off",
    )

    # Subcommand: calculate a preset recipe by number or name
    recipe_parser = subparsers.add_parser(
        "recipe",
        help="Calculate effects for a preset recipe",
    )
    recipe_parser.add_argument(
        "recipe",
        help="Recipe number or name",
    )

    # Subcommand: reverse lookup
    search_parser = subparsers.add_parser(
        "search",
        help="Find ingredient combinations for target effects",
    )
    search_parser.add_argument(
        "-t",
        "--target",
        action="append",
        required=True,
        metavar="POWER[:TYPE[:LEVEL]]",
        help="Target effect, e.g. 'Encounter:Fire:2' or 'Egg' (repeatable)",
    )
    search_parser.add_argument(
        "--no-catalog",
        action="store_true",
        help="Skip listing matching preset recipes and meals",
    )

    return parser
