from config import (
    DisplayConfig,
)
from models.recipe import (
    Meal,
    Recipe,
    RecipeEffect,
)
from models.sandwich import (
    Effect,
    SandwichResult,
)

# Index = deliciousness tier
DELICIOUSNESS_LABELS = (
    "Inedible",
    "Okay",
    "Good",
    "Excellent",
)


def format_effect(
    effect: Effect | RecipeEffect,
    show_raw: bool = False,
) -> str:
    """One-line effect text, e.g. ``"Encounter Power: Fire Lv. 2"``.

    Parameters
    ----------
    effect : Effect or RecipeEffect
        Computed or declared effect.
    show_raw : bool, optional
        Append the raw power/type totals (computed effects only).
    """
    text = f"{effect.power.full_name}: {effect.type.value} Lv. {effect.level}"
    if show_raw and isinstance(effect, Effect):
        text += f"  (power {effect.raw_power}, type {effect.raw_type})"
    return text


def _ingredient_line(
    result: SandwichResult,
) -> str:
    parts = [f"{selection.name} x{selection.quantity}" for selection in result.fillings]
    parts += [selection.name for selection in result.condiments]
    return ", ".join(parts) if parts else "(nothing)"


def display_sandwich(
    result: SandwichResult,
    display: DisplayConfig | None = None,
    title: str = "SANDWICH",
):
    """Pretty-print one calculated sandwich.

    Parameters
    ----------
    result : SandwichResult
        Calculation output.
    display : DisplayConfig, optional
        Controls raw values and the deliciousness line; defaults to showing
        both.
    title : str, optional
        Banner text.
    """
    display = display or DisplayConfig()

    print(f"========== {title} ==========")
    print(f"Ingredients: {_ingredient_line(result)}")
    if not result.has_bread:
        print("Bread: none")
    if display.show_deliciousness:
        label = DELICIOUSNESS_LABELS[result.deliciousness]
        print(f"Deliciousness: {result.deliciousness} ({label})")
    if result.matched_recipe is not None:
        recipe = result.matched_recipe
        print(f"Recipe: #{recipe.number} {recipe.name}")

    if not result.effects:
        print("No effects.")
    for index, effect in enumerate(result.effects, 1):
        print(f" {index}. {format_effect(effect, display.show_raw_values)}")

    # Over-limit plates are still calculated; just flag them
    if not result.is_valid:
        print(f"Warning: {result.validation_message}")
    print("=" * (len(title) + 22))


def display_search_results(
    results: list[SandwichResult],
    recipes: list[Recipe] | None = None,
    meals: list[Meal] | None = None,
    display: DisplayConfig | None = None,
):
    """Pretty-print reverse-lookup results plus any catalog matches.

    Parameters
    ----------
    results : list[SandwichResult]
        Search output, already sorted.
    recipes : list[Recipe], optional
        Preset recipes whose declared effects meet the targets.
    meals : list[Meal], optional
        Restaurant meals whose declared effects meet the targets.
    display : DisplayConfig, optional
        Display switches forwarded to effect formatting.
    """
    display = display or DisplayConfig()

    if recipes:
        print("Preset recipes:")
        for recipe in recipes:
            effects = "; ".join(format_effect(effect) for effect in recipe.effects)
            print(f"  #{recipe.number} {recipe.name} - {effects}")
    if meals:
        print("Restaurant meals:")
        for meal in meals:
            effects = "; ".join(format_effect(effect) for effect in meal.effects)
            print(f"  {meal.name} ({meal.shop}, {meal.cost}) - {effects}")

    if not results:
        print("No sandwiches found.")
        return

    print(f"========== {len(results)} SANDWICHES ==========")
    index_width = len(str(len(results)))
    for index, result in enumerate(results, 1):
        print(f" {index:>{index_width}}. {_ingredient_line(result)}")
        pad = " " * (index_width + 3)
        for effect in result.effects:
            print(f"{pad}- {format_effect(effect, display.show_raw_values)}")
        if result.matched_recipe is not None:
            print(f"{pad}= Recipe #{result.matched_recipe.number} {result.matched_recipe.name}")
    print("=======================================")
