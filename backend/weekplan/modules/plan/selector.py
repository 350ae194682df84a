import random
from typing import Protocol, Sequence

from weekplan.core.errors import CatalogUnavailableError
from weekplan.modules.plan.catalog import RecipeCandidate


class RandomSource(Protocol):
    def shuffle(self, x: list) -> None: ...


def ParseCount(raw: str | None, default: int) -> int:
    """Read the ?count= query value: fractions truncate, negatives clamp to 0, junk uses the default."""
    if raw is None:
        return max(default, 0)
    try:
        value = int(float(raw.strip()))
    except (ValueError, OverflowError):
        return max(default, 0)
    return max(value, 0)


def SelectRecipes(
    candidates: Sequence[RecipeCandidate] | None,
    count: int,
    rng: RandomSource | None = None,
) -> list[RecipeCandidate]:
    """Greedy pick of up to `count` recipes with pairwise distinct primary and secondary ingredients.

    Candidates are shuffled first, so which recipes win a conflict depends only on
    the shuffle order. Recipes without ingredients are never picked.
    """
    if candidates is None:
        raise CatalogUnavailableError("Failed to fetch recipes from database")
    if count <= 0:
        return []

    pool = [recipe for recipe in candidates if recipe.Ingredients]
    (rng or random.Random()).shuffle(pool)

    selected: list[RecipeCandidate] = []
    used_primary: set[str] = set()
    used_secondary: set[str] = set()
    for recipe in pool:
        primary = recipe.PrimaryIngredient
        secondary = recipe.SecondaryIngredient
        if primary in used_primary:
            continue
        if secondary is not None and secondary in used_secondary:
            continue
        selected.append(recipe)
        used_primary.add(primary)
        if secondary is not None:
            used_secondary.add(secondary)
        if len(selected) >= count:
            break
    return selected
