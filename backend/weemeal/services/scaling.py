# weemeal/services/scaling.py
# Portion scaling + amount formatting for the recipe detail view
# One scaling rule for every consumer: round(amount * target / yield, 2), half-up.

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Iterable, List, Optional, Sequence, TypeVar, Union

from pydantic import BaseModel

from weemeal.models.recipe import Ingredient, SectionCaption
from weemeal.services.utils import parse_amount

_CENT = Decimal("0.01")

T = TypeVar("T")


class DisplayIngredient(BaseModel):
    contentId: str
    contentType: str = "INGREDIENT"
    position: int
    ingredientName: str
    unit: Optional[str] = None
    amount: Optional[float] = None          # scaled
    displayAmount: Optional[str] = None     # "4", "2.5", "0.33"


DisplayItem = Union[DisplayIngredient, SectionCaption]


def portion_multiplier(recipe_yield: int, target_portions: int) -> float:
    if recipe_yield < 1:
        raise ValueError("recipeYield must be at least 1")
    return target_portions / recipe_yield


def round2(value: float) -> float:
    # str() gives the shortest repr, so 2.675 rounds to 2.68
    if not math.isfinite(value):
        return value
    d = Decimal(str(value))
    with localcontext() as ctx:
        # enough digits for the integer part plus two decimals
        ctx.prec = max(ctx.prec, d.adjusted() + 3)
        return float(d.quantize(_CENT, rounding=ROUND_HALF_UP))


def scaled_amount(amount: Optional[float], multiplier: float) -> Optional[float]:
    if amount is None:
        return None
    value = amount * multiplier
    # overflow has no displayable amount
    return round2(value) if math.isfinite(value) else None


def format_amount(value: Optional[float]) -> Optional[str]:
    """Display string: "4" for whole numbers, otherwise up to 2 decimals without trailing zeros."""
    if value is None or not math.isfinite(value):
        return None
    value = round2(value)
    if value == int(value):
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


def format_stored_amount(value: float) -> str:
    # Unscaled amounts keep their full precision ("0.333", not "0.33")
    return str(int(value)) if float(value).is_integer() else str(value)


def sort_by_position(content: Iterable[T]) -> List[T]:
    # sorted() is stable, so duplicate positions keep their stored order
    return sorted(content, key=lambda c: c.position)


def scale_for_display(content: Sequence[Union[Ingredient, SectionCaption]], multiplier: float) -> List[DisplayItem]:
    out: List[DisplayItem] = []
    for item in sort_by_position(content):
        if isinstance(item, SectionCaption):
            out.append(item)
            continue
        amount = scaled_amount(parse_amount(item.amount), multiplier)
        out.append(DisplayIngredient(
            contentId=item.contentId,
            position=item.position,
            ingredientName=item.ingredientName,
            unit=item.unit,
            amount=amount,
            displayAmount=format_amount(amount),
        ))
    return out


def format_ingredient(ingredient: Ingredient) -> str:
    """"{amount} {unit} {name}" with missing parts left out (export format, unscaled)."""
    parts: List[str] = []
    amount = parse_amount(ingredient.amount)
    if amount is not None:
        parts.append(format_stored_amount(amount))
    if ingredient.unit:
        parts.append(ingredient.unit)
    parts.append(ingredient.ingredientName)
    return " ".join(parts)
