"""Daily intake record operations and totals."""

from collections.abc import Iterable, Sequence

from nutripro.domain.exchange import MealTimeId
from nutripro.domain.nutrition import ZERO_MACROS, MacroProfile
from nutripro.domain.records import CartItem, DailyRecord


def add_to_log(
    record: DailyRecord, meal: MealTimeId, items: Sequence[CartItem]
) -> DailyRecord:
    """Return a new record with items appended to a meal."""
    updated = {slot: list(entries) for slot, entries in record.items()}
    updated[meal] = [*record.get(meal, []), *items]
    return updated


def remove_from_log(record: DailyRecord, meal: MealTimeId, index: int) -> DailyRecord:
    """Return a new record without the item at index; bad indexes change nothing."""
    updated = {slot: list(entries) for slot, entries in record.items()}
    entries = updated.get(meal, [])
    if 0 <= index < len(entries):
        del entries[index]
    return updated


def flatten(record: DailyRecord) -> list[CartItem]:
    """All logged items in meal order."""
    return [item for meal in MealTimeId for item in record.get(meal, [])]


def meal_totals(items: Iterable[CartItem]) -> MacroProfile:
    """Quantity-weighted energy and macro totals."""
    total = ZERO_MACROS
    for item in items:
        total += MacroProfile(
            calories=item.amount("cal"),
            protein_g=item.amount("p"),
            fat_g=item.amount("f"),
            carbs_g=item.amount("c"),
        )
    return total


def record_totals(record: DailyRecord) -> MacroProfile:
    """Totals across every meal of the day."""
    return meal_totals(flatten(record))


def nutrient_totals(items: Iterable[CartItem], keys: Iterable[str]) -> dict[str, float]:
    """Quantity-weighted totals for the requested nutrient keys."""
    wanted = list(keys)
    totals = {key: 0.0 for key in wanted}
    for item in items:
        for key in wanted:
            totals[key] += item.amount(key)
    return totals
