"""Staging cart for foods about to be logged to a meal."""

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace

from nutripro.domain.catalog import NutrientRecord
from nutripro.domain.records import GRAMS_PER_UNIT, CartItem
from nutripro.services.records import nutrient_totals

QUANTITY_STEP = 0.5
MIN_STEPPED_QUANTITY = 0.1


@dataclass
class Cart:
    """Ordered list of staged foods with quantities in 100 g units."""

    items: list[CartItem] = field(default_factory=list)

    def add(self, food: NutrientRecord) -> None:
        """Add one unit of a food, merging with an existing entry."""
        for index, item in enumerate(self.items):
            if item.food.id == food.id:
                self.items[index] = replace(item, quantity=item.quantity + 1)
                return
        self.items.append(CartItem(food=food, quantity=1.0))

    def adjust(self, food_id: str, delta: float = QUANTITY_STEP) -> None:
        """Step a quantity up or down, never below the minimum step."""
        self._update(food_id, lambda quantity: max(MIN_STEPPED_QUANTITY, quantity + delta))

    def set_quantity(self, food_id: str, quantity: float) -> None:
        """Set an exact quantity; zero is kept rather than removing the item."""
        if not math.isfinite(quantity):
            return
        self._update(food_id, lambda _: max(0.0, quantity))

    def set_grams(self, food_id: str, raw_grams: object) -> bool:
        """Set a quantity from gram input; non-numeric input is ignored."""
        grams = _parse_number(raw_grams)
        if grams is None:
            return False
        self.set_quantity(food_id, grams / GRAMS_PER_UNIT)
        return True

    def remove(self, food_id: str) -> None:
        """Drop a food from the cart."""
        self.items = [item for item in self.items if item.food.id != food_id]

    def clear(self) -> None:
        """Empty the cart."""
        self.items = []

    def totals(self, keys: Iterable[str]) -> dict[str, float]:
        """Quantity-weighted totals for the given nutrients."""
        return nutrient_totals(self.items, keys)

    def _update(self, food_id: str, compute: Callable[[float], float]) -> None:
        self.items = [
            replace(item, quantity=compute(item.quantity))
            if item.food.id == food_id
            else item
            for item in self.items
        ]


def _parse_number(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number
