"""Domain models for logged food intake."""

from dataclasses import dataclass

from nutripro.domain.catalog import NutrientRecord
from nutripro.domain.exchange import MealTimeId

GRAMS_PER_UNIT = 100.0


@dataclass(frozen=True)
class CartItem:
    """A catalog food with a quantity in units of 100 g."""

    food: NutrientRecord
    quantity: float

    @property
    def grams(self) -> float:
        """Edible portion in grams."""
        return self.quantity * GRAMS_PER_UNIT

    def amount(self, key: str) -> float:
        """Return the consumed amount of a nutrient."""
        return self.food.nutrient(key) * self.quantity


DailyRecord = dict[MealTimeId, list[CartItem]]


def empty_daily_record() -> DailyRecord:
    """Return a record with an empty item list for every meal slot."""
    return {meal: [] for meal in MealTimeId}
