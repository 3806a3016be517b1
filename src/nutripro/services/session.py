"""Single dietitian session state."""

from dataclasses import dataclass, field, replace

from nutripro.domain.cases import CaseRecord
from nutripro.domain.catalog import DEFAULT_VISIBLE_NUTRIENTS, NUTRIENT_METADATA
from nutripro.domain.exchange import FoodGroupId, MealTimeId, PortionMatrix
from nutripro.domain.plans import DietPlan
from nutripro.domain.profile import UserProfile
from nutripro.domain.records import CartItem, DailyRecord, empty_daily_record
from nutripro.services.cart import Cart
from nutripro.services.cases import CaseService, restore_snapshot
from nutripro.services.metabolic import compute_tdee, has_body_metrics
from nutripro.services.planning import empty_plan, set_portion
from nutripro.services.portions import (
    PortionComparison,
    compare_plan,
    estimate_portion_matrix,
)
from nutripro.services.records import add_to_log, remove_from_log

DEFAULT_TDEE = 2000
ALWAYS_VISIBLE_NUTRIENT = "cal"
_DISPLAY_KEYS = frozenset(meta.key for meta in NUTRIENT_METADATA)


class UnknownNutrientError(ValueError):
    """Raised when a nutrient key has no display metadata."""


@dataclass
class DietitianSession:
    """Mutable state for one assessment; computations stay in pure services."""

    profile: UserProfile = field(default_factory=UserProfile)
    tdee: int = DEFAULT_TDEE
    plan: DietPlan = field(default_factory=empty_plan)
    record: DailyRecord = field(default_factory=empty_daily_record)
    cart: Cart = field(default_factory=Cart)
    visible_nutrients: list[str] = field(
        default_factory=lambda: list(DEFAULT_VISIBLE_NUTRIENTS)
    )

    def update_profile(self, **changes: object) -> UserProfile:
        """Replace the profile with edited fields and refresh the TDEE."""
        self.profile = replace(self.profile, **changes)
        self._refresh_tdee()
        return self.profile

    def toggle_nutrient(self, key: str) -> list[str]:
        """Show or hide a nutrient column; energy stays when it is the last one."""
        if key not in _DISPLAY_KEYS:
            raise UnknownNutrientError(key)
        if key not in self.visible_nutrients:
            self.visible_nutrients = [*self.visible_nutrients, key]
        elif not (key == ALWAYS_VISIBLE_NUTRIENT and len(self.visible_nutrients) == 1):
            self.visible_nutrients = [k for k in self.visible_nutrients if k != key]
        return self.visible_nutrients

    def set_portion(self, group: FoodGroupId, meal: MealTimeId, value: float) -> DietPlan:
        """Edit one plan cell; targets are recomputed from the whole matrix."""
        self.plan = set_portion(self.plan, group, meal, value)
        return self.plan

    def log_cart(self, meal: MealTimeId) -> list[CartItem]:
        """Move the staged cart into a meal and clear the cart."""
        items = list(self.cart.items)
        self.record = add_to_log(self.record, meal, items)
        self.cart.clear()
        return items

    def remove_logged(self, meal: MealTimeId, index: int) -> None:
        """Remove one logged item by its position in the meal."""
        self.record = remove_from_log(self.record, meal, index)

    def save_case(self, case_service: CaseService) -> CaseRecord:
        """Snapshot the current state into the saved-case list."""
        return case_service.save(self.profile, self.plan, self.record)

    def load_case(self, case: CaseRecord) -> None:
        """Restore profile, plan and record from a saved case."""
        self.profile, self.plan, self.record = restore_snapshot(case)
        self._refresh_tdee()

    def actual_portions(self) -> PortionMatrix:
        """Estimated exchange portions of the logged food."""
        return estimate_portion_matrix(self.record)

    def comparison(self) -> list[PortionComparison]:
        """Plan versus actual for every group and meal."""
        return compare_plan(self.plan, self.record)

    def _refresh_tdee(self) -> None:
        # An incomplete profile keeps the previous estimate.
        if has_body_metrics(self.profile):
            self.tdee = compute_tdee(self.profile)
