"""Domain models for saved case snapshots."""

from dataclasses import dataclass

from nutripro.domain.plans import DietPlan
from nutripro.domain.profile import UserProfile
from nutripro.domain.records import DailyRecord


@dataclass(frozen=True)
class TargetActual:
    """Planned target next to the actual intake."""

    target: float
    actual: float


@dataclass(frozen=True)
class CaseSummary:
    """Target versus actual energy and macros."""

    calories: TargetActual
    protein: TargetActual
    fat: TargetActual
    carb: TargetActual


@dataclass(frozen=True)
class CaseRecord:
    """Immutable snapshot of a dietitian session."""

    id: str
    timestamp: int
    profile: UserProfile
    plan: DietPlan
    record: DailyRecord
    summary: CaseSummary
