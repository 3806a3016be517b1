"""Case snapshots: building, restoring and storing saved sessions."""

import copy
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol

from nutripro.domain.cases import CaseRecord, CaseSummary, TargetActual
from nutripro.domain.plans import DietPlan
from nutripro.domain.profile import UserProfile
from nutripro.domain.records import DailyRecord
from nutripro.services.metabolic import round_half_up
from nutripro.services.records import record_totals


class CaseNotFoundError(LookupError):
    """Raised when a saved case id does not exist."""


class CaseRepository(Protocol):
    """Persistence interface for saved cases, newest first."""

    def list_cases(self) -> list[CaseRecord]:
        """Return all saved cases."""

    def get_case(self, case_id: str) -> CaseRecord | None:
        """Return a case by id, if present."""

    def add_case(self, case: CaseRecord) -> None:
        """Store a case in front of the existing ones."""

    def delete_case(self, case_id: str) -> bool:
        """Delete a case and report whether it existed."""


def summarize(plan: DietPlan, record: DailyRecord) -> CaseSummary:
    """Pair plan targets with raw intake totals."""
    actual = record_totals(record)
    return CaseSummary(
        calories=TargetActual(target=plan.target_calories, actual=actual.calories),
        protein=TargetActual(target=plan.target_p, actual=actual.protein_g),
        fat=TargetActual(target=plan.target_f, actual=actual.fat_g),
        carb=TargetActual(target=plan.target_c, actual=actual.carbs_g),
    )


def build_snapshot(
    profile: UserProfile,
    plan: DietPlan,
    record: DailyRecord,
    *,
    now: datetime | None = None,
) -> CaseRecord:
    """Snapshot the session; later edits to the inputs do not leak in."""
    moment = now or datetime.now(tz=UTC)
    timestamp = int(moment.timestamp() * 1000)
    return CaseRecord(
        id=str(timestamp),
        timestamp=timestamp,
        profile=copy.deepcopy(profile),
        plan=copy.deepcopy(plan),
        record=copy.deepcopy(record),
        summary=summarize(plan, record),
    )


def restore_snapshot(case: CaseRecord) -> tuple[UserProfile, DietPlan, DailyRecord]:
    """Return independent copies of a case's profile, plan and record."""
    return (
        copy.deepcopy(case.profile),
        copy.deepcopy(case.plan),
        copy.deepcopy(case.record),
    )


def calorie_achievement(case: CaseRecord) -> int | None:
    """Actual energy as a percent of target, or None without a target."""
    target = case.summary.calories.target
    if target <= 0:
        return None
    return int(round_half_up(case.summary.calories.actual / target * 100))


@dataclass
class CaseService:
    """Application service for the saved-case list."""

    repository: CaseRepository

    def save(
        self,
        profile: UserProfile,
        plan: DietPlan,
        record: DailyRecord,
        *,
        now: datetime | None = None,
    ) -> CaseRecord:
        """Build a snapshot with a unique time-based id and store it."""
        case = build_snapshot(profile, plan, record, now=now)
        existing = {saved.id for saved in self.repository.list_cases()}
        timestamp = case.timestamp
        while str(timestamp) in existing:
            timestamp += 1
        if timestamp != case.timestamp:
            case = replace(case, id=str(timestamp), timestamp=timestamp)
        self.repository.add_case(case)
        return case

    def list_cases(self) -> list[CaseRecord]:
        """Return saved cases, newest first."""
        return self.repository.list_cases()

    def get(self, case_id: str) -> CaseRecord:
        """Return a case or raise CaseNotFoundError."""
        case = self.repository.get_case(case_id)
        if case is None:
            raise CaseNotFoundError(case_id)
        return case

    def delete(self, case_id: str) -> None:
        """Delete a case or raise CaseNotFoundError."""
        if not self.repository.delete_case(case_id):
            raise CaseNotFoundError(case_id)

    def seed_demo(self, case: CaseRecord) -> bool:
        """Store a demo case only when nothing has been saved yet."""
        if self.repository.list_cases():
            return False
        self.repository.add_case(case)
        return True
