"""Domain models for exchange diet plans."""

from dataclasses import dataclass

from nutripro.domain.exchange import PortionMatrix


@dataclass(frozen=True)
class MacroTargets:
    """Energy and macro targets derived from a portion matrix."""

    target_calories: float
    target_p: float
    target_f: float
    target_c: float


@dataclass(frozen=True)
class DietPlan:
    """Exchange portions per group and meal with their derived targets.

    Build instances through ``nutripro.services.planning`` so the targets
    always match the portions matrix.
    """

    target_calories: float
    target_p: float
    target_f: float
    target_c: float
    portions: PortionMatrix

    @property
    def targets(self) -> MacroTargets:
        """Targets as a standalone value."""
        return MacroTargets(
            target_calories=self.target_calories,
            target_p=self.target_p,
            target_f=self.target_f,
            target_c=self.target_c,
        )
