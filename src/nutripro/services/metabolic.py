"""Anthropometric and energy requirement calculations."""

import math
from dataclasses import dataclass
from enum import Enum

from nutripro.domain.profile import ActivityLevel, Gender, UserProfile

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}

_SEX_CONSTANTS: dict[Gender, float] = {Gender.MALE: 5, Gender.FEMALE: -161}

IDEAL_BMI = 22.0
HEALTHY_BMI_LOW = 18.5
HEALTHY_BMI_HIGH = 23.9
ABW_FACTOR = 0.25


class BmiStatus(Enum):
    """BMI bands used for adults in Taiwan."""

    UNDERWEIGHT = "過輕"
    NORMAL = "正常"
    OVERWEIGHT = "過重"
    MILD_OBESITY = "輕度肥胖"
    MODERATE_OBESITY = "中度肥胖"
    SEVERE_OBESITY = "重度肥胖"


# Upper bounds (exclusive) of each band, checked in order.
_BMI_BANDS: tuple[tuple[float, BmiStatus], ...] = (
    (18.5, BmiStatus.UNDERWEIGHT),
    (24, BmiStatus.NORMAL),
    (27, BmiStatus.OVERWEIGHT),
    (30, BmiStatus.MILD_OBESITY),
    (35, BmiStatus.MODERATE_OBESITY),
)


@dataclass(frozen=True)
class BodyAssessment:
    """Display-ready body composition and energy figures."""

    bmi: float | None
    bmi_status: BmiStatus | None
    ideal_weight: float | None
    ideal_weight_low: float | None
    ideal_weight_high: float | None
    adjusted_weight: float | None
    bmr: int
    tdee: int


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves toward positive infinity."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def has_body_metrics(profile: UserProfile) -> bool:
    """Whether height, weight and age are all filled in."""
    return bool(profile.height and profile.weight and profile.age)


def compute_bmr(profile: UserProfile) -> float:
    """Mifflin-St Jeor basal metabolic rate, or 0 for an incomplete profile."""
    if not has_body_metrics(profile):
        return 0.0
    return (
        10 * profile.weight
        + 6.25 * profile.height
        - 5 * profile.age
        + _SEX_CONSTANTS[profile.gender]
    )


def compute_tdee(profile: UserProfile) -> int:
    """Total daily energy expenditure in kcal."""
    bmr = compute_bmr(profile)
    return int(round_half_up(bmr * ACTIVITY_MULTIPLIERS[profile.activity_level]))


def _height_m_squared(profile: UserProfile) -> float | None:
    height_m = profile.height / 100
    if height_m <= 0:
        return None
    return height_m * height_m


def compute_bmi(profile: UserProfile) -> float | None:
    """Body mass index, or None when height is missing."""
    squared = _height_m_squared(profile)
    if squared is None:
        return None
    return profile.weight / squared


def bmi_status(bmi: float | None) -> BmiStatus | None:
    """Classify a BMI value; zero or missing values have no status."""
    if bmi is None or bmi <= 0:
        return None
    for upper, status in _BMI_BANDS:
        if bmi < upper:
            return status
    return BmiStatus.SEVERE_OBESITY


def ideal_body_weight(profile: UserProfile) -> float | None:
    """Ideal body weight at BMI 22."""
    squared = _height_m_squared(profile)
    if squared is None:
        return None
    return IDEAL_BMI * squared


def ideal_weight_range(profile: UserProfile) -> tuple[float, float] | None:
    """Healthy weight range for BMI 18.5 to 23.9."""
    squared = _height_m_squared(profile)
    if squared is None:
        return None
    return HEALTHY_BMI_LOW * squared, HEALTHY_BMI_HIGH * squared


def adjusted_body_weight(profile: UserProfile) -> float | None:
    """Obesity-adjusted body weight."""
    ibw = ideal_body_weight(profile)
    if ibw is None:
        return None
    return (profile.weight - ibw) * ABW_FACTOR + ibw


def assess(profile: UserProfile) -> BodyAssessment:
    """Compute every body metric, rounded for display."""
    bmi = compute_bmi(profile)
    weight_range = ideal_weight_range(profile)
    return BodyAssessment(
        bmi=_one_decimal(bmi) if bmi else None,
        bmi_status=bmi_status(bmi),
        ideal_weight=_one_decimal(ideal_body_weight(profile)),
        ideal_weight_low=_one_decimal(weight_range[0]) if weight_range else None,
        ideal_weight_high=_one_decimal(weight_range[1]) if weight_range else None,
        adjusted_weight=_one_decimal(adjusted_body_weight(profile)),
        bmr=int(round_half_up(compute_bmr(profile))),
        tdee=compute_tdee(profile),
    )


def _one_decimal(value: float | None) -> float | None:
    if value is None:
        return None
    return round_half_up(value, 1)
