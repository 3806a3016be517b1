"""Anthropometric profile of the client being assessed."""

from dataclasses import dataclass
from enum import StrEnum


class Gender(StrEnum):
    """Biological sex used by the BMR equation."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(StrEnum):
    """Physical activity tiers."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


@dataclass(frozen=True)
class UserProfile:
    """Client profile; edits replace the whole object."""

    height: float = 0.0
    weight: float = 0.0
    age: int = 30
    gender: Gender = Gender.MALE
    activity_level: ActivityLevel = ActivityLevel.MODERATE
    name: str = ""
    notes: str = ""
