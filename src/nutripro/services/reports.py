"""Row values for case exports.

Spreadsheet writing happens elsewhere; these helpers only produce the rows
an exporter writes: the case list summary, and for a single case its
client details, per-nutrient totals and meal-by-meal food log.
"""

from collections.abc import Iterable
from datetime import datetime, tzinfo

from nutripro.domain.cases import CaseRecord
from nutripro.domain.catalog import NUTRIENT_METADATA
from nutripro.domain.exchange import MEAL_TIME_LABELS, MealTimeId
from nutripro.domain.profile import Gender
from nutripro.domain.records import DailyRecord
from nutripro.services.cases import calorie_achievement
from nutripro.services.metabolic import compute_bmi, round_half_up
from nutripro.services.records import flatten, nutrient_totals

UNNAMED = "未命名"
_GENDER_LABELS = {Gender.MALE: "男", Gender.FEMALE: "女"}


def case_summary_rows(
    cases: Iterable[CaseRecord], tz: tzinfo | None = None
) -> list[dict[str, object]]:
    """One row per saved case; dates use tz, or local time when omitted."""
    rows: list[dict[str, object]] = []
    for case in cases:
        bmi = compute_bmi(case.profile)
        achievement = calorie_achievement(case)
        rows.append(
            {
                "紀錄日期": _case_date(case, tz),
                "姓名": case.profile.name or UNNAMED,
                "性別": _GENDER_LABELS[case.profile.gender],
                "年齡": case.profile.age,
                "身高(cm)": case.profile.height,
                "體重(kg)": case.profile.weight,
                "BMI": round_half_up(bmi, 1) if bmi is not None else None,
                "目標熱量(kcal)": case.plan.target_calories,
                "實際攝取(kcal)": case.summary.calories.actual,
                "熱量達成率(%)": achievement,
                "備註": case.profile.notes,
            }
        )
    return rows


def case_profile_rows(
    case: CaseRecord, tz: tzinfo | None = None
) -> list[dict[str, object]]:
    """Client details and plan targets of one case."""
    profile = case.profile
    details: tuple[tuple[str, str, object], ...] = (
        ("基本資料", "姓名", profile.name or UNNAMED),
        ("基本資料", "日期", _case_date(case, tz)),
        ("基本資料", "性別", _GENDER_LABELS[profile.gender]),
        ("基本資料", "年齡", profile.age),
        ("基本資料", "身高 (cm)", profile.height),
        ("基本資料", "體重 (kg)", profile.weight),
        ("基本資料", "活動量", profile.activity_level.value),
        ("基本資料", "備註", profile.notes),
        ("熱量設計", "目標熱量", case.plan.target_calories),
        ("熱量設計", "目標蛋白質 (g)", case.plan.target_p),
        ("熱量設計", "目標脂肪 (g)", case.plan.target_f),
        ("熱量設計", "目標碳水 (g)", case.plan.target_c),
    )
    return [
        {"類別": section, "項目": label, "內容": value}
        for section, label, value in details
    ]


def nutrient_total_rows(case: CaseRecord) -> list[dict[str, object]]:
    """Total intake for every displayed nutrient, with macro targets."""
    totals = nutrient_totals(
        flatten(case.record), (meta.key for meta in NUTRIENT_METADATA)
    )
    targets = {
        "cal": case.plan.target_calories,
        "p": case.plan.target_p,
        "f": case.plan.target_f,
        "c": case.plan.target_c,
    }
    return [
        {
            "營養素": meta.label,
            "單位": meta.unit,
            "總攝取量": round(totals[meta.key], 2),
            "建議目標": targets.get(meta.key),
        }
        for meta in NUTRIENT_METADATA
    ]


def meal_log_rows(record: DailyRecord) -> list[dict[str, object]]:
    """Flattened food log with grams and per-item macros."""
    rows: list[dict[str, object]] = []
    for meal in MealTimeId:
        for item in record.get(meal, []):
            rows.append(
                {
                    "餐次": MEAL_TIME_LABELS[meal],
                    "食物名稱": item.food.name,
                    "份量": item.quantity,
                    "克數(g)": int(round_half_up(item.grams)),
                    "熱量": int(round_half_up(item.amount("cal"))),
                    "蛋白質": round_half_up(item.amount("p"), 1),
                    "脂肪": round_half_up(item.amount("f"), 1),
                    "碳水": round_half_up(item.amount("c"), 1),
                }
            )
    return rows


def _case_date(case: CaseRecord, tz: tzinfo | None) -> str:
    moment = datetime.fromtimestamp(case.timestamp / 1000, tz=tz)
    return moment.date().isoformat()
