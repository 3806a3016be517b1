"""Tests for case export rows."""

from datetime import UTC, datetime, timedelta, timezone

from nutripro.domain.cases import CaseRecord
from nutripro.domain.exchange import FoodGroupId, MealTimeId
from nutripro.domain.profile import Gender, UserProfile
from nutripro.domain.records import CartItem, empty_daily_record
from nutripro.services.cases import build_snapshot
from nutripro.services.planning import empty_plan, set_portion
from nutripro.services.reports import (
    case_profile_rows,
    case_summary_rows,
    meal_log_rows,
    nutrient_total_rows,
)
from tests.conftest import make_food

NOW = datetime(2024, 5, 1, 8, 30, tzinfo=UTC)


TAIPEI = timezone(timedelta(hours=8))


def _case(name: str = "林小姐") -> CaseRecord:
    profile = UserProfile(
        height=160, weight=55, age=30, gender=Gender.FEMALE, name=name, notes="素食"
    )
    plan = set_portion(empty_plan(), FoodGroupId.STARCH, MealTimeId.LUNCH, 3)
    record = empty_daily_record()
    record[MealTimeId.LUNCH] = [
        CartItem(make_food("rice", name="白米飯", cal=183, p=3.1, f=0.4, c=41), 1.5)
    ]
    return build_snapshot(profile, plan, record, now=NOW)


def test_case_summary_rows() -> None:
    rows = case_summary_rows([_case(), _case(name="")], tz=UTC)

    assert rows[0] == {
        "紀錄日期": "2024-05-01",
        "姓名": "林小姐",
        "性別": "女",
        "年齡": 30,
        "身高(cm)": 160,
        "體重(kg)": 55,
        "BMI": 21.5,
        "目標熱量(kcal)": 210,
        "實際攝取(kcal)": 274.5,
        "熱量達成率(%)": 131,
        "備註": "素食",
    }
    assert rows[1]["姓名"] == "未命名"


def test_case_dates_follow_timezone() -> None:
    evening = _case()
    late = build_snapshot(
        evening.profile,
        evening.plan,
        evening.record,
        now=datetime(2024, 5, 1, 18, 30, tzinfo=UTC),
    )

    assert case_summary_rows([late], tz=UTC)[0]["紀錄日期"] == "2024-05-01"
    assert case_summary_rows([late], tz=TAIPEI)[0]["紀錄日期"] == "2024-05-02"


def test_case_profile_rows() -> None:
    rows = case_profile_rows(_case(), tz=TAIPEI)

    values = {row["項目"]: row["內容"] for row in rows}
    assert [row["類別"] for row in rows].count("熱量設計") == 4
    assert values == {
        "姓名": "林小姐",
        "日期": "2024-05-01",
        "性別": "女",
        "年齡": 30,
        "身高 (cm)": 160,
        "體重 (kg)": 55,
        "活動量": "moderate",
        "備註": "素食",
        "目標熱量": 210,
        "目標蛋白質 (g)": 6,
        "目標脂肪 (g)": 0,
        "目標碳水 (g)": 45,
    }


def test_case_profile_rows_default_name() -> None:
    rows = case_profile_rows(_case(name=""), tz=UTC)

    assert rows[0] == {"類別": "基本資料", "項目": "姓名", "內容": "未命名"}


def test_nutrient_total_rows() -> None:
    rows = {row["營養素"]: row for row in nutrient_total_rows(_case())}

    assert rows["熱量"]["總攝取量"] == 274.5
    assert rows["熱量"]["建議目標"] == 210
    assert rows["蛋白質"]["總攝取量"] == 4.65
    assert rows["鈉"]["總攝取量"] == 0
    assert rows["鈉"]["建議目標"] is None
    assert rows["鈉"]["單位"] == "mg"


def test_meal_log_rows() -> None:
    rows = meal_log_rows(_case().record)

    assert rows == [
        {
            "餐次": "午餐",
            "食物名稱": "白米飯",
            "份量": 1.5,
            "克數(g)": 150,
            "熱量": 275,
            "蛋白質": 4.7,
            "脂肪": 0.6,
            "碳水": 61.5,
        }
    ]
