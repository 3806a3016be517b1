"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from nutripro.adapters.food_source import FoodRowSource
from nutripro.adapters.json_case_repository import InMemoryCaseRepository
from nutripro.config import Settings
from nutripro.containers import AppContainer
from nutripro.domain.catalog import NutrientRecord
from nutripro.services.cases import CaseService
from nutripro.services.catalog import CatalogService
from nutripro.services.session import DietitianSession

SAMPLE_ROWS: list[dict[str, object]] = [
    {
        "樣品名稱": "白米飯",
        "俗名": " 白飯 ,蓬萊米飯,  ",
        "食品分類": "穀物類",
        "熱量(kcal)": 183,
        "粗蛋白(g)": 3.1,
        "粗脂肪(g)": 0.3,
        "總碳水化合物(g)": 41.0,
        "鈉(mg)": 1,
    },
    {
        "樣品名稱": "雞胸肉",
        "食品分類": "肉類",
        "熱量(kcal)": 104,
        "粗蛋白(g)": 22.4,
        "粗脂肪(g)": 0.9,
        "總碳水化合物(g)": "N/A",
        "鈉(mg)": 50,
    },
    {
        "樣品名稱": "鯖魚",
        "食品分類": "魚貝類",
        "熱量(kcal)": 275,
        "粗蛋白(g)": 17.0,
        "粗脂肪(g)": 22.6,
        "總碳水化合物(g)": 0,
    },
    {
        "樣品名稱": "高麗菜",
        "食品分類": "蔬菜類",
        "熱量(kcal)": "23",
        "粗蛋白(g)": "1.3",
        "粗脂肪(g)": "0.1",
        "總碳水化合物(g)": "4.8",
        "膳食纖維(g)": "1.1",
    },
    {
        "樣品名稱": "香蕉",
        "食品分類": "水果類",
        "熱量(kcal)": 85,
        "粗蛋白(g)": 1.5,
        "粗脂肪(g)": 0.1,
        "總碳水化合物(g)": 22.1,
    },
    {
        "樣品名稱": "全脂鮮乳",
        "食品分類": "乳品類",
        "熱量(kcal)": 63,
        "粗蛋白(g)": 3.0,
        "粗脂肪(g)": 3.6,
        "總碳水化合物(g)": 4.8,
    },
    {
        "樣品名稱": "花生",
        "食品分類": "堅果及種子類",
        "熱量(kcal)": 567,
        "粗蛋白(g)": 25.8,
        "粗脂肪(g)": 49.2,
        "總碳水化合物(g)": 16.1,
    },
    {"樣品名稱": "", "食品分類": "穀物類", "熱量(kcal)": 100},
    {"樣品名稱": "說明列", "食品分類": "", "熱量(kcal)": "-"},
]


def make_food(food_id: str = "food_1", **values: object) -> NutrientRecord:
    """Build a catalog record with sensible identity defaults."""
    name = str(values.pop("name", "測試食物"))
    category = str(values.pop("category", "全穀雜糧"))
    return NutrientRecord(id=food_id, name=name, category=category, **values)


@dataclass
class FakeFoodRowSource(FoodRowSource):
    """Row source serving fixed rows and counting calls."""

    rows: list[dict[str, object]] = field(default_factory=lambda: list(SAMPLE_ROWS))
    calls: int = 0
    closed: bool = False

    async def fetch_rows(self) -> list[dict[str, object]]:
        self.calls += 1
        return list(self.rows)

    async def close(self) -> None:
        self.closed = True


@dataclass
class FailingFoodRowSource(FoodRowSource):
    """Row source that always fails."""

    message: str = "network unreachable"

    async def fetch_rows(self) -> list[dict[str, object]]:
        raise ConnectionError(self.message)

    async def close(self) -> None:
        return None


@pytest.fixture
def settings() -> Settings:
    return Settings(
        food_source_url=None,
        food_source_path=None,
        cases_path=None,
        environment="test",
    )


@pytest.fixture
def food_source() -> FakeFoodRowSource:
    return FakeFoodRowSource()


@pytest.fixture
def catalog_service(food_source: FakeFoodRowSource) -> CatalogService:
    return CatalogService(source=food_source)


@pytest.fixture
def case_service() -> CaseService:
    return CaseService(InMemoryCaseRepository())


@pytest.fixture
def container(
    settings: Settings,
    food_source: FakeFoodRowSource,
    catalog_service: CatalogService,
    case_service: CaseService,
) -> AppContainer:
    async def close_resources() -> None:
        await food_source.close()

    return AppContainer(
        settings=settings,
        food_source=food_source,
        catalog_service=catalog_service,
        case_service=case_service,
        session=DietitianSession(),
        close_resources=close_resources,
    )
