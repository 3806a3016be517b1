"""Tests for settings helpers."""

import pytest

from nutripro.config import (
    Settings,
    SourceKind,
    resolve_source_kind,
    resolve_timezone,
)


def test_defaults(settings: Settings) -> None:
    assert settings.catalog_page_size == 20
    assert settings.http_timeout_seconds == 15
    assert resolve_source_kind(settings) is SourceKind.NONE


@pytest.mark.parametrize(
    ("url", "path", "expected"),
    [
        ("https://data.example.com/foods.json", None, SourceKind.URL),
        ("https://data.example.com/foods.json", "foods.json", SourceKind.URL),
        (None, "foods.json", SourceKind.FILE),
        ("   ", "foods.json", SourceKind.FILE),
        ("", "  ", SourceKind.NONE),
    ],
)
def test_resolve_source_kind(
    url: str | None, path: str | None, expected: SourceKind
) -> None:
    settings = Settings(food_source_url=url, food_source_path=path)

    assert resolve_source_kind(settings) is expected


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CATALOG_PAGE_SIZE", "50")
    monkeypatch.setenv("FOOD_SOURCE_PATH", "/data/foods.json")

    settings = Settings()

    assert settings.catalog_page_size == 50
    assert resolve_source_kind(settings) is SourceKind.FILE


@pytest.mark.parametrize("value", [None, "", "  "])
def test_report_timezone_defaults_to_local_time(value: str | None) -> None:
    assert resolve_timezone(Settings(timezone=value)) is None
