"""Tests for catalog row sources."""

import asyncio
import json
from pathlib import Path

import httpx
import pytest

from nutripro.adapters.food_source import (
    HttpxFoodRowSource,
    JsonFileFoodRowSource,
    StaticFoodRowSource,
)
from tests.conftest import SAMPLE_ROWS


def test_httpx_source_fetches_rows() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/foods.json"
        return httpx.Response(200, json=SAMPLE_ROWS[:2])

    transport = httpx.MockTransport(handler)
    async_client = httpx.AsyncClient(transport=transport)
    source = HttpxFoodRowSource(
        url="https://data.example.com/foods.json", http_client=async_client
    )

    rows = asyncio.run(source.fetch_rows())
    asyncio.run(source.close())

    assert [row["樣品名稱"] for row in rows] == ["白米飯", "雞胸肉"]


def test_httpx_source_accepts_wrapped_rows() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"rows": SAMPLE_ROWS[:1]})

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    source = HttpxFoodRowSource(url="https://data.example.com/foods", http_client=async_client)

    assert len(asyncio.run(source.fetch_rows())) == 1


def test_httpx_source_raises_on_http_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": "missing"})

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    source = HttpxFoodRowSource(url="https://data.example.com/foods", http_client=async_client)

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(source.fetch_rows())


def test_httpx_source_rejects_non_array_payload() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"status": "ok"})

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    source = HttpxFoodRowSource(url="https://data.example.com/foods", http_client=async_client)

    with pytest.raises(ValueError, match="JSON array"):
        asyncio.run(source.fetch_rows())


def test_json_file_source_reads_rows(tmp_path: Path) -> None:
    path = tmp_path / "foods.json"
    path.write_text(json.dumps(SAMPLE_ROWS, ensure_ascii=False), encoding="utf-8")
    source = JsonFileFoodRowSource(path)

    rows = asyncio.run(source.fetch_rows())

    assert len(rows) == len(SAMPLE_ROWS)
    assert rows[0]["食品分類"] == "穀物類"


def test_static_source_returns_copy() -> None:
    source = StaticFoodRowSource([{"樣品名稱": "燕麥"}])

    rows = asyncio.run(source.fetch_rows())
    rows.clear()

    assert asyncio.run(source.fetch_rows()) == [{"樣品名稱": "燕麥"}]
