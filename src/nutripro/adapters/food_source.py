"""Sources of raw food composition rows."""

import asyncio
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import httpx


class FoodRowSource(Protocol):
    """Interface for loading already-parsed spreadsheet rows."""

    async def fetch_rows(self) -> list[dict[str, object]]:
        """Return raw rows keyed by spreadsheet header."""

    async def close(self) -> None:
        """Release any resources held by the source."""


@dataclass
class HttpxFoodRowSource(FoodRowSource):
    """Fetches rows as a JSON array over HTTP."""

    url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15

    @classmethod
    def create(cls, url: str, timeout_seconds: float = 15) -> "HttpxFoodRowSource":
        """Create a row source with a managed httpx session."""
        return cls(
            url=url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def fetch_rows(self) -> list[dict[str, object]]:
        """Download and decode the row array."""
        response = await self.http_client.get(self.url, timeout=self.timeout_seconds)
        response.raise_for_status()
        return _coerce_rows(response.json())

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


@dataclass
class JsonFileFoodRowSource(FoodRowSource):
    """Reads rows from a JSON file exported from the spreadsheet."""

    path: Path

    async def fetch_rows(self) -> list[dict[str, object]]:
        """Read and decode the row array."""
        text = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
        return _coerce_rows(json.loads(text))

    async def close(self) -> None:
        """Nothing to release for file sources."""
        return None


@dataclass
class StaticFoodRowSource(FoodRowSource):
    """Serves rows held in memory, used when no source is configured."""

    rows: list[dict[str, object]]

    async def fetch_rows(self) -> list[dict[str, object]]:
        """Return the configured rows."""
        return list(self.rows)

    async def close(self) -> None:
        """Nothing to release for static sources."""
        return None


def _coerce_rows(payload: object) -> list[dict[str, object]]:
    if isinstance(payload, dict) and isinstance(payload.get("rows"), list):
        payload = payload["rows"]
    if not isinstance(payload, list):
        raise ValueError("Food source must return a JSON array of rows")
    return [row for row in payload if isinstance(row, dict)]
