"""Queries against saved Metabase cards that hold pump and trader statistics."""

from __future__ import annotations

import json
import logging
import struct
from typing import Any, MutableMapping

from .httpclient import HttpClient, HttpClientError
from .pumpmodel import DatasetQueryResults, parse_dataset_query_results

logger = logging.getLogger(__name__)

_SESSION_PATH = "/api/session"
_AUTH_NAMESPACE = "auth"
_MIN_DURATION = 7


class MetabaseError(Exception):
    """Raised when authentication or a card query fails."""


def _card_path(card: int) -> str:
    return f"/api/card/{card}/query"


def _target(tag: str) -> list:
    return ["variable", ["template-tag", tag]]


def _number_param(param_id: str, tag: str, value: str) -> dict:
    return {"id": param_id, "type": "number/=", "value": [value], "target": _target(tag)}


def _category_param(param_id: str, tag: str, value: str) -> dict:
    return {"id": param_id, "type": "category", "value": value, "target": _target(tag)}


def _format_float32(value: float) -> str:
    """Shortest decimal text that reads back as the same single-precision value."""
    packed = struct.pack("<f", value)
    for precision in range(1, 10):
        text = f"{value:.{precision}g}"
        if struct.pack("<f", float(text)) == packed:
            return text
    return f"{value:.9g}"


class MetabaseDataSource:
    """Runs parameterised card queries, authenticating with a cached session token."""

    def __init__(
        self,
        client: HttpClient,
        username: str,
        password: str,
        cache: MutableMapping[Any, str] | None = None,
    ) -> None:
        self._client = client
        self._username = username
        self._password = password
        self._cache: MutableMapping[Any, str] = {} if cache is None else cache

    def auth(self, username: str, password: str) -> str:
        """Return a session token for the user, from the cache when available."""
        key = (_AUTH_NAMESPACE, username)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        body = json.dumps({"username": username, "password": password})
        try:
            resp = self._client.post(_SESSION_PATH, body, {"Content-Type": "application/json"})
        except HttpClientError as exc:
            logger.error("failed to auth metabase: %s", exc)
            raise MetabaseError(f"failed to auth metabase: {exc}") from exc
        try:
            data = json.loads(resp)
        except ValueError as exc:
            logger.error("failed to unmarshal auth response: %s", exc)
            raise MetabaseError(f"failed to unmarshal auth response: {exc}") from exc
        token = data.get("id") if isinstance(data, dict) else None
        if not isinstance(token, str):
            logger.error("failed to get auth token")
            raise MetabaseError("failed to get auth token")
        self._cache[key] = token
        return token

    def _query(self, card: int | None, parameters: list[dict], what: str) -> DatasetQueryResults:
        token = self.auth(self._username, self._password)
        if card is None:
            raise MetabaseError(f"failed to {what}: unsupported timezone")
        headers = {"Content-Type": "application/json", "X-Metabase-Session": token}
        payload = json.dumps(
            {"ignore_cache": False, "collection_preview": False, "parameters": parameters}
        )
        try:
            resp = self._client.post(_card_path(card), payload, headers)
        except HttpClientError as exc:
            logger.error("failed to %s: %s", what, exc)
            raise MetabaseError(f"failed to {what}: {exc}") from exc
        try:
            return parse_dataset_query_results(resp)
        except ValueError as exc:
            logger.error("failed to unmarshal %s response: %s", what, exc)
            raise MetabaseError(f"failed to unmarshal {what} response: {exc}") from exc

    def _days_query(
        self,
        duration: int,
        timezone: str,
        ids: dict[str, str],
        cards: dict[str, int],
        what: str,
    ) -> DatasetQueryResults:
        duration = max(duration, _MIN_DURATION)
        timezone = timezone or "UTC"
        params = [_number_param(ids.get(timezone, ""), "days", str(int(duration)))]
        return self._query(cards.get(timezone), params, what)

    def daily_launched_token_info(self, duration: int = 7, timezone: str = "") -> DatasetQueryResults:
        """Daily counts of created tokens and those that reached Raydium."""
        return self._days_query(
            duration,
            timezone,
            {"UTC": "bb79b15e-1245-4166-96f0-c6baaa71567c", "CST": "a3066d17-b2fc-4d12-bf4a-92f81ab71d66"},
            {"UTC": 106, "CST": 115},
            "daily launched token info",
        )

    def launched_token_time_distribution(self, duration: int = 7, timezone: str = "") -> DatasetQueryResults:
        """Distribution of new token launches over half-hour slots."""
        return self._days_query(
            duration,
            timezone,
            {"UTC": "4afba805-4047-477a-b1aa-399e06f5f5e4", "CST": "a9330250-fca8-46b2-88ed-0fef40ef981e"},
            {"UTC": 107, "CST": 114},
            "launched token time distribution",
        )

    def daily_trade_counts(self, duration: int = 7, timezone: str = "") -> DatasetQueryResults:
        """Daily trade counts."""
        return self._days_query(
            duration,
            timezone,
            {"UTC": "59c5518a-8697-4d92-8531-4ba301e6ab85", "CST": "59c5518a-8697-4d92-8531-4ba301e6ab85"},
            {"UTC": 108, "CST": 116},
            "daily trade counts",
        )

    def trader_overview(self, trader: str) -> DatasetQueryResults:
        """Overall statistics of a trader."""
        params = [_category_param("cd81bc1d-4a11-4375-84ea-e018c5d9ddef", "trader", trader)]
        return self._query(110, params, "trader overview")

    def trader_overview_v2(self, trader: str, tz: str = "", days: int = 0) -> DatasetQueryResults:
        """Statistics of a trader over the given number of days."""
        tz = tz or "CST"
        params = [
            _category_param("3332d084-956d-489e-87f2-e634c4d0e42d", "trader", trader),
            _category_param("d988ac7f-ecb0-40d7-8123-5410e5598ebc", "tz", tz),
            _number_param("a9218770-8bb2-474d-ab33-11ffdc7e2052", "days", str(int(days))),
        ]
        return self._query(140, params, "trader overview")

    def _trader_days_query(
        self,
        trader: str,
        duration: int,
        timezone: str,
        ids: dict[str, tuple[str, str]],
        cards: dict[str, int],
        what: str,
    ) -> DatasetQueryResults:
        trader_id, days_id = ids.get(timezone, ("", ""))
        params = [
            _category_param(trader_id, "trader", trader),
            _number_param(days_id, "days", str(int(duration))),
        ]
        return self._query(cards.get(timezone), params, what)

    def trader_tx_time_distribution(self, trader: str, duration: int, timezone: str = "") -> DatasetQueryResults:
        """Distribution of a trader's transactions over time of day."""
        ids = ("b8f94534-7734-4e40-b8e4-212e0d876cda", "e164924c-5361-411d-82de-34de55cd3e67")
        return self._trader_days_query(
            trader,
            duration,
            timezone,
            {"UTC": ids, "CST": ids},
            {"": 112, "UTC": 112, "CST": 120},
            "get trader tx time distribution",
        )

    def trader_profit_token_distribution(
        self, trader: str, duration: int, timezone: str = ""
    ) -> DatasetQueryResults:
        """Distribution of a trader's profit across tokens."""
        return self._trader_days_query(
            trader,
            duration,
            timezone,
            {
                "UTC": ("586e6393-9ff0-4eac-9918-d10984d441c7", "43a557d5-fbc8-4cd7-b8e4-101564b47695"),
                "CST": ("596faff0-6ef4-42cf-be21-b854f2db58af", "208313ef-a20b-427c-a4ea-9d154e053aed"),
            },
            {"": 113, "UTC": 113, "CST": 119},
            "get trader profit token distribution",
        )

    def trader_profit_distribution(self, trader: str, duration: int, timezone: str = "") -> DatasetQueryResults:
        """Distribution of a trader's recent returns."""
        return self._trader_days_query(
            trader,
            duration,
            timezone or "CST",
            {
                "UTC": ("90848092-e63d-4b0a-8e07-265fd413e2f2", "a8098d1f-6d88-4e64-8b3f-4ee5a0e92994"),
                "CST": ("f4bba41b-2de9-4fa1-9651-96d696aa221e", "158050e1-75eb-4729-8567-1214ba6ff071"),
            },
            {"UTC": 111, "CST": 118},
            "get trader profit distribution",
        )

    def top_trader(self, duration: int, win_ratio: float) -> DatasetQueryResults:
        """Top traders over 30, 7 or (otherwise) 1 day with at least the given win ratio."""
        if duration == 30:
            param_id, card = "04f74b13-e4df-4836-b94b-72c1170dffcd", 125
        elif duration == 7:
            param_id, card = "6f67544d-f340-4dd4-91ce-56a225d95a25", 124
        else:
            param_id, card = "ec83280c-ba44-4968-9899-4a37d4f8a318", 131
        params = [_number_param(param_id, "win_ratio", _format_float32(float(win_ratio)))]
        return self._query(card, params, "get top traders")