"""A small HTTP client bound to a base URL."""

from __future__ import annotations

import json
from typing import Any, Mapping
from urllib.parse import urlencode, urlsplit, urlunsplit

import requests

DEFAULT_TIMEOUT = 30.0


class HttpClientError(Exception):
    """Raised when a URL cannot be built or a request fails."""


class HttpClient:
    """Issues requests relative to a base URL and returns raw response bodies."""

    def __init__(
        self,
        base_url: str = "",
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url
        self.timeout = timeout
        self._session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return self._base_url

    def parse_url(self, path: str, queries: Mapping[str, str] | None = None) -> str:
        """Join the base URL and path; replace the query string when queries are given."""
        if not self._base_url:
            raise HttpClientError("base url is empty")
        url = self._base_url + path
        if queries is None:
            return url
        try:
            parts = urlsplit(url)
        except ValueError as exc:
            raise HttpClientError(str(exc)) from exc
        query = urlencode(sorted(queries.items()))
        return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))

    def do_request(
        self,
        method: str,
        path: str,
        body: bytes | str | None = None,
        queries: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> bytes:
        return self.do_request_url(method, self.parse_url(path, queries), body, headers)

    def do_request_url(
        self,
        method: str,
        url: str,
        body: bytes | str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> bytes:
        """Send a request to a complete URL and return the response body."""
        if isinstance(body, str):
            body = body.encode()
        try:
            response = self._session.request(
                method, url, data=body, headers=dict(headers or {}), timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise HttpClientError(str(exc)) from exc
        return response.content

    def get(
        self,
        path: str,
        headers: Mapping[str, str] | None = None,
        queries: Mapping[str, str] | None = None,
    ) -> bytes:
        return self.do_request("GET", path, None, queries, headers)

    def get_url(self, url: str, headers: Mapping[str, str] | None = None) -> bytes:
        return self.do_request_url("GET", url, None, headers)

    def post(
        self,
        path: str,
        body: bytes | str | None = None,
        headers: Mapping[str, str] | None = None,
        queries: Mapping[str, str] | None = None,
    ) -> bytes:
        return self.do_request("POST", path, body, queries, headers)


def parse_json_response(data: bytes | str) -> Any:
    """Decode a JSON response body."""
    return json.loads(data)