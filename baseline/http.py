"""HTTP client layer for downloading the feature catalog."""

from __future__ import annotations

import json
from typing import Any

import httpx

from ._version import __version__
from .constants import DEFAULT_TIMEOUT_SECONDS
from .exceptions import ContentError, HttpStatusError, NetworkError, RequestTimeoutError


def _build_headers() -> dict[str, str]:
    return {
        "User-Agent": f"pybaseline/{__version__}",
        "Accept": "application/json",
    }


def fetch_text(url: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> str:
    """Fetch a document body with friendly failures and one connect retry."""
    retry_once = True
    while True:
        try:
            with httpx.Client(
                timeout=timeout, follow_redirects=True, headers=_build_headers()
            ) as client:
                response = client.get(url)
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(url) from exc
        except httpx.ConnectError as exc:
            if retry_once:
                retry_once = False
                continue
            raise NetworkError(url, cause=exc.__class__.__name__) from exc
        except httpx.RequestError as exc:
            raise NetworkError(url, cause=exc.__class__.__name__) from exc

        if response.status_code != 200:
            raise HttpStatusError(response.status_code, str(response.url))

        body = response.text
        if not body.strip():
            raise ContentError(str(response.url))
        return body


def parse_json_payload(raw: str, url: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ContentError(url) from exc


def fetch_catalog_payload(
    url: str, timeout: float = DEFAULT_TIMEOUT_SECONDS
) -> tuple[str, dict[str, Any]]:
    """Download the web-features payload, returning the raw body and the decoded mapping."""
    raw = fetch_text(url, timeout=timeout)
    payload = parse_json_payload(raw, url)
    if not isinstance(payload, dict):
        raise ContentError(url)
    return raw, payload
