from __future__ import annotations

"""Lightweight HTTP GET-JSON helper.

Uses stdlib urllib. One attempt per call: a failed fetch is reported to the
caller instead of being retried.
"""
import json
import urllib.error
import urllib.request
from typing import Any, Dict, Optional


class HttpError(Exception):
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


def get_json(
    url: str, *, headers: Optional[Dict[str, str]] = None, timeout: float = 5.0
) -> Dict[str, Any]:
    req = urllib.request.Request(url, headers=headers or {}, method="GET")
    req.add_header("Accept", "application/json")
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:  # nosec B310
            if not 200 <= resp.status < 300:
                raise HttpError(f"HTTP {resp.status} for {url}", status=resp.status)
            data = resp.read()
    except urllib.error.HTTPError as e:
        raise HttpError(f"HTTP {e.code} for {url}", status=e.code) from e
    except (urllib.error.URLError, TimeoutError) as e:
        raise HttpError(f"Failed to fetch JSON from {url}: {e}") from e
    try:
        return json.loads(data.decode("utf-8"))
    except ValueError as e:  # JSON decode
        raise HttpError(f"Invalid JSON from {url}: {e}") from e
