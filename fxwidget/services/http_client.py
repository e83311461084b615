from __future__ import annotations

"""Lightweight HTTP client util with retry.

GET-only JSON fetching on top of stdlib urllib; the rate table is the only
upstream call this service makes, so a full client is not warranted.
"""
import json
import logging
import time
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger("fxwidget.http")

USER_AGENT = "fxwidget/0.1 (+rate-table-fetch)"


class HttpError(Exception):
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


def build_url(url: str, params: Optional[Mapping[str, str]] = None) -> str:
    if not params:
        return url
    sep = "&" if urllib.parse.urlparse(url).query else "?"
    return f"{url}{sep}{urllib.parse.urlencode(params)}"


def get_json(
    url: str,
    *,
    params: Optional[Mapping[str, str]] = None,
    timeout: float = 5.0,
    retries: int = 2,
    backoff: float = 0.5,
) -> Dict[str, Any]:
    full_url = build_url(url, params)
    request = urllib.request.Request(
        full_url, headers={"Accept": "application/json", "User-Agent": USER_AGENT}
    )
    last_err: Optional[Exception] = None
    for attempt in range(retries + 1):
        try:
            with urllib.request.urlopen(request, timeout=timeout) as resp:  # nosec B310
                if resp.status >= 400:
                    raise HttpError(f"HTTP {resp.status} for {full_url}", resp.status)
                body = json.loads(resp.read().decode("utf-8"))
                if not isinstance(body, dict):
                    raise HttpError(f"Expected a JSON object from {full_url}")
                return body
        except urllib.error.HTTPError as e:
            last_err = HttpError(f"HTTP {e.code} for {full_url}", e.code)
            # client errors will not improve on retry
            if 400 <= e.code < 500 and e.code != 429:
                break
        except (
            urllib.error.URLError,
            TimeoutError,
            HttpError,
            ValueError,
        ) as e:  # ValueError for JSON decode
            last_err = e
        if attempt == retries:
            break
        delay = backoff * (2**attempt)
        logger.warning(
            "GET %s failed (attempt %d/%d): %s; retrying in %.1fs",
            full_url,
            attempt + 1,
            retries + 1,
            last_err,
            delay,
        )
        time.sleep(delay)
    status = last_err.status if isinstance(last_err, HttpError) else None
    raise HttpError(f"Failed to fetch JSON from {full_url}: {last_err}", status)
