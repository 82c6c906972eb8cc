"""
Shared HTTP client for the weather and marine providers.

Both providers authenticate with a key in the query string (``appid`` for
OpenWeatherMap, ``key`` for World Weather Online), so every request made
through this session is logged at DEBUG with those parameters masked.

The session retries transient failures (connection resets, 429 and 5xx
gateway errors) with exponential backoff and applies a default timeout, so a
hung provider surfaces as ``requests.Timeout`` instead of blocking a flow.

Usage::

    from fishing_forecast.services.http import session

    resp = session.get(OWM_CURRENT_API, params={...}, timeout=settings.request_timeout)
    resp.raise_for_status()
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from fishing_forecast import __version__

logger = logging.getLogger(__name__)

USER_AGENT = f"fishing-forecast/{__version__}"

SECRET_PARAMS = frozenset({"appid", "key"})

DEFAULT_RETRY = Retry(
    total=3,
    backoff_factor=1,
    status_forcelist=[429, 502, 503, 504],
    allowed_methods=["GET"],
    raise_on_status=False,  # callers decide via raise_for_status()
)

DEFAULT_TIMEOUT = 30.0  # seconds


def redact_url(url: str) -> str:
    """Mask API key query parameters in ``url``."""
    parts = urlsplit(url)
    if not parts.query:
        return url
    query = [
        (name, "***" if name.lower() in SECRET_PARAMS else value)
        for name, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(query, safe="*")))


def _log_response(response: requests.Response, *_args: Any, **_kwargs: Any) -> None:
    logger.debug(
        "%s %s -> %s (%.2fs)",
        response.request.method,
        redact_url(response.url),
        response.status_code,
        response.elapsed.total_seconds(),
    )


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a provider session.

    Args:
        retry: Custom retry strategy (defaults to ``DEFAULT_RETRY``).
        timeout: Applied to any request sent without an explicit ``timeout``.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers.update({"User-Agent": USER_AGENT, "Accept": "application/json"})
    s.hooks["response"].append(_log_response)

    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = timeout
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


session: requests.Session = create_session()
