"""Helper utilities.

This module centralises common helper functions such as creating a
configured HTTP session and applying retry policies to network calls.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict

import requests
from requests import Response
from tenacity import (after_log, after_nothing, retry, retry_if_exception_type,
                      stop_after_attempt, wait_exponential)

from .config import FETCH_ATTEMPTS, USER_AGENT, VERIFY_TLS


logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^(\w+:)?//")


def get_http_session() -> requests.Session:
    """Return a new HTTP session carrying the checker's User-Agent.

    Caller is responsible for closing the session or letting it be
    garbage collected.
    """
    session = requests.Session()
    session.headers.update({"User-Agent": USER_AGENT})
    session.verify = VERIFY_TLS
    return session


def strip_scheme(url: str) -> str:
    """Drop a leading ``scheme://`` (or bare ``//``) from a site address."""
    return _SCHEME_RE.sub("", url.strip(), count=1)


def retryable_request(method: Callable[[requests.Session, str, Dict[str, Any]], Response]) -> Callable[..., Response]:
    """Decorator factory to apply retry logic to HTTP calls.

    The decorated function must accept a `requests.Session` as its first
    argument, followed by URL and optional kwargs, and return a
    `requests.Response`.  Only network errors are retried, up to
    FETCH_ATTEMPTS total attempts with exponential back-off between 1 and
    10 seconds.  Any completed response is returned whatever its status.
    The default of one attempt means a failure is reported straight away.
    """

    @retry(
        reraise=True,
        stop=stop_after_attempt(FETCH_ATTEMPTS),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(requests.RequestException),
        after=after_log(logger, logging.WARNING) if FETCH_ATTEMPTS > 1 else after_nothing,
    )
    def wrapper(session: requests.Session, url: str, **kwargs: Any) -> Response:
        return method(session, url, **kwargs)

    return wrapper


__all__ = ["get_http_session", "retryable_request", "strip_scheme"]
