"""
Shared HTTP session factory.

Builds a ``requests.Session`` with a mounted adapter, a project User-Agent and
a default timeout injected into every request.  Retries are disabled by
default: the ITIS gateway issues exactly one request per call and leaves
retry policy to the caller.

Usage::

    from itis_explorer.services.http import create_session

    session = create_session(timeout=10)
    resp = session.get("https://services.itis.gov/", params=[("q", "*:*")])
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

#: No retries on connect, read or status; errors surface on the first attempt.
NO_RETRY = Retry(
    total=0,
    connect=0,
    read=0,
    redirect=3,
    allowed_methods=["GET", "HEAD", "OPTIONS"],
    raise_on_status=False,  # status handling lives in the gateway
    raise_on_redirect=False,
)

DEFAULT_TIMEOUT = 30  # seconds

USER_AGENT = "itis-explorer/0.1"


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a ``requests.Session`` with the retry adapter mounted.

    Args:
        retry: Custom retry strategy (defaults to ``NO_RETRY``).
        timeout: Default timeout applied to every request.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or NO_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT
    s.headers["Accept"] = "application/json"

    # Inject a default timeout so callers don't need to pass ``timeout=``.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s
