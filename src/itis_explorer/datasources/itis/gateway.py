"""
ITIS search gateway.

Executes one GET against the index per call and decodes the SOLR envelope.
Failures are normalized into ``TransportError``, ``RemoteStatusError`` and
``DecodeError``; nothing is retried and nothing is cached.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import requests
from pydantic import ValidationError

from itis_explorer.datasources.itis import client
from itis_explorer.datasources.itis.models import SearchEnvelope, SearchResult
from itis_explorer.datasources.itis.query import SearchSpec, build_params
from itis_explorer.errors import DecodeError, RemoteStatusError, TransportError
from itis_explorer.services.http import DEFAULT_TIMEOUT, create_session

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


class SearchGateway:
    """Runs built parameter sets against a single ITIS SOLR endpoint."""

    def __init__(
        self,
        base_url: str = client.API_BASE,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or create_session(timeout=timeout)

    def execute(self, params: Sequence[tuple[str, str]]) -> SearchResult:
        """GET the endpoint with ``params`` and return the envelope's ``response``."""
        try:
            resp = self.session.get(self.base_url, params=list(params), timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("ITIS request to %s failed: %s", self.base_url, exc)
            msg = f"Failed to reach ITIS at {self.base_url}: {exc}"
            raise TransportError(msg) from exc

        logger.debug("GET %s -> %s", resp.url, resp.status_code)
        if not resp.ok:
            logger.warning("ITIS returned HTTP %s for %s", resp.status_code, resp.url)
            raise RemoteStatusError(resp.status_code, url=resp.url)

        try:
            body: Any = resp.json()
        except ValueError as exc:
            msg = f"ITIS response is not valid JSON: {exc}"
            raise DecodeError(msg) from exc

        try:
            envelope = SearchEnvelope.model_validate(body)
        except ValidationError as exc:
            first = exc.errors()[0]
            loc = ".".join(str(p) for p in first["loc"]) or "body"
            msg = f"Unexpected ITIS response envelope at {loc}: {first['msg']}"
            raise DecodeError(msg) from exc
        return envelope.response

    def search(self, spec: SearchSpec) -> SearchResult:
        """Build ``spec`` and execute it."""
        return self.execute(build_params(spec))
