"""
Shared fixtures: a tiny in-memory ITIS index behind a fake ``requests`` session.

``FixtureSession`` understands just enough SOLR to answer the queries the
package builds (exact field match, quoted phrase, prefix and ``*...*``
contains wildcards, ``fq`` filters, ``sort`` and ``start``/``rows``).
"""

from __future__ import annotations

import json
import re
from typing import Any
from urllib.parse import urlencode

import pytest
import requests

from itis_explorer.datasources.itis.gateway import SearchGateway
from itis_explorer.dispatch import OperationDispatcher

BASE_URL = "https://itis.test/solr/"


def _hierarchy(tsn: str, *ranks: tuple[str, str]) -> list[str]:
    return [f"{tsn}:$" + "$".join(f"{label}:{name}" for label, name in ranks) + "$"]


_HOMINIDAE = (
    ("Kingdom", "Animalia"),
    ("Phylum", "Chordata"),
    ("Class", "Mammalia"),
    ("Order", "Primates"),
    ("Family", "Hominidae"),
)

FIXTURE_DOCS: list[dict[str, Any]] = [
    {
        "tsn": "180092",
        "nameWInd": "Homo sapiens",
        "kingdom": "Animalia",
        "rank": "Species",
        "genus": "Homo",
        "author": "Linnaeus, 1758",
        "usage": "valid",
        "phylum": "Chordata",
        "class": "Mammalia",
        "order": "Primates",
        "family": "Hominidae",
        "species": "Homo sapiens",
        "hierarchySoFarWRanks": _hierarchy(
            "180092", *_HOMINIDAE, ("Genus", "Homo"), ("Species", "Homo sapiens")
        ),
    },
    {
        "tsn": "944219",
        "nameWInd": "Homo neanderthalensis",
        "kingdom": "Animalia",
        "rank": "Species",
        "genus": "Homo",
        "usage": "valid",
        "hierarchySoFarWRanks": _hierarchy(
            "944219", *_HOMINIDAE, ("Genus", "Homo"), ("Species", "Homo neanderthalensis")
        ),
    },
    {
        "tsn": "180091",
        "nameWInd": "Homo",
        "kingdom": "Animalia",
        "rank": "Genus",
        "hierarchySoFarWRanks": _hierarchy("180091", *_HOMINIDAE, ("Genus", "Homo")),
    },
    {
        "tsn": "573082",
        "nameWInd": "Pan troglodytes",
        "kingdom": "Animalia",
        "rank": "Species",
        "genus": "Pan",
        "hierarchySoFarWRanks": _hierarchy(
            "573082", *_HOMINIDAE, ("Genus", "Pan"), ("Species", "Pan troglodytes")
        ),
    },
    {
        "tsn": "573021",
        "nameWInd": "Gorilla gorilla",
        "kingdom": "Animalia",
        "rank": "Species",
        "genus": "Gorilla",
        "hierarchySoFarWRanks": _hierarchy(
            "573021", *_HOMINIDAE, ("Genus", "Gorilla"), ("Species", "Gorilla gorilla")
        ),
    },
    {
        "tsn": "900001",
        "nameWInd": "Fakeus decoyus",
        "kingdom": "Animalia",
        "rank": "Species",
        "genus": "Fakeus",
        "hierarchySoFarWRanks": _hierarchy(
            "900001",
            ("Kingdom", "Animalia"),
            ("Class", "Mammalia"),
            ("Order", "Primates"),
            ("Family", "Hominidaeformes"),
            ("Genus", "Fakeus"),
            ("Species", "Fakeus decoyus"),
        ),
    },
    {
        "tsn": "180596",
        "nameWInd": "Canis lupus",
        "kingdom": "Animalia",
        "rank": "Species",
        "genus": "Canis",
        "hierarchySoFarWRanks": _hierarchy(
            "180596",
            ("Kingdom", "Animalia"),
            ("Phylum", "Chordata"),
            ("Class", "Mammalia"),
            ("Order", "Carnivora"),
            ("Family", "Canidae"),
            ("Genus", "Canis"),
            ("Species", "Canis lupus"),
        ),
    },
    {
        "tsn": "19405",
        "nameWInd": "Quercus alba",
        "kingdom": "Plantae",
        "rank": "Species",
        "genus": "Quercus",
        "hierarchySoFarWRanks": _hierarchy(
            "19405",
            ("Kingdom", "Plantae"),
            ("Class", "Magnoliopsida"),
            ("Order", "Fagales"),
            ("Family", "Fagaceae"),
            ("Genus", "Quercus"),
            ("Species", "Quercus alba"),
        ),
    },
    {
        # No genus, no hierarchy: exploration cannot proceed
        "tsn": "999999",
        "nameWInd": "Orphanus solitarius",
        "kingdom": "Animalia",
        "rank": "Species",
        "hierarchySoFarWRanks": [],
    },
]


def _unescape(value: str) -> str:
    return re.sub(r"\\(.)", r"\1", value)


def _field_text(doc: dict[str, Any], field: str) -> str:
    value = doc.get(field)
    if isinstance(value, list):
        return value[0] if value else ""
    return "" if value is None else str(value)


def _matches(doc: dict[str, Any], clause: str) -> bool:
    if clause == "*:*":
        return True
    field, _, raw = clause.partition(":")
    text = _field_text(doc, field)
    if raw.startswith('"') and raw.endswith('"'):
        return text == _unescape(raw[1:-1])
    if raw.startswith("*") and raw.endswith("*") and len(raw) > 1:
        return _unescape(raw[1:-1]) in text
    if raw.endswith("*") and not raw.endswith("\\*"):
        return text.startswith(_unescape(raw[:-1]))
    return text == _unescape(raw)


def make_response(body: Any, status: int = 200, url: str = BASE_URL) -> requests.Response:
    """Real ``requests.Response`` carrying ``body`` (dict -> JSON, str/bytes verbatim)."""
    resp = requests.Response()
    resp.status_code = status
    resp.url = url
    resp.encoding = "utf-8"
    if isinstance(body, bytes):
        resp._content = body
    elif isinstance(body, str):
        resp._content = body.encode()
    else:
        resp._content = json.dumps(body).encode()
        resp.headers["Content-Type"] = "application/json"
    return resp


class FixtureSession:
    """Stand-in for ``requests.Session`` answering from ``FIXTURE_DOCS``."""

    def __init__(self, docs: list[dict[str, Any]] | None = None) -> None:
        self.docs = docs if docs is not None else FIXTURE_DOCS
        self.calls: list[list[tuple[str, str]]] = []

    def get(
        self, url: str, params: list[tuple[str, str]] | None = None, timeout: float | None = None
    ) -> requests.Response:
        params = list(params or [])
        self.calls.append(params)

        q = next(v for k, v in params if k == "q")
        filters = [v for k, v in params if k == "fq"]
        hits = [
            d
            for d in self.docs
            if _matches(d, q) and all(_matches(d, f) for f in filters)
        ]

        sort = next((v for k, v in params if k == "sort"), None)
        if sort:
            field, _, direction = sort.partition(" ")
            hits.sort(key=lambda d: _field_text(d, field), reverse=direction == "desc")

        start = int(next((v for k, v in params if k == "start"), "0"))
        rows = int(next((v for k, v in params if k == "rows"), "10"))
        fields = next((v.split(",") for k, v in params if k == "fl"), None)
        page = hits[start : start + rows]
        if fields:
            page = [{f: d[f] for f in fields if f in d} for d in page]

        body = {
            "responseHeader": {"status": 0},
            "response": {"numFound": len(hits), "start": start, "docs": page},
        }
        return make_response(body, url=f"{url}?{urlencode(params)}")


@pytest.fixture
def fixture_session() -> FixtureSession:
    return FixtureSession()


@pytest.fixture
def gateway(fixture_session: FixtureSession) -> SearchGateway:
    return SearchGateway(base_url=BASE_URL, session=fixture_session)  # type: ignore[arg-type]


@pytest.fixture
def dispatcher(gateway: SearchGateway) -> OperationDispatcher:
    return OperationDispatcher(gateway)
