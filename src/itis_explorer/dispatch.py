"""
Operation dispatcher.

Maps an operation name plus an argument bag onto the query layer and renders
the outcome as a JSON-ready payload.  Arguments are validated against the
request models in ``schemas``; any ``ItisError`` (or ``ValueError``) raised
while handling is turned into an error payload instead of propagating.

Payload shapes::

    {"is_error": false, "operation": "...", <echoed args>, "total_results": n, ...}
    {"is_error": true,  "operation": "...", "error": {"type": "...", "message": "..."}}
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from itis_explorer import schemas
from itis_explorer.datasources.itis import client, query
from itis_explorer.datasources.itis.explore import TaxonomyExplorer
from itis_explorer.datasources.itis.gateway import SearchGateway
from itis_explorer.datasources.itis.hierarchy import lineage
from itis_explorer.datasources.itis.models import Record, SearchResult, project_summary
from itis_explorer.errors import (
    InvalidArgumentsError,
    ItisError,
    NotFoundError,
    UnknownOperationError,
)

logger = logging.getLogger(__name__)

Payload = dict[str, Any]

# Rank fields copied into get_hierarchy's "hierarchy" block, kingdom first
_HIERARCHY_RANKS = ("kingdom", "phylum", "class", "order", "family", "genus", "species")


@dataclass(frozen=True)
class Operation:
    """Catalog entry: request model plus a one-line description."""

    name: str
    request: type[schemas.OperationRequest]
    description: str

    @property
    def required(self) -> list[str]:
        return [
            n
            for n, f in self.request.model_fields.items()
            if f.is_required() and n != "operation"
        ]


OPERATIONS: dict[str, Operation] = {
    op.name: op
    for op in (
        Operation(
            "search_itis",
            schemas.SearchItisRequest,
            "Search ITIS with a SOLR query, filters, sort and field projection",
        ),
        Operation(
            "search_by_scientific_name",
            schemas.SearchByScientificNameRequest,
            "Find records by exact scientific name",
        ),
        Operation("search_by_tsn", schemas.SearchByTsnRequest, "Look up a record by TSN"),
        Operation(
            "search_by_kingdom", schemas.SearchByKingdomRequest, "List records in a kingdom"
        ),
        Operation(
            "search_by_rank",
            schemas.SearchByRankRequest,
            "List records at a taxonomic rank, optionally within a kingdom",
        ),
        Operation(
            "get_hierarchy",
            schemas.GetHierarchyRequest,
            "Full classification (kingdom to species) for a TSN",
        ),
        Operation(
            "autocomplete_search",
            schemas.AutocompleteRequest,
            "Scientific names starting with a partial name",
        ),
        Operation(
            "get_statistics", schemas.GetStatisticsRequest, "Total number of records in ITIS"
        ),
        Operation(
            "explore_taxonomy",
            schemas.ExploreTaxonomyRequest,
            "Related species sharing the genus, family, order or class of a species",
        ),
    )
}


def project_detail(doc: Record) -> dict[str, Any]:
    """Record narrowed for name/kingdom/rank listings."""
    return {
        **project_summary(doc),
        "author": doc.get("author"),
        "usage": doc.get("usage"),
    }


def error_payload(operation: str, exc: ItisError) -> Payload:
    return {"is_error": True, "operation": operation, "error": exc.to_dict()}


class OperationDispatcher:
    """Closed catalog of operations over one gateway."""

    def __init__(self, gateway: SearchGateway, explorer: TaxonomyExplorer | None = None) -> None:
        self.gateway = gateway
        self.explorer = explorer or TaxonomyExplorer(gateway)
        self._handlers: dict[str, Callable[[Any], Payload]] = {
            "search_itis": self._search_itis,
            "search_by_scientific_name": self._search_by_scientific_name,
            "search_by_tsn": self._search_by_tsn,
            "search_by_kingdom": self._search_by_kingdom,
            "search_by_rank": self._search_by_rank,
            "get_hierarchy": self._get_hierarchy,
            "autocomplete_search": self._autocomplete_search,
            "get_statistics": self._get_statistics,
            "explore_taxonomy": self._explore_taxonomy,
        }

    def parse(
        self, operation: str, arguments: Mapping[str, Any] | None
    ) -> schemas.OperationRequest:
        """Validate an argument bag into the operation's request model."""
        if operation not in OPERATIONS:
            raise UnknownOperationError(operation)
        try:
            request: schemas.OperationRequest = schemas.request_adapter.validate_python(
                {**(arguments or {}), "operation": operation}
            )
        except ValidationError as exc:
            errors = exc.errors(include_url=False, include_context=False, include_input=False)
            raise InvalidArgumentsError(operation, [dict(e) for e in errors]) from exc
        return request

    def dispatch(self, operation: str, arguments: Mapping[str, Any] | None = None) -> Payload:
        """Run one operation; failures come back as an error payload."""
        try:
            request = self.parse(operation, arguments)
            payload = self._handlers[operation](request)
        except ItisError as exc:
            logger.warning("%s failed: %s", operation, exc)
            return error_payload(operation, exc)
        except ValueError as exc:
            logger.warning("%s rejected: %s", operation, exc)
            wrapped = InvalidArgumentsError(operation, [{"loc": (), "msg": str(exc)}])
            return error_payload(operation, wrapped)
        return {"is_error": False, "operation": operation, **payload}

    # -------------------------------------------------------------------------
    # Handlers
    # -------------------------------------------------------------------------

    def _search_itis(self, req: schemas.SearchItisRequest) -> Payload:
        spec = query.SearchSpec(
            query=req.query,
            start=req.start,
            rows=req.rows,
            sort=req.sort,
            fields=tuple(req.fields or ()),
            filters=dict(req.filters or {}),
        )
        result = self.gateway.search(spec)
        return {**req.echo(), **_counts(result), "results": list(result.docs)}

    def _search_by_scientific_name(self, req: schemas.SearchByScientificNameRequest) -> Payload:
        spec = query.by_scientific_name(req.name, start=req.start, rows=req.rows)
        return self._listing(req, spec, project_detail)

    def _search_by_tsn(self, req: schemas.SearchByTsnRequest) -> Payload:
        result = self.gateway.search(query.by_tsn(req.tsn))
        if not result.docs:
            raise NotFoundError(req.tsn, what="TSN")
        return {**req.echo(), **_counts(result), "record": result.docs[0]}

    def _search_by_kingdom(self, req: schemas.SearchByKingdomRequest) -> Payload:
        spec = query.by_kingdom(req.kingdom, start=req.start, rows=req.rows)
        return self._listing(req, spec, project_detail)

    def _search_by_rank(self, req: schemas.SearchByRankRequest) -> Payload:
        spec = query.by_rank(req.rank, kingdom=req.kingdom, start=req.start, rows=req.rows)
        return self._listing(req, spec, project_detail)

    def _get_hierarchy(self, req: schemas.GetHierarchyRequest) -> Payload:
        result = self.gateway.search(query.hierarchy(req.tsn))
        if not result.docs:
            raise NotFoundError(req.tsn, what="TSN")
        doc = result.docs[0]
        return {
            **req.echo(),
            "scientific_name": doc.get(client.NAME),
            "rank": doc.get(client.RANK),
            "hierarchy": {r: doc[r] for r in _HIERARCHY_RANKS if doc.get(r)},
            "lineage": lineage(doc.get(client.HIERARCHY)),
        }

    def _autocomplete_search(self, req: schemas.AutocompleteRequest) -> Payload:
        spec = query.autocomplete(req.partial_name, rows=req.rows)
        return self._listing(req, spec, project_summary, key="suggestions")

    def _get_statistics(self, _req: schemas.GetStatisticsRequest) -> Payload:
        result = self.gateway.search(query.statistics())
        return {"total_records": result.num_found}

    def _explore_taxonomy(self, req: schemas.ExploreTaxonomyRequest) -> Payload:
        exploration = self.explorer.explore(req.scientific_name, req.level, rows=req.rows)
        return {**req.echo(), **exploration.to_dict()}

    def _listing(
        self,
        req: schemas.OperationRequest,
        spec: query.SearchSpec,
        project: Callable[[Record], dict[str, Any]],
        key: str = "results",
    ) -> Payload:
        result = self.gateway.search(spec)
        return {**req.echo(), **_counts(result), key: [project(d) for d in result.docs]}


def _counts(result: SearchResult) -> dict[str, int]:
    return {"total_results": result.num_found, "start": result.start}
