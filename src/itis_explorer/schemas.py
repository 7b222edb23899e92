"""
Request models for the operation catalog.

One pydantic model per operation, joined into a discriminated union on the
``operation`` field.  The dispatcher validates inbound argument bags against
it, so handlers only ever see typed, bounded values.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter

from itis_explorer.datasources.itis.client import DEFAULT_ROWS, MAX_ROWS
from itis_explorer.datasources.itis.models import ExplorationLevel


def _int_to_str(value: Any) -> Any:
    return str(value) if isinstance(value, int) and not isinstance(value, bool) else value


Tsn = Annotated[str, BeforeValidator(_int_to_str), Field(pattern=r"^\d+$")]
Name = Annotated[str, Field(min_length=1)]
Rows = Annotated[int, Field(ge=0, le=MAX_ROWS)]
NonNegative = Annotated[int, Field(ge=0)]


class OperationRequest(BaseModel):
    """Common config for all operation requests."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid", frozen=True)

    def echo(self) -> dict[str, Any]:
        """Request parameters to echo back in the payload."""
        return self.model_dump(exclude={"operation"}, exclude_none=True, mode="json")


# =============================================================================
# Searches
# =============================================================================


class SearchItisRequest(OperationRequest):
    """Free-form SOLR search with filters, pagination, sort and projection."""

    operation: Literal["search_itis"] = "search_itis"
    query: str | None = None
    start: NonNegative | None = None
    rows: Rows = DEFAULT_ROWS
    sort: str | None = None
    fields: list[str] | None = None
    filters: dict[str, str] | None = None


class SearchByScientificNameRequest(OperationRequest):
    operation: Literal["search_by_scientific_name"] = "search_by_scientific_name"
    name: Name
    start: NonNegative | None = None
    rows: Rows = DEFAULT_ROWS


class SearchByTsnRequest(OperationRequest):
    operation: Literal["search_by_tsn"] = "search_by_tsn"
    tsn: Tsn


class SearchByKingdomRequest(OperationRequest):
    operation: Literal["search_by_kingdom"] = "search_by_kingdom"
    kingdom: Name
    start: NonNegative | None = None
    rows: Rows = DEFAULT_ROWS


class SearchByRankRequest(OperationRequest):
    operation: Literal["search_by_rank"] = "search_by_rank"
    rank: Name
    kingdom: str | None = None
    start: NonNegative | None = None
    rows: Rows = DEFAULT_ROWS


class GetHierarchyRequest(OperationRequest):
    operation: Literal["get_hierarchy"] = "get_hierarchy"
    tsn: Tsn


class AutocompleteRequest(OperationRequest):
    operation: Literal["autocomplete_search"] = "autocomplete_search"
    partial_name: Name
    rows: Rows = DEFAULT_ROWS


class GetStatisticsRequest(OperationRequest):
    operation: Literal["get_statistics"] = "get_statistics"


class ExploreTaxonomyRequest(OperationRequest):
    """Relatives of a species at the given level (siblings = same genus)."""

    operation: Literal["explore_taxonomy"] = "explore_taxonomy"
    scientific_name: Name
    level: ExplorationLevel = ExplorationLevel.SIBLINGS
    rows: Rows = DEFAULT_ROWS


AnyRequest = Annotated[
    SearchItisRequest
    | SearchByScientificNameRequest
    | SearchByTsnRequest
    | SearchByKingdomRequest
    | SearchByRankRequest
    | GetHierarchyRequest
    | AutocompleteRequest
    | GetStatisticsRequest
    | ExploreTaxonomyRequest,
    Field(discriminator="operation"),
]

request_adapter: TypeAdapter[AnyRequest] = TypeAdapter(AnyRequest)
