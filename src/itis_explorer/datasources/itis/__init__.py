"""ITIS (Integrated Taxonomic Information System) SOLR data source.

Public API:
  - client: endpoint URL, field names, defaults
  - query: SearchSpec, build_params, convenience constructors
  - gateway: SearchGateway (one GET per call, typed errors)
  - hierarchy: parse_hierarchy, extract_rank for ``hierarchySoFarWRanks``
  - explore: TaxonomyExplorer (siblings/family/order/class relatives)
  - models: SearchResult, ExplorationLevel, ExplorationResult
"""

from itis_explorer.datasources.itis.client import API_BASE
from itis_explorer.datasources.itis.explore import TaxonomyExplorer
from itis_explorer.datasources.itis.gateway import SearchGateway
from itis_explorer.datasources.itis.hierarchy import RankEntry, extract_rank, parse_hierarchy
from itis_explorer.datasources.itis.models import (
    ExplorationLevel,
    ExplorationResult,
    SearchResult,
    TaxonSummary,
)
from itis_explorer.datasources.itis.query import SearchSpec, build_params, escape_query_value

__all__ = [
    "API_BASE",
    "ExplorationLevel",
    "ExplorationResult",
    "RankEntry",
    "SearchGateway",
    "SearchResult",
    "SearchSpec",
    "TaxonSummary",
    "TaxonomyExplorer",
    "build_params",
    "escape_query_value",
    "extract_rank",
    "parse_hierarchy",
]
