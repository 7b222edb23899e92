"""
Taxonomic exploration: find the relatives of a named species.

Two sequential calls: resolve the name to its first matching record, then
query for species sharing its genus (``siblings``) or the family/order/class
taken from its hierarchy string.  Relatives always come back sorted by name.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from itis_explorer.datasources.itis import client, query
from itis_explorer.datasources.itis.hierarchy import extract_rank, rank_clause
from itis_explorer.datasources.itis.models import (
    ExplorationLevel,
    ExplorationResult,
    Record,
    TaxonSummary,
)
from itis_explorer.errors import IncompleteDataError, MalformedHierarchyError, NotFoundError

if TYPE_CHECKING:
    from itis_explorer.datasources.itis.gateway import SearchGateway

logger = logging.getLogger(__name__)


class TaxonomyExplorer:
    """Derives and runs "find relatives" queries for a resolved record."""

    def __init__(self, gateway: SearchGateway) -> None:
        self.gateway = gateway

    def resolve(self, scientific_name: str) -> Record:
        """First record whose display name matches exactly, else ``NotFoundError``."""
        result = self.gateway.search(query.by_scientific_name(scientific_name))
        if not result.docs:
            raise NotFoundError(scientific_name)
        return result.docs[0]

    def explore(
        self,
        scientific_name: str,
        level: ExplorationLevel | str = ExplorationLevel.SIBLINGS,
        rows: int = client.DEFAULT_ROWS,
    ) -> ExplorationResult:
        level = ExplorationLevel(level)
        target = self.resolve(scientific_name)
        summary = TaxonSummary.from_record(target)

        spec, description = self._relatives_query(target, summary, level, rows)
        logger.debug("Exploring %s (%s): %s", scientific_name, level, spec.query)
        relatives = self.gateway.search(spec)

        return ExplorationResult(
            target=summary,
            level=level,
            description=description,
            relatives=relatives,
        )

    def _relatives_query(
        self,
        target: Record,
        summary: TaxonSummary,
        level: ExplorationLevel,
        rows: int,
    ) -> tuple[query.SearchSpec, str]:
        if level is ExplorationLevel.SIBLINGS:
            genus = target.get(client.GENUS)
            if not genus:
                reason = "genus is not known"
                raise IncompleteDataError(level.value, _partial(target, summary), reason)
            return query.siblings_of(genus, rows=rows), f"Species in genus {genus}"

        label = level.rank_label
        assert label is not None
        try:
            taxon = extract_rank(target.get(client.HIERARCHY), label)
        except MalformedHierarchyError as exc:
            raise IncompleteDataError(level.value, _partial(target, summary), str(exc)) from exc
        if taxon is None:
            reason = f"{label} not present in hierarchy"
            raise IncompleteDataError(level.value, _partial(target, summary), reason)

        spec = query.relatives_in(rank_clause(label, taxon), rows=rows)
        return spec, f"Species in {level.value} {taxon}"


def _partial(target: Record, summary: TaxonSummary) -> dict[str, object]:
    """What was known about the target when exploration had to stop."""
    return {
        **summary.to_dict(),
        "kingdom": target.get(client.KINGDOM),
        "genus": target.get(client.GENUS),
        "hierarchy": target.get(client.HIERARCHY),
    }
