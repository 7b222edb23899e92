"""Data models for ITIS search responses and exploration results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from itis_explorer.datasources.itis import client

#: A single ITIS document: field name -> value, as returned by the index.
Record = dict[str, Any]


class SearchResult(BaseModel):
    """The ``response`` object of an ITIS SOLR envelope."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    num_found: int = Field(..., ge=0, alias="numFound")
    start: int = Field(..., ge=0)
    docs: tuple[Record, ...]


class SearchEnvelope(BaseModel):
    """Top-level JSON body returned by the index."""

    response: SearchResult


class ExplorationLevel(StrEnum):
    """Scope of a "find relatives" query."""

    SIBLINGS = "siblings"
    FAMILY = "family"
    ORDER = "order"
    CLASS = "class"

    @property
    def rank_label(self) -> str | None:
        """Hierarchy rank label for the level, or None for siblings (genus field)."""
        if self is ExplorationLevel.SIBLINGS:
            return None
        return self.value.capitalize()


@dataclass(frozen=True)
class TaxonSummary:
    """Identity of a resolved record."""

    tsn: str | None
    scientific_name: str | None
    rank: str | None

    @classmethod
    def from_record(cls, record: Record) -> TaxonSummary:
        tsn = record.get(client.TSN)
        return cls(
            tsn=str(tsn) if tsn is not None else None,
            scientific_name=record.get(client.NAME),
            rank=record.get(client.RANK),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"tsn": self.tsn, "scientific_name": self.scientific_name, "rank": self.rank}


@dataclass(frozen=True)
class ExplorationResult:
    """A resolved target paired with its related species."""

    target: TaxonSummary
    level: ExplorationLevel
    description: str
    relatives: SearchResult

    def to_dict(self) -> dict[str, Any]:
        return {
            "target": self.target.to_dict(),
            "level": self.level.value,
            "description": self.description,
            "total_results": self.relatives.num_found,
            "start": self.relatives.start,
            "relatives": [project_summary(doc) for doc in self.relatives.docs],
        }


def project_summary(doc: Record) -> dict[str, Any]:
    """Narrow a record to {tsn, scientific_name, kingdom, rank}."""
    return {
        "tsn": doc.get(client.TSN),
        "scientific_name": doc.get(client.NAME),
        "kingdom": doc.get(client.KINGDOM),
        "rank": doc.get(client.RANK),
    }
