"""
Parser for the ``hierarchySoFarWRanks`` field.

ITIS encodes a record's ancestry as one string of ``$``-separated segments,
each ``<RankLabel>:<TaxonName>``::

    202423:$Kingdom:Animalia$Phylum:Chordata$Class:Mammalia$...$Species:Homo sapiens$

Grammar::

    hierarchy := segment ( "$" segment )*
    segment   := ""                      (leading/trailing separator)
               | label ":" name
    label     := one or more chars except ":" and "$"
    name      := zero or more chars except "$"

A leading segment whose label is all digits and whose name is empty is the
record's own TSN header and is skipped.  Any other non-empty segment without a
``:`` raises ``MalformedHierarchyError``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from itis_explorer.datasources.itis.query import escape_query_value
from itis_explorer.errors import MalformedHierarchyError

SEGMENT_SEP = "$"
LABEL_SEP = ":"


@dataclass(frozen=True)
class RankEntry:
    """One ``Label:Name`` segment of a hierarchy string."""

    rank: str
    name: str


def _coerce(value: str | Sequence[str] | None) -> str:
    """Accept the wire shape (a one-element list) or a bare string."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value[0] if value else ""


def parse_hierarchy(value: str | Sequence[str] | None) -> list[RankEntry]:
    """Parse a hierarchy string (or its one-element list) into ordered rank entries."""
    text = _coerce(value)
    entries: list[RankEntry] = []
    for position, segment in enumerate(text.split(SEGMENT_SEP)):
        if not segment:
            continue
        label, sep, name = segment.partition(LABEL_SEP)
        if not sep or not label:
            msg = f"Malformed hierarchy segment {segment!r} (expected 'Label:Name')"
            raise MalformedHierarchyError(msg)
        if position == 0 and label.isdigit() and not name:
            continue
        entries.append(RankEntry(rank=label, name=name))
    return entries


def extract_rank(value: str | Sequence[str] | None, rank_label: str) -> str | None:
    """
    Return the taxon name at ``rank_label``, or None when it is not present.

    The label match is exact and case-sensitive (``"Family"``, not ``"family"``).
    Missing or empty input also returns None.
    """
    for entry in parse_hierarchy(value):
        if entry.rank == rank_label:
            return entry.name or None
    return None


def rank_clause(rank_label: str, name: str) -> str:
    """Escaped ``Label\\:Name`` token for matching one segment in a query."""
    return f"{escape_query_value(rank_label)}\\{LABEL_SEP}{escape_query_value(name)}"


def lineage(value: str | Sequence[str] | None) -> list[dict[str, str]]:
    """Hierarchy as a list of ``{"rank", "name"}`` dicts, kingdom first."""
    return [{"rank": e.rank, "name": e.name} for e in parse_hierarchy(value)]
