"""
SOLR query construction for the ITIS index.

``SearchSpec`` describes a search; ``build_params`` turns it into the ordered
parameter list sent to the index.  The convenience constructors below compose
on top of it for the common lookups (by name, TSN, kingdom, rank, ...).

Parameter layout (order is stable)::

    wt=json, indent=true, q, [start], rows, [sort], [fl], fq...

Filters are emitted as repeated ``fq`` parameters; the index AND-s them.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace

from itis_explorer.datasources.itis import client

# Characters with meaning in Lucene/SOLR query syntax
_SPECIAL_CHARS = frozenset('+-&|!(){}[]^"~*?:\\/')


# =============================================================================
# Search specification
# =============================================================================


@dataclass(frozen=True)
class SearchSpec:
    """A structured search against the index. Built per call, never reused."""

    query: str | None = None
    start: int | None = None
    rows: int | None = None
    sort: str | None = None
    fields: Sequence[str] = ()
    filters: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.start is not None and self.start < 0:
            msg = f"start must be non-negative, got {self.start}"
            raise ValueError(msg)
        if self.rows is not None and self.rows < 0:
            msg = f"rows must be non-negative, got {self.rows}"
            raise ValueError(msg)

    def with_filters(self, **filters: str) -> SearchSpec:
        """Copy of this spec with extra filters appended after the existing ones."""
        return replace(self, filters={**self.filters, **filters})


def build_params(spec: SearchSpec) -> list[tuple[str, str]]:
    """Build the canonical ordered parameter list for ``spec``."""
    params: list[tuple[str, str]] = [("wt", "json"), ("indent", "true")]

    params.append(("q", spec.query if spec.query else client.MATCH_ALL))

    # start is only sent when given; the index defaults to 0
    if spec.start is not None:
        params.append(("start", str(spec.start)))
    rows = spec.rows if spec.rows is not None else client.DEFAULT_ROWS
    params.append(("rows", str(rows)))

    if spec.sort:
        params.append(("sort", spec.sort))

    if spec.fields:
        params.append(("fl", ",".join(spec.fields)))

    for key, value in spec.filters.items():
        params.append(("fq", f"{key}:{value}"))

    return params


# =============================================================================
# Escaping
# =============================================================================


def escape_query_value(value: str) -> str:
    """Backslash-escape query syntax characters and whitespace so ``value`` is a literal."""
    out = []
    for ch in value:
        if ch in _SPECIAL_CHARS or ch.isspace():
            out.append("\\")
        out.append(ch)
    return "".join(out)


def quote_phrase(value: str) -> str:
    """Wrap ``value`` in double quotes, escaping embedded quotes and backslashes."""
    inner = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{inner}"'


# =============================================================================
# Convenience constructors
# =============================================================================


def by_scientific_name(
    name: str, *, start: int | None = None, rows: int | None = None
) -> SearchSpec:
    """Exact-phrase match on the display name (``nameWInd``)."""
    return SearchSpec(query=f"{client.NAME}:{quote_phrase(name)}", start=start, rows=rows)


def by_tsn(tsn: str | int) -> SearchSpec:
    """Exact match on the taxonomic serial number."""
    return SearchSpec(query=f"{client.TSN}:{escape_query_value(str(tsn))}")


def by_kingdom(
    kingdom: str,
    *,
    start: int | None = None,
    rows: int | None = None,
    filters: Mapping[str, str] | None = None,
) -> SearchSpec:
    """All records in a kingdom, as an exact-match filter."""
    spec = SearchSpec(start=start, rows=rows, filters=dict(filters or {}))
    return spec.with_filters(**{client.KINGDOM: quote_phrase(kingdom)})


def by_rank(
    rank: str,
    *,
    kingdom: str | None = None,
    start: int | None = None,
    rows: int | None = None,
) -> SearchSpec:
    """All records at a taxonomic rank, optionally narrowed to one kingdom."""
    spec = SearchSpec(start=start, rows=rows).with_filters(**{client.RANK: quote_phrase(rank)})
    if kingdom:
        spec = spec.with_filters(**{client.KINGDOM: quote_phrase(kingdom)})
    return spec


def autocomplete(partial_name: str, *, rows: int | None = None) -> SearchSpec:
    """Prefix match on the display name, always sorted by name ascending."""
    return SearchSpec(
        query=f"{client.NAME}:{escape_query_value(partial_name)}*",
        rows=rows,
        sort=client.NAME_ASC,
    )


def hierarchy(tsn: str | int) -> SearchSpec:
    """TSN lookup projecting only the classification fields."""
    return replace(by_tsn(tsn), fields=tuple(client.HIERARCHY_FIELDS))


def statistics() -> SearchSpec:
    """Zero-row query; only ``numFound`` of the response is meaningful."""
    return SearchSpec(query=client.MATCH_ALL, rows=0, fields=(client.TSN,))


def siblings_of(genus: str, *, rows: int = client.DEFAULT_ROWS) -> SearchSpec:
    """Species sharing ``genus``, name-ascending."""
    return SearchSpec(
        query=f"{client.GENUS}:{escape_query_value(genus)}",
        rows=rows,
        sort=client.NAME_ASC,
        filters={client.RANK: client.SPECIES_RANK},
    )


def relatives_in(segment: str, *, rows: int = client.DEFAULT_ROWS) -> SearchSpec:
    """
    Species whose hierarchy contains ``segment``, an escaped ``Label\\:Name`` token.

    The clause matches the whole ``$``-delimited segment so that a taxon name
    which is a prefix of another (``Hominidae`` / ``Hominidaeformes``) does
    not over-match.
    """
    return SearchSpec(
        query=f"{client.HIERARCHY}:*${segment}$*",
        rows=rows,
        sort=client.NAME_ASC,
        filters={client.RANK: client.SPECIES_RANK},
    )
