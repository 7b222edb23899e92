"""Tests for taxonomic exploration."""

from __future__ import annotations

import pytest

from itis_explorer.datasources.itis.explore import TaxonomyExplorer
from itis_explorer.datasources.itis.gateway import SearchGateway
from itis_explorer.datasources.itis.models import ExplorationLevel, ExplorationResult
from itis_explorer.errors import IncompleteDataError, NotFoundError

from tests.conftest import BASE_URL, FixtureSession


def _names(result: ExplorationResult) -> list[str]:
    return [d["nameWInd"] for d in result.relatives.docs]


@pytest.fixture
def explorer(gateway: SearchGateway) -> TaxonomyExplorer:
    return TaxonomyExplorer(gateway)


class TestResolve:
    def test_first_match(self, explorer: TaxonomyExplorer) -> None:
        assert explorer.resolve("Homo sapiens")["tsn"] == "180092"

    def test_not_found(self, explorer: TaxonomyExplorer) -> None:
        with pytest.raises(NotFoundError, match="Nonexistent species") as info:
            explorer.resolve("Nonexistent species")
        assert info.value.query == "Nonexistent species"


class TestSiblings:
    """Same-genus exploration."""

    def test_homo_siblings_sorted_by_name(self, explorer: TaxonomyExplorer) -> None:
        result = explorer.explore("Homo sapiens", "siblings", 5)
        # The target is included; the genus record itself is not a Species
        assert _names(result) == ["Homo neanderthalensis", "Homo sapiens"]
        assert result.relatives.num_found == 2

    def test_target_summary(self, explorer: TaxonomyExplorer) -> None:
        result = explorer.explore("Homo sapiens", ExplorationLevel.SIBLINGS)
        assert result.target.tsn == "180092"
        assert result.target.scientific_name == "Homo sapiens"
        assert result.target.rank == "Species"
        assert result.level is ExplorationLevel.SIBLINGS
        assert result.description == "Species in genus Homo"

    def test_rows_limit(self, explorer: TaxonomyExplorer) -> None:
        result = explorer.explore("Homo sapiens", "siblings", 1)
        assert _names(result) == ["Homo neanderthalensis"]
        assert result.relatives.num_found == 2

    def test_missing_genus(self, explorer: TaxonomyExplorer) -> None:
        with pytest.raises(IncompleteDataError) as info:
            explorer.explore("Orphanus solitarius", "siblings")
        err = info.value
        assert err.level == "siblings"
        assert err.target["tsn"] == "999999"
        assert err.target["scientific_name"] == "Orphanus solitarius"
        assert "siblings" in str(err)


class TestHierarchyLevels:
    """Family/order/class exploration via the hierarchy string."""

    def test_family_exact_token(self, explorer: TaxonomyExplorer) -> None:
        result = explorer.explore("Homo sapiens", "family", 10)
        assert _names(result) == [
            "Gorilla gorilla",
            "Homo neanderthalensis",
            "Homo sapiens",
            "Pan troglodytes",
        ]
        # Hominidaeformes shares the prefix but is a different family
        assert "Fakeus decoyus" not in _names(result)
        assert result.description == "Species in family Hominidae"

    def test_order(self, explorer: TaxonomyExplorer) -> None:
        result = explorer.explore("Pan troglodytes", "order")
        assert "Fakeus decoyus" in _names(result)
        assert "Canis lupus" not in _names(result)
        assert result.description == "Species in order Primates"

    def test_class(self, explorer: TaxonomyExplorer) -> None:
        result = explorer.explore("Canis lupus", ExplorationLevel.CLASS)
        names = _names(result)
        assert "Canis lupus" in names
        assert "Homo sapiens" in names
        assert "Quercus alba" not in names
        assert names == sorted(names)

    def test_missing_hierarchy(self, explorer: TaxonomyExplorer) -> None:
        with pytest.raises(IncompleteDataError, match="Family not present") as info:
            explorer.explore("Orphanus solitarius", "family")
        assert info.value.target["hierarchy"] == []

    def test_not_found(self, explorer: TaxonomyExplorer) -> None:
        with pytest.raises(NotFoundError, match="Nonexistent species"):
            explorer.explore("Nonexistent species", "family", 5)

    def test_malformed_hierarchy_is_incomplete(self) -> None:
        doc = {
            "tsn": "1",
            "nameWInd": "Brokenus hierarchus",
            "rank": "Species",
            "hierarchySoFarWRanks": ["Kingdom:Animalia$Chordata$Family:X"],
        }
        session = FixtureSession([doc])
        gw = SearchGateway(base_url=BASE_URL, session=session)  # type: ignore[arg-type]
        with pytest.raises(IncompleteDataError, match="Malformed"):
            TaxonomyExplorer(gw).explore("Brokenus hierarchus", "family")

    def test_unknown_level(self, explorer: TaxonomyExplorer) -> None:
        with pytest.raises(ValueError, match="genus"):
            explorer.explore("Homo sapiens", "genus")


class TestRequests:
    """The two calls are sequential and well-formed."""

    def test_two_calls_resolve_then_relatives(
        self, explorer: TaxonomyExplorer, fixture_session: FixtureSession
    ) -> None:
        explorer.explore("Homo sapiens", "family", 3)
        assert len(fixture_session.calls) == 2
        resolve, relatives = fixture_session.calls
        assert ("q", 'nameWInd:"Homo sapiens"') in resolve
        assert ("q", "hierarchySoFarWRanks:*$Family\\:Hominidae$*") in relatives
        assert ("fq", "rank:Species") in relatives
        assert ("sort", "nameWInd asc") in relatives
        assert ("rows", "3") in relatives

    def test_no_second_call_when_not_found(
        self, explorer: TaxonomyExplorer, fixture_session: FixtureSession
    ) -> None:
        with pytest.raises(NotFoundError):
            explorer.explore("Nonexistent species")
        assert len(fixture_session.calls) == 1

    def test_to_dict_projection(self, explorer: TaxonomyExplorer) -> None:
        data = explorer.explore("Homo sapiens", "siblings", 5).to_dict()
        assert data["target"] == {
            "tsn": "180092",
            "scientific_name": "Homo sapiens",
            "rank": "Species",
        }
        assert data["level"] == "siblings"
        assert data["total_results"] == 2
        assert data["relatives"][0] == {
            "tsn": "944219",
            "scientific_name": "Homo neanderthalensis",
            "kingdom": "Animalia",
            "rank": "Species",
        }
