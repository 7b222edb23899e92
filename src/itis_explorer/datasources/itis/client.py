"""ITIS SOLR endpoint constants and field names.

API docs: https://www.itis.gov/solr_documentation.html
"""

API_BASE = "https://services.itis.gov/"

# ---------------------------------------------------------------------------
# Request defaults
# ---------------------------------------------------------------------------
DEFAULT_ROWS = 10
MAX_ROWS = 100  # recommended cap per request
MATCH_ALL = "*:*"

# ---------------------------------------------------------------------------
# Document fields
# ---------------------------------------------------------------------------
TSN = "tsn"
NAME = "nameWInd"
KINGDOM = "kingdom"
RANK = "rank"
GENUS = "genus"
HIERARCHY = "hierarchySoFarWRanks"

NAME_ASC = f"{NAME} asc"

# Fields projected by get_hierarchy
HIERARCHY_FIELDS = [
    TSN,
    NAME,
    KINGDOM,
    "phylum",
    "class",
    "order",
    "family",
    GENUS,
    "species",
    RANK,
    "phyloSort",
    HIERARCHY,
]

# Rank value used to restrict exploration results to species
SPECIES_RANK = "Species"
