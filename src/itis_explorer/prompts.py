"""
Prompt catalog.

Static task templates that walk an agent through the operation catalog
(``search_by_scientific_name``, ``get_hierarchy``, ``explore_taxonomy``, ...).
Only the operation names are coupled to the rest of the package.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from itis_explorer.errors import UnknownPromptError


@dataclass(frozen=True)
class PromptArgument:
    name: str
    description: str
    required: bool = True
    default: str = ""


@dataclass(frozen=True)
class Prompt:
    """A named, parameterized task template."""

    name: str
    description: str
    template: str
    arguments: tuple[PromptArgument, ...] = field(default_factory=tuple)

    def render(self, arguments: Mapping[str, Any] | None = None) -> str:
        values = {a.name: a.default for a in self.arguments}
        for key, value in (arguments or {}).items():
            if key in values and value not in (None, ""):
                values[key] = str(value)
        return self.template.format(**values)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "arguments": [
                {"name": a.name, "description": a.description, "required": a.required}
                for a in self.arguments
            ],
        }


# =============================================================================
# Templates
# =============================================================================

_PROFILE = """\
I need to build a complete taxonomic profile for {organism_name}. Please:

1. First, use search_by_scientific_name to find the organism and get its TSN and basic information
2. Use get_hierarchy to retrieve the complete taxonomic hierarchy from Kingdom to Species
3. Use explore_taxonomy with level 'siblings' to find other species in the same genus
4. Use explore_taxonomy with level 'family' to find other species in the same family
5. Present the information in a structured format showing:
   - Basic organism details (TSN, scientific name, rank)
   - Complete taxonomic hierarchy
   - Related species at genus level
   - Related species at family level
   - Summary of taxonomic relationships

Format the response as a comprehensive taxonomic report."""

_COMPARE = """\
I need to compare the taxonomic relationships between these species: {species_list}. Please:

1. For each species in the list, use search_by_scientific_name to get basic taxonomic information
2. For each species, use get_hierarchy to get the complete taxonomic classification
3. Analyze the hierarchies to identify:
   - Shared taxonomic levels (where they diverge in classification)
   - Common ancestors at different taxonomic ranks
   - Degree of relatedness
4. Present a comparative analysis showing:
   - Side-by-side taxonomic classifications
   - Evolutionary relationships and divergence points
   - Shared taxonomic groups
   - Summary of how closely related these species are

Format as a comparative taxonomic analysis with clear relationship mappings."""

_SURVEY = """\
I need to conduct a biodiversity survey of {taxonomic_group} {group_name}. Please:

1. Use the appropriate search tool (search_by_kingdom, search_by_rank, or search_itis with \
filters) to get an overview of species in this group
2. Get statistics on total number of species using get_statistics or targeted searches
3. Sample {sample_size} representative species and for each:
   - Get detailed taxonomic information
   - Retrieve hierarchical classification
4. Analyze patterns in the data:
   - Diversity at different taxonomic levels
   - Representative families/genera
   - Distribution across higher taxonomic groups
5. Present findings as:
   - Executive summary of biodiversity
   - Statistical overview
   - Representative species profiles
   - Taxonomic diversity analysis
   - Conservation implications if relevant

Format as a scientific biodiversity assessment report."""

_AUDIT = """\
I need to verify the taxonomic accuracy of these scientific names: {names_to_verify}. Please:

1. For each name, use search_by_scientific_name to check if it exists in ITIS
2. For valid names, use get_hierarchy to confirm current taxonomic classification
3. Use autocomplete_search with partial names to find potential alternatives for invalid names
4. For each name, determine:
   - Validity status (valid/invalid/uncertain)
   - Current accepted classification
   - TSN (Taxonomic Serial Number)
   - Potential synonyms or alternatives
5. Present results as:
   - Summary table of verification results
   - Detailed findings for each name
   - Recommendations for invalid names
   - Standard reference format for valid names

Format as a taxonomic verification report with clear recommendations."""

_TEACHING = """\
I need to create educational content about {concept_focus} for {education_level} students. \
Please:

1. Select appropriate example organisms based on education level (familiar species for lower \
levels, diverse examples for higher levels)
2. Use search_by_scientific_name and get_hierarchy to get complete taxonomic information for \
examples
3. Use explore_taxonomy to find related species that illustrate key concepts
4. For {concept_focus}, develop:
   - Clear explanations with real examples
   - Progressive complexity appropriate to level
   - Interactive elements using the data
   - Assessment questions
5. Present as:
   - Structured lesson plan
   - Example organism profiles
   - Activities and exercises
   - Assessment materials
   - Extension activities

Format as a complete educational module with engaging, level-appropriate content."""


PROMPTS: dict[str, Prompt] = {
    p.name: p
    for p in (
        Prompt(
            name="complete_taxonomy_profile",
            description=(
                "Build a complete taxonomic profile for any organism including hierarchy, "
                "related species, and classification details"
            ),
            template=_PROFILE,
            arguments=(
                PromptArgument(
                    "organism_name",
                    "Scientific name of the organism to profile",
                    default="Homo sapiens",
                ),
            ),
        ),
        Prompt(
            name="compare_species_relationships",
            description=(
                "Compare the taxonomic relationships between multiple species to understand "
                "their evolutionary connections"
            ),
            template=_COMPARE,
            arguments=(
                PromptArgument(
                    "species_list",
                    "Comma-separated list of scientific names to compare",
                    default="Homo sapiens, Pan troglodytes",
                ),
            ),
        ),
        Prompt(
            name="biodiversity_survey",
            description=(
                "Conduct a biodiversity survey of a specific taxonomic group to understand "
                "species diversity and distribution"
            ),
            template=_SURVEY,
            arguments=(
                PromptArgument(
                    "taxonomic_group",
                    "The taxonomic group to survey (kingdom, phylum, class, order, family, "
                    "or genus)",
                    default="kingdom",
                ),
                PromptArgument(
                    "group_name", "Name of the specific taxonomic group", default="Animalia"
                ),
                PromptArgument(
                    "sample_size",
                    "Number of species to include in detailed analysis (default: 20)",
                    required=False,
                    default="20",
                ),
            ),
        ),
        Prompt(
            name="taxonomic_verification_audit",
            description=(
                "Verify and audit a list of scientific names for taxonomic accuracy and "
                "current classification status"
            ),
            template=_AUDIT,
            arguments=(
                PromptArgument(
                    "names_to_verify",
                    "Comma-separated list of scientific names to verify",
                    default="Homo sapiens, Tyrannosaurus rex",
                ),
            ),
        ),
        Prompt(
            name="taxonomy_teaching_module",
            description=(
                "Create educational content demonstrating taxonomic principles using real "
                "organism examples"
            ),
            template=_TEACHING,
            arguments=(
                PromptArgument(
                    "education_level",
                    "Target education level: elementary, middle_school, high_school, "
                    "undergraduate, graduate",
                    default="high_school",
                ),
                PromptArgument(
                    "concept_focus",
                    "Specific concept to teach: hierarchy, classification, "
                    "binomial_nomenclature, evolution, biodiversity",
                    default="hierarchy",
                ),
            ),
        ),
    )
}


def list_prompts() -> list[dict[str, Any]]:
    """Metadata for every prompt, in catalog order."""
    return [p.to_dict() for p in PROMPTS.values()]


def get_prompt(name: str, arguments: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Render ``name`` as a single user message."""
    prompt = PROMPTS.get(name)
    if prompt is None:
        raise UnknownPromptError(name)
    text = prompt.render(arguments)
    return {
        "name": prompt.name,
        "description": prompt.description,
        "messages": [{"role": "user", "content": {"type": "text", "text": text}}],
    }
