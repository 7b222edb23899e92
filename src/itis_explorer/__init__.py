"""ITIS Explorer - query construction and taxonomic exploration for the ITIS index.

Architecture::

    datasources/itis/  ITIS SOLR index (query building, gateway, hierarchy parser, explorer)
    services/          Shared utilities (HTTP session factory)
    schemas.py         Typed request models, one per operation
    dispatch.py        Operation catalog: name + arguments -> payload
    prompts.py         Static prompt templates referencing the operations
    server.py          JSON-lines request loop over stdin/stdout
    cli.py             ``itis-explorer`` entry point

Data flow: server/cli → dispatch → query → gateway → ITIS, with
explore_taxonomy running two sequential searches through the explorer.
"""

__version__ = "0.1.0"

from itis_explorer.config import Settings
from itis_explorer.dispatch import OperationDispatcher

__all__ = ["OperationDispatcher", "Settings", "__version__"]
