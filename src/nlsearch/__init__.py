"""
nlsearch — natural-language relevance search over nested JSON-like data.

The ``nlsearch`` package walks an arbitrary tree of mappings, lists and
scalars, scores every node against a free-text query and returns the
relevant nodes ranked, each with its path and ancestor chain.

Quick start (programmatic API)::

    from nlsearch import search

    results = search(employees, "who works in engineering?")
    for r in results:
        print(r.score, r.path_string, r.node)

Quick start (CLI)::

    nlsearch search employees.json "who works in engineering?"

Configuration override::

    from nlsearch import NLSearch, NLSearchConfig

    client = NLSearch(config=NLSearchConfig(min_score=0.5, analyzer="simple"))
"""

__version__ = "1.0.0"

# Primary public API — the NLSearch facade
from nlsearch.client import NLSearch, load_json, loads_json, search

# Configuration
from nlsearch.core.config import NLSearchConfig, SearchOptions

# Core data types that callers interact with
from nlsearch.core.analysis import TextAnalyzer
from nlsearch.core.engine import NodeKind, SearchResult

# Exception hierarchy
from nlsearch.exceptions import (
    ConfigError,
    DataLoadError,
    NLSearchError,
    SearchError,
)


def health(config: NLSearchConfig | None = None) -> dict:
    """
    Return a small status dict for agents or health checks.

    When *config* is None, uses :meth:`NLSearchConfig.from_env()` for the snapshot.
    """
    cfg = config or NLSearchConfig.from_env()
    return {
        "version": __version__,
        "analyzer": cfg.analyzer,
        "min_score": cfg.min_score,
    }


__all__ = [
    "__version__",
    # Facade
    "NLSearch",
    "search",
    "load_json",
    "loads_json",
    # Config
    "NLSearchConfig",
    "SearchOptions",
    # Data types
    "NodeKind",
    "SearchResult",
    "TextAnalyzer",
    # Exceptions
    "NLSearchError",
    "ConfigError",
    "DataLoadError",
    "SearchError",
    # Status
    "health",
]
