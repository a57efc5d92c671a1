"""
nlsearch Core — configuration, text analysis, scoring, and traversal.

Re-exports the primary classes for convenience::

    from nlsearch.core import TreeSearchEngine, extract_text
"""

from nlsearch.core.analysis import (
    ANALYZER_REGISTRY,
    PorterAnalyzer,
    SimpleAnalyzer,
    TextAnalyzer,
    create_analyzer,
)
from nlsearch.core.config import NLSearchConfig, SearchOptions
from nlsearch.core.engine import (
    NodeKind,
    QueryState,
    SearchResult,
    build_query_state,
    calculate_relevance,
    classify_node,
    dice_coefficient,
    extract_text,
    token_overlap,
)
from nlsearch.core.search import ResultFormatter, TreeSearchEngine, rank_results

__all__ = [
    "ANALYZER_REGISTRY",
    "PorterAnalyzer",
    "SimpleAnalyzer",
    "TextAnalyzer",
    "create_analyzer",
    "NLSearchConfig",
    "SearchOptions",
    "NodeKind",
    "QueryState",
    "SearchResult",
    "build_query_state",
    "calculate_relevance",
    "classify_node",
    "dice_coefficient",
    "extract_text",
    "token_overlap",
    "ResultFormatter",
    "TreeSearchEngine",
    "rank_results",
]
