"""
nlsearch Core Engine

Data models, text extraction and relevance scoring for natural-language
search over JSON-like trees.

A node's searchable text is its whole subtree flattened into one string.
Each node is scored against the query with four signals:

- exact substring hit of the whole query
- whole-string similarity (Jaro-Winkler class)
- token overlap of stemmed query tokens
- Dice coefficient over the two token sets
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from nlsearch.core.analysis import TextAnalyzer
from nlsearch.core.config import SearchOptions

logger = logging.getLogger(__name__)

MAX_EXTRACT_DEPTH = 50

# [exact, similarity, token_overlap, dice]
EXACT_MATCH_WEIGHTS = (0.4, 0.2, 0.3, 0.1)
# [similarity, token_overlap, dice]
PARTIAL_MATCH_WEIGHTS = (0.3, 0.4, 0.3)


# =============================================================================
# Data Models
# =============================================================================

class NodeKind(Enum):
    """Tag for the kinds of value a tree node can hold."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def classify_node(node: Any) -> NodeKind:
    """Return the :class:`NodeKind` of *node*.

    Values of unsupported types are treated as ``NULL`` and skipped.
    """
    if node is None:
        return NodeKind.NULL
    # bool before int: bool is an int subclass
    if isinstance(node, bool):
        return NodeKind.BOOLEAN
    if isinstance(node, (int, float)):
        return NodeKind.NUMBER
    if isinstance(node, str):
        return NodeKind.STRING
    if isinstance(node, (list, tuple)):
        return NodeKind.ARRAY
    if isinstance(node, Mapping):
        return NodeKind.OBJECT
    return NodeKind.NULL


def render_scalar(node: Any) -> str:
    """Canonical text for a boolean or number (``true``, ``30``, ``1.5``)."""
    return json.dumps(node)


@dataclass(frozen=True)
class QueryState:
    """The query as prepared once per search call."""

    raw: str
    normalized: str
    tokens: Tuple[str, ...]
    stemmed: Tuple[str, ...]
    """Stemmed tokens; equal to :attr:`tokens` for case-sensitive search."""


def build_query_state(query: str, case_sensitive: bool, analyzer: TextAnalyzer) -> QueryState:
    """Normalize, tokenize and (case-insensitive only) stem *query*."""
    normalized = query if case_sensitive else query.lower()
    tokens = tuple(analyzer.tokenize(normalized))
    stemmed = tokens if case_sensitive else tuple(analyzer.stem(t) for t in tokens)
    return QueryState(raw=query, normalized=normalized, tokens=tokens, stemmed=stemmed)


@dataclass
class SearchResult:
    """A matching node with its location in the tree.

    ``path[i]`` is the segment (key or ``"[index]"``) leading out of
    ``parents[i]``; ``parents[-1]`` is the node's immediate parent.
    """
    node: Any
    path: List[str]
    parents: List[Any]
    score: float
    explanation: Optional[dict] = None
    """Optional per-signal breakdown (when explain=True)."""

    def __lt__(self, other):
        return self.score > other.score  # Higher score = better

    @property
    def depth(self) -> int:
        return len(self.path)

    @property
    def path_string(self) -> str:
        """Dotted path, e.g. ``departments[0].teams[1].name``."""
        out = ""
        for segment in self.path:
            if segment.startswith("[") and segment.endswith("]"):
                out += segment
            else:
                out += f".{segment}" if out else segment
        return out

    def to_dict(self) -> dict:
        """Return a dict for API/agent pipelines.

        Ancestors are omitted and ``node`` is returned as is, not copied.
        """
        return {
            "node": self.node,
            "path": list(self.path),
            "path_string": self.path_string,
            "score": self.score,
            "depth": self.depth,
            "explanation": self.explanation,
        }


# =============================================================================
# Text Extraction
# =============================================================================

def extract_text(
    node: Any,
    search_keys: bool,
    case_sensitive: bool,
    depth: int = 0,
    max_depth: int = MAX_EXTRACT_DEPTH,
) -> str:
    """
    Flatten *node* and its subtree into one searchable string.

    Only the keys of an object reached directly (or through arrays) are
    included when *search_keys* is set; values below an object are always
    extracted without their keys.  Subtrees nested deeper than *max_depth*
    contribute nothing.  *case_sensitive* is accepted for symmetry with the
    scorer; normalization happens after extraction.
    """
    if depth > max_depth:
        return ""

    kind = classify_node(node)
    if kind is NodeKind.STRING:
        return node
    if kind in (NodeKind.NUMBER, NodeKind.BOOLEAN):
        return render_scalar(node)

    parts: List[str] = []
    if kind is NodeKind.ARRAY:
        for item in node:
            text = extract_text(item, search_keys, case_sensitive, depth + 1, max_depth)
            if text:
                parts.append(text)
    elif kind is NodeKind.OBJECT:
        for key, value in node.items():
            if search_keys:
                parts.append(str(key))
            text = extract_text(value, False, case_sensitive, depth + 1, max_depth)
            if text:
                parts.append(text)
    return " ".join(parts)


# =============================================================================
# Scoring Signals
# =============================================================================

def token_overlap(query_tokens: Sequence[str], content_tokens: Sequence[str]) -> float:
    """Fraction of query tokens that occur anywhere in *content_tokens*."""
    if not query_tokens:
        return 0.0
    content = set(content_tokens)
    matched = sum(1 for token in query_tokens if token in content)
    return matched / len(query_tokens)


def dice_coefficient(tokens1: Sequence[str], tokens2: Sequence[str]) -> float:
    """Dice coefficient ``2|A∩B| / (|A|+|B|)`` over the two token sets."""
    if not tokens1 or not tokens2:
        return 0.0
    set1 = set(tokens1)
    set2 = set(tokens2)
    return 2 * len(set1 & set2) / (len(set1) + len(set2))


def calculate_relevance(
    node: Any,
    query: QueryState,
    options: SearchOptions,
    analyzer: TextAnalyzer,
    max_depth: int = MAX_EXTRACT_DEPTH,
    explain: bool = False,
) -> float | tuple[float, dict]:
    """
    Calculate the relevance score of *node* for *query*.

    With an exact substring hit the signals are weighted
    ``[exact .4, similarity .2, overlap .3, dice .1]``; without one the
    remaining three are weighted ``[similarity .3, overlap .4, dice .3]``.

    Args:
        explain: If True, return (score, explanation_dict) with breakdown.
    """
    text = extract_text(node, options.search_keys, options.case_sensitive, max_depth=max_depth)
    if not text:
        if explain:
            return 0.0, {"empty": True}
        return 0.0

    content = text if options.case_sensitive else text.lower()

    # An empty query is a substring of everything; it never counts as a hit.
    exact = bool(query.normalized) and query.normalized in content
    similarity = analyzer.similarity(query.normalized, content)

    content_tokens = analyzer.tokenize(content)
    if not options.case_sensitive:
        content_tokens = [analyzer.stem(t) for t in content_tokens]

    overlap = token_overlap(query.stemmed, content_tokens)
    dice = dice_coefficient(query.stemmed, content_tokens)

    if exact:
        w_exact, w_sim, w_overlap, w_dice = EXACT_MATCH_WEIGHTS
        score = w_exact + similarity * w_sim + overlap * w_overlap + dice * w_dice
    else:
        w_sim, w_overlap, w_dice = PARTIAL_MATCH_WEIGHTS
        score = similarity * w_sim + overlap * w_overlap + dice * w_dice

    if explain:
        explanation: Dict[str, Any] = {
            "exact_match": exact,
            "similarity": round(similarity, 4),
            "token_overlap": round(overlap, 4),
            "dice": round(dice, 4),
        }
        return score, explanation
    return score
