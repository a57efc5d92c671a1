"""
nlsearch Search Engine

Tree traversal, ranking and result formatting.

The engine walks the whole tree in pre-order, scores every non-null node
with :func:`~nlsearch.core.engine.calculate_relevance`, keeps the nodes
that clear ``min_score`` and returns them ranked by score.  Output helpers
render results for the console, JSON pipelines and grep-like listings.
"""

import json
import logging
import time
from typing import Any, List, Mapping, Optional

from nlsearch.core.analysis import TextAnalyzer, create_analyzer
from nlsearch.core.config import NLSearchConfig, SearchOptions
from nlsearch.core.engine import (
    NodeKind,
    QueryState,
    SearchResult,
    build_query_state,
    calculate_relevance,
    classify_node,
    extract_text,
)
from nlsearch.exceptions import ConfigError, SearchError

logger = logging.getLogger(__name__)


def rank_results(results: List[SearchResult], max_results: Optional[int] = None) -> List[SearchResult]:
    """
    Sort *results* by score (descending) and truncate to *max_results*.

    The sort is stable, so equal scores keep traversal order.  ``None``
    means no cap; a negative cap yields an empty list.
    """
    ranked = sorted(results)
    if max_results is None:
        return ranked
    return ranked[:max(int(max_results), 0)]


# =============================================================================
# Search Engine
# =============================================================================

class TreeSearchEngine:
    """
    Relevance search over a single in-memory JSON-like tree.

    The engine holds only its configuration and analyzer; every call to
    :meth:`search` builds its own query state and result buffer, so one
    engine can serve any number of calls (and threads) over read-only data.
    """

    def __init__(
        self,
        config: NLSearchConfig | None = None,
        analyzer: TextAnalyzer | None = None,
    ):
        self._config = config or NLSearchConfig.from_env()
        if analyzer is not None and not isinstance(analyzer, TextAnalyzer):
            raise ConfigError(
                f"analyzer must be a TextAnalyzer instance, got {type(analyzer).__name__}; "
                "select a registered analyzer by name through config.analyzer"
            )
        self._analyzer = analyzer or create_analyzer(self._config.analyzer)

    @property
    def config(self) -> NLSearchConfig:
        return self._config

    @property
    def analyzer(self) -> TextAnalyzer:
        return self._analyzer

    # ── Public API ────────────────────────────────────────────────

    def search(
        self,
        data: Any,
        query: str,
        options: SearchOptions | Mapping[str, Any] | None = None,
        explain: bool = False,
        **overrides: Any,
    ) -> List[SearchResult]:
        """
        Search *data* for nodes relevant to *query*.

        Args:
            data: The tree to search (mapping, sequence or scalar).
            query: Free-text query.
            options: :class:`SearchOptions` or a mapping of option names
                (snake_case or camelCase).  Missing or ``None`` values fall
                back to the config defaults.
            explain: Attach a per-signal scoring breakdown to each result.
            **overrides: Individual options, e.g. ``min_score=0.5``.

        Returns:
            Ranked list of search results (possibly empty).

        Raises:
            SearchError: If *query* is not a string.
        """
        if not isinstance(query, str):
            raise SearchError(f"query must be a string, got {type(query).__name__}")

        opts = SearchOptions.resolve(options, self._config.default_options(), **overrides)
        state = build_query_state(query, opts.case_sensitive, self._analyzer)
        logger.debug(f"Query: '{query}' → tokens: {list(state.stemmed)}")

        t0 = time.perf_counter()
        walk = _Walk(opts, state, explain)
        self._traverse(data, [], [], walk)

        if walk.depth_limited:
            logger.warning(
                f"Tree deeper than {self._config.max_traverse_depth} levels; "
                f"{walk.depth_limited} subtree(s) were not visited"
            )
        if walk.cycles:
            logger.warning(f"Skipped {walk.cycles} cyclic reference(s) while searching")

        ranked = rank_results(walk.results, opts.max_results)
        logger.debug(
            f"Visited {walk.visited} node(s), {len(walk.results)} match(es), "
            f"returning {len(ranked)} in {time.perf_counter() - t0:.4f}s"
        )
        return ranked

    # ── Traversal ─────────────────────────────────────────────────

    def _traverse(self, node: Any, path: List[str], parents: List[Any], walk: "_Walk") -> None:
        """Pre-order walk: score *node*, then recurse into its children."""
        kind = classify_node(node)
        if kind is NodeKind.NULL:
            return
        walk.visited += 1

        if walk.explain:
            score, explanation = calculate_relevance(
                node, walk.query, walk.options, self._analyzer,
                max_depth=self._config.max_extract_depth, explain=True,
            )
        else:
            score = calculate_relevance(
                node, walk.query, walk.options, self._analyzer,
                max_depth=self._config.max_extract_depth,
            )
            explanation = None

        if score >= walk.options.min_score:
            walk.results.append(SearchResult(
                node=node,
                path=list(path),
                parents=list(parents),
                score=score,
                explanation=explanation,
            ))

        if kind not in (NodeKind.ARRAY, NodeKind.OBJECT):
            return

        if len(path) >= self._config.max_traverse_depth:
            walk.depth_limited += 1
            return
        if any(parent is node for parent in parents):
            walk.cycles += 1
            return

        parents.append(node)
        if kind is NodeKind.ARRAY:
            children = ((f"[{index}]", item) for index, item in enumerate(node))
        else:
            children = ((str(key), value) for key, value in node.items())
        for segment, child in children:
            path.append(segment)
            self._traverse(child, path, parents, walk)
            path.pop()
        parents.pop()


class _Walk:
    """Mutable per-call state threaded through one traversal."""

    __slots__ = ("options", "query", "explain", "results", "visited", "depth_limited", "cycles")

    def __init__(self, options: SearchOptions, query: QueryState, explain: bool):
        self.options = options
        self.query = query
        self.explain = explain
        self.results: List[SearchResult] = []
        self.visited = 0
        self.depth_limited = 0
        self.cycles = 0


# =============================================================================
# Result Formatting
# =============================================================================

class ResultFormatter:
    """Format search results for different output modes."""

    # ── Helpers ───────────────────────────────────────────────────

    @staticmethod
    def _preview(node: Any, width: int) -> str:
        """One-line preview of a node, truncated to *width* characters."""
        if isinstance(node, str):
            text = node
        else:
            try:
                text = json.dumps(node, ensure_ascii=False, default=str)
            except ValueError:
                # circular reference
                text = extract_text(node, True, True)
        text = " ".join(text.split())
        if len(text) > width:
            text = text[: max(width - 1, 0)] + "…"
        return text

    @staticmethod
    def _display_path(result: SearchResult) -> str:
        return result.path_string or "(root)"

    # ── Console (human-friendly) ──────────────────────────────────

    @staticmethod
    def format_console(results: List[SearchResult], elapsed_time: float | None = None) -> str:
        """
        Console output: a header with the result count (and optional
        timing), then one block per result with its path, score and a
        preview of the matched node.
        """
        if not results:
            return "\n  No results found.\n"

        import shutil
        width = min(shutil.get_terminal_size().columns, 78)
        thin = "─" * width

        header = f"  NLSEARCH — {len(results)} result{'s' if len(results) != 1 else ''}"
        if elapsed_time is not None:
            timing_str = f"{elapsed_time:.4f}".replace(',', '.')
            header += f" in {timing_str} seconds"

        out: List[str] = []
        out.append(f"\n{thin}")
        out.append(header)
        out.append(thin)

        for idx, r in enumerate(results, start=1):
            out.append("")
            out.append(f"  #{idx}  {ResultFormatter._display_path(r)}")
            out.append(f"  {'─' * (width - 2)}")
            out.append(f"    Score  : {r.score:.3f}")
            out.append(f"    Depth  : {r.depth}")
            out.append(f"    Node   : {ResultFormatter._preview(r.node, width - 13)}")
            if r.explanation:
                e = r.explanation
                if e.get("empty"):
                    out.append("    Explain: (no text)")
                else:
                    out.append(
                        f"    Explain: exact={'yes' if e['exact_match'] else 'no'} "
                        f"sim={e['similarity']:.2f} overlap={e['token_overlap']:.2f} "
                        f"dice={e['dice']:.2f}"
                    )

        out.append(f"\n{thin}")
        return "\n".join(out)

    # ── JSON ──────────────────────────────────────────────────────

    @staticmethod
    def format_json(results: List[SearchResult], include_parents: bool = False) -> str:
        """Format results as JSON.

        Parents are omitted by default because every ancestor repeats the
        whole subtree; pass *include_parents* to emit them anyway.
        """
        def _to_obj(r: SearchResult) -> dict:
            obj = {
                "path": r.path,
                "path_string": r.path_string,
                "score": round(r.score, 4),
                "node": r.node,
            }
            if include_parents:
                obj["parents"] = r.parents
            if r.explanation:
                obj["explanation"] = r.explanation
            return obj

        return json.dumps([_to_obj(r) for r in results], indent=2, ensure_ascii=False, default=str)

    # ── Compact (grep-like, one line per result) ──────────────────

    @staticmethod
    def format_compact(results: List[SearchResult]) -> str:
        """One line per result: ``score  path  preview``."""
        if not results:
            return "No results found."

        lines: List[str] = []
        for r in results:
            lines.append(
                f"{r.score:.3f}  {ResultFormatter._display_path(r)}  "
                f"{ResultFormatter._preview(r.node, 60)}"
            )
        return "\n".join(lines)
