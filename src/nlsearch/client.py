"""
nlsearch Client Facade

Single entry point for programmatic use.  Wraps the search engine behind
an instance-based API with an async variant, plus a module-level
:func:`search` for one-off calls.

Usage::

    from nlsearch import NLSearch, search

    # One-off
    hits = search(employees, "who works in engineering?", max_results=5)

    # Reusable instance with explicit configuration
    from nlsearch import NLSearchConfig
    client = NLSearch(config=NLSearchConfig(min_score=0.4))
    hits = client.search(catalog, "laptops in stock")
    for hit in hits:
        print(f"{hit.score:.2f}  {hit.path_string}")

    # Async variant (for FastAPI / aiohttp handlers)
    hits = await client.asearch(catalog, "laptops in stock")
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping

from nlsearch.core.analysis import TextAnalyzer
from nlsearch.core.config import NLSearchConfig, SearchOptions
from nlsearch.core.engine import SearchResult
from nlsearch.core.search import TreeSearchEngine
from nlsearch.exceptions import DataLoadError

logger = logging.getLogger(__name__)


class NLSearch:
    """
    High-level nlsearch client.

    Each instance carries its own :class:`NLSearchConfig` and holds no
    state between calls, so ``NLSearch().search(...)`` and the module-level
    :func:`search` behave identically.

    Args:
        config: Explicit configuration object.  When *None*, a config is
            built from environment variables plus keyword overrides.
        text_analyzer: Custom :class:`TextAnalyzer`; defaults to the one named
            by ``config.analyzer`` (the ``analyzer=`` keyword sets that name).
        validate_on_init: If True, call :meth:`NLSearchConfig.validate`
            right away so a bad analyzer name or depth limit surfaces
            before the first search.
        **kwargs: Forwarded to :class:`NLSearchConfig` when *config* is
            ``None`` (e.g. ``min_score=0.5``).
    """

    def __init__(
        self,
        config: NLSearchConfig | None = None,
        *,
        text_analyzer: TextAnalyzer | None = None,
        validate_on_init: bool = False,
        **kwargs,
    ):
        if config is not None:
            self._config = config
        elif kwargs:
            # Build a config from env, then overlay keyword overrides
            base = NLSearchConfig.from_env()
            merged = {
                f.name: kwargs.get(f.name, getattr(base, f.name))
                for f in base.__dataclass_fields__.values()
            }
            self._config = NLSearchConfig(**merged)
        else:
            self._config = NLSearchConfig.from_env()

        if validate_on_init:
            self._config.validate()

        self._engine = TreeSearchEngine(config=self._config, analyzer=text_analyzer)

    # ── Configuration ─────────────────────────────────────────────

    @property
    def config(self) -> NLSearchConfig:
        """The active configuration for this client."""
        return self._config

    # ── Search ────────────────────────────────────────────────────

    def search(
        self,
        data: Any,
        query: str,
        options: SearchOptions | Mapping[str, Any] | None = None,
        *,
        explain: bool = False,
        **overrides: Any,
    ) -> List[SearchResult]:
        """
        Search *data* for nodes relevant to *query*.

        Args:
            data: Tree to search: mappings, lists/tuples and scalars.
            query: Natural-language query.
            options: :class:`SearchOptions` or a mapping with any of
                ``min_score`` (0.3), ``max_results`` (unbounded),
                ``search_keys`` (True), ``case_sensitive`` (False).
                camelCase spellings are accepted too.
            explain: Attach a scoring breakdown to each result.
            **overrides: Individual options as keywords.

        Returns:
            Results ranked by score, highest first.
        """
        return self._engine.search(data, query, options, explain=explain, **overrides)

    async def asearch(
        self,
        data: Any,
        query: str,
        options: SearchOptions | Mapping[str, Any] | None = None,
        *,
        explain: bool = False,
        **overrides: Any,
    ) -> List[SearchResult]:
        """Async variant of :meth:`search`. Runs in a worker thread; same results and exceptions."""
        return await asyncio.to_thread(
            self.search, data, query, options, explain=explain, **overrides,
        )

    # ── Health (for agents / status endpoints) ─────────────────────

    def health(self) -> Dict[str, object]:
        """Return a small status dict for agents or readiness checks."""
        return {
            "version": __import__("nlsearch", fromlist=["__version__"]).__version__,
            "analyzer": self._engine.analyzer.name,
            "min_score": self._config.min_score,
        }


def search(
    data: Any,
    query: str,
    options: SearchOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> List[SearchResult]:
    """Search *data* without keeping a client around.  See :meth:`NLSearch.search`."""
    return NLSearch().search(data, query, options, **overrides)


def load_json(source: str | Path) -> Any:
    """
    Read a JSON document from a file path (``"-"`` reads stdin).

    Raises:
        DataLoadError: If the file cannot be read or is not valid JSON.
    """
    import sys

    try:
        if str(source) == "-":
            text = sys.stdin.read()
        else:
            text = Path(source).read_text(encoding="utf-8")
    except OSError as exc:
        raise DataLoadError(f"Cannot read {source}: {exc}") from exc
    return loads_json(text, source=str(source))


def loads_json(text: str, source: str = "<string>") -> Any:
    """Parse JSON *text*, raising :class:`DataLoadError` on invalid input."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"Invalid JSON in {source}: {exc}") from exc
