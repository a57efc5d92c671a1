"""
nlsearch MCP Server

Exposes natural-language JSON search as tools that AI agents (Claude,
Cursor, Windsurf) can invoke natively via the Model Context Protocol.

Start with::

    nlsearch mcp                              # stdio transport (default for Cursor)
    nlsearch mcp --transport streamable-http  # HTTP (Streamable)

Or programmatically::

    from nlsearch.mcp.server import create_server
    server = create_server()
    server.run()
"""

from __future__ import annotations

import json
import logging
from typing import Annotated

# FastMCP uses pydantic for validation, so Field should be available
# If ImportError occurs, it indicates the [mcp] extra wasn't installed
from pydantic import Field  # type: ignore[import-untyped]

from nlsearch.client import load_json, loads_json
from nlsearch.core.config import NLSearchConfig
from nlsearch.core.search import ResultFormatter, TreeSearchEngine

logger = logging.getLogger(__name__)


def run_search_json(
    engine: TreeSearchEngine,
    query: str,
    data: str | None = None,
    file_path: str | None = None,
    **options,
) -> str:
    """Load the document from *data* (a JSON string) or *file_path*, search it, return JSON."""
    if data is not None:
        tree = loads_json(data, source="data")
    elif file_path:
        tree = load_json(file_path)
    else:
        raise ValueError("Provide either 'data' (a JSON string) or 'file_path'.")

    results = engine.search(tree, query, **options)
    logger.info(f"search_json: '{query}' → {len(results)} result(s)")
    return ResultFormatter.format_json(results)


def create_server(config: NLSearchConfig | None = None):
    """
    Build and return a configured FastMCP server instance.

    All tool invocations share one config and one search engine; the
    engine keeps no state between calls.

    Args:
        config: Instance-based configuration.  Defaults to
            ``NLSearchConfig.from_env()`` so that the server respects
            the same environment variables as the CLI.

    Raises ``ImportError`` if ``fastmcp`` is not installed (install
    via ``pip install 'nlsearch[mcp]'``).
    """
    from fastmcp import FastMCP  # type: ignore[import-untyped]

    from nlsearch import __version__

    cfg = config or NLSearchConfig.from_env()
    engine = TreeSearchEngine(config=cfg)

    mcp = FastMCP("nlsearch")

    # ==================================================================
    # Tool: search_json
    # ==================================================================

    @mcp.tool()
    def search_json(
        query: Annotated[
            str,
            Field(description="Natural-language query, e.g. 'projects that are in progress'.")
        ],
        data: Annotated[
            str | None,
            Field(default=None, description="The JSON document to search, as a JSON string. Provide either this or file_path.")
        ] = None,
        file_path: Annotated[
            str | None,
            Field(default=None, description="Path to a JSON file to search. Used when data is not given.")
        ] = None,
        min_score: Annotated[
            float | None,
            Field(default=None, description="Minimum relevance score in [0, 1]. Defaults to 0.3.")
        ] = None,
        max_results: Annotated[
            int | None,
            Field(default=None, description="Maximum number of results. Defaults to all matches; 10-20 is usually enough.")
        ] = None,
        search_keys: Annotated[
            bool | None,
            Field(default=None, description="Also match object keys (field names). Defaults to True.")
        ] = None,
        case_sensitive: Annotated[
            bool | None,
            Field(default=None, description="Match case exactly. Defaults to False.")
        ] = None,
    ) -> str:
        """Search a JSON document for the nodes most relevant to a natural-language query.

        Returns a JSON list of matches ranked by score, each with its path
        (e.g. 'users[0].name'), the matched node, and its score.
        """
        return run_search_json(
            engine,
            query,
            data=data,
            file_path=file_path,
            min_score=min_score,
            max_results=max_results,
            search_keys=search_keys,
            case_sensitive=case_sensitive,
        )

    # ==================================================================
    # Tool: health (readiness check)
    # ==================================================================

    @mcp.tool()
    def health() -> str:
        """Check that the nlsearch MCP server is running and responsive.

        Returns:
            JSON with status, version and analyzer information.
        """
        return json.dumps({
            "status": "ok",
            "version": __version__,
            "analyzer": engine.analyzer.name,
        })

    return mcp
