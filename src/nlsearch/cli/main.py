"""
nlsearch CLI

Command-line interface for searching JSON documents.

Usage::

    nlsearch search data.json "who works in engineering?"
    cat data.json | nlsearch search - "laptops in stock" -f json
    nlsearch mcp                       # Start the MCP server
"""

import logging
import time

import click

from nlsearch.core.config import NLSearchConfig
from nlsearch.core.search import ResultFormatter, TreeSearchEngine
from nlsearch.exceptions import NLSearchError


# ---------------------------------------------------------------------------
# Logging helpers
# ---------------------------------------------------------------------------

def _configure_logging(config: NLSearchConfig, verbose: bool) -> None:
    """Set up logging for the CLI session."""
    level = logging.DEBUG if verbose else getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=config.log_format)


# ---------------------------------------------------------------------------
# Top-level group
# ---------------------------------------------------------------------------

@click.group()
@click.version_option(package_name="nlsearch")
@click.option(
    "--analyzer",
    type=click.Choice(["porter", "simple"]),
    default=None,
    envvar="NLSEARCH_ANALYZER",
    help="Text analyzer override (default: $NLSEARCH_ANALYZER or 'porter').",
)
@click.pass_context
def cli(ctx: click.Context, analyzer: str | None):
    """nlsearch — natural-language search over JSON data."""
    ctx.ensure_object(dict)
    config = NLSearchConfig.from_env()
    if analyzer:
        config.analyzer = analyzer
    ctx.obj["config"] = config


# ---------------------------------------------------------------------------
# nlsearch search
# ---------------------------------------------------------------------------

@cli.command()
@click.argument("source", type=click.Path(allow_dash=True))
@click.argument("query")
@click.option("--min-score", type=float, default=None,
              help="Minimum relevance score (default: 0.3).")
@click.option("-n", "--max-results", type=int, default=None,
              help="Maximum number of results.")
@click.option("--no-keys", is_flag=True, help="Do not match against object keys.")
@click.option("--case-sensitive", is_flag=True, help="Match case exactly (disables stemming).")
@click.option("-f", "--format", "fmt",
              type=click.Choice(["console", "json", "compact"]),
              default="console", help="Output format.")
@click.option("--explain", is_flag=True, help="Show the per-signal scoring breakdown.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def search(ctx: click.Context, source: str, query: str, min_score: float | None,
           max_results: int | None, no_keys: bool, case_sensitive: bool,
           fmt: str, explain: bool, verbose: bool):
    """Search the JSON document SOURCE (a path, or - for stdin) for QUERY."""
    config: NLSearchConfig = ctx.obj["config"]
    _configure_logging(config, verbose)

    from nlsearch.client import load_json  # noqa: E402

    try:
        config.validate()
        data = load_json(source)
        engine = TreeSearchEngine(config=config)
        t0 = time.perf_counter()
        results = engine.search(
            data,
            query,
            min_score=min_score,
            max_results=max_results,
            search_keys=False if no_keys else None,
            case_sensitive=True if case_sensitive else None,
            explain=explain,
        )
    except NLSearchError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1)
    elapsed = time.perf_counter() - t0

    formatter = ResultFormatter()
    if fmt == "json":
        click.echo(formatter.format_json(results))
    elif fmt == "compact":
        click.echo(formatter.format_compact(results))
    else:
        click.echo(formatter.format_console(results, elapsed_time=elapsed))


# ---------------------------------------------------------------------------
# nlsearch mcp
# ---------------------------------------------------------------------------

@cli.command()
@click.option("--transport", type=click.Choice(["stdio", "sse", "streamable-http"]),
              default="stdio", help="MCP transport (default: stdio).")
@click.option("-v", "--verbose", is_flag=True)
@click.pass_context
def mcp(ctx: click.Context, transport: str, verbose: bool):
    """Start the nlsearch MCP server so AI agents can search JSON documents."""
    config: NLSearchConfig = ctx.obj["config"]
    _configure_logging(config, verbose)
    try:
        from nlsearch.mcp.server import create_server  # noqa: E402
    except ImportError:
        click.echo(
            "Error: MCP dependencies not installed.\n"
            "Install with:  pip install 'nlsearch[mcp]'",
            err=True,
        )
        raise SystemExit(1)

    server = create_server(config)
    server.run(transport=transport)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    cli()
