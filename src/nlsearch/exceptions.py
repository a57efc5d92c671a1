"""
nlsearch Exception Hierarchy

The search core itself is total: null nodes, empty data, empty queries and
odd option values never raise.  These exceptions cover the edges only
(configuration, loading JSON input, analyzer failures) so that CLI, API
and MCP consumers can handle them precisely.

Usage::

    from nlsearch.exceptions import NLSearchError, DataLoadError

    try:
        data = load_json("catalog.json")
    except DataLoadError as exc:
        print(f"Cannot read input: {exc}")
"""


class NLSearchError(Exception):
    """Base exception for all nlsearch errors."""


class ConfigError(NLSearchError, ValueError):
    """Configuration is invalid (unknown analyzer, bad depth, bad log level).

    Inherits from ``ValueError`` so callers catching ``ValueError`` from
    ``NLSearchConfig.validate()`` keep working.
    """


class DataLoadError(NLSearchError, ValueError):
    """Input data could not be read or is not valid JSON."""


class SearchError(NLSearchError):
    """A search was called with a query that is not a string."""
