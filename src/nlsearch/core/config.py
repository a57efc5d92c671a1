"""
nlsearch Configuration Module

Centralized configuration for the nlsearch engine.  :class:`SearchOptions`
is the per-call option set (threshold, cap, key inclusion, case policy);
:class:`NLSearchConfig` carries the defaults those options fall back to plus
the ambient settings (analyzer, depth guards, logging).
"""

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)

# =============================================================================
# Per-call Search Options
# =============================================================================

# camelCase spellings accepted in option mappings (e.g. options decoded from
# a JSON request body).
_OPTION_ALIASES = {
    "minScore": "min_score",
    "maxResults": "max_results",
    "searchKeys": "search_keys",
    "caseSensitive": "case_sensitive",
}


@dataclass(frozen=True)
class SearchOptions:
    """
    Options for one search call.

    Values are taken verbatim: a ``min_score`` outside ``[0, 1]`` simply
    makes matching trivial or impossible, and a negative ``max_results``
    yields an empty result list.
    """

    min_score: float = 0.3
    """Minimum relevance score for a node to be reported."""
    max_results: Optional[int] = None
    """Result cap.  ``None`` means unbounded."""
    search_keys: bool = True
    """Include a visited object's own keys in its searchable text."""
    case_sensitive: bool = False
    """Match case exactly.  Disables stemming."""

    @classmethod
    def resolve(
        cls,
        options: "SearchOptions | Mapping[str, Any] | None" = None,
        defaults: "SearchOptions | None" = None,
        **overrides: Any,
    ) -> "SearchOptions":
        """
        Merge *options* and keyword *overrides* onto *defaults*.

        *options* may be a :class:`SearchOptions` or a mapping using either
        snake_case or camelCase keys.  ``None`` values fall back to the
        default, unknown keys are ignored.
        """
        base = defaults or cls()
        if isinstance(options, SearchOptions):
            base = options
            options = None

        raw: dict = {}
        if options:
            raw.update(options)
        raw.update(overrides)

        changes = {}
        for key, value in raw.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in cls.__dataclass_fields__:
                logger.debug(f"Ignoring unknown search option '{key}'")
                continue
            if value is None:
                continue
            changes[name] = value
        return replace(base, **changes) if changes else base


# =============================================================================
# Instance-Based Configuration
# =============================================================================

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


@dataclass
class NLSearchConfig:
    """
    Instance-based configuration for nlsearch.

    Each instance is self-contained and can be passed through the call
    stack, so several differently configured searchers can live side by
    side in one process.

    Create from environment variables::

        config = NLSearchConfig.from_env()

    Or with explicit values::

        config = NLSearchConfig(min_score=0.5, analyzer="simple")
    """

    # ── Search defaults ───────────────────────────────────────────
    min_score: float = 0.3
    max_results: Optional[int] = None
    search_keys: bool = True
    case_sensitive: bool = False

    # ── Text analysis ─────────────────────────────────────────────
    analyzer: str = "porter"
    """Name of the registered text analyzer (see ``nlsearch.core.analysis``)."""

    # ── Safety limits ─────────────────────────────────────────────
    max_extract_depth: int = 50
    """Nesting levels flattened into a node's text before the subtree is dropped."""
    max_traverse_depth: int = 500
    """Nesting levels the walker descends before it stops recursing."""

    # ── Logging ───────────────────────────────────────────────────
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # ── Factory ───────────────────────────────────────────────────

    @classmethod
    def from_env(cls) -> "NLSearchConfig":
        """Build a config snapshot from current environment variables."""
        max_results_raw = os.getenv("NLSEARCH_MAX_RESULTS", "").strip()
        return cls(
            min_score=float(os.getenv("NLSEARCH_MIN_SCORE", "0.3")),
            max_results=int(max_results_raw) if max_results_raw else None,
            search_keys=_env_bool("NLSEARCH_SEARCH_KEYS", True),
            case_sensitive=_env_bool("NLSEARCH_CASE_SENSITIVE", False),
            analyzer=os.getenv("NLSEARCH_ANALYZER", "porter").lower(),
            max_traverse_depth=int(os.getenv("NLSEARCH_MAX_DEPTH", "500")),
            log_level=os.getenv("NLSEARCH_LOG_LEVEL", "INFO").upper(),
        )

    # ── Validation & Accessors ────────────────────────────────────

    def validate(self) -> bool:
        """
        Check analyzer name, depth limits and log level.

        Raises :class:`~nlsearch.exceptions.ConfigError` on failure.
        Search defaults are deliberately not checked.
        """
        from nlsearch.core.analysis import ANALYZER_REGISTRY
        from nlsearch.exceptions import ConfigError

        if self.analyzer not in ANALYZER_REGISTRY:
            raise ConfigError(
                f"Unknown analyzer '{self.analyzer}'. "
                f"Supported: {', '.join(ANALYZER_REGISTRY)}.\n"
                "  Set via: export NLSEARCH_ANALYZER=porter"
            )
        if self.max_extract_depth <= 0:
            raise ConfigError(
                f"max_extract_depth must be positive, got {self.max_extract_depth}"
            )
        if self.max_traverse_depth <= 0:
            raise ConfigError(
                f"max_traverse_depth must be positive, got {self.max_traverse_depth}"
            )
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigError(
                f"Unknown log level '{self.log_level}'. "
                f"Supported: {', '.join(_LOG_LEVELS)}."
            )
        return True

    def default_options(self) -> SearchOptions:
        """Return the :class:`SearchOptions` implied by this config."""
        return SearchOptions(
            min_score=self.min_score,
            max_results=self.max_results,
            search_keys=self.search_keys,
            case_sensitive=self.case_sensitive,
        )
