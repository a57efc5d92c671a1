"""
Text analysis capabilities used by the relevance scorer.

The scorer only ever talks to a :class:`TextAnalyzer` through three
operations: ``tokenize``, ``stem`` and ``similarity``.  Concrete analyzers
are registered by name so configuration can pick one without the rest of
the codebase importing a specific NLP library.
"""

import logging
import re
from typing import Dict, List

import jellyfish
from nltk.stem import PorterStemmer

logger = logging.getLogger(__name__)

# Word characters, allowing inner apostrophes and dots ("don't", "node.js",
# "1.5").  Underscores split, so snake_case keys yield their parts.
_WORD_RE = re.compile(r"[^\W_]+(?:['.][^\W_]+)*", re.UNICODE)


class TextAnalyzer:
    """
    Abstract base for text analyzers.

    Implementations must be deterministic and side-effect free, and
    :meth:`similarity` must stay within ``[0, 1]``.
    """

    name = "base"

    def tokenize(self, text: str) -> List[str]:
        """Split *text* into word tokens with punctuation stripped."""
        raise NotImplementedError

    def stem(self, token: str) -> str:
        """Reduce *token* to its canonical root form."""
        raise NotImplementedError

    def similarity(self, a: str, b: str) -> float:
        """Whole-string similarity of *a* and *b* in ``[0, 1]``."""
        raise NotImplementedError


class PorterAnalyzer(TextAnalyzer):
    """Regex tokenizer, Porter stemming (``nltk``) and Jaro-Winkler similarity (``jellyfish``)."""

    name = "porter"

    def __init__(self):
        self._stemmer = PorterStemmer()

    def tokenize(self, text: str) -> List[str]:
        return _WORD_RE.findall(text)

    def stem(self, token: str) -> str:
        return self._stemmer.stem(token)

    def similarity(self, a: str, b: str) -> float:
        if not a or not b:
            return 0.0
        return jellyfish.jaro_winkler_similarity(a, b)


class SimpleAnalyzer(PorterAnalyzer):
    """Like :class:`PorterAnalyzer` but tokens are only case-folded, never stemmed."""

    name = "simple"

    def stem(self, token: str) -> str:
        return token.lower()


# Analyzer registry — maps config name → class
ANALYZER_REGISTRY: Dict[str, type] = {
    "porter": PorterAnalyzer,
    "simple": SimpleAnalyzer,
}


def create_analyzer(name: str = "porter") -> TextAnalyzer:
    """
    Factory that instantiates the analyzer registered under *name*.

    Raises :class:`~nlsearch.exceptions.ConfigError` for unknown names.
    """
    from nlsearch.exceptions import ConfigError

    key = (name or "porter").lower()
    if key not in ANALYZER_REGISTRY:
        raise ConfigError(
            f"Unknown analyzer '{name}'. "
            f"Supported: {', '.join(ANALYZER_REGISTRY)}"
        )
    logger.debug(f"Using text analyzer '{key}'")
    return ANALYZER_REGISTRY[key]()
