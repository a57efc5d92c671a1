"""
Tests for the nlsearch client API (nlsearch.client.NLSearch).

Covers the public facade: search() in instance and module form, the async
variant, config construction, analyzer injection, JSON loading and health.
"""

import pytest

import nlsearch
from nlsearch import (
    DataLoadError,
    NLSearch,
    NLSearchConfig,
    TextAnalyzer,
    load_json,
    loads_json,
    search,
)
from nlsearch.exceptions import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Module-level search() reads NLSEARCH_* variables; keep them unset."""
    for name in ("NLSEARCH_MIN_SCORE", "NLSEARCH_MAX_RESULTS", "NLSEARCH_SEARCH_KEYS",
                 "NLSEARCH_CASE_SENSITIVE", "NLSEARCH_ANALYZER", "NLSEARCH_MAX_DEPTH"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def client(config):
    return NLSearch(config=config)


class WhitespaceAnalyzer(TextAnalyzer):
    """Test analyzer: split on spaces, no stemming, no character similarity."""

    name = "whitespace"

    def __init__(self):
        self.calls = 0

    def tokenize(self, text):
        self.calls += 1
        return text.split()

    def stem(self, token):
        return token

    def similarity(self, a, b):
        return 0.0


# =============================================================================
# Construction
# =============================================================================


class TestNLSearchConstruction:

    def test_construct_with_explicit_config(self, config):
        client = NLSearch(config=config)
        assert client.config is config

    def test_construct_from_kwargs_overrides_env(self):
        client = NLSearch(min_score=0.5, analyzer="simple")
        assert client.config.min_score == 0.5
        assert client.config.analyzer == "simple"

    def test_analyzer_keyword_selects_registered_analyzer_by_name(self, users):
        client = NLSearch(analyzer="simple")
        assert client.health()["analyzer"] == "simple"
        results = client.search(users, "alice")
        assert any(r.node == "Alice" for r in results)

    def test_validate_on_init(self):
        with pytest.raises(ConfigError):
            NLSearch(config=NLSearchConfig(analyzer="nope"), validate_on_init=True)

    def test_unknown_analyzer_fails_without_validation(self):
        with pytest.raises(ConfigError):
            NLSearch(config=NLSearchConfig(analyzer="nope"))


# =============================================================================
# search()
# =============================================================================


class TestSearch:

    def test_instance_and_module_forms_agree(self, client, employees):
        a = client.search(employees, "machine learning and data science")
        b = search(employees, "machine learning and data science")
        assert [(r.path, r.score) for r in a] == [(r.path, r.score) for r in b]

    def test_module_search_returns_result_fields(self):
        data = [{"id": 1, "text": "Hello world"}, {"id": 2, "text": "Goodbye world"}]
        results = search(data, "hello")
        assert results
        top = results[0]
        assert top.node == "Hello world"
        assert top.path == ["[0]", "text"]
        assert top.parents == [data, data[0]]
        assert 0.0 <= top.score <= 1.0 + 1e-9

    def test_options_as_keywords(self, client, users):
        assert len(client.search(users, "new york", max_results=1)) == 1

    def test_options_as_mapping(self, client, users):
        lenient = client.search(users, "user from new york", {"minScore": 0.1})
        strict = client.search(users, "user from new york", {"minScore": 0.5})
        assert len(lenient) >= len(strict)

    def test_explain_passthrough(self, client, users):
        results = client.search(users, "chicago", explain=True)
        assert results and results[0].explanation["exact_match"] is True

    def test_custom_analyzer_is_used(self, config):
        analyzer = WhitespaceAnalyzer()
        client = NLSearch(config=config, text_analyzer=analyzer)
        results = client.search({"city": "new york"}, "new york")
        assert analyzer.calls > 0
        assert any(r.node == "new york" for r in results)
        assert client.health()["analyzer"] == "whitespace"


# =============================================================================
# Async variant
# =============================================================================


class TestAsyncApi:

    @pytest.mark.asyncio
    async def test_asearch_returns_same_as_search(self, client, employees):
        sync_hits = client.search(employees, "data pipeline")
        async_hits = await client.asearch(employees, "data pipeline")
        assert [(r.path, r.score) for r in sync_hits] == [(r.path, r.score) for r in async_hits]

    @pytest.mark.asyncio
    async def test_asearch_passes_options(self, client, employees):
        hits = await client.asearch(employees, "engineering", max_results=1)
        assert len(hits) == 1


# =============================================================================
# JSON loading
# =============================================================================


class TestLoadJson:

    def test_load_file(self, json_file, users):
        assert load_json(json_file) == users

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataLoadError, match="Cannot read"):
            load_json(tmp_path / "missing.json")

    def test_invalid_json(self):
        with pytest.raises(DataLoadError, match="Invalid JSON"):
            loads_json("{not json")

    def test_data_load_error_is_value_error(self):
        with pytest.raises(ValueError):
            loads_json("[1,")


# =============================================================================
# Health
# =============================================================================


class TestHealth:

    def test_client_health(self, client):
        status = client.health()
        assert status["version"] == nlsearch.__version__
        assert status["analyzer"] == "porter"

    def test_package_health(self):
        status = nlsearch.health(NLSearchConfig(analyzer="simple"))
        assert status == {"version": nlsearch.__version__, "analyzer": "simple", "min_score": 0.3}
