from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest

from mapcatalog.adapters.http_resilience import (
    CacheConfig,
    _build_cache_components,  # type: ignore[reportPrivateUsage]
)
from mapcatalog.config import (
    DEFAULT_FILTER_QUERIES,
    ConfigurationError,
    MissingConfigurationError,
    ProxyConfig,
    get_ckan_config,
    get_proxy_config,
    get_storage_config,
    require_env_var,
    require_env_vars,
)
from mapcatalog.config.env import env_json_list, env_list

CKAN_ENV = (
    "CKAN_URL",
    "CKAN_FILTER_QUERIES",
    "CKAN_BLACKLIST",
    "CKAN_DATA_CUSTODIAN",
    "MAPCATALOG_PROXY_URL",
    "MAPCATALOG_PROXY_DOMAINS",
    "MAPCATALOG_ALWAYS_PROXY",
    "MAPCATALOG_HTTP_CACHE",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in CKAN_ENV:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    assert require_env_vars(["EXAMPLE_VAR"]) == {"EXAMPLE_VAR": "value"}


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError, match="EXAMPLE_VAR"):
        require_env_var("EXAMPLE_VAR")


def test_env_list_skips_blank_entries(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_LIST", "a, b,, c ")

    assert env_list("EXAMPLE_LIST") == ("a", "b", "c")


def test_env_json_list_rejects_non_lists(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_JSON", '{"fq": "res_format:wms"}')

    with pytest.raises(ConfigurationError):
        env_json_list("EXAMPLE_JSON")


def test_get_ckan_config_reads_environment(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("CKAN_URL", "http://ckan.example.org")
    clean_env.setenv("CKAN_FILTER_QUERIES", '["fq=res_format:wms", "fq=res_format:\\"Esri REST\\""]')
    clean_env.setenv("CKAN_BLACKLIST", "Secret,Internal")
    clean_env.setenv("CKAN_DATA_CUSTODIAN", "Data team")

    config = get_ckan_config()

    assert config.search.url == "http://ckan.example.org"
    assert config.search.filter_queries == ("fq=res_format:wms", 'fq=res_format:"Esri REST"')
    assert config.search.blacklist == frozenset({"Secret", "Internal"})
    assert config.search.data_custodian == "Data team"
    assert config.proxy is None


def test_get_ckan_config_defaults(clean_env: pytest.MonkeyPatch) -> None:
    config = get_ckan_config(url="http://ckan.example.org")

    assert config.search.filter_queries == DEFAULT_FILTER_QUERIES
    assert config.search.blacklist == frozenset()
    assert not config.search.filter_by_capabilities
    assert config.resilience.cache is not None
    assert config.resilience.cache.backend == "sqlite"


def test_get_ckan_config_requires_url(clean_env: pytest.MonkeyPatch) -> None:
    with pytest.raises(MissingConfigurationError, match="CKAN_URL"):
        get_ckan_config()


def test_get_ckan_config_rejects_non_positive_threshold(clean_env: pytest.MonkeyPatch) -> None:
    with pytest.raises(ConfigurationError):
        get_ckan_config(url="http://ckan", minimum_max_scale_denominator=0)


def test_explicit_empty_filter_queries_are_kept(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("CKAN_FILTER_QUERIES", '["fq=ignored"]')

    config = get_ckan_config(url="http://ckan", filter_queries=[])

    assert config.search.filter_queries == ()


def test_get_proxy_config(clean_env: pytest.MonkeyPatch) -> None:
    assert get_proxy_config() is None

    clean_env.setenv("MAPCATALOG_PROXY_URL", "/proxy/")
    clean_env.setenv("MAPCATALOG_PROXY_DOMAINS", "Example.org, gov.au")
    clean_env.setenv("MAPCATALOG_ALWAYS_PROXY", "true")

    assert get_proxy_config() == ProxyConfig(
        base_url="/proxy/",
        proxy_domains=frozenset({"example.org", "gov.au"}),
        always_proxy=True,
    )


def test_storage_prefers_explicit_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MAPCATALOG_DATA_DIR", str(tmp_path / "data"))

    storage = get_storage_config()
    cache_path = storage.http_cache_path()

    assert cache_path == (tmp_path / "data" / "http_cache.db").resolve()
    assert cache_path.parent.exists()


def test_get_ckan_config_rejects_invalid_url(clean_env: pytest.MonkeyPatch) -> None:
    with pytest.raises(ConfigurationError, match="CKAN url"):
        get_ckan_config(url="http://[ckan")


def test_http_cache_backend_from_env(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("MAPCATALOG_HTTP_CACHE", "off")
    assert get_ckan_config(url="http://ckan").resilience.cache is None

    clean_env.setenv("MAPCATALOG_HTTP_CACHE", "memory")
    cache = get_ckan_config(url="http://ckan").resilience.cache
    assert cache is not None
    assert cache.backend == "memory"

    assert get_ckan_config(url="http://ckan", cache_backend="off").resilience.cache is None


def test_http_cache_backend_rejects_unknown_value(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("MAPCATALOG_HTTP_CACHE", "redis")

    with pytest.raises(ConfigurationError, match="MAPCATALOG_HTTP_CACHE"):
        get_ckan_config(url="http://ckan")


def test_sqlite_cache_lives_in_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MAPCATALOG_DATA_DIR", str(tmp_path / "data"))

    storage, policy = _build_cache_components(CacheConfig(backend="sqlite"))

    assert storage is not None
    assert policy is None
    assert (tmp_path / "data").is_dir()
