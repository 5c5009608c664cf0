"""Tests for configuration loading."""

import os

import pytest

from git_author_stats.config import AuthorStatsConfig, load_config
from git_author_stats.exceptions import AuthorStatsError, InvalidConfigError
from git_author_stats.exclusions import ExclusionReason, classify


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's home and working directory configs out of the tests."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("GIT_AUTHOR_STATS_"):
            monkeypatch.delenv(key)


class TestAuthorStatsConfig:
    """Test defaults and validation."""

    def test_defaults(self):
        config = AuthorStatsConfig()
        assert config.start_year == 2016
        assert config.worker_limit == 16
        assert config.generated_prefixes == ("cache/",)
        assert config.imported_prefixes == ("xip/",)
        assert "bin" in config.binary_extensions
        assert "v" in config.generated_extensions

    @pytest.mark.parametrize(
        "field,value",
        [("worker_limit", 0), ("start_year", 1800), ("git_timeout_seconds", 0), ("verbosity", "loud")],
    )
    def test_invalid_values(self, field, value):
        with pytest.raises(InvalidConfigError):
            AuthorStatsConfig(**{field: value})

    def test_extensions_normalized(self):
        config = AuthorStatsConfig(binary_extensions=[".BIN", "zip"])
        assert config.binary_extensions == frozenset({"bin", "zip"})

    def test_exclusion_policy(self):
        config = AuthorStatsConfig(generated_prefixes=["out/"])
        policy = config.exclusion_policy
        assert classify("out/a.c", policy) == ExclusionReason.GENERATED
        assert classify("cache/a.c", policy) is None


class TestLoadConfig:
    """Test load_config source merging."""

    def test_no_sources(self):
        assert load_config() == AuthorStatsConfig()

    def test_project_file(self, tmp_path):
        (tmp_path / "git-author-stats.toml").write_text("start_year = 2019\n")
        assert load_config().start_year == 2019

    def test_section_table(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text('[git-author-stats]\nimported_prefixes = ["vendor/", "third_party/"]\n')
        config = load_config(config_file=path)
        assert config.imported_prefixes == ("vendor/", "third_party/")

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        (tmp_path / "git-author-stats.toml").write_text("worker_limit = 4\n")
        monkeypatch.setenv("GIT_AUTHOR_STATS_WORKER_LIMIT", "8")
        assert load_config().worker_limit == 8

    def test_env_list(self, monkeypatch):
        monkeypatch.setenv("GIT_AUTHOR_STATS_GENERATED_PREFIXES", "out/, build/")
        assert load_config().generated_prefixes == ("out/", "build/")

    def test_cli_overrides_env(self, monkeypatch):
        monkeypatch.setenv("GIT_AUTHOR_STATS_WORKER_LIMIT", "8")
        assert load_config(worker_limit=2).worker_limit == 2

    def test_none_override_ignored(self, monkeypatch):
        monkeypatch.setenv("GIT_AUTHOR_STATS_START_YEAR", "2020")
        assert load_config(start_year=None).start_year == 2020

    def test_verbose_flag(self):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"

    def test_bad_env_value(self, monkeypatch):
        monkeypatch.setenv("GIT_AUTHOR_STATS_WORKER_LIMIT", "many")
        with pytest.raises(AuthorStatsError):
            load_config()

    def test_missing_file(self, tmp_path):
        with pytest.raises(AuthorStatsError):
            load_config(config_file=tmp_path / "nope.toml")

    def test_unknown_key(self, tmp_path):
        (tmp_path / "git-author-stats.toml").write_text("colour = 'blue'\n")
        with pytest.raises(AuthorStatsError):
            load_config()

    def test_malformed_toml(self, tmp_path):
        (tmp_path / "git-author-stats.toml").write_text("start_year = = 1\n")
        with pytest.raises(AuthorStatsError):
            load_config()
