"""Tests for configuration loading and layering."""

import pytest

from cassandra_tablestats.collectors.errors import ConfigurationError
from cassandra_tablestats.config.loader import ConfigLoader
from cassandra_tablestats.config.models import (
    CollectorConfig,
    DEFAULT_JOLOKIA_URL,
    DEFAULT_SKIP_METRICS,
    split_csv,
)
from cassandra_tablestats.config.settings import Settings


@pytest.fixture
def config_file(tmp_path):
    """Write a YAML config file and return its path."""
    def write(text):
        path = tmp_path / "tablestats.yaml"
        path.write_text(text)
        return str(path)
    return write


class TestModels:
    def test_defaults(self):
        config = CollectorConfig(name="cassandra")

        assert config.jolokia == DEFAULT_JOLOKIA_URL
        assert config.debug is False
        assert config.stderr is False
        assert config.skip_zeros is False
        assert config.skip == DEFAULT_SKIP_METRICS
        assert config.timeout is None

    def test_default_skip_list_not_shared(self):
        config = CollectorConfig(name="cassandra")
        config.skip.append("Extra")
        assert "Extra" not in DEFAULT_SKIP_METRICS

    def test_skip_csv(self):
        config = CollectorConfig(name="c", skip="RowCacheHit, RowCacheMiss,,")
        assert config.skip == ["RowCacheHit", "RowCacheMiss"]

    def test_skip_list_of_csv(self):
        config = CollectorConfig(name="c", skip=["A,B", "C"])
        assert config.skip == ["A", "B", "C"]

    def test_skip_empty(self):
        assert CollectorConfig(name="c", skip="").skip == []

    def test_skip_null_keeps_defaults(self):
        assert CollectorConfig(name="c", skip=None).skip == DEFAULT_SKIP_METRICS

    def test_invalid_url(self):
        with pytest.raises(ValueError):
            CollectorConfig(name="c", jolokia="localhost:1778/jolokia")

    def test_blank_name(self):
        with pytest.raises(ValueError):
            CollectorConfig(name="  ")

    def test_non_positive_timeout(self):
        with pytest.raises(ValueError):
            CollectorConfig(name="c", timeout=0)

    def test_split_csv_none(self):
        assert split_csv(None) == []


class TestSettings:
    def test_unset(self):
        assert Settings.as_overrides() == {}

    def test_values(self, monkeypatch):
        monkeypatch.setenv("TABLESTATS_JOLOKIA_URL", "http://cass:1778/jolokia")
        monkeypatch.setenv("TABLESTATS_SKIP_ZEROS", "yes")
        monkeypatch.setenv("TABLESTATS_DEBUG", "0")
        monkeypatch.setenv("TABLESTATS_SKIP", "A,B")

        overrides = Settings.as_overrides()

        assert overrides == {
            "jolokia": "http://cass:1778/jolokia",
            "skip_zeros": True,
            "debug": False,
            "skip": "A,B",
        }

    def test_config_path(self, monkeypatch):
        monkeypatch.setenv("TABLESTATS_CONFIG", "/etc/tablestats.yaml")
        assert Settings().CONFIG_PATH == "/etc/tablestats.yaml"


class TestLoadFromFile:
    def test_load(self, config_file):
        path = config_file("name: cassandra\nskip_zeros: true\nskip:\n  - A\n  - B\n")
        assert ConfigLoader.load_from_file(path) == {
            "name": "cassandra",
            "skip_zeros": True,
            "skip": ["A", "B"],
        }

    def test_env_substitution(self, config_file, monkeypatch):
        monkeypatch.setenv("CASSANDRA_HOST", "cass-3")
        path = config_file("jolokia: http://${CASSANDRA_HOST}:1778/jolokia\n")
        assert ConfigLoader.load_from_file(path)["jolokia"] == "http://cass-3:1778/jolokia"

    def test_empty_file(self, config_file):
        assert ConfigLoader.load_from_file(config_file("")) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigLoader.load_from_file(str(tmp_path / "missing.yaml"))

    def test_not_a_mapping(self, config_file):
        with pytest.raises(ValueError):
            ConfigLoader.load_from_file(config_file("- a\n- b\n"))


class TestResolve:
    def test_defaults(self):
        config = ConfigLoader.resolve("tablestats")
        assert config.name == "tablestats"
        assert config.jolokia == DEFAULT_JOLOKIA_URL

    def test_precedence(self, config_file, monkeypatch):
        monkeypatch.setenv("TABLESTATS_NAME", "from-env")
        monkeypatch.setenv("TABLESTATS_JOLOKIA_URL", "http://env:1778/jolokia")
        monkeypatch.setenv("TABLESTATS_TIMEOUT", "3")
        path = config_file("jolokia: http://file:1778/jolokia\nskip_zeros: true\n")

        config = ConfigLoader.resolve(
            "tablestats",
            config_path=path,
            overrides={"jolokia": "http://cli:1778/jolokia", "skip_zeros": None, "skip": None},
        )

        assert config.name == "from-env"
        assert config.jolokia == "http://cli:1778/jolokia"
        assert config.skip_zeros is True
        assert config.timeout == 3.0
        assert config.skip == DEFAULT_SKIP_METRICS

    def test_config_path_from_env(self, config_file, monkeypatch):
        monkeypatch.setenv("TABLESTATS_CONFIG", config_file("name: from-file\n"))
        assert ConfigLoader.resolve("tablestats").name == "from-file"

    def test_cli_skip_lists(self):
        config = ConfigLoader.resolve("t", overrides={"skip": ["A,B", "C"]})
        assert config.skip == ["A", "B", "C"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigLoader.resolve("t", config_path=str(tmp_path / "missing.yaml"))

    def test_invalid_yaml(self, config_file):
        with pytest.raises(ConfigurationError):
            ConfigLoader.resolve("t", config_path=config_file("name: [unclosed\n"))

    def test_validation_error(self):
        with pytest.raises(ConfigurationError):
            ConfigLoader.resolve("t", overrides={"jolokia": "not-a-url"})


def test_resolve_empty_skip_key_keeps_defaults(tmp_path):
    """An empty `skip:` key in the file keeps the default skip list."""
    path = tmp_path / "tablestats.yaml"
    path.write_text("name: cassandra\nskip:\n")

    config = ConfigLoader.resolve("t", config_path=str(path))

    assert config.skip == DEFAULT_SKIP_METRICS
