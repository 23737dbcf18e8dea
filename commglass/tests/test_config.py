"""Tests for configuration loading."""

from pathlib import Path

import pytest

from commglass.engine.config import Config
from commglass.engine.errors import ConfigError


def test_defaults():
    config = Config()
    assert config.search.suggestion_limit == 6
    assert config.search.group_min_results == 4
    assert config.logging.level == "INFO"
    assert config.data.dataset_path is None


def test_load_without_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(Config, "default_locations", staticmethod(lambda: [tmp_path / "none.yaml"]))
    assert Config.load() == Config()


def test_load_from_yaml(tmp_path):
    path = tmp_path / "commglass.yaml"
    path.write_text(
        "search:\n"
        "  suggestion_limit: 3\n"
        "logging:\n"
        "  level: debug\n"
        "data:\n"
        "  dataset_path: ~/inbox.yaml\n"
    )
    config = Config.load(path)
    assert config.search.suggestion_limit == 3
    assert config.search.group_min_results == 4
    assert config.logging.level == "DEBUG"
    assert config.data.dataset_path == Path.home() / "inbox.yaml"


def test_default_location_is_found(tmp_path, monkeypatch):
    path = tmp_path / "commglass.yaml"
    path.write_text("search:\n  group_min_results: 2\n")
    monkeypatch.setattr(Config, "default_locations", staticmethod(lambda: [path]))
    assert Config.load().search.group_min_results == 2


@pytest.mark.parametrize("body", [
    "search:\n  suggestion_limit: 0\n",
    "logging:\n  level: LOUD\n",
    "- just\n- a list\n",
    "search: [unclosed\n",
])
def test_invalid_config(tmp_path, body):
    path = tmp_path / "commglass.yaml"
    path.write_text(body)
    with pytest.raises(ConfigError):
        Config.load(path)


def test_explicit_missing_path(tmp_path):
    with pytest.raises(ConfigError):
        Config.load(tmp_path / "missing.yaml")


def test_save_round_trip(tmp_path):
    config = Config()
    config.search.suggestion_limit = 4
    path = tmp_path / "out" / "config.yaml"
    config.save(path)
    assert Config.load(path).search.suggestion_limit == 4
