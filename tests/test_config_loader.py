"""Tests covering the REVAC configuration loader behaviour."""

from pathlib import Path

import pytest

from revac.exceptions import RevacConfigError
from revac.utils import ConfigLoader


def test_config_loader_starts_from_schema_defaults() -> None:
    config = ConfigLoader().load().to_dict()
    assert config["tuning"]["vectors"] == 80
    assert config["tuning"]["output"] is None
    assert config["tracking"]["enabled"] is False


def test_config_loader_merges_file_then_overrides(tmp_path: Path) -> None:
    path = tmp_path / "tuning.yaml"
    path.write_text(
        "parameters:\n  alpha: [0, 1]\n  beta: [-2, 2]\ntuning:\n  vectors: 20\n  parents: 10\n",
        encoding="utf-8",
    )
    config = ConfigLoader().load(path, overrides={"tuning": {"parents": 5}}).to_dict()
    assert config["tuning"]["vectors"] == 20
    assert config["tuning"]["parents"] == 5
    assert list(config["parameters"]) == ["alpha", "beta"]


def test_config_loader_accepts_yaml_strings_and_json(tmp_path: Path) -> None:
    loaded = ConfigLoader().load("tuning: {runs: 2}")
    assert loaded["tuning"]["runs"] == 2
    path = tmp_path / "tuning.json"
    path.write_text('{"tuning": {"h": 4}}', encoding="utf-8")
    assert ConfigLoader().load(path).section("tuning")["h"] == 4


def test_config_loader_applies_profile_before_config() -> None:
    config = ConfigLoader().load({"tuning": {"runs": 3}}, profile="fast").section("tuning")
    assert config["vectors"] == 20
    assert config["runs"] == 3


def test_config_loader_unknown_profile_raises() -> None:
    with pytest.raises(RevacConfigError):
        ConfigLoader().load(profile="turbo")


def test_config_loader_unknown_section_raises() -> None:
    loader = ConfigLoader()
    with pytest.raises(RevacConfigError) as err:
        loader.load(overrides={"unknown_section": {"foo": 1}})
    assert "unknown_section" in str(err.value)


def test_config_loader_unknown_key_raises() -> None:
    loader = ConfigLoader()
    with pytest.raises(RevacConfigError) as err:
        loader.load(overrides={"tuning": {"invalid_key": 1}})
    assert "tuning.invalid_key" in str(err.value)


def test_config_loader_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        ConfigLoader().load(tmp_path / "missing.yaml")


def test_config_loader_wraps_unsupported_override_values() -> None:
    with pytest.raises(RevacConfigError):
        ConfigLoader().load(overrides={"tuning": {"output": object()}})
