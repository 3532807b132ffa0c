from __future__ import annotations

from pathlib import Path

import pytest

from bunyan_log_viewer.core.config import default_config_path, load_settings
from bunyan_log_viewer.core.errors import ConfigError


def test_defaults_without_file(tmp_path: Path) -> None:
    settings = load_settings(env={"XDG_CONFIG_HOME": str(tmp_path)})
    assert settings.local is False
    assert settings.timezone == "UTC"
    assert settings.output == "long"
    assert settings.color is None


def test_default_path_uses_xdg(tmp_path: Path) -> None:
    assert default_config_path({"XDG_CONFIG_HOME": str(tmp_path)}) == tmp_path / "logviewer" / "config.yaml"


def test_yaml_file_then_env_overrides(tmp_path: Path) -> None:
    config = tmp_path / "logviewer" / "config.yaml"
    config.parent.mkdir()
    config.write_text("output: short\ntimezone: Europe/Paris\ncolor: false\n", encoding="utf-8")

    settings = load_settings(env={"XDG_CONFIG_HOME": str(tmp_path), "LV_OUTPUT": "json-4", "LV_LOCAL": "true"})

    assert settings.output == "json-4"
    assert settings.timezone == "Europe/Paris"
    assert settings.color is False
    assert settings.local is True


def test_explicit_missing_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_settings(tmp_path / "nope.yaml", env={})


def test_config_env_variable(tmp_path: Path) -> None:
    config = tmp_path / "lv.yaml"
    config.write_text("local: yes\n", encoding="utf-8")
    assert load_settings(env={"LV_CONFIG": str(config)}).local is True


@pytest.mark.parametrize(
    "content",
    ["output: sideways\n", "- just\n- a list\n", "color: [1\n"],
)
def test_invalid_files(tmp_path: Path, content: str) -> None:
    config = tmp_path / "bad.yaml"
    config.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(config, env={})
