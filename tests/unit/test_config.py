# tests/unit/test_config.py: Unit tests for configuration loading and validation.

import pytest
import os
from pathlib import Path

from treemirror.config import load_config, default_config_path, CONFIG_ENV_VAR
from treemirror.mirror import DEFAULT_MANIFEST_FILE
from treemirror.util.errors import ConfigError

@pytest.fixture
def mock_config_dir(tmp_path: Path, monkeypatch) -> Path:
    """Creates a mock XDG config directory structure and sets the environment variable."""
    # platformdirs will add 'treemirror' to this path
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    config_dir = tmp_path / "treemirror"
    config_dir.mkdir()
    return config_dir

def test_load_valid_config(mock_config_dir: Path, monkeypatch):
    """Tests that a valid configuration file is loaded and parsed correctly."""
    monkeypatch.setenv("MODULES_ROOT", "/srv/modules")
    config_content = """
version: 1
mirrors:
  - name: "modules"
    source: "${MODULES_ROOT}/live"
    destination: "~/cache/modules"
    exclude: ["*.tfstate"]
"""
    (mock_config_dir / "mirrors.yaml").write_text(config_content)

    config = load_config()

    assert config.version == 1
    assert len(config.mirrors) == 1
    mirror = config.get_mirror("modules")
    assert mirror.source == Path("/srv/modules/live").resolve()
    assert mirror.destination == Path(os.path.expanduser("~/cache/modules")).resolve()
    assert mirror.exclude == ["*.tfstate"]

def test_load_config_not_found(tmp_path: Path, monkeypatch):
    """Tests that a ConfigError is raised if the config file doesn't exist."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    with pytest.raises(ConfigError, match="Configuration file not found"):
        load_config()

def test_explicit_path_and_env_override(tmp_path: Path, monkeypatch):
    """Tests that an explicit path or $TREEMIRROR_CONFIG is used instead of the XDG path."""
    config_file = tmp_path / "custom.yaml"
    config_file.write_text("version: 1\n")

    assert load_config(config_file).mirrors == []

    monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
    assert default_config_path() == config_file.resolve()
    assert load_config().version == 1

def test_config_validation_error(mock_config_dir: Path):
    """Tests that a ConfigError is raised on an invalid configuration."""
    config_content = "version: 2\nmirrors: []"
    (mock_config_dir / "mirrors.yaml").write_text(config_content)

    with pytest.raises(ConfigError, match="Configuration validation failed"):
        load_config()

def test_yaml_error(mock_config_dir: Path):
    (mock_config_dir / "mirrors.yaml").write_text("version: [1\n")

    with pytest.raises(ConfigError, match="Error parsing YAML"):
        load_config()

def test_duplicate_names_rejected(mock_config_dir: Path):
    config_content = """
version: 1
mirrors:
  - {name: a, source: /tmp/a, destination: /tmp/b}
  - {name: a, source: /tmp/c, destination: /tmp/d}
"""
    (mock_config_dir / "mirrors.yaml").write_text(config_content)

    with pytest.raises(ConfigError, match="Duplicate mirror name"):
        load_config()

def test_manifest_file_must_be_plain_name(mock_config_dir: Path):
    config_content = "version: 1\ndefaults:\n  manifest_file: sub/manifest\n"
    (mock_config_dir / "mirrors.yaml").write_text(config_content)

    with pytest.raises(ConfigError, match="plain file name"):
        load_config()

def test_default_values_are_applied(mock_config_dir: Path):
    """Tests that default values are correctly applied to the config."""
    config_content = """
version: 1
defaults:
  exclude: ["*.log"]
mirrors:
  - name: "plain"
    source: "/tmp/src"
    destination: "/tmp/dst"
  - name: "hidden"
    source: "/tmp/src"
    destination: "/tmp/dst2"
    include_hidden: true
    exclude: []
"""
    (mock_config_dir / "mirrors.yaml").write_text(config_content)

    config = load_config()

    assert config.defaults.manifest_file == DEFAULT_MANIFEST_FILE
    assert config.logging.level == "INFO"

    plain = config.filter_for(config.get_mirror("plain"))
    assert not plain("debug.log")
    assert not plain(".env")
    assert plain("main.tf")

    hidden = config.filter_for(config.get_mirror("hidden"))
    assert hidden("debug.log")
    assert hidden(".env")

def test_unknown_mirror(mock_config_dir: Path):
    (mock_config_dir / "mirrors.yaml").write_text("version: 1\n")

    with pytest.raises(ConfigError, match="not found"):
        load_config().get_mirror("missing")
