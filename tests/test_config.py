from pathlib import Path

import pytest

from revstamp_core.config import ConfigLoader, StampConfig, merge_defaults
from revstamp_core.errors import ConfigError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("REVSTAMP_CONFIG_PATH", raising=False)
    monkeypatch.delenv("REVSTAMP_OUTPUT", raising=False)


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_defaults_without_config_file(tmp_path: Path):
    cfg = ConfigLoader.load(tmp_path)
    assert cfg == StampConfig()
    assert cfg.output.path == Path("version.cr")
    assert cfg.output.constant == "VERSION"
    assert cfg.backends.fossil.marker == ".fslckout"
    assert cfg.backends.git.ref == "HEAD"
    assert cfg.log.verbosity == "warning"


def test_config_file_overlays_defaults(tmp_path: Path):
    _write(
        tmp_path / "revstamp.toml",
        """
[output]
path = "src/version.cr"

[backends.git]
ref = "origin/main"
""",
    )
    cfg = ConfigLoader.load(tmp_path)
    assert cfg.output.path == Path("src/version.cr")
    assert cfg.output.constant == "VERSION"
    assert cfg.backends.git.ref == "origin/main"
    assert cfg.backends.git.executable == "git"


def test_explicit_config_path(tmp_path: Path):
    _write(tmp_path / "conf" / "stamp.toml", '[log]\nverbosity = "debug"\n')
    cfg = ConfigLoader.load(tmp_path, Path("conf/stamp.toml"))
    assert cfg.log.verbosity == "debug"


def test_config_path_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _write(tmp_path / "other.toml", '[output]\nconstant = "BUILD_ID"\n')
    monkeypatch.setenv("REVSTAMP_CONFIG_PATH", str(tmp_path / "other.toml"))
    assert ConfigLoader.load(tmp_path).output.constant == "BUILD_ID"


def test_missing_explicit_config_fails(tmp_path: Path):
    with pytest.raises(ConfigError):
        ConfigLoader.load(tmp_path, Path("nope.toml"))


def test_output_env_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _write(tmp_path / "revstamp.toml", '[output]\npath = "a.cr"\n')
    monkeypatch.setenv("REVSTAMP_OUTPUT", "b.cr")
    assert ConfigLoader.load(tmp_path).output.path == Path("b.cr")


def test_invalid_toml(tmp_path: Path):
    _write(tmp_path / "revstamp.toml", "[output\npath = 1\n")
    with pytest.raises(ConfigError, match="Invalid config TOML"):
        ConfigLoader.load(tmp_path)


def test_unknown_key_rejected(tmp_path: Path):
    _write(tmp_path / "revstamp.toml", "[backends.svn]\nexecutable = \"svn\"\n")
    with pytest.raises(ConfigError):
        ConfigLoader.load(tmp_path)


def test_invalid_constant_name_rejected(tmp_path: Path):
    _write(tmp_path / "revstamp.toml", '[output]\nconstant = "not valid"\n')
    with pytest.raises(ConfigError):
        ConfigLoader.load(tmp_path)


def test_merge_defaults_is_deep_and_non_mutating():
    defaults = {"a": {"x": 1, "y": 2}, "b": 3}
    merged = merge_defaults(defaults, {"a": {"y": 5}})
    assert merged == {"a": {"x": 1, "y": 5}, "b": 3}
    assert defaults == {"a": {"x": 1, "y": 2}, "b": 3}
