"""Layered configuration: built-in defaults, optional TOML file, environment."""

from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "revstamp.toml"
CONFIG_PATH_ENV = "REVSTAMP_CONFIG_PATH"
OUTPUT_PATH_ENV = "REVSTAMP_OUTPUT"


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid")


class OutputConfig(_Section):
    path: Path = Path("version.cr")
    constant: str = Field("VERSION", pattern=r"^[A-Za-z_][A-Za-z0-9_]*$")


class LogConfig(_Section):
    verbosity: Literal["debug", "info", "warning", "error"] = "warning"


class FossilConfig(_Section):
    executable: str = "fossil"
    marker: str = ".fslckout"


class GitConfig(_Section):
    executable: str = "git"
    ref: str = "HEAD"


class BackendsConfig(_Section):
    fossil: FossilConfig = FossilConfig()
    git: GitConfig = GitConfig()


class StampConfig(_Section):
    """Effective configuration for one run."""
    output: OutputConfig = OutputConfig()
    log: LogConfig = LogConfig()
    backends: BackendsConfig = BackendsConfig()


def default_config() -> Dict[str, Any]:
    return StampConfig().model_dump(mode="json")


def merge_defaults(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_defaults(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigLoader:
    """Resolves and loads the effective StampConfig."""

    @staticmethod
    def resolve_config_path(root: Path, config_path: Optional[Path] = None) -> Optional[Path]:
        """Return the config file to read, or None when there is none.

        An explicit path (argument or environment) must exist; the default
        ``revstamp.toml`` is optional.
        """
        raw = config_path or os.getenv(CONFIG_PATH_ENV)
        if raw:
            path = Path(raw)
            if not path.is_absolute():
                path = root / path
            if not path.is_file():
                raise ConfigError(f"Config file not found: {path}")
            return path
        default = root / DEFAULT_CONFIG_FILE
        return default if default.is_file() else None

    @staticmethod
    def read_toml(path: Path) -> Dict[str, Any]:
        try:
            with path.open("rb") as fh:
                return tomllib.load(fh)
        except OSError as e:
            raise ConfigError(f"Cannot read config {path}: {e}") from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config TOML: {path} ({e})") from e

    @classmethod
    def load(cls, root: Path, config_path: Optional[Path] = None) -> StampConfig:
        data = default_config()
        path = cls.resolve_config_path(root, config_path)
        if path is not None:
            logger.debug(f"Loading config from {path}")
            data = merge_defaults(data, cls.read_toml(path))

        env_output = os.getenv(OUTPUT_PATH_ENV, "").strip()
        if env_output and isinstance(data.get("output"), dict):
            data["output"]["path"] = env_output

        try:
            return StampConfig.model_validate(data)
        except ValidationError as e:
            source = path or "defaults"
            raise ConfigError(f"Invalid config in {source}: {e}") from e
