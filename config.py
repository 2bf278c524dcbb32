"""Configuration loading for hashthing (YAML or TOML)."""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from errors import ConfigError

DEFAULT_MANIFEST = "manifest.json"
DEFAULT_SCAN_EXTENSIONS = [".css"]
MANIFEST_FORMATS = ("json", "yaml")

KNOWN_KEYS = {"manifest", "manifest_format", "scan_extensions", "verbose", "log_file"}


@dataclass
class HashthingConfig:
    """Settings for one fingerprinting run."""

    manifest: Path = Path(DEFAULT_MANIFEST)
    manifest_format: str = "json"
    scan_extensions: List[str] = field(default_factory=lambda: list(DEFAULT_SCAN_EXTENSIONS))
    verbose: bool = False
    log_file: Optional[Path] = None


def load_config(config_path: Path) -> HashthingConfig:
    """
    Load settings from a YAML or TOML file.

    A ``pyproject.toml`` is read from its ``[tool.hashthing]`` table.
    Relative paths are resolved against the config file's directory.

    Raises:
        ConfigError: If the file is missing, unparsable or has invalid values.
    """
    data = _read_config(config_path)
    base = config_path.parent
    config = HashthingConfig()

    unknown = set(data) - KNOWN_KEYS
    if unknown:
        raise ConfigError(f"Unknown config keys in {config_path}: {', '.join(sorted(unknown))}")

    if "manifest" in data:
        config.manifest = base / _as_str(data, "manifest")
    if "manifest_format" in data:
        config.manifest_format = _as_format(_as_str(data, "manifest_format"))
    if "scan_extensions" in data:
        config.scan_extensions = normalize_extensions(_as_str_list(data, "scan_extensions"))
    if "verbose" in data:
        value = data["verbose"]
        if not isinstance(value, bool):
            raise ConfigError("'verbose' must be true or false")
        config.verbose = value
    if "log_file" in data:
        config.log_file = base / _as_str(data, "log_file")

    return config


def normalize_extensions(extensions: List[str]) -> List[str]:
    """Lower-case extensions and make sure they start with a dot."""
    normalized = []
    for ext in extensions:
        if not ext.startswith("."):
            ext = "." + ext
        normalized.append(ext.lower())
    return normalized


def _read_config(config_path: Path) -> Dict[str, Any]:
    suffix = config_path.suffix.lower()
    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {config_path}: {exc}") from exc

    try:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(content)
        elif suffix == ".toml":
            data = tomllib.loads(content)
            if config_path.name == "pyproject.toml":
                data = data.get("tool", {}).get("hashthing", {})
        else:
            raise ConfigError(f"Unsupported config file type: {config_path.name}")
    except (yaml.YAMLError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Cannot parse config file {config_path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping at the root")
    return data


def _as_str(data: Dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str) or not value:
        raise ConfigError(f"'{key}' must be a non-empty string")
    return value


def _as_str_list(data: Dict[str, Any], key: str) -> List[str]:
    value = data[key]
    if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
        raise ConfigError(f"'{key}' must be a list of strings")
    return value


def _as_format(value: str) -> str:
    if value not in MANIFEST_FORMATS:
        raise ConfigError(
            f"'manifest_format' must be one of {', '.join(MANIFEST_FORMATS)}, got '{value}'"
        )
    return value
