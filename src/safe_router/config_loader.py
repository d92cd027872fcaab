"""Load GeneratorConfig from safe-router.yaml / .yml / .toml if present.

Merges file config with explicit overrides (usually CLI flags). Overrides
take precedence; overrides whose value is ``None`` are ignored so that
unset flags do not mask file values.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from safe_router._errors import ConfigError
from safe_router.config import GeneratorConfig

CONFIG_FILENAMES: tuple[str, ...] = ("safe-router.yaml", "safe-router.yml", "safe-router.toml")

# Keys accepted in config files, with their GeneratorConfig field name
_FILE_KEYS: dict[str, str] = {
    "type": "project_type",
    "project_type": "project_type",
    "out": "out",
    "mode": "mode",
    "watch": "watch",
    "routes_dir": "routes_dir",
    "debounce_ms": "debounce_ms",
}

_SECTION_NAMES = ("safe-router", "safe_router")


def load_config(root: Path, **overrides: object) -> GeneratorConfig:
    """Load GeneratorConfig for *root*, merging any config file found there.

    Raises:
        ConfigError: If the config file cannot be parsed or holds unknown keys.

    """
    file_config = read_config_file(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}
    # Normalize out to Path
    if "out" in merged and not isinstance(merged["out"], Path):
        merged["out"] = Path(str(merged["out"]))
    return GeneratorConfig(root=root, **merged)  # type: ignore[arg-type]


def find_config_file(root: Path) -> Path | None:
    """Return the first config file present in *root*, or None."""
    for name in CONFIG_FILENAMES:
        path = root / name
        if path.is_file():
            return path
    return None


def read_config_file(root: Path) -> dict[str, object]:
    """Read the config file in *root*. Returns an empty dict when absent."""
    path = find_config_file(root)
    if path is None:
        return {}
    if path.suffix == ".toml":
        data = _parse_toml(path)
    else:
        data = _parse_yaml(path)
    return _flatten_section(data, path)


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        msg = f"Failed to read config file {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"Config file {path} must contain a mapping, got {type(data).__name__}"
        raise ConfigError(msg)
    return data


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        msg = f"Failed to read config file {path}: {exc}"
        raise ConfigError(msg) from exc


def _flatten_section(data: dict[str, object], path: Path) -> dict[str, object]:
    """Extract keys from the top level or a ``safe-router`` section."""
    raw: dict[str, object] = {}
    for section in _SECTION_NAMES:
        value = data.get(section)
        if isinstance(value, dict):
            raw.update(value)
    for k, v in data.items():
        if k not in _SECTION_NAMES:
            raw[k] = v

    result: dict[str, object] = {}
    for k, v in raw.items():
        field_name = _FILE_KEYS.get(k)
        if field_name is None:
            msg = f"Unknown key {k!r} in config file {path}"
            raise ConfigError(msg)
        result[field_name] = v
    return result
