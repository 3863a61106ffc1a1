"""Configuration loading for webcheck (.webcheck.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".webcheck.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class AnalyzerConfig:
    """Single-file analyzer enablement."""

    enabled: Optional[List[str]] = None


@dataclass
class ValidatorConfig:
    """Cross-file validator enablement and class-name allowances."""

    enabled: Optional[List[str]] = None
    ignore_classes: List[str] = field(default_factory=list)


@dataclass
class WebCheckConfig:
    """Represents the settings defined in .webcheck.yml."""

    root: Path
    analyzers: AnalyzerConfig = field(default_factory=AnalyzerConfig)
    validators: ValidatorConfig = field(default_factory=ValidatorConfig)
    exclude_paths: List[str] = field(default_factory=list)


def load_config(config_path: Path) -> WebCheckConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return WebCheckConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    analyzer_data = _as_dict(data.get("analyzers"))
    analyzers = AnalyzerConfig()
    if "enabled" in analyzer_data:
        analyzers.enabled = _as_str_list(analyzer_data.get("enabled"))

    validator_data = _as_dict(data.get("validators"))
    validators = ValidatorConfig()
    if "enabled" in validator_data:
        validators.enabled = _as_str_list(validator_data.get("enabled"))
    validators.ignore_classes = _as_str_list(validator_data.get("ignore_classes"))

    return WebCheckConfig(
        root=root,
        analyzers=analyzers,
        validators=validators,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix not in {".yml", ".yaml"}:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
