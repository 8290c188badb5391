"""Configuration loading for aicontext (.aicontext.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

from .models import Bucket

CONFIG_FILENAME = ".aicontext.yml"

DEFAULT_MAX_BYTES = 500_000

DEFAULT_IGNORE = ("node_modules", "vendor")

DEFAULT_BUCKETS: Tuple[Bucket, ...] = (
    Bucket("all", ("php", "css", "js", "json", "html")),
    Bucket("php", ("php",)),
    Bucket("css", ("css",)),
    Bucket("js", ("js",)),
)


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class DependencyConfig:
    """Dependency harvesting settings."""

    enabled: bool = True
    extensions: List[str] = field(default_factory=lambda: ["php"])


@dataclass
class ContextConfig:
    """Represents the settings defined in .aicontext.yml."""

    root: Path
    source_dirs: List[str] = field(default_factory=lambda: ["src"])
    manifest: str = "composer.json"
    output_dir: str = ".ai"
    ignore: List[str] = field(default_factory=lambda: list(DEFAULT_IGNORE))
    max_bytes: int = DEFAULT_MAX_BYTES
    relative_base: Optional[Path] = None
    buckets: List[Bucket] = field(default_factory=lambda: list(DEFAULT_BUCKETS))
    dependencies: DependencyConfig = field(default_factory=DependencyConfig)

    @property
    def manifest_path(self) -> Path:
        return self.root / self.manifest

    @property
    def output_path(self) -> Path:
        return self.root / self.output_dir

    @property
    def base_path(self) -> Path:
        """Directory that path headers in output documents are relative to."""
        return self.relative_base if self.relative_base is not None else self.root


def load_config(config_path: Path) -> ContextConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ContextConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = ContextConfig(root=root)

    if "source_dirs" in data:
        config.source_dirs = _as_str_list(data.get("source_dirs"))
    manifest = _as_str(data.get("manifest"))
    if manifest:
        config.manifest = manifest
    output_dir = _as_str(data.get("output_dir"))
    if output_dir:
        config.output_dir = output_dir
    if "ignore" in data:
        config.ignore = _as_str_list(data.get("ignore"))

    max_bytes = _as_int(data.get("max_bytes"))
    if max_bytes is not None:
        if max_bytes <= 0:
            raise ConfigError("max_bytes must be a positive integer")
        config.max_bytes = max_bytes

    relative_base = _as_str(data.get("relative_base"))
    if relative_base:
        config.relative_base = (root / relative_base).resolve()

    buckets_data = data.get("buckets")
    if buckets_data is not None:
        config.buckets = _parse_buckets(buckets_data)

    deps_data = _as_dict(data.get("dependencies"))
    if deps_data:
        enabled = _as_bool(deps_data.get("enabled"))
        if enabled is not None:
            config.dependencies.enabled = enabled
        if "extensions" in deps_data:
            config.dependencies.extensions = _normalise_extensions(
                _as_str_list(deps_data.get("extensions"))
            )

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigError(f"{path.name} is not valid UTF-8: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _parse_buckets(value: Any) -> List[Bucket]:
    if not isinstance(value, dict):
        raise ConfigError("buckets must map bucket names to extension lists")
    buckets: List[Bucket] = []
    for name, extensions in value.items():
        bucket_name = _as_str(name)
        if not bucket_name:
            continue
        buckets.append(
            Bucket(bucket_name, tuple(_normalise_extensions(_as_str_list(extensions))))
        )
    return buckets


def _normalise_extensions(values: Sequence[str]) -> List[str]:
    # Extensions are compared without the leading dot.
    return [value.lstrip(".") for value in values if value.strip(". ")]


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
