"""Resolution of the root paths scanned by a run."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from .config import ConfigError, ContextConfig


class PathListNotFoundError(FileNotFoundError):
    """Raised when a user-supplied path-list file cannot be located."""


def resolve_paths_file(argument: str, root: Path) -> Path:
    """Locate the path-list file as given, then relative to the project root."""
    candidate = Path(argument).expanduser()
    if candidate.exists():
        return candidate.resolve()
    candidate = root / argument
    if candidate.exists():
        return candidate.resolve()
    raise PathListNotFoundError(f"Additional paths file not found: {argument}")


def read_path_list(path: Path, root: Path) -> List[Path]:
    """Return one path per non-blank line, resolved against ``root``."""
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigError(f"Paths file {path.name} is not valid UTF-8: {exc}") from exc

    entries: List[Path] = []
    for line in text.splitlines():
        if not line.strip():
            continue
        entries.append((root / line.rstrip("\r\n")).resolve())
    return entries


def build_roots(
    config: ContextConfig,
    extra_paths: Sequence[Path] = (),
    *,
    only_listed: bool = False,
) -> List[Path]:
    """Return the roots to scan: source dirs, the manifest, then extra paths."""
    if only_listed and extra_paths:
        return list(extra_paths)
    roots = [config.root / source for source in config.source_dirs]
    roots.append(config.manifest_path)
    roots.extend(extra_paths)
    return roots


def output_name(bucket: str, suffix: Optional[str] = None) -> str:
    if suffix:
        return f"files-{bucket}-{suffix}.txt"
    return f"files-{bucket}.txt"


__all__ = [
    "PathListNotFoundError",
    "build_roots",
    "output_name",
    "read_path_list",
    "resolve_paths_file",
]
