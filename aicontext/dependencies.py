"""Manifest loading and vendored dependency harvesting."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .config import DEFAULT_MAX_BYTES
from .logging import get_logger
from .models import DependencyRecord
from .walker import find_files
from .writer import write_output

logger = get_logger("dependencies")


class ManifestError(RuntimeError):
    """Raised when the dependency manifest cannot be parsed."""


def load_manifest(path: Path) -> List[DependencyRecord]:
    """Return the records declared under the manifest's ``require`` key."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.warning("Manifest %s not found; skipping dependencies", path)
        return []
    except UnicodeDecodeError as exc:
        raise ManifestError(f"{path.name} is not valid UTF-8: {exc}") from exc

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Failed to parse {path.name}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ManifestError(f"{path.name} must contain a JSON object at the root")

    require = payload.get("require")
    if not isinstance(require, dict):
        return []

    records: List[DependencyRecord] = []
    for name, version in require.items():
        if not isinstance(name, str) or not name.strip():
            continue
        records.append(DependencyRecord(name=name, version=str(version)))
    return records


def process_dependency(
    record: DependencyRecord,
    root: Path,
    output_dir: Path,
    *,
    extensions: Sequence[str],
    ignore: Iterable[str] = (),
    base: Optional[Path] = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
) -> Optional[Path]:
    """Write the output document for one dependency.

    An existing document is returned as is, without rescanning. ``None`` means
    the dependency has no vendored source directory.
    """
    destination = output_dir / record.output_name
    if destination.exists():
        logger.debug("Keeping existing %s", destination.name)
        return destination

    source_dir = record.source_dir(root)
    if not source_dir.is_dir():
        logger.debug("No vendored source for %s at %s", record.name, source_dir)
        return None

    files = find_files([source_dir], extensions, ignore)
    write_output(files, destination, base if base is not None else root, max_bytes)
    return destination


def harvest_dependencies(
    records: Iterable[DependencyRecord],
    root: Path,
    output_dir: Path,
    *,
    extensions: Sequence[str],
    ignore: Iterable[str] = (),
    base: Optional[Path] = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
) -> List[Optional[Path]]:
    """Process every record, returning one entry per dependency."""
    ignore = tuple(ignore)
    return [
        process_dependency(
            record,
            root,
            output_dir,
            extensions=extensions,
            ignore=ignore,
            base=base,
            max_bytes=max_bytes,
        )
        for record in records
    ]


__all__ = ["ManifestError", "harvest_dependencies", "load_manifest", "process_dependency"]
