"""Directory traversal and extension classification."""

from __future__ import annotations

import os
from pathlib import Path
from typing import AbstractSet, Dict, Iterable, Iterator, List, Sequence, Set

from .logging import get_logger
from .models import Bucket

logger = get_logger("walker")


def file_extension(path: Path) -> str:
    """Return the last suffix of ``path`` without the leading dot."""
    return path.suffix[1:]


def matches_extensions(path: Path, extensions: AbstractSet[str] | Sequence[str]) -> bool:
    if not extensions:
        return True
    return file_extension(path) in extensions


def _is_skipped(name: str, ignore: AbstractSet[str]) -> bool:
    return name in ignore or name.startswith(".")


def _list_directory(directory: Path) -> List[os.DirEntry]:
    try:
        with os.scandir(directory) as entries:
            return sorted(entries, key=lambda entry: entry.name)
    except OSError as exc:
        logger.warning("Skipping unreadable directory %s: %s", directory, exc)
        return []


def _walk_directory(directory: Path, ignore: AbstractSet[str]) -> Iterator[Path]:
    for entry in _list_directory(directory):
        if _is_skipped(entry.name, ignore):
            continue
        path = directory / entry.name
        try:
            is_dir = entry.is_dir()
            is_file = not is_dir and entry.is_file()
        except OSError as exc:
            logger.warning("Skipping unreadable entry %s: %s", path, exc)
            continue
        if is_dir:
            yield from _walk_directory(path, ignore)
        elif is_file:
            yield path


def collect_files(roots: Iterable[Path], ignore: Iterable[str] = ()) -> List[Path]:
    """Return every visible, non-ignored file reachable from ``roots``.

    Directory roots are enumerated depth first with entries sorted by name.
    A root that is a file counts as a single-item listing and goes through the
    same ignore and hidden checks. Roots that do not exist are dropped. Files
    reached through overlapping roots are kept once, at their first position.
    """
    ignore_set = frozenset(ignore)
    files: List[Path] = []
    seen: Set[Path] = set()
    for root in roots:
        if root.is_dir():
            candidates: Iterable[Path] = _walk_directory(root, ignore_set)
        elif root.is_file():
            if _is_skipped(root.name, ignore_set):
                continue
            candidates = [root]
        else:
            logger.debug("Root path %s does not exist; skipping", root)
            continue
        for path in candidates:
            key = path.resolve()
            if key in seen:
                logger.debug("Skipping duplicate %s", path)
                continue
            seen.add(key)
            files.append(path)
    return files


def classify(files: Sequence[Path], buckets: Iterable[Bucket]) -> Dict[str, List[Path]]:
    """Partition ``files`` into buckets, preserving discovery order."""
    result: Dict[str, List[Path]] = {}
    for bucket in buckets:
        allowed = frozenset(bucket.extensions)
        result[bucket.name] = [path for path in files if matches_extensions(path, allowed)]
    return result


def find_files(
    roots: Iterable[Path], extensions: Sequence[str], ignore: Iterable[str] = ()
) -> List[Path]:
    """Walk ``roots`` and keep only files whose extension is whitelisted."""
    allowed = frozenset(extensions)
    return [path for path in collect_files(roots, ignore) if matches_extensions(path, allowed)]


__all__ = ["classify", "collect_files", "file_extension", "find_files", "matches_extensions"]
