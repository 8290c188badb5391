"""Aggregation pipeline producing LLM context documents."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from .config import ContextConfig
from .dependencies import harvest_dependencies, load_manifest
from .logging import get_logger
from .models import BuildResult
from .paths import build_roots, output_name, read_path_list, resolve_paths_file
from .walker import classify, collect_files
from .writer import write_output

logger = get_logger("builder")


def generate_context(
    config: ContextConfig,
    paths_file: Optional[str] = None,
    *,
    only_listed: bool = False,
) -> BuildResult:
    """Scan the project and write one document per bucket and dependency.

    Bucket documents are regenerated on every run. Dependency documents are
    only written when missing.
    """
    root = config.root
    extra_paths: List[Path] = []
    suffix: Optional[str] = None
    if paths_file:
        list_path = resolve_paths_file(paths_file, root)
        extra_paths = read_path_list(list_path, root)
        suffix = list_path.stem
        logger.debug("Loaded %d extra path(s) from %s", len(extra_paths), list_path)

    output_dir = config.output_path
    output_dir.mkdir(mode=0o755, parents=True, exist_ok=True)

    roots = build_roots(config, extra_paths, only_listed=only_listed)
    files = collect_files(roots, config.ignore)
    logger.info("Discovered %d file(s) under %d root path(s)", len(files), len(roots))

    result = BuildResult()
    for bucket_name, bucket_files in classify(files, config.buckets).items():
        destination = output_dir / output_name(bucket_name, suffix)
        blocks = write_output(bucket_files, destination, config.base_path, config.max_bytes)
        if blocks:
            result.block_counts[destination] = blocks
            logger.info("Wrote %s (%d file(s))", destination.name, blocks)
        else:
            logger.debug("No files for bucket %s; %s not written", bucket_name, destination.name)
        result.primary_outputs.append(destination)

    if config.dependencies.enabled:
        records = load_manifest(config.manifest_path)
        result.dependency_outputs = harvest_dependencies(
            records,
            root,
            output_dir,
            extensions=config.dependencies.extensions,
            ignore=config.ignore,
            base=config.base_path,
            max_bytes=config.max_bytes,
        )

    return result


__all__ = ["generate_context"]
