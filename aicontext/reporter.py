"""Completion summary for an aggregation run."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Tuple

from .writer import FENCE

_KB = 1024
_MB = 1024 * 1024


@dataclass
class CompletionReport:
    """Totals and sizes gathered from the generated documents."""

    total_blocks: int
    files: List[Tuple[str, str]] = field(default_factory=list)


def count_blocks(text: str) -> int:
    """Count blocks in a document from an earlier run.

    Only used when the current run did not write the document, so fence lines
    inside file contents may still skew the count.
    """
    fences = sum(1 for line in text.splitlines() if line == FENCE)
    return (fences + 1) // 2


def _format_number(value: float) -> str:
    text = str(round(value, 2))
    return text[:-2] if text.endswith(".0") else text


def human_readable_size(size: int) -> str:
    if size >= _MB:
        return f"{_format_number(size / _MB)} MB"
    if size >= _KB:
        return f"{_format_number(size / _KB)} KB"
    return f"{size} bytes"


def build_report(
    outputs: Iterable[Path],
    dependency_outputs: Iterable[Optional[Path]],
    block_counts: Optional[Mapping[Path, int]] = None,
) -> CompletionReport:
    """Summarize existing documents.

    ``block_counts`` holds the number of blocks written this run per document;
    documents missing from it are counted from their text.
    """
    outputs = list(outputs)
    block_counts = block_counts or {}
    total = 0
    for path in outputs:
        if path in block_counts:
            total += block_counts[path]
        elif path.is_file():
            total += count_blocks(path.read_text(encoding="utf-8", errors="replace"))

    files: List[Tuple[str, str]] = []
    for path in [*outputs, *dependency_outputs]:
        if path is not None and path.is_file():
            files.append((path.name, human_readable_size(path.stat().st_size)))
    return CompletionReport(total_blocks=total, files=files)


def format_report(report: CompletionReport) -> str:
    lines = [
        "Script completed successfully.",
        f"Total files scanned: {report.total_blocks}",
        "Files created:",
    ]
    lines.extend(f"- {name} ({size})" for name, size in report.files)
    return "\n".join(lines)


__all__ = ["CompletionReport", "build_report", "count_blocks", "format_report", "human_readable_size"]
