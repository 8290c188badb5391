"""Rendering of output documents from aggregated source files."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from .config import DEFAULT_MAX_BYTES
from .logging import get_logger
from .models import ReadResult

logger = get_logger("writer")

FENCE = "```"


def read_capped(path: Path, max_bytes: int = DEFAULT_MAX_BYTES) -> ReadResult:
    """Read at most ``max_bytes`` from ``path``, flagging truncation."""
    with path.open("rb") as handle:
        content = handle.read(max_bytes)
        truncated = bool(handle.read(1))
    if truncated:
        logger.debug("Truncated %s to %d bytes", path, max_bytes)
    return ReadResult(content=content, truncated=truncated)


def relative_header(path: Path, base: Path) -> str:
    """Return ``path`` relative to ``base`` or unchanged when outside of it."""
    try:
        return path.relative_to(base).as_posix()
    except ValueError:
        return path.as_posix()


def _encode(text: str) -> bytes:
    # Undecodable file names come back from scandir as surrogate escapes.
    return text.encode("utf-8", "surrogateescape")


def render_blocks(
    files: Sequence[Path], base: Path, max_bytes: int = DEFAULT_MAX_BYTES
) -> List[bytes]:
    """Return one header and fenced content block per readable file.

    Files that cannot be read are logged and skipped.
    """
    blocks: List[bytes] = []
    for path in files:
        try:
            result = read_capped(path, max_bytes)
        except OSError as exc:
            logger.warning("Skipping unreadable file %s: %s", path, exc)
            continue
        header = _encode(f"{relative_header(path, base)}\n{FENCE}\n")
        blocks.append(header + result.content + _encode(f"\n{FENCE}\n"))
    return blocks


def render_document(
    files: Sequence[Path], base: Path, max_bytes: int = DEFAULT_MAX_BYTES
) -> Optional[bytes]:
    """Concatenate the blocks for ``files``; ``None`` when nothing was rendered."""
    blocks = render_blocks(files, base, max_bytes)
    if not blocks:
        return None
    return b"".join(blocks)


def write_output(
    files: Sequence[Path],
    destination: Path,
    base: Path,
    max_bytes: int = DEFAULT_MAX_BYTES,
) -> int:
    """Overwrite ``destination`` with the rendered document.

    Nothing is written when there are no files, so a previous document (or
    its absence) is left as it was. Returns the number of blocks written.
    """
    if not files:
        return 0
    blocks = render_blocks(files, base, max_bytes)
    if not blocks:
        return 0
    destination.write_bytes(b"".join(blocks))
    logger.debug("Wrote %d block(s) to %s", len(blocks), destination)
    return len(blocks)


__all__ = [
    "FENCE",
    "read_capped",
    "relative_header",
    "render_blocks",
    "render_document",
    "write_output",
]
