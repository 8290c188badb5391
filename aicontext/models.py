"""Core data models shared across aicontext components."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Bucket:
    """Named extension whitelist; an empty whitelist accepts every file."""

    name: str
    extensions: Tuple[str, ...] = ()


@dataclass
class ReadResult:
    """Content of a single file read up to the size ceiling."""

    content: bytes
    truncated: bool


@dataclass(frozen=True)
class DependencyRecord:
    """One entry of the manifest's ``require`` mapping."""

    name: str
    version: str

    @property
    def identifier(self) -> str:
        """Declared name with any ``:version`` suffix removed."""
        return self.name.split(":", 1)[0]

    @property
    def vendor(self) -> str:
        return self.identifier.split("/", 1)[0]

    @property
    def package(self) -> str:
        parts = self.identifier.split("/", 1)
        return parts[1] if len(parts) == 2 else ""

    @property
    def output_name(self) -> str:
        parts = [_slug(self.vendor)]
        if self.package:
            parts.append(_slug(self.package))
        return f"composer-{'-'.join(parts)}.txt"

    def source_dir(self, root: Path) -> Path:
        """Return ``<root>/vendor/<vendor>/<package>/src`` for this dependency."""
        vendored = root / "vendor" / self.vendor
        if self.package:
            vendored = vendored / self.package
        return vendored / "src"


def _slug(value: str) -> str:
    for separator in ("/", "\\", ":"):
        value = value.replace(separator, "-")
    return value


@dataclass
class BuildResult:
    """Outputs of a single aggregation run."""

    primary_outputs: List[Path] = field(default_factory=list)
    dependency_outputs: List[Optional[Path]] = field(default_factory=list)
    block_counts: Dict[Path, int] = field(default_factory=dict)
