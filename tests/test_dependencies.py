"""Tests for aicontext.dependencies."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from aicontext.dependencies import (
    ManifestError,
    harvest_dependencies,
    load_manifest,
    process_dependency,
)
from aicontext.models import DependencyRecord


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_load_manifest_reads_require_mapping(tmp_path: Path) -> None:
    manifest = tmp_path / "composer.json"
    _write(
        manifest,
        json.dumps(
            {
                "name": "acme/app",
                "require": {"php": ">=8.1", "monolog/monolog": "^3.0"},
                "require-dev": {"pestphp/pest": "^2.0"},
            }
        ),
    )

    records = load_manifest(manifest)

    assert records == [
        DependencyRecord(name="php", version=">=8.1"),
        DependencyRecord(name="monolog/monolog", version="^3.0"),
    ]


def test_load_manifest_without_require_returns_empty(tmp_path: Path) -> None:
    manifest = tmp_path / "composer.json"
    _write(manifest, "{}")

    assert load_manifest(manifest) == []


def test_load_manifest_missing_file_warns(tmp_path: Path, caplog) -> None:
    assert load_manifest(tmp_path / "composer.json") == []
    assert "not found" in caplog.text


def test_load_manifest_rejects_invalid_json(tmp_path: Path) -> None:
    manifest = tmp_path / "composer.json"
    _write(manifest, "{not json")

    with pytest.raises(ManifestError):
        load_manifest(manifest)


def test_load_manifest_rejects_non_object_root(tmp_path: Path) -> None:
    manifest = tmp_path / "composer.json"
    _write(manifest, "[]")

    with pytest.raises(ManifestError):
        load_manifest(manifest)


def test_dependency_record_naming() -> None:
    record = DependencyRecord(name="acme/widgets:dev", version="^1.0")

    assert record.identifier == "acme/widgets"
    assert record.vendor == "acme"
    assert record.package == "widgets"
    assert record.output_name == "composer-acme-widgets.txt"
    assert record.source_dir(Path("/proj")) == Path("/proj/vendor/acme/widgets/src")


def test_process_dependency_harvests_only_php(tmp_path: Path) -> None:
    root = tmp_path
    output_dir = root / ".ai"
    output_dir.mkdir()
    _write(root / "vendor" / "acme" / "widgets" / "src" / "Widget.php", "<?php class Widget {}")
    _write(root / "vendor" / "acme" / "widgets" / "src" / "widget.js", "alert(1)")

    record = DependencyRecord(name="acme/widgets", version="^1.0")
    result = process_dependency(record, root, output_dir, extensions=["php"])

    assert result == output_dir / "composer-acme-widgets.txt"
    content = result.read_text(encoding="utf-8")
    assert content == (
        "vendor/acme/widgets/src/Widget.php\n```\n<?php class Widget {}\n```\n"
    )


def test_process_dependency_without_vendored_source(tmp_path: Path) -> None:
    output_dir = tmp_path / ".ai"
    output_dir.mkdir()

    record = DependencyRecord(name="acme/missing", version="*")
    result = process_dependency(record, tmp_path, output_dir, extensions=["php"])

    assert result is None
    assert list(output_dir.iterdir()) == []


def test_process_dependency_keeps_existing_output(tmp_path: Path) -> None:
    output_dir = tmp_path / ".ai"
    existing = output_dir / "composer-acme-widgets.txt"
    _write(existing, "stale")
    os.utime(existing, (1_000_000, 1_000_000))
    _write(tmp_path / "vendor" / "acme" / "widgets" / "src" / "New.php", "<?php // new")

    record = DependencyRecord(name="acme/widgets", version="^1.0")
    result = process_dependency(record, tmp_path, output_dir, extensions=["php"])

    assert result == existing
    assert existing.read_text(encoding="utf-8") == "stale"
    assert existing.stat().st_mtime == 1_000_000


def test_harvest_dependencies_returns_entry_per_record(tmp_path: Path) -> None:
    output_dir = tmp_path / ".ai"
    output_dir.mkdir()
    _write(tmp_path / "vendor" / "acme" / "present" / "src" / "A.php", "<?php")

    records = [
        DependencyRecord(name="acme/present", version="^1.0"),
        DependencyRecord(name="acme/absent", version="^1.0"),
    ]
    results = harvest_dependencies(records, tmp_path, output_dir, extensions=["php"])

    assert results == [output_dir / "composer-acme-present.txt", None]
    assert sorted(path.name for path in output_dir.iterdir()) == ["composer-acme-present.txt"]


def test_load_manifest_rejects_non_utf8(tmp_path: Path) -> None:
    manifest = tmp_path / "composer.json"
    manifest.write_bytes(b'{"require": {"caf\xe9/x": "*"}}')

    with pytest.raises(ManifestError, match="UTF-8"):
        load_manifest(manifest)


def test_dependency_record_without_package_part() -> None:
    record = DependencyRecord(name="php", version=">=8.1")

    assert record.vendor == "php"
    assert record.package == ""
    assert record.output_name == "composer-php.txt"
    assert record.source_dir(Path("/proj")) == Path("/proj/vendor/php/src")
