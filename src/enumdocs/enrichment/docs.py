"""Drive the rewriter over the provider's documentation tree.

Layout expected under the docs root::

    docs/
      resources/       check.md, heartbeat.md, status_page.md, ...
      data-sources/    checks.md, users.md, ...

Each file's stem selects its enum map from the Resource Enum Table; files
without an entry are rewritten with an empty map, which leaves them
untouched. A file is written back only when its content actually changed,
so repeated runs cause no filesystem churn.

A missing ``resources/`` or ``data-sources/`` directory means "no files";
every other filesystem failure raises
:class:`~enumdocs.exceptions.FileSystemError` and aborts the run. Files
written before the failure stay written.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from enumdocs.enrichment.rewriter import rewrite_markdown
from enumdocs.exceptions import FileSystemError
from enumdocs.models import (
    EnrichConfig,
    EnrichmentReport,
    EnumInfo,
    ResourceEnums,
)
from enumdocs.output import debug, enum_counts, progress, updated

DOC_SUBDIRS = ("resources", "data-sources")
"""Subdirectories of the docs root that are enriched, in processing order."""


def enrich_file(
    path: Path,
    enums: Mapping[str, EnumInfo],
    *,
    check: bool = False,
) -> bool:
    """Rewrite one Markdown file in place.

    Args:
        path: The ``.md`` file.
        enums: Enum map for the file's resource or data source.
        check: When ``True``, report whether the file would change
            without writing it.

    Returns:
        ``True`` if the rewritten content differs from the file on disk.

    Raises:
        FileSystemError: If the file cannot be read or written.
    """
    try:
        # newline="" keeps \r\n endings intact for the byte comparison
        with open(path, encoding="utf-8", newline="") as f:
            original = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise FileSystemError(f"Cannot read {path}: {exc}") from exc

    enriched = rewrite_markdown(original, enums)
    if enriched == original:
        return False

    if not check:
        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(enriched)
        except OSError as exc:
            raise FileSystemError(f"Cannot write {path}: {exc}") from exc
    return True


def enrich_directory(
    directory: Path,
    table: ResourceEnums,
    *,
    check: bool = False,
) -> tuple[int, list[Path]]:
    """Enrich every ``.md`` file directly inside *directory*.

    Args:
        directory: A ``resources/`` or ``data-sources/`` directory.
        table: The Resource Enum Table.
        check: Report changes without writing.

    Returns:
        ``(files_scanned, updated_files)``. Both are empty when
        *directory* does not exist.

    Raises:
        FileSystemError: If the directory cannot be listed or a file
            cannot be read or written.
    """
    try:
        entries = sorted(directory.iterdir())
    except FileNotFoundError:
        debug(f"Skipping missing directory {directory}")
        return 0, []
    except OSError as exc:
        raise FileSystemError(f"Cannot read directory {directory}: {exc}") from exc

    scanned = 0
    updated_files: list[Path] = []
    for path in entries:
        if path.suffix != ".md" or path.is_dir():
            continue
        scanned += 1
        enums = table.get(path.stem, {})
        if enrich_file(path, enums, check=check):
            updated_files.append(path)
            updated(path, check=check)
    return scanned, updated_files


def enrich_docs(
    docs_dir: Path,
    table: ResourceEnums,
    *,
    check: bool = False,
) -> EnrichmentReport:
    """Enrich ``resources/`` then ``data-sources/`` under *docs_dir*.

    Args:
        docs_dir: The documentation root.
        table: The Resource Enum Table.
        check: Report changes without writing.

    Returns:
        An :class:`~enumdocs.models.EnrichmentReport` for the run.
    """
    report = EnrichmentReport(
        enum_counts={name: len(enums) for name, enums in table.items()},
        check=check,
    )
    for subdir in DOC_SUBDIRS:
        scanned, updated = enrich_directory(docs_dir / subdir, table, check=check)
        report.files_scanned += scanned
        report.updated_files.extend(updated)
    return report


def run(config: EnrichConfig, *, check: bool = False) -> EnrichmentReport:
    """Fetch the spec once, build the enum table, and enrich the docs.

    Any fetch or parse failure propagates before a single file is touched.

    Args:
        config: Resolved settings (spec source, docs root, timeout).
        check: Report changes without writing.

    Returns:
        The run's :class:`~enumdocs.models.EnrichmentReport`.

    Raises:
        FetchError: If the spec cannot be retrieved.
        ParseError: If the spec cannot be parsed.
        FileSystemError: On unrecoverable documentation I/O errors.
    """
    from enumdocs.parser import load_spec
    from enumdocs.resources import build_enum_table

    progress(f"Fetching OpenAPI spec from {config.spec_source}")
    spec = load_spec(config.spec_source, timeout=config.timeout)

    table = build_enum_table(spec)
    enum_counts({name: len(enums) for name, enums in table.items()})
    for name in sorted(table):
        for field, enum_info in sorted(table[name].items()):
            debug(f"  {name}.{field}: {list(enum_info.values)}")

    progress(f"Enriching documentation in {config.docs_dir}")
    return enrich_docs(config.docs_dir, table, check=check)
