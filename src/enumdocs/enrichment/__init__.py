"""Documentation enrichment pipeline.

This package turns the Resource Enum Table into edited Markdown:

1. **Rewriting** (:mod:`~enumdocs.enrichment.rewriter`) -- a pure,
   idempotent line-by-line transform that appends
   ``Must be one of: ...`` to enum-constrained attribute lines, tracking
   the ``### Nested Schema for `x``` section each line belongs to.

2. **Orchestration** (:mod:`~enumdocs.enrichment.docs`) -- fetches the
   spec once, builds the table, and applies the rewriter to every file in
   ``docs/resources`` and ``docs/data-sources``, writing back only files
   whose content changed.
"""

from __future__ import annotations

from enumdocs.enrichment.docs import enrich_directory, enrich_docs, enrich_file, run
from enumdocs.enrichment.rewriter import format_enum_suffix, rewrite_markdown

__all__ = [
    "enrich_directory",
    "enrich_docs",
    "enrich_file",
    "format_enum_suffix",
    "rewrite_markdown",
    "run",
]
