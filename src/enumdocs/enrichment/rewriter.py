"""Inject "Must be one of: ..." constraints into generated Markdown docs.

The Terraform provider docs generator emits attributes as::

    ## Schema

    ### Required

    - `name` (String) Name of the check.
    - `assertions` (Attributes List) Assertions to run. (see below for nested schema)

    <a id="nestedatt--assertions"></a>
    ### Nested Schema for `assertions`

    - `type` (String) What to assert on.

:func:`rewrite_markdown` walks those lines once, tracking which nested
schema section it is in, and appends the allowed values to every attribute
whose field has an :class:`~enumdocs.models.EnumInfo`::

    - `type` (String) What to assert on. Must be one of: `JSON_BODY`, `STATUS_CODE`.

Lookup tries ``<section>.<field>`` first and then the bare ``<field>``.
The bare fallback can attach the wrong values when two nested sections
reuse a field name whose enums differ; that imprecision is kept because
the extracted keys only carry one level of nesting to begin with.

Rewriting is idempotent: a line already containing ``Must be one of:`` is
never touched again.
"""

from __future__ import annotations

import re
from typing import Mapping, Optional

from enumdocs.models import EnumInfo

CONSTRAINT_MARKER = "Must be one of:"

_SCHEMA_HEADER = re.compile(r"^## Schema")
# `checks.assertions` style headings keep only the last segment as context.
_NESTED_HEADER = re.compile(r"^### Nested Schema for `(?:[a-z_]+\.)*([a-z_]+)`")
_ATTRIBUTE = re.compile(r"^(- `([a-z_]+)` \([^)]+\))(.*)$")


def rewrite_markdown(text: str, enums: Mapping[str, EnumInfo]) -> str:
    """Return *text* with enum constraints appended to matching attributes.

    Every line other than a matched attribute line passes through
    unchanged; the line count and order are preserved, as are ``\\r\\n``
    line endings.

    Args:
        text: Full Markdown document.
        enums: Dotted field name to allowed values for this document's
            resource or data source. An empty mapping is a no-op.

    Returns:
        The rewritten document.
    """
    if not enums:
        return text

    context = ""
    rewritten: list[str] = []
    for line in text.split("\n"):
        body, ending = (line[:-1], "\r") if line.endswith("\r") else (line, "")
        context = _next_context(body, context)
        rewritten.append(_rewrite_line(body, context, enums) + ending)

    return "\n".join(rewritten)


def format_enum_suffix(info: EnumInfo) -> str:
    """Render the constraint sentence, including its leading space.

    Example::

        format_enum_suffix(EnumInfo(values=("PAUSED", "ACTIVE")))
        # ' Must be one of: `ACTIVE`, `PAUSED`.'
    """
    quoted = ", ".join(f"`{value}`" for value in info.sorted_values())
    return f" {CONSTRAINT_MARKER} {quoted}."


def lookup_enum(
    enums: Mapping[str, EnumInfo],
    context: str,
    field: str,
) -> Optional[EnumInfo]:
    """Find the enum for *field* inside the nested section *context*.

    Args:
        enums: The document's enum map.
        context: Current nested schema name, ``""`` at the top level.
        field: Attribute name from the list item.

    Returns:
        The qualified match, else (inside a nested section) the bare-name
        match, else ``None``.
    """
    if not context:
        return enums.get(field)
    info = enums.get(f"{context}.{field}")
    if info is None:
        info = enums.get(field)
    return info


def _next_context(line: str, context: str) -> str:
    """Return the nested-schema context in effect after *line*."""
    if _SCHEMA_HEADER.match(line):
        return ""
    nested = _NESTED_HEADER.match(line)
    if nested:
        return nested.group(1)
    return context


def _rewrite_line(line: str, context: str, enums: Mapping[str, EnumInfo]) -> str:
    """Append the constraint sentence to *line* if it is an enum attribute."""
    match = _ATTRIBUTE.match(line)
    if not match:
        return line

    head, field, rest = match.groups()
    info = lookup_enum(enums, context, field)
    if info is None or CONSTRAINT_MARKER in rest:
        return line

    suffix = format_enum_suffix(info)
    description = rest.strip()
    if not description:
        return head + suffix
    if description.endswith("."):
        description = description[:-1]
    return f"{head} {description}.{suffix}"
