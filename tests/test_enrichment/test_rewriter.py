"""Tests for the Markdown constraint rewriter."""

from __future__ import annotations

import pytest

from enumdocs.enrichment.rewriter import (
    CONSTRAINT_MARKER,
    format_enum_suffix,
    lookup_enum,
    rewrite_markdown,
)
from enumdocs.models import EnumInfo


STATUS = EnumInfo(values=("PAUSED", "ACTIVE"))
ASSERTION_TYPE = EnumInfo(values=("STATUS_CODE", "JSON_BODY"))
BARE_TYPE = EnumInfo(values=("HTTP", "TCP"))


# ---------------------------------------------------------------------------
# format_enum_suffix
# ---------------------------------------------------------------------------


class TestFormatEnumSuffix:
    """Test rendering of the constraint sentence."""

    def test_sorted_and_quoted(self) -> None:
        assert format_enum_suffix(STATUS) == " Must be one of: `ACTIVE`, `PAUSED`."

    def test_single_value(self) -> None:
        assert format_enum_suffix(EnumInfo(values=("ONLY",))) == " Must be one of: `ONLY`."

    def test_sort_is_lexicographic(self) -> None:
        info = EnumInfo(values=("b", "B", "a"))
        assert format_enum_suffix(info) == " Must be one of: `B`, `a`, `b`."


# ---------------------------------------------------------------------------
# Single attribute lines
# ---------------------------------------------------------------------------


class TestAttributeLines:
    """Test rewriting of individual attribute list items."""

    def test_empty_description(self) -> None:
        result = rewrite_markdown("- `status` (String)", {"status": STATUS})
        assert result == "- `status` (String) Must be one of: `ACTIVE`, `PAUSED`."

    def test_description_with_period(self) -> None:
        result = rewrite_markdown(
            "- `status` (String) The current status.", {"status": STATUS}
        )
        assert result == (
            "- `status` (String) The current status. Must be one of: `ACTIVE`, `PAUSED`."
        )

    def test_description_without_period(self) -> None:
        result = rewrite_markdown("- `status` (String) The current status", {"status": STATUS})
        assert result == (
            "- `status` (String) The current status. Must be one of: `ACTIVE`, `PAUSED`."
        )

    def test_trailing_whitespace_is_trimmed(self) -> None:
        result = rewrite_markdown("- `status` (String) Status.   ", {"status": STATUS})
        assert result == "- `status` (String) Status. Must be one of: `ACTIVE`, `PAUSED`."

    def test_only_one_trailing_period_removed(self) -> None:
        result = rewrite_markdown("- `status` (String) Etc..", {"status": STATUS})
        assert result == "- `status` (String) Etc.. Must be one of: `ACTIVE`, `PAUSED`."

    def test_already_enriched_line_unchanged(self) -> None:
        line = "- `status` (String) Status. Must be one of: `ACTIVE`."
        assert rewrite_markdown(line, {"status": STATUS}) == line

    def test_field_without_enum_unchanged(self) -> None:
        line = "- `name` (String) Name of the check."
        assert rewrite_markdown(line, {"status": STATUS}) == line

    @pytest.mark.parametrize(
        "line",
        [
            "- `Status` (String) Capitalised names are not attributes.",
            "- `status`(String) Missing space.",
            "- `status` String without parentheses.",
            "* `status` (String) Different bullet.",
            "  - `status` (String) Indented.",
            "`status` (String)",
        ],
    )
    def test_non_attribute_lines_unchanged(self, line: str) -> None:
        assert rewrite_markdown(line, {"status": STATUS}) == line

    def test_empty_enum_map_is_noop(self) -> None:
        text = "## Schema\n\n- `status` (String)\n"
        assert rewrite_markdown(text, {}) is text


# ---------------------------------------------------------------------------
# Nested schema context
# ---------------------------------------------------------------------------


class TestNestedContext:
    """Test heading-driven context tracking."""

    def test_qualified_key_inside_nested_section(self) -> None:
        text = "### Nested Schema for `assertions`\n\n- `type` (String) What to assert on."
        result = rewrite_markdown(text, {"assertions.type": ASSERTION_TYPE})
        assert result.splitlines()[-1] == (
            "- `type` (String) What to assert on. Must be one of: `JSON_BODY`, `STATUS_CODE`."
        )

    def test_qualified_key_not_used_at_top_level(self) -> None:
        line = "- `type` (String) What to assert on."
        assert rewrite_markdown(line, {"assertions.type": ASSERTION_TYPE}) == line

    def test_top_level_uses_bare_key(self) -> None:
        enums = {"assertions.type": ASSERTION_TYPE, "type": BARE_TYPE}
        result = rewrite_markdown("- `type` (String)", enums)
        assert result == "- `type` (String) Must be one of: `HTTP`, `TCP`."

    def test_nested_section_prefers_qualified_key(self) -> None:
        enums = {"assertions.type": ASSERTION_TYPE, "type": BARE_TYPE}
        text = "### Nested Schema for `assertions`\n- `type` (String)"
        assert rewrite_markdown(text, enums).endswith("`JSON_BODY`, `STATUS_CODE`.")

    def test_nested_section_falls_back_to_bare_key(self) -> None:
        text = "### Nested Schema for `settings`\n- `type` (String)"
        assert rewrite_markdown(text, {"type": BARE_TYPE}).endswith("`HTTP`, `TCP`.")

    def test_schema_heading_resets_context(self) -> None:
        text = (
            "### Nested Schema for `assertions`\n"
            "## Schema\n"
            "- `type` (String)"
        )
        lines = rewrite_markdown(text, {"assertions.type": ASSERTION_TYPE}).split("\n")
        assert lines[-1] == "- `type` (String)"

    def test_later_nested_heading_replaces_context(self) -> None:
        text = (
            "### Nested Schema for `assertions`\n"
            "- `type` (String)\n"
            "### Nested Schema for `regions`\n"
            "- `type` (String)"
        )
        lines = rewrite_markdown(text, {"assertions.type": ASSERTION_TYPE}).split("\n")
        assert CONSTRAINT_MARKER in lines[1]
        assert lines[3] == "- `type` (String)"

    def test_dotted_nested_heading_uses_last_segment(self) -> None:
        text = "### Nested Schema for `checks.assertions`\n- `type` (String)"
        result = rewrite_markdown(text, {"assertions.type": ASSERTION_TYPE})
        assert result.endswith("`JSON_BODY`, `STATUS_CODE`.")

    def test_other_headings_keep_context(self) -> None:
        text = (
            "### Nested Schema for `assertions`\n"
            "Required:\n"
            "### Optional\n"
            "- `type` (String)"
        )
        result = rewrite_markdown(text, {"assertions.type": ASSERTION_TYPE})
        assert CONSTRAINT_MARKER in result.split("\n")[-1]


class TestLookupEnum:
    """Test the qualified-then-bare lookup order."""

    def test_top_level_bare_only(self) -> None:
        assert lookup_enum({"type": BARE_TYPE}, "", "type") is BARE_TYPE

    def test_qualified_first(self) -> None:
        enums = {"assertions.type": ASSERTION_TYPE, "type": BARE_TYPE}
        assert lookup_enum(enums, "assertions", "type") is ASSERTION_TYPE

    def test_miss(self) -> None:
        assert lookup_enum({"status": STATUS}, "assertions", "type") is None


# ---------------------------------------------------------------------------
# Whole documents
# ---------------------------------------------------------------------------


class TestWholeDocument:
    """Test structure preservation across a full document."""

    def test_line_count_preserved(self, check_doc: str) -> None:
        result = rewrite_markdown(check_doc, {"status": STATUS, "assertions.type": ASSERTION_TYPE})
        assert len(result.split("\n")) == len(check_doc.split("\n"))
        assert result.endswith("\n")

    def test_only_attribute_lines_change(self, check_doc: str) -> None:
        result = rewrite_markdown(check_doc, {"status": STATUS, "assertions.type": ASSERTION_TYPE})
        changed = [
            (before, after)
            for before, after in zip(check_doc.split("\n"), result.split("\n"))
            if before != after
        ]
        assert [before for before, _ in changed] == [
            "- `status` (String)",
            "- `type` (String) What to assert on.",
        ]

    def test_idempotent(self, check_doc: str) -> None:
        enums = {"status": STATUS, "method": EnumInfo(values=("GET", "POST"))}
        once = rewrite_markdown(check_doc, enums)
        assert once != check_doc
        assert rewrite_markdown(once, enums) == once

    def test_crlf_line_endings_preserved(self) -> None:
        text = "## Schema\r\n\r\n- `status` (String) Status.\r\n"
        result = rewrite_markdown(text, {"status": STATUS})
        assert result == (
            "## Schema\r\n\r\n"
            "- `status` (String) Status. Must be one of: `ACTIVE`, `PAUSED`.\r\n"
        )

    def test_crlf_nested_heading_still_sets_context(self) -> None:
        text = "### Nested Schema for `assertions`\r\n- `type` (String)\r\n"
        result = rewrite_markdown(text, {"assertions.type": ASSERTION_TYPE})
        assert result.split("\r\n")[1].endswith("`JSON_BODY`, `STATUS_CODE`.")
