"""Shared test fixtures for enumdocs.

Provides reusable fixtures for loading the OpenAPI fixture, building a
documentation tree, isolating configuration, managing output state, and
running CLI commands. These fixtures are automatically discovered by
pytest and available to all test modules without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from enumdocs.models import OpenAPISpec
from enumdocs.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"

CHECK_DOC = """\
---
page_title: "onlineornot_check Resource - onlineornot"
---

# onlineornot_check (Resource)

## Schema

### Required

- `name` (String) Name of the check.
- `url` (String) URL to monitor.

### Optional

- `method` (String) HTTP method used for the request.
- `status` (String)
- `assertions` (Attributes List) Assertions to run. (see [below for nested schema](#nestedatt--assertions))

### Read-Only

- `id` (String) Check ID.

<a id="nestedatt--assertions"></a>
### Nested Schema for `assertions`

Required:

- `type` (String) What to assert on.
- `comparison` (String) How to compare.
- `expected` (String) Expected value.
"""

WEBHOOK_DOC = """\
# onlineornot_webhook (Resource)

## Schema

- `url` (String) Webhook URL.
"""


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Spec fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def monitoring_raw() -> dict[str, Any]:
    """Load the raw monitoring API spec dict."""
    with open(FIXTURES_DIR / "monitoring_openapi.json") as f:
        return json.load(f)


@pytest.fixture
def monitoring_spec(monitoring_raw: dict[str, Any]) -> OpenAPISpec:
    """Monitoring API spec validated into the schema model."""
    return OpenAPISpec.model_validate(monitoring_raw)


@pytest.fixture
def spec_file(tmp_path: Path) -> Path:
    """Copy of the monitoring spec fixture in tmp_path."""
    path = tmp_path / "openapi.json"
    path.write_text(
        (FIXTURES_DIR / "monitoring_openapi.json").read_text(encoding="utf-8"),
        encoding="utf-8",
    )
    return path


# ---------------------------------------------------------------------------
# Documentation tree fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def check_doc() -> str:
    """Generated documentation page for the check resource."""
    return CHECK_DOC


@pytest.fixture
def webhook_doc() -> str:
    """Generated documentation page with no enum-constrained attributes."""
    return WEBHOOK_DOC


@pytest.fixture
def docs_tree(tmp_path: Path) -> Path:
    """A docs/ tree with one enrichable and one plain resource page.

    Returns:
        The ``docs`` root directory.
    """
    docs = tmp_path / "docs"
    resources = docs / "resources"
    resources.mkdir(parents=True)
    (resources / "check.md").write_text(CHECK_DOC, encoding="utf-8")
    (resources / "webhook.md").write_text(WEBHOOK_DOC, encoding="utf-8")
    return docs


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_DATA_HOME into tmp_path, clears all ENUMDOCS_* environment
    variables, and changes the working directory to tmp_path so no
    project ``enumdocs.json`` leaks in.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["ENUMDOCS_SPEC", "ENUMDOCS_DOCS_DIR", "ENUMDOCS_TIMEOUT"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
