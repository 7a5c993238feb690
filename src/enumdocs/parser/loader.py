"""Load the OpenAPI document from a URL, local file, or stdin.

This module handles all I/O for fetching the raw OpenAPI document and
converting it into a :class:`~enumdocs.models.OpenAPISpec`. It supports
both JSON and YAML with automatic format detection.

Retrieval is a single attempt: enrichment is a one-shot documentation
build step, so a failure aborts the run instead of retrying.

The public functions are:

* :func:`load_raw` -- Load and parse a document into a plain dict.
* :func:`load_spec` -- :func:`load_raw` plus validation into the schema model.
* :func:`validate_openapi_version` -- Reject Swagger 2.x and non-3.x documents.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml
from pydantic import ValidationError

from enumdocs.exceptions import FetchError, ParseError
from enumdocs.models import OpenAPISpec


def load_spec(source: str, timeout: float = 30.0) -> OpenAPISpec:
    """Load an OpenAPI document and validate it into an :class:`OpenAPISpec`.

    Args:
        source: A URL (http/https), file path, or '-' for stdin.
        timeout: HTTP timeout in seconds (URL sources only).

    Returns:
        The parsed specification model.

    Raises:
        FetchError: If the document cannot be retrieved.
        ParseError: If the document cannot be parsed or does not have the
            shape of an OpenAPI 3.x document.
    """
    raw = load_raw(source, timeout=timeout)
    validate_openapi_version(raw)
    try:
        return OpenAPISpec.model_validate(raw)
    except ValidationError as exc:
        raise ParseError(f"Invalid OpenAPI document from {source}: {exc}") from exc


def load_raw(source: str, timeout: float = 30.0) -> dict[str, Any]:
    """Load an OpenAPI document from URL, file path, or stdin ('-').

    Supports JSON and YAML formats, auto-detected from the content type,
    the file extension, or the content itself.

    Args:
        source: A URL (http/https), file path, or '-' for stdin.
        timeout: HTTP timeout in seconds (URL sources only).

    Returns:
        The parsed document as a dictionary.

    Raises:
        FetchError: If the source cannot be retrieved.
        ParseError: If the content cannot be parsed.
    """
    if source == "-":
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        return _load_from_url(source, timeout)
    else:
        return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    """Read the document from stdin.

    Raises:
        FetchError: If stdin cannot be read.
        ParseError: If stdin is empty or the content cannot be parsed.
    """
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise FetchError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise ParseError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_url(url: str, timeout: float = 30.0) -> dict[str, Any]:
    """Fetch the document from *url*.

    Args:
        url: The HTTP(S) URL to fetch.
        timeout: Request timeout in seconds.

    Raises:
        FetchError: On transport failure or a non-success status code.
        ParseError: If the response body cannot be parsed.
    """
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise FetchError(
            f"HTTP {exc.response.status_code} fetching spec from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise FetchError(f"Failed to fetch spec from {url}: {exc}") from exc

    content = response.text
    # raw.githubusercontent.com serves JSON as text/plain, so this is only a hint
    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    """Load the document from a local file.

    Args:
        path: Path to a ``.json``, ``.yaml`` or ``.yml`` file. Other
            extensions fall back to content-based detection.

    Raises:
        FetchError: If the file does not exist or cannot be read.
        ParseError: If the file is empty or cannot be parsed.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise FetchError(f"Spec file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FetchError(f"Failed to read spec file {path}: {exc}") from exc

    if not content.strip():
        raise ParseError(f"Spec file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.

    Args:
        content: The raw string content.
        hint: Optional format hint ('json' or 'yaml').

    Returns:
        The parsed dictionary.

    Raises:
        ParseError: If the content cannot be parsed as either format, or
            is not an object at the top level.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise ParseError(f"Invalid JSON: {exc}") from exc
        else:
            if not isinstance(result, dict):
                raise ParseError(
                    f"Spec must be a JSON/YAML object (got {type(result).__name__})"
                )
            return result

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        yaml_error = exc
    else:
        if not isinstance(result, dict):
            raise ParseError(
                "Spec must be a JSON/YAML object (got "
                f"{type(result).__name__ if result is not None else 'empty document'})"
            )
        return result

    msg = "Failed to parse spec as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise ParseError(msg)


def validate_openapi_version(raw: dict[str, Any]) -> str | None:
    """Check the document's declared version.

    Swagger 2.x documents keep request bodies in ``parameters`` and schemas
    in ``definitions``, so walking them would silently find nothing; they
    are rejected instead. A missing ``openapi`` field is tolerated because
    trimmed-down schema exports often omit it.

    Args:
        raw: The parsed document dictionary.

    Returns:
        The ``openapi`` version string, or ``None`` when absent.

    Raises:
        ParseError: For Swagger 2.x or a non-3.x ``openapi`` version.
    """
    if "swagger" in raw:
        raise ParseError(
            f"Swagger {raw['swagger']} is not supported. "
            "Only OpenAPI 3.0.x and 3.1.x are supported."
        )

    version = raw.get("openapi")
    if version is None:
        return None

    version_str = str(version)
    if not version_str.startswith("3."):
        raise ParseError(
            f"Unsupported OpenAPI version: {version_str}. "
            "Only OpenAPI 3.0.x and 3.1.x are supported."
        )
    return version_str
