"""Configuration resolution and XDG data directory.

This module handles all settings for enumdocs:

* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, the project-local ``enumdocs.json``, and built-in
  defaults into an :class:`~enumdocs.models.EnrichConfig`.
* **Data directory** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.enumdocs/`` on macOS and Windows. Crash logs are written under it.
  See :func:`get_data_dir`.

Environment variables:

* ``ENUMDOCS_SPEC`` -- spec source (URL, file path, or ``-``).
* ``ENUMDOCS_DOCS_DIR`` -- documentation root.
* ``ENUMDOCS_TIMEOUT`` -- HTTP timeout in seconds.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from enumdocs.exceptions import ConfigError
from enumdocs.models import EnrichConfig

_APP_NAME = "enumdocs"
_PROJECT_CONFIG_FILENAME = "enumdocs.json"

ENV_SPEC = "ENUMDOCS_SPEC"
ENV_DOCS_DIR = "ENUMDOCS_DOCS_DIR"
ENV_TIMEOUT = "ENUMDOCS_TIMEOUT"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/enumdocs/`` (default ``~/.local/share/enumdocs/``).
    On macOS/Windows: ``~/.enumdocs/``.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./enumdocs.json``.

    A provider repository typically commits this file to pin the spec
    source (e.g. a vendored copy) or a non-standard docs location::

        {"spec_source": "openapi.json", "docs_dir": "website/docs"}

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a valid JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


# --- Precedence resolution ---


def resolve_config(
    cli_spec: Optional[str] = None,
    cli_docs_dir: Optional[Path] = None,
    cli_timeout: Optional[float] = None,
) -> EnrichConfig:
    """Resolve settings with the full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_spec``, ``cli_docs_dir``, ``cli_timeout``)
        2. Environment variables (``ENUMDOCS_SPEC``, ``ENUMDOCS_DOCS_DIR``,
           ``ENUMDOCS_TIMEOUT``)
        3. Project config (``./enumdocs.json``)
        4. Defaults

    Returns:
        The effective :class:`~enumdocs.models.EnrichConfig`.

    Raises:
        ConfigError: If the project file is invalid or a value fails
            validation (e.g. a non-numeric timeout).
    """
    # 4 + 3. Defaults, then the project file
    values: dict[str, Any] = {}
    project = load_project_config()
    if project is not None:
        for key in ("spec_source", "docs_dir", "timeout"):
            if key in project:
                values[key] = project[key]

    # 2. Environment variables
    env_spec = os.environ.get(ENV_SPEC)
    if env_spec:
        values["spec_source"] = env_spec
    env_docs_dir = os.environ.get(ENV_DOCS_DIR)
    if env_docs_dir:
        values["docs_dir"] = env_docs_dir
    env_timeout = os.environ.get(ENV_TIMEOUT)
    if env_timeout:
        values["timeout"] = env_timeout

    # 1. CLI flags (highest precedence)
    if cli_spec is not None:
        values["spec_source"] = cli_spec
    if cli_docs_dir is not None:
        values["docs_dir"] = cli_docs_dir
    if cli_timeout is not None:
        values["timeout"] = cli_timeout

    try:
        return EnrichConfig.model_validate(values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
