"""Map Terraform resource and data-source names to the API paths documenting them.

Resources are documented from the *create* endpoint's request body (walked
with ``POST``); data sources from the list or read endpoint's ``200``
response (walked with ``GET``). Names match the Markdown file stems under
``docs/resources/`` and ``docs/data-sources/``.

A name missing from these tables simply receives no enrichment.
"""

from __future__ import annotations

from typing import Optional

from enumdocs.models import EnumInfo, HTTPMethod, OpenAPISpec, ResourceEnums
from enumdocs.parser.extractor import extract_enums

RESOURCE_PATHS: dict[str, str] = {
    "check": "/v1/checks",
    "heartbeat": "/v1/heartbeats",
    "maintenance_window": "/v1/maintenance-windows",
    "webhook": "/v1/webhooks",
    "status_page": "/v1/status_pages",
    "status_page_component": "/v1/status_pages/{status_page_id}/components",
    "status_page_component_group": "/v1/status_pages/{status_page_id}/groups",
    "status_page_incident": "/v1/status_pages/{status_page_id}/incidents",
    "status_page_scheduled_maintenance": (
        "/v1/status_pages/{status_page_id}/scheduled_maintenance"
    ),
}
"""Resource name -> creation path (walked with POST)."""

DATA_SOURCE_PATHS: dict[str, str] = {
    "checks": "/v1/checks",
    "heartbeats": "/v1/heartbeats",
    "maintenance_windows": "/v1/maintenance-windows",
    "webhooks": "/v1/webhooks",
    "status_pages": "/v1/status_pages",
    "user": "/v1/users/{user_id}",
    "users": "/v1/users",
}
"""Data-source name -> retrieval path (walked with GET)."""


def lookup_path(name: str) -> Optional[tuple[str, HTTPMethod]]:
    """Return the ``(path, method)`` used to source enums for *name*.

    Resource names take precedence; the two tables do not currently
    overlap.

    Args:
        name: A resource or data-source name, e.g. ``"check"`` or ``"users"``.

    Returns:
        The path template and HTTP method, or ``None`` for unknown names.
    """
    if name in RESOURCE_PATHS:
        return RESOURCE_PATHS[name], HTTPMethod.POST
    if name in DATA_SOURCE_PATHS:
        return DATA_SOURCE_PATHS[name], HTTPMethod.GET
    return None


def known_names() -> list[str]:
    """Return every resource and data-source name, sorted."""
    return sorted(set(RESOURCE_PATHS) | set(DATA_SOURCE_PATHS))


def build_enum_table(spec: OpenAPISpec) -> ResourceEnums:
    """Build the Resource Enum Table for every known resource and data source.

    Runs :func:`~enumdocs.parser.extractor.extract_enums` once per table
    entry. Names whose path yields no enum-constrained fields are omitted.

    Args:
        spec: The parsed OpenAPI document.

    Returns:
        Mapping of resource/data-source name to its dotted-field enum map.
    """
    table: ResourceEnums = {}
    for entries, method in (
        (RESOURCE_PATHS, HTTPMethod.POST),
        (DATA_SOURCE_PATHS, HTTPMethod.GET),
    ):
        for name, path in entries.items():
            enums: dict[str, EnumInfo] = extract_enums(spec, path, method)
            if enums:
                table[name] = enums
    return table
