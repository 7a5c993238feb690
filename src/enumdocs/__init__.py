"""enumdocs -- Enrich provider documentation with OpenAPI enum constraints.

This package reads the monitoring service's OpenAPI document, collects the
allowed values of every enum-constrained field per Terraform resource and
data source, and rewrites the generated Markdown docs so each constrained
attribute states which values it accepts.

Typical workflow::

    enumdocs enrich                  # fetch the hosted spec, rewrite ./docs
    enumdocs enrich --check          # CI guard: fail if docs are stale
    enumdocs enums --resource check  # show the enum table for one resource

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for the OpenAPI subset and configuration.
    resources: Resource/data-source to API path table.
    config: Settings precedence resolution and data directory.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric process exit codes.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
