"""Resolve ``$ref`` pointers against ``components.schemas``.

The enum walk treats a reference as transparent: a ``$ref`` contributes
exactly what its target would contribute if inlined. Only references of
the form ``#/components/schemas/<name>`` are followed. Anything else
(external files, ``#/components/responses/...``) and any name missing from
the document resolve to ``None`` -- vendor specs regularly reference
definitions they do not ship, and that must not break a docs build.

JSON Pointer escaping (``~1`` for ``/``, ``~0`` for ``~``) is honoured in
the schema name.
"""

from __future__ import annotations

from typing import Optional

from enumdocs.models import OpenAPISpec, SchemaNode

_SCHEMA_REF_PREFIX = "#/components/schemas/"


def ref_name(ref: str) -> Optional[str]:
    """Return the component schema name a ``$ref`` points at.

    Args:
        ref: The ``$ref`` string, e.g. ``"#/components/schemas/Check"``.

    Returns:
        The unescaped schema name (``"Check"``), or ``None`` when *ref* does
        not point into ``components.schemas``.
    """
    if not ref.startswith(_SCHEMA_REF_PREFIX):
        return None
    name = ref[len(_SCHEMA_REF_PREFIX):]
    if not name or "/" in name:
        return None
    return name.replace("~1", "/").replace("~0", "~")


def resolve_ref(spec: OpenAPISpec, ref: str) -> Optional[SchemaNode]:
    """Look up the schema a ``$ref`` points at.

    Args:
        spec: The parsed document holding ``components.schemas``.
        ref: The ``$ref`` string.

    Returns:
        The referenced :class:`~enumdocs.models.SchemaNode`, or ``None``
        when the reference is unsupported or unresolved.
    """
    name = ref_name(ref)
    if name is None:
        return None
    return spec.components.schemas.get(name)
