"""Extract enum constraints from one operation of a parsed OpenAPI document.

The single public entry point is :func:`extract_enums`, which walks the
schema of one path + method pair and returns a flat mapping from dotted
field name to :class:`~enumdocs.models.EnumInfo`.

Which schema is walked depends on the method:

* ``POST`` / ``PATCH`` -- the request body (every media type). These are
  the constraints a create/update call enforces, so they document resources.
* ``GET`` -- the ``"200"`` response body (every media type). These document
  the read side, i.e. data sources.

Naming: a property ``c`` directly inside object property ``p`` is keyed
``p.c``. Only the *immediate* parent name is used as the prefix, however
deep ``p`` itself sits, because the generated docs track exactly one
level of ``Nested Schema for `p``` heading at a time.

After the walk, a leading ``result.`` (the response envelope) and then a
leading ``result_info.`` (pagination metadata) are stripped from every key.
"""

from __future__ import annotations

from typing import Iterator, Union

from enumdocs.models import EnumInfo, HTTPMethod, OpenAPISpec, Operation, SchemaNode
from enumdocs.parser.resolver import ref_name, resolve_ref

_ENVELOPE_PREFIXES = ("result.", "result_info.")
_SUCCESS_STATUS = "200"


def extract_enums(
    spec: OpenAPISpec,
    path: str,
    method: Union[str, HTTPMethod],
) -> dict[str, EnumInfo]:
    """Collect the enum-constrained fields of one operation.

    Lookup misses are not errors: an unknown *path*, a verb the path does
    not define, or a method other than GET/POST/PATCH all yield ``{}``.

    Args:
        spec: The parsed OpenAPI document.
        path: URL path template exactly as declared, e.g. ``"/v1/checks"``.
        method: HTTP verb in any case, or an :class:`HTTPMethod`.

    Returns:
        Mapping of dotted field name to its allowed values. Fields without
        an ``enum`` are absent.

    Example::

        enums = extract_enums(spec, "/v1/checks", "POST")
        enums["assertions.type"].values
        # ('JSON_BODY', 'RESPONSE_HEADERS', 'RESPONSE_TIME', 'STATUS_CODE')
    """
    path_item = spec.paths.get(path)
    if path_item is None:
        return {}

    operation = path_item.operation_for(method)
    if operation is None:
        return {}

    collected: dict[str, EnumInfo] = {}
    for schema in _operation_schemas(operation, method.lower()):
        _walk(schema, "", spec, collected, frozenset())

    return _strip_envelopes(collected)


def _operation_schemas(operation: Operation, verb: str) -> list[SchemaNode]:
    """Return the body schemas to walk for *verb*, one per media type."""
    if verb in (HTTPMethod.POST.value, HTTPMethod.PATCH.value):
        if operation.request_body is None:
            return []
        return [media.schema_ for media in operation.request_body.content.values()]

    if verb == HTTPMethod.GET.value:
        response = operation.responses.get(_SUCCESS_STATUS)
        if response is None:
            return []
        return [media.schema_ for media in response.content.values()]

    return []


def _walk(
    node: SchemaNode,
    prefix: str,
    spec: OpenAPISpec,
    enums: dict[str, EnumInfo],
    seen: frozenset[str],
) -> None:
    """Record every enum reachable from *node* into *enums*.

    ``$ref``, the composition lists, ``properties`` and ``items`` are all
    visited; none of them short-circuits the others.

    Args:
        node: The schema to walk.
        prefix: Name of the immediate parent object property, or ``""``
            at the top level.
        spec: Document used to resolve ``$ref`` pointers.
        enums: Accumulator, mutated in place.
        seen: Reference names on the current descent path. A reference
            already in it is a cycle and contributes nothing further.
    """
    if node.ref:
        name = ref_name(node.ref)
        target = resolve_ref(spec, node.ref)
        if name is not None and target is not None and name not in seen:
            _walk(target, prefix, spec, enums, seen | {name})

    for member in (*node.all_of, *node.one_of, *node.any_of):
        _walk(member, prefix, spec, enums, seen)

    for prop_name, child in node.properties.items():
        qualified = f"{prefix}.{prop_name}" if prefix else prop_name
        views = list(_merged_views(child, spec, seen))

        values = next((view.enum for view in views if view.enum), None)
        if values:
            enums[qualified] = EnumInfo(values=values)

        # Children are keyed by this property's bare name, not `qualified`.
        if any(view.is_object_like or view.items is not None for view in views):
            _walk(child, prop_name, spec, enums, seen)

    if node.items is not None:
        _walk(node.items, prefix, spec, enums, seen)


def _merged_views(
    node: SchemaNode,
    spec: OpenAPISpec,
    seen: frozenset[str],
) -> Iterator[SchemaNode]:
    """Yield *node* and every schema that would be merged into it if inlined.

    Follows ``$ref`` targets and ``allOf``/``oneOf``/``anyOf`` members, so a
    property declared as ``{"$ref": "#/components/schemas/Status"}`` is
    seen to carry ``Status``'s enum and object-ness.
    """
    yield node

    if node.ref:
        name = ref_name(node.ref)
        target = resolve_ref(spec, node.ref)
        if name is not None and target is not None and name not in seen:
            yield from _merged_views(target, spec, seen | {name})

    for member in (*node.all_of, *node.one_of, *node.any_of):
        yield from _merged_views(member, spec, seen)


def _strip_envelopes(enums: dict[str, EnumInfo]) -> dict[str, EnumInfo]:
    """Drop the ``result.`` / ``result_info.`` wrapper prefixes from keys."""
    cleaned: dict[str, EnumInfo] = {}
    for key, info in enums.items():
        for envelope in _ENVELOPE_PREFIXES:
            if key.startswith(envelope):
                key = key[len(envelope):]
        cleaned[key] = info
    return cleaned
