"""Canonical Pydantic models shared across all enumdocs modules.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**Schema models** -- the subset of an OpenAPI 3.x document needed to find
enum constraints:
    :class:`HTTPMethod`, :class:`SchemaNode`, :class:`MediaType`,
    :class:`RequestBody`, :class:`Response`, :class:`Operation`,
    :class:`PathItem`, :class:`Components`, and :class:`OpenAPISpec`.

**Enrichment models** -- produced by the extractor and the docs
orchestrator:
    :class:`EnumInfo`, :data:`ResourceEnums`, and :class:`EnrichmentReport`.

**Configuration models** -- resolved by :mod:`enumdocs.config`:
    :class:`EnrichConfig`.

Schema models ignore unknown keys so that a full vendor spec validates
without modelling every OpenAPI feature. Fields whose wire names are not
valid Python identifiers (``$ref``, ``allOf``, ``requestBody``) use aliases
with ``populate_by_name`` enabled.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_SPEC_URL = (
    "https://raw.githubusercontent.com/OnlineOrNot/api-schemas/main/openapi.json"
)
"""Hosted OpenAPI document for the monitoring service."""

DEFAULT_DOCS_DIR = "docs"
"""Documentation root containing ``resources/`` and ``data-sources/``."""


# --- Schema Models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods a :class:`PathItem` can hold an operation for."""

    GET = "get"
    POST = "post"
    PUT = "put"
    PATCH = "patch"
    DELETE = "delete"


class SchemaNode(BaseModel):
    """A (recursive) JSON Schema object from the OpenAPI document.

    ``ref``, the three composition lists, ``properties`` and ``items`` are
    not mutually exclusive: a node may carry a ``$ref`` alongside local
    properties, and every branch contributes when enums are collected.

    ``type`` is accepted either as a single string (OpenAPI 3.0) or as a
    list of strings (OpenAPI 3.1, e.g. ``["string", "null"]``).
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: Optional[Union[str, list[str]]] = None
    enum: list[str] = Field(default_factory=list)
    description: Optional[str] = None
    properties: dict[str, SchemaNode] = Field(default_factory=dict)
    items: Optional[SchemaNode] = None
    ref: Optional[str] = Field(default=None, alias="$ref")
    all_of: list[SchemaNode] = Field(default_factory=list, alias="allOf")
    one_of: list[SchemaNode] = Field(default_factory=list, alias="oneOf")
    any_of: list[SchemaNode] = Field(default_factory=list, alias="anyOf")

    @field_validator("type", mode="before")
    @classmethod
    def _normalise_type(cls, value: Any) -> Any:
        # Anything other than a string or a list of strings is ignored.
        if isinstance(value, str):
            return value
        if isinstance(value, list):
            return [v for v in value if isinstance(v, str)]
        return None

    @field_validator("enum", mode="before")
    @classmethod
    def _normalise_enum(cls, value: Any) -> Any:
        # Nullable enums list ``null`` as a member; it is not a documentable value.
        if not isinstance(value, list):
            return []
        return [
            str(v).lower() if isinstance(v, bool) else str(v)
            for v in value
            if v is not None
        ]

    @field_validator("properties", mode="before")
    @classmethod
    def _drop_boolean_properties(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return {}
        return {k: v for k, v in value.items() if isinstance(v, (dict, SchemaNode))}

    @field_validator("items", mode="before")
    @classmethod
    def _drop_boolean_items(cls, value: Any) -> Any:
        # OpenAPI 3.1 allows ``items: true``; only schema objects are walked.
        if isinstance(value, (dict, SchemaNode)):
            return value
        return None

    @field_validator("all_of", "one_of", "any_of", mode="before")
    @classmethod
    def _drop_non_schema_members(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return []
        return [v for v in value if isinstance(v, (dict, SchemaNode))]

    @property
    def type_names(self) -> list[str]:
        """The declared type(s) as a list, empty when untyped."""
        if self.type is None:
            return []
        if isinstance(self.type, str):
            return [self.type]
        return list(self.type)

    @property
    def is_object_like(self) -> bool:
        """Whether the node describes an object.

        Type tagging in real specs is inconsistent, so a node with
        properties counts as an object even without ``type: object``.
        """
        return "object" in self.type_names or bool(self.properties)


class MediaType(BaseModel):
    """One entry of a ``content`` map, keyed by media type string."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    schema_: SchemaNode = Field(default_factory=SchemaNode, alias="schema")

    @field_validator("schema_", mode="before")
    @classmethod
    def _null_schema_is_empty(cls, value: Any) -> Any:
        # ``schema: null`` and boolean schemas carry no properties to walk.
        if isinstance(value, (dict, SchemaNode)):
            return value
        return {}


def _object_entries(value: Any, model: type[BaseModel]) -> dict[str, Any]:
    """Keep only the object-valued entries of a map; anything else is empty."""
    if not isinstance(value, dict):
        return {}
    return {k: v for k, v in value.items() if isinstance(v, (dict, model))}


class RequestBody(BaseModel):
    """An operation's ``requestBody``."""

    model_config = ConfigDict(extra="ignore")

    content: dict[str, MediaType] = Field(default_factory=dict)

    @field_validator("content", mode="before")
    @classmethod
    def _drop_non_object_media(cls, value: Any) -> Any:
        return _object_entries(value, MediaType)


class Response(BaseModel):
    """A single entry of an operation's ``responses`` map."""

    model_config = ConfigDict(extra="ignore")

    content: dict[str, MediaType] = Field(default_factory=dict)

    @field_validator("content", mode="before")
    @classmethod
    def _drop_non_object_media(cls, value: Any) -> Any:
        return _object_entries(value, MediaType)


class Operation(BaseModel):
    """An OpenAPI *Operation Object* (request body and responses only)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    request_body: Optional[RequestBody] = Field(default=None, alias="requestBody")
    responses: dict[str, Response] = Field(default_factory=dict)

    @field_validator("responses", mode="before")
    @classmethod
    def _stringify_status_codes(cls, value: Any) -> Any:
        # YAML documents may spell status codes as bare integers.
        if not isinstance(value, dict):
            return {}
        return {
            str(code): resp
            for code, resp in value.items()
            if isinstance(resp, (dict, Response))
        }


class PathItem(BaseModel):
    """An OpenAPI *Path Item Object*: at most one operation per verb."""

    model_config = ConfigDict(extra="ignore")

    get: Optional[Operation] = None
    post: Optional[Operation] = None
    put: Optional[Operation] = None
    patch: Optional[Operation] = None
    delete: Optional[Operation] = None

    def operation_for(self, method: Union[str, HTTPMethod]) -> Optional[Operation]:
        """Return the operation for *method*, or ``None`` when absent.

        Args:
            method: HTTP verb in any case (``"POST"``, ``"post"``) or an
                :class:`HTTPMethod` member.
        """
        try:
            verb = HTTPMethod(method.lower() if isinstance(method, str) else method)
        except ValueError:
            return None
        return getattr(self, verb.value)


class Components(BaseModel):
    """The ``components`` section; only reusable schemas are modelled."""

    model_config = ConfigDict(extra="ignore")

    schemas: dict[str, SchemaNode] = Field(default_factory=dict)

    @field_validator("schemas", mode="before")
    @classmethod
    def _drop_boolean_schemas(cls, value: Any) -> Any:
        return _object_entries(value, SchemaNode)


class OpenAPISpec(BaseModel):
    """Root of a parsed OpenAPI document.

    Produced by :func:`~enumdocs.parser.loader.load_spec` and consumed by
    :func:`~enumdocs.parser.extractor.extract_enums`. Built fresh for each
    run and never cached.
    """

    model_config = ConfigDict(extra="ignore")

    openapi: Optional[str] = None
    paths: dict[str, PathItem] = Field(default_factory=dict)
    components: Components = Field(default_factory=Components)

    @field_validator("openapi", mode="before")
    @classmethod
    def _stringify_version(cls, value: Any) -> Any:
        return None if value is None else str(value)

    @field_validator("paths", mode="before")
    @classmethod
    def _drop_non_object_paths(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return {}
        return {k: v for k, v in value.items() if isinstance(v, (dict, PathItem))}

    @field_validator("components", mode="before")
    @classmethod
    def _null_components_is_empty(cls, value: Any) -> Any:
        if isinstance(value, (dict, Components)):
            return value
        return {}


# --- Enrichment Models ---


class EnumInfo(BaseModel):
    """Allowed values for exactly one (possibly nested) field.

    Values keep the order the schema declares them in; rendering sorts
    them via :meth:`sorted_values`.
    """

    model_config = ConfigDict(frozen=True)

    values: tuple[str, ...]

    def sorted_values(self) -> list[str]:
        """Return the values sorted lexicographically."""
        return sorted(self.values)


ResourceEnums = dict[str, dict[str, EnumInfo]]
"""Resource/data-source name -> dotted field name -> :class:`EnumInfo`."""


class EnrichmentReport(BaseModel):
    """Outcome of one documentation enrichment run.

    ``updated_files`` lists the files whose content changed (or, in check
    mode, would change), in processing order.
    """

    enum_counts: dict[str, int] = Field(default_factory=dict)
    files_scanned: int = 0
    updated_files: list[Path] = Field(default_factory=list)
    check: bool = False

    @property
    def changed(self) -> bool:
        """Whether any file was (or would be) rewritten."""
        return bool(self.updated_files)


# --- Configuration Models ---


class EnrichConfig(BaseModel):
    """Effective settings for a run, after precedence resolution.

    See :func:`~enumdocs.config.resolve_config` for the precedence chain.
    """

    spec_source: str = Field(
        default=DEFAULT_SPEC_URL,
        description="URL, file path, or '-' for stdin",
    )
    docs_dir: Path = Field(
        default=Path(DEFAULT_DOCS_DIR),
        description="Directory holding resources/ and data-sources/",
    )
    timeout: float = Field(
        default=30.0, gt=0, description="HTTP timeout in seconds"
    )
