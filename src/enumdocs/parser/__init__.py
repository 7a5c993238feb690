"""OpenAPI parser -- load the document, resolve ``$ref`` pointers, extract enums.

This sub-package turns the monitoring service's OpenAPI document into the
flat enum maps the documentation rewriter consumes.

Typical usage::

    from enumdocs.parser import extract_enums, load_spec

    spec = load_spec("https://example.com/openapi.json")
    enums = extract_enums(spec, "/v1/checks", "POST")
    # {"status": EnumInfo(values=("ACTIVE", "PAUSED")), ...}

Sub-modules:

* :mod:`~enumdocs.parser.loader` -- I/O layer (URL, file, stdin) plus
  JSON/YAML detection and validation into :class:`~enumdocs.models.OpenAPISpec`.
* :mod:`~enumdocs.parser.resolver` -- ``#/components/schemas/<name>``
  reference lookup.
* :mod:`~enumdocs.parser.extractor` -- Schema walk producing dotted field
  name to :class:`~enumdocs.models.EnumInfo` mappings.
"""

from enumdocs.parser.extractor import extract_enums
from enumdocs.parser.loader import load_raw, load_spec

__all__ = ["load_raw", "load_spec", "extract_enums"]
