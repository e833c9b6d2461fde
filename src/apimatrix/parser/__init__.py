"""OpenAPI document parser -- load documents and extract report rows.

Typical usage::

    from apimatrix.parser import load_spec, get_paths, extract_path

    raw = load_spec("https://petstore3.swagger.io/api/v3/openapi.json")
    for path, item in (get_paths(raw) or {}).items():
        ...

Sub-modules:

* :mod:`~apimatrix.parser.loader` -- I/O layer (URL, file, stdin), format
  detection, and typed access to ``paths`` and ``info.title``.
* :mod:`~apimatrix.parser.extractor` -- Walks one path item and renders a
  line per operation.
"""

from apimatrix.parser.extractor import extract_path
from apimatrix.parser.loader import (
    fetch_response,
    fetch_spec,
    get_paths,
    get_title,
    load_spec,
    parse_document,
)

__all__ = [
    "extract_path",
    "fetch_response",
    "fetch_spec",
    "get_paths",
    "get_title",
    "load_spec",
    "parse_document",
]
