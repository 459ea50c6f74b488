"""Swagger 2.0 document loader.

Reads a YAML or JSON file (JSON is a subset of YAML) into a SwaggerDocument.
"""

from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from apigateway_importer.errors import DocumentError

from .base import SwaggerDocument


def load_document(source: str | Path | Mapping | SwaggerDocument) -> SwaggerDocument:
    """Load a document from a file path, a parsed mapping, or pass a model through."""
    if isinstance(source, SwaggerDocument):
        return source

    if isinstance(source, Mapping):
        return parse_document(dict(source))

    file_path = Path(source)
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentError(f"Cannot read document: {e}", {"path": str(file_path)}) from e

    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentError(f"Document is not valid YAML or JSON: {e}", {"path": str(file_path)}) from e

    if not isinstance(doc, dict):
        raise DocumentError("Document root must be an object", {"path": str(file_path)})

    return parse_document(doc)


def parse_document(doc: dict) -> SwaggerDocument:
    """Validate a parsed document into the importer's models."""
    if "openapi" in doc:
        raise DocumentError("OpenAPI 3.x documents are not supported", {"openapi": doc["openapi"]})

    try:
        return SwaggerDocument.model_validate(doc)
    except ValidationError as e:
        raise DocumentError(f"Malformed Swagger document: {e.error_count()} error(s)", {"errors": e.errors()}) from e
