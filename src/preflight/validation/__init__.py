"""Validation rule engine: records + analyses in, ordered findings out."""

from preflight.validation.documents import load_documents, load_manifest
from preflight.validation.engine import validate
from preflight.validation.manifest import parse_manifest
from preflight.validation.rules import DEFAULT_RULES
from preflight.validation.schemas import (
    DatasetContext,
    Document,
    Finding,
    Manifest,
    Rule,
)

__all__ = [
    "DEFAULT_RULES",
    "DatasetContext",
    "Document",
    "Finding",
    "Manifest",
    "Rule",
    "load_documents",
    "load_manifest",
    "parse_manifest",
    "validate",
]
