"""Render a JSON Schema (draft-07) describing the rows of a CSV file."""

from __future__ import annotations

import json
from typing import Any

from preflight.analysis.schemas import CsvAnalysis
from preflight.constants import ColumnType

JSON_SCHEMA_DRAFT = "http://json-schema.org/draft-07/schema#"

# Timestamps and dates stay strings; JSON has no temporal type
_JSON_TYPES: dict[ColumnType, str] = {
    ColumnType.INTEGER: "integer",
    ColumnType.FLOAT: "number",
    ColumnType.BOOLEAN: "boolean",
}


def render_csv_schema(analysis: CsvAnalysis, file_name: str) -> str:
    properties: dict[str, Any] = {}
    for column in analysis.columns:
        prop: dict[str, Any] = {
            "type": _JSON_TYPES.get(column.inferred_type, "string"),
            "description": (
                f"Column {column.index} (inferred type: {column.inferred_type})"
            ),
        }
        if column.sample_values:
            prop["examples"] = list(column.sample_values)
        properties[column.name] = prop

    document: dict[str, Any] = {
        "$schema": JSON_SCHEMA_DRAFT,
        "title": f"Schema for {file_name}",
        "description": "Auto-generated schema from CSV analysis",
        "type": "array",
        "items": {"type": "object", "properties": properties},
    }
    return json.dumps(document, indent=2) + "\n"
