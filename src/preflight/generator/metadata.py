"""Render a ``metadata.json`` skeleton with placeholder fields."""

from __future__ import annotations

import json
from typing import Any

from preflight import __version__
from preflight.generator.schemas import DatasetSummary

REVIEW_NOTE = "Review and complete all [TODO] fields before publication"


def render_metadata(summary: DatasetSummary) -> str:
    document: dict[str, Any] = {
        "title": "[TODO: Dataset title]",
        "description": "[TODO: What the dataset contains and why it was collected]",
        "creator": "[TODO: Author or organization]",
        "date": "[TODO: Publication date, YYYY-MM-DD]",
        "license": "[TODO: SPDX license identifier, e.g. CC-BY-4.0]",
        "keywords": ["[TODO: keyword]", "[TODO: keyword]"],
        "contact": {
            "name": "[TODO: Contact name]",
            "email": "[TODO: Contact email]",
        },
        "files": [
            {
                "count": summary.total_files,
                "total_size_bytes": summary.total_size_bytes,
                "types": summary.kind_counts,
            }
        ],
        "tool": {
            "name": "preflight",
            "version": __version__,
            "generated": summary.generated_at.isoformat(timespec="seconds"),
            "note": REVIEW_NOTE,
        },
    }
    return json.dumps(document, indent=2) + "\n"
