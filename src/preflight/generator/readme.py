"""Render a ``README.md`` template."""

from __future__ import annotations

from preflight.generator.schemas import DatasetSummary
from preflight.report.terminal import format_size


def render_readme(summary: DatasetSummary) -> str:
    types = [f"| {kind} | {n} |" for kind, n in summary.kind_counts.items()]
    lines = [
        "# [TODO: Dataset Title]",
        "",
        "[TODO: Short description of the dataset]",
        "",
        "## Description",
        "",
        "[TODO: What was measured, where, when, and by whom]",
        "",
        "## Contents",
        "",
        f"{summary.total_files} files, {format_size(summary.total_size_bytes)} total.",
        "",
        "| Type | Files |",
        "|------|-------|",
        *types,
        "",
        "## Methodology",
        "",
        "[TODO: How the data was collected and processed]",
        "",
        "## Usage",
        "",
        "[TODO: How to load and interpret the files]",
        "",
        "## Citation",
        "",
        "[TODO: Preferred citation, including a DOI if one exists]",
        "",
        "## License",
        "",
        "[TODO: License name; see the LICENSE file]",
        "",
        "## Contact",
        "",
        "[TODO: Maintainer name and email]",
    ]
    return "\n".join(lines) + "\n"
