"""Render a ``DATACARD.md`` template."""

from __future__ import annotations

from preflight import __version__
from preflight.generator.schemas import DatasetSummary
from preflight.report.terminal import format_size


def render_datacard(summary: DatasetSummary) -> str:
    types = [f"- {kind}: {n} file(s)" for kind, n in summary.kind_counts.items()]
    lines = [
        "# Data Card: [TODO: Dataset Name]",
        "",
        "## Overview",
        "",
        "[TODO: One-paragraph summary of the dataset and its purpose]",
        "",
        "## Intended Use",
        "",
        "### Primary Uses",
        "",
        "[TODO: The analyses and applications this dataset supports]",
        "",
        "### Out-of-Scope Uses",
        "",
        "[TODO: Uses the dataset is not suitable for]",
        "",
        "## Data Collection",
        "",
        "### Collection Methods",
        "",
        "[TODO: Instruments, protocols, or sources used]",
        "",
        "### Collection Period",
        "",
        "[TODO: Start and end dates of collection]",
        "",
        "### Quality Control",
        "",
        "[TODO: Validation and cleaning steps applied]",
        "",
        "## Data Format",
        "",
        f"{summary.total_files} files totaling "
        f"{format_size(summary.total_size_bytes)}.",
        "",
        "### File Types",
        "",
        *(types or ["- none"]),
        "",
        "### File Structure",
        "",
        "[TODO: Directory layout and naming conventions]",
        "",
        "## Limitations",
        "",
        "[TODO: Known biases, gaps, and caveats]",
        "",
        "## Provenance",
        "",
        "### Dataset Version",
        "",
        "[TODO: Version identifier]",
        "",
        "### Previous Versions",
        "",
        "[TODO: Links to earlier releases, if any]",
        "",
        "### Processing History",
        "",
        "[TODO: Transformations applied to the raw data]",
        "",
        "## Maintenance",
        "",
        "### Update Frequency",
        "",
        "[TODO: How often the dataset is refreshed]",
        "",
        "### Retention Policy",
        "",
        "[TODO: How long the dataset will be kept available]",
        "",
        "---",
        "",
        f"Generated: {summary.generated_at.isoformat(timespec='seconds')}",
        f"Tool: preflight {__version__}",
        "",
        "Review and complete all [TODO] sections before publication.",
    ]
    return "\n".join(lines) + "\n"
