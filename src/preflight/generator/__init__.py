"""Documentation generation: templates for the files a FAIR dataset needs."""

from preflight.generator.datacard import render_datacard
from preflight.generator.documentation import generate_documentation
from preflight.generator.manifest import render_manifest
from preflight.generator.metadata import render_metadata
from preflight.generator.readme import render_readme
from preflight.generator.schema import render_csv_schema
from preflight.generator.schemas import DatasetSummary, GeneratedFile

__all__ = [
    "DatasetSummary",
    "GeneratedFile",
    "generate_documentation",
    "render_csv_schema",
    "render_datacard",
    "render_manifest",
    "render_metadata",
    "render_readme",
]
