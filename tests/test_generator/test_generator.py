"""Tests for documentation template generation."""

from __future__ import annotations

from typing import TypeAlias
import json
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from preflight.analysis.schemas import ColumnInfo, CsvAnalysis, TextAnalysis
from preflight.config import Settings
from preflight.constants import ColumnType, FileKind
from preflight.generator import (
    DatasetSummary,
    generate_documentation,
    render_csv_schema,
    render_datacard,
    render_manifest,
    render_metadata,
    render_readme,
)
from preflight.scanner.hashing import hash_records, sha256_file
from preflight.scanner.schemas import FileRecord
from preflight.services.preflight_service import run_preflight
from preflight.validation.manifest import parse_manifest
from preflight.validation.rules.integrity import check_integrity
from preflight.validation.schemas import DatasetContext

MakeRecord: TypeAlias = Callable[..., FileRecord]
MakeContext: TypeAlias = Callable[..., DatasetContext]

GENERATED_AT = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


def _summary(**overrides: object) -> DatasetSummary:
    fields: dict[str, object] = {
        "total_files": 3,
        "total_size_bytes": 2048,
        "kind_counts": {"csv": 2, "text": 1},
        "generated_at": GENERATED_AT,
    }
    fields.update(overrides)
    return DatasetSummary.model_validate(fields)


def _integrity_codes(result) -> list[str]:
    return [f.code for f in result.findings if f.code.startswith("INTEGRITY")]


class TestRenderManifest:
    def test_sha256sum_lines_sorted_by_path(self, make_record: MakeRecord) -> None:
        records = hash_records([
            make_record("b.csv", "x\n1\n"),
            make_record("a/readings.csv", "y\n2\n"),
        ])
        text = render_manifest(records)
        assert text.splitlines() == [
            f"{records[1].sha256}  a/readings.csv",
            f"{records[0].sha256}  b.csv",
        ]

    def test_unhashed_records_are_digested(self, make_record: MakeRecord) -> None:
        record = make_record("notes.txt", "field notes\n")
        assert record.sha256 is None
        text = render_manifest([record])
        assert text == f"{sha256_file(record.full_path)}  notes.txt\n"

    def test_root_manifest_not_listed(self, make_record: MakeRecord) -> None:
        records = [
            make_record("MANIFEST.txt", "stale\n"),
            make_record("a.csv", "x\n1\n"),
        ]
        lines = render_manifest(records).splitlines()
        assert [line.split("  ")[1] for line in lines] == ["a.csv"]

    def test_unreadable_file_left_out(self, make_record: MakeRecord) -> None:
        gone = make_record("gone.csv", "x\n1\n")
        gone.full_path.unlink()
        kept = make_record("kept.csv", "x\n2\n")
        text = render_manifest([gone, kept])
        assert text.endswith("  kept.csv\n")
        assert "gone.csv" not in text

    def test_round_trip_through_integrity_check(
        self, make_record: MakeRecord, make_context: MakeContext
    ) -> None:
        records = hash_records([
            make_record("data/station one.csv", "t\n1\n"),
            make_record("data/station_two.csv", "t\n2\n"),
            make_record("LICENSE", "MIT License\n"),
        ])
        manifest = parse_manifest(render_manifest(records))

        assert manifest.error is None
        assert len(manifest.entries) == 3
        assert check_integrity(make_context(records, manifest=manifest)) == []


class TestRenderCsvSchema:
    def test_column_types_and_examples(self) -> None:
        analysis = CsvAnalysis(
            columns=[
                ColumnInfo(
                    name="count",
                    index=0,
                    inferred_type=ColumnType.INTEGER,
                    sample_values=["1", "2"],
                ),
                ColumnInfo(name="temp", index=1, inferred_type=ColumnType.FLOAT),
                ColumnInfo(name="valid", index=2, inferred_type=ColumnType.BOOLEAN),
                ColumnInfo(name="day", index=3, inferred_type=ColumnType.DATE),
                ColumnInfo(name="site", index=4),
            ]
        )

        schema = json.loads(render_csv_schema(analysis, "readings.csv"))

        assert schema["$schema"] == "http://json-schema.org/draft-07/schema#"
        assert schema["title"] == "Schema for readings.csv"
        assert schema["type"] == "array"
        props = schema["items"]["properties"]
        assert list(props) == ["count", "temp", "valid", "day", "site"]
        assert {name: p["type"] for name, p in props.items()} == {
            "count": "integer",
            "temp": "number",
            "valid": "boolean",
            "day": "string",
            "site": "string",
        }
        assert props["count"]["examples"] == ["1", "2"]
        assert props["count"]["description"] == "Column 0 (inferred type: integer)"
        assert "examples" not in props["temp"]


class TestSummaryTemplates:
    def test_summary_from_records(self, make_record: MakeRecord) -> None:
        records = [
            make_record("a.csv", "x\n1\n"),
            make_record("b.csv", "x\n2\n"),
            make_record("notes.txt", "hello\n"),
        ]
        summary = DatasetSummary.from_records(records, GENERATED_AT)
        assert summary.total_files == 3
        assert summary.total_size_bytes == sum(r.size_bytes for r in records)
        assert summary.kind_counts == {"csv": 2, "text": 1}

    def test_metadata_skeleton(self) -> None:
        doc = json.loads(render_metadata(_summary()))
        for key in ("title", "description", "creator", "date", "license"):
            assert doc[key].startswith("[TODO")
        assert len(doc["keywords"]) == 2
        assert doc["files"] == [
            {"count": 3, "total_size_bytes": 2048, "types": {"csv": 2, "text": 1}}
        ]
        assert doc["tool"]["generated"] == "2024-03-01T12:00:00+00:00"

    def test_datacard_sections(self) -> None:
        text = render_datacard(_summary())
        assert text.startswith("# Data Card: [TODO: Dataset Name]\n")
        for heading in (
            "## Overview",
            "## Intended Use",
            "## Data Collection",
            "## Data Format",
            "## Limitations",
            "## Provenance",
            "## Maintenance",
        ):
            assert f"\n{heading}\n" in text
        assert "3 files totaling 2.0 KB." in text
        assert "- csv: 2 file(s)" in text

    def test_readme_lists_file_types(self) -> None:
        text = render_readme(_summary(kind_counts={"binary": 1}))
        assert text.startswith("# [TODO: Dataset Title]\n")
        assert "| binary | 1 |" in text
        assert "## Citation" in text


class TestGenerateDocumentation:
    def test_writes_missing_templates(
        self, make_record: MakeRecord, tmp_path: Path
    ) -> None:
        csv = make_record("sub/readings.csv", "t\n1\n")
        notes = make_record("notes.txt", "hello\n")
        analysis = CsvAnalysis(columns=[ColumnInfo(name="t", index=0)])

        generated = generate_documentation(
            [notes, csv], [TextAnalysis(), analysis], tmp_path
        )

        written = [
            (g.path.relative_to(tmp_path).as_posix(), g.created) for g in generated
        ]
        assert written == [
            ("README.md", True),
            ("metadata.json", True),
            ("DATACARD.md", True),
            ("sub/readings.schema.json", True),
            ("MANIFEST.txt", True),
        ]
        manifest = parse_manifest((tmp_path / "MANIFEST.txt").read_text())
        assert set(manifest.entries) == {"notes.txt", "sub/readings.csv"}

    def test_never_overwrites(self, make_record: MakeRecord, tmp_path: Path) -> None:
        readme = make_record("README.md", "# Mine\n")
        manifest = make_record("MANIFEST.txt", "# hand written\n")

        generated = generate_documentation(
            [manifest, readme], [TextAnalysis(), TextAnalysis()], tmp_path
        )

        created = {g.path.name: g.created for g in generated}
        assert created["README.md"] is False
        assert created["MANIFEST.txt"] is False
        assert created["DATACARD.md"] is True
        assert (tmp_path / "README.md").read_text() == "# Mine\n"
        assert (tmp_path / "MANIFEST.txt").read_text() == "# hand written\n"

    def test_csv_without_columns_gets_no_schema(
        self, make_record: MakeRecord, tmp_path: Path
    ) -> None:
        empty = make_record("empty.csv", "", kind=FileKind.CSV)
        generate_documentation([empty], [CsvAnalysis()], tmp_path / "out")
        assert not (tmp_path / "out" / "empty.schema.json").exists()
        assert (tmp_path / "out" / "MANIFEST.txt").exists()

    def test_output_dir_created(self, make_record: MakeRecord, tmp_path: Path) -> None:
        record = make_record("a.txt", "hello\n")
        out = tmp_path / "docs" / "generated"
        generate_documentation([record], [TextAnalysis()], out)
        assert (out / "README.md").exists()


class TestGeneratedManifestVerifies:
    def test_rescan_has_no_integrity_findings(
        self, fair_dataset: Path, settings: Settings
    ) -> None:
        nested = fair_dataset / "raw" / "buoy_positions.csv"
        nested.parent.mkdir()
        nested.write_text("buoy,lat\nA,42.5\nB,42.6\n")
        cfg = settings.model_copy(update={"hash_files": False})
        before = run_preflight(fair_dataset, cfg)

        generate_documentation(before.records, before.analyses, fair_dataset)
        after = run_preflight(fair_dataset, cfg)

        assert (fair_dataset / "DATACARD.md").exists()
        assert (fair_dataset / "raw" / "buoy_positions.schema.json").exists()
        assert _integrity_codes(after) == []
        assert {r.path for r in after.records} >= {"MANIFEST.txt", "DATACARD.md"}

    def test_later_edit_is_detected(
        self, fair_dataset: Path, settings: Settings
    ) -> None:
        before = run_preflight(fair_dataset, settings)
        generate_documentation(before.records, before.analyses, fair_dataset)

        with open(fair_dataset / "temperature_readings.csv", "a") as f:
            f.write("004,2023-01-01T03:00:00Z,42.8,-30.4,13.1\n")
        after = run_preflight(fair_dataset, settings)

        assert _integrity_codes(after) == ["INTEGRITY-001"]
