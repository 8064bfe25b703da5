"""Tests for required-file, layout and file-naming rules."""

from typing import TypeAlias
from collections.abc import Callable

from preflight.constants import Severity
from preflight.validation.names import (
    is_descriptive,
    is_documentation,
    is_license,
    is_readme,
    is_schema,
    stem_words,
)
from preflight.validation.rules.naming import (
    check_characters,
    check_descriptive,
    check_duplicates,
    check_mixed_case,
)
from preflight.validation.rules.structure import check_layout, check_required_files
from preflight.validation.schemas import DatasetContext

MakeContext: TypeAlias = Callable[..., DatasetContext]


def _codes(findings) -> list[str]:
    return [f.code for f in findings]


class TestNamePredicates:
    def test_readme_variants(self) -> None:
        assert is_readme("README.md")
        assert is_readme("readme.txt")
        assert not is_readme("notes.md")

    def test_licence_spelling(self) -> None:
        assert is_license("LICENSE")
        assert is_license("Licence.txt")

    def test_schema_suffixes(self) -> None:
        assert is_schema("readings.schema.json")
        assert is_schema("schema.json")
        assert is_schema("readings.schema")
        assert not is_schema("readings.json")

    def test_documentation(self) -> None:
        assert is_documentation("CHANGELOG")
        assert is_documentation("guide.rst")
        assert not is_documentation("readings.csv")

    def test_descriptive(self) -> None:
        assert is_descriptive("temperature_readings.csv")
        assert not is_descriptive("data.csv")
        assert not is_descriptive("12345.csv")
        assert not is_descriptive("ab.csv")
        # only ASCII digit stems count as numeric-only
        assert is_descriptive("\u0661\u0662\u0663\u0664\u0665.csv")

    def test_stem_words(self) -> None:
        assert stem_words("Survey_FINAL-copy.csv") == ["survey", "final", "copy"]


class TestStructure:
    def test_empty_dataset_misses_everything(self, make_context: MakeContext) -> None:
        findings = check_required_files(make_context([]))
        assert _codes(findings) == ["STR-001", "STR-002", "STR-003"]
        assert [f.severity for f in findings] == [
            Severity.CRITICAL,
            Severity.CRITICAL,
            Severity.WARNING,
        ]
        assert all(f.file_path is None for f in findings)

    def test_required_files_found_in_subdirectory(
        self, make_context: MakeContext
    ) -> None:
        ctx = make_context(["docs/README.md", "LICENCE", "meta/metadata.json"])
        assert check_required_files(ctx) == []

    def test_deep_nesting(self, make_context: MakeContext) -> None:
        deep = "/".join(["d"] * 10) + "/file.csv"
        ok = "/".join(["d"] * 9) + "/file.csv"
        findings = check_layout(make_context([deep, ok]))
        assert _codes(findings) == ["STR-004"]
        assert findings[0].file_path == deep
        assert "11 levels deep" in findings[0].message

    def test_long_filename(self, make_context: MakeContext) -> None:
        name = "a" * 256 + ".csv"
        findings = check_layout(make_context([name]))
        assert _codes(findings) == ["STR-005"]


class TestNaming:
    def test_spaces_trigger_both_rules(self, make_context: MakeContext) -> None:
        findings = check_characters(make_context(["my data.csv"]))
        assert _codes(findings) == ["NAME-001", "NAME-002"]
        assert "my_data.csv" in findings[0].suggestion

    def test_special_characters(self, make_context: MakeContext) -> None:
        findings = check_characters(make_context(["results(v2)&more.csv"]))
        assert _codes(findings) == ["NAME-002"]
        assert findings[0].message.endswith("()&")

    def test_non_ascii_letters_are_special(self, make_context: MakeContext) -> None:
        assert _codes(check_characters(make_context(["café.csv"]))) == ["NAME-002"]

    def test_clean_names(self, make_context: MakeContext) -> None:
        assert check_characters(make_context(["a-b_c.1.csv"])) == []

    def test_mixed_case_needs_more_than_five_files(
        self, make_context: MakeContext
    ) -> None:
        five = ["A.csv", "B.csv", "C.csv", "d.csv", "e.csv"]
        assert check_mixed_case(make_context(five)) == []
        findings = check_mixed_case(make_context([*five, "f.csv"]))
        assert _codes(findings) == ["NAME-003"]
        assert "(3 of 6 files)" in findings[0].message
        assert findings[0].severity is Severity.INFO

    def test_mixed_case_ignores_conventional_upper_names(
        self, make_context: MakeContext
    ) -> None:
        files = ["README.md", "LICENSE", "CHANGELOG.md"] + [
            f"part_{i}.csv" for i in range(6)
        ]
        assert check_mixed_case(make_context(files)) == []

    def test_duplicates_case_insensitive(self, make_context: MakeContext) -> None:
        ctx = make_context(["a/Readings.csv", "b/readings.csv", "c/other.csv"])
        findings = check_duplicates(ctx)
        assert _codes(findings) == ["NAME-004"]
        assert "readings.csv appears 2 times" in findings[0].message
        assert findings[0].file_path is None

    def test_working_copy_tokens(self, make_context: MakeContext) -> None:
        findings = check_descriptive(make_context(["survey_final_copy.csv"]))
        assert _codes(findings) == ["NAME-005"]
        assert "(copy, final)" in findings[0].message

    def test_non_descriptive_data_file(self, make_context: MakeContext) -> None:
        findings = check_descriptive(make_context(["data.csv", "x.md", "tmp.json"]))
        assert _codes(findings) == ["FAIR-F301", "FAIR-F301"]
        assert [f.file_path for f in findings] == ["data.csv", "tmp.json"]
