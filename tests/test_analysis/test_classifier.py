"""Tests for the content classifier."""

from preflight.analysis.classifier import (
    classify,
    is_binary_prefix,
    sniff_binary_format,
)
from preflight.constants import FileKind


class TestClassify:
    def test_csv_by_extension(self) -> None:
        assert classify(b"a,b\n1,2\n", "csv") == FileKind.CSV

    def test_tsv_maps_to_csv(self) -> None:
        assert classify(b"a\tb\n", "tsv") == FileKind.CSV

    def test_json_by_extension(self) -> None:
        assert classify(b'{"a": 1}', "json") == FileKind.JSON

    def test_extension_case_and_dot_ignored(self) -> None:
        assert classify(b"{}", ".JSON") == FileKind.JSON

    def test_unknown_extension_is_text(self) -> None:
        assert classify(b"hello world\n", "md") == FileKind.TEXT

    def test_null_byte_overrides_extension(self) -> None:
        assert classify(b"a,b\x00c", "csv") == FileKind.BINARY

    def test_control_heavy_prefix_is_binary(self) -> None:
        prefix = bytes([0x01, 0x02, 0x03, 0x04]) + b"ab"
        assert classify(prefix, "txt") == FileKind.BINARY

    def test_empty_file_is_not_binary(self) -> None:
        assert classify(b"", "csv") == FileKind.CSV

    def test_utf8_multibyte_counts_as_printable(self) -> None:
        prefix = "température,été\n".encode()
        assert classify(prefix, "csv") == FileKind.CSV


class TestBinaryPrefix:
    def test_tabs_and_newlines_are_text(self) -> None:
        assert is_binary_prefix(b"a\tb\r\nc\n") is False

    def test_ratio_threshold_is_strict(self) -> None:
        # 3 of 10 bytes are control: exactly at 0.3 is still text
        prefix = bytes([0x01, 0x02, 0x03]) + b"abcdefg"
        assert is_binary_prefix(prefix, 0.3) is False
        assert is_binary_prefix(prefix, 0.29) is True


class TestSniffFormat:
    def test_hdf5(self) -> None:
        assert sniff_binary_format(b"\x89HDF\r\n\x1a\n rest") == "hdf5"

    def test_png(self) -> None:
        assert sniff_binary_format(b"\x89PNG\r\n\x1a\n") == "png"

    def test_netcdf(self) -> None:
        assert sniff_binary_format(b"CDF\x01...") == "netcdf"

    def test_unknown(self) -> None:
        assert sniff_binary_format(b"\x00\x01\x02") == "unknown"
