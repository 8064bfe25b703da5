"""Tests for the streaming CSV state machine and delimiter detection."""

import pytest

from preflight.analysis.csv_tokenizer import (
    CsvTokenizer,
    TokenizerState,
    choose_delimiter,
    detect_delimiter,
    tokenize,
)


class TestTokenize:
    def test_simple_rows(self) -> None:
        assert tokenize("a,b,c\n1,2,3\n") == [["a", "b", "c"], ["1", "2", "3"]]

    def test_no_trailing_newline(self) -> None:
        assert tokenize("a,b\n1,2") == [["a", "b"], ["1", "2"]]

    def test_crlf_and_bare_cr(self) -> None:
        assert tokenize("a,b\r\n1,2\r3,4") == [["a", "b"], ["1", "2"], ["3", "4"]]

    def test_blank_lines_skipped(self) -> None:
        assert tokenize("a\n\n\nb\n") == [["a"], ["b"]]

    def test_quoted_delimiter_and_newline_are_literal(self) -> None:
        rows = tokenize('name,notes\n"Smith, J","line1\nline2"\n')
        assert rows == [["name", "notes"], ["Smith, J", "line1\nline2"]]

    def test_escaped_quote(self) -> None:
        assert tokenize('"say ""hi"""\n') == [['say "hi"']]

    def test_empty_fields(self) -> None:
        assert tokenize(",,\n") == [["", "", ""]]

    def test_trailing_delimiter_at_eof(self) -> None:
        assert tokenize("a,b,") == [["a", "b", ""]]

    def test_empty_quoted_field(self) -> None:
        assert tokenize('"",x\n') == [["", "x"]]

    def test_text_after_closing_quote_kept(self) -> None:
        assert tokenize('"ab"c,d\n') == [["abc", "d"]]

    def test_other_delimiter(self) -> None:
        assert tokenize("a;b\n", ";") == [["a", "b"]]


class TestChunkBoundaries:
    def test_state_carries_across_feeds(self) -> None:
        text = 'id,comment\n1,"hello, ""world""\nbye"\n2,plain\n'
        expected = tokenize(text)
        for size in (1, 2, 3, 5, 7):
            tokenizer = CsvTokenizer()
            rows: list[list[str]] = []
            for start in range(0, len(text), size):
                rows.extend(tokenizer.feed(text[start:start + size]))
            rows.extend(tokenizer.finish())
            assert rows == expected, f"chunk size {size}"

    def test_escaped_quote_split_between_feeds(self) -> None:
        tokenizer = CsvTokenizer()
        assert tokenizer.feed('"a"') == []
        assert tokenizer.state is TokenizerState.QUOTE_IN_QUOTED_FIELD
        tokenizer.feed('"b"\n')
        assert tokenizer.finish() == []
        assert tokenizer.error is None

    def test_crlf_split_between_feeds(self) -> None:
        tokenizer = CsvTokenizer()
        rows = tokenizer.feed("a,b\r")
        assert rows == [["a", "b"]]
        assert tokenizer.state is TokenizerState.ROW_END
        rows = tokenizer.feed("\n1,2\n")
        assert rows == [["1", "2"]]


class TestMalformed:
    def test_unterminated_quote_reports_error(self) -> None:
        tokenizer = CsvTokenizer()
        rows = tokenizer.feed('a,b\n1,"open\n2,3\n')
        rows.extend(tokenizer.finish())
        assert rows == [["a", "b"]]
        assert tokenizer.error is not None
        assert "unterminated" in tokenizer.error

    def test_invalid_delimiter_rejected(self) -> None:
        with pytest.raises(ValueError, match="invalid delimiter"):
            CsvTokenizer('"')

    def test_feed_after_finish_rejected(self) -> None:
        tokenizer = CsvTokenizer()
        tokenizer.finish()
        with pytest.raises(RuntimeError):
            tokenizer.feed("a")


class TestDelimiterDetection:
    def test_comma(self) -> None:
        assert detect_delimiter("a,b,c\n1,2,3\n4,5,6\n") == ","

    def test_tab_consistent_counts(self) -> None:
        assert detect_delimiter("a\tb\tc\n1\t2\t3\n4\t5\t6\n") == "\t"

    def test_semicolon(self) -> None:
        assert detect_delimiter("a;b\n1,5;2\n3,5;4\n") == ";"

    def test_pipe(self) -> None:
        assert detect_delimiter("a|b|c\n1|2|3\n") == "|"

    def test_inconsistent_defaults_to_comma(self) -> None:
        assert detect_delimiter("a;b\n1;2;3\nx\ty\n") == ","

    def test_single_column_defaults_to_comma(self) -> None:
        assert detect_delimiter("value\n1\n2\n") == ","

    def test_empty_defaults_to_comma(self) -> None:
        assert detect_delimiter("") == ","

    def test_quoted_delimiters_not_counted(self) -> None:
        sample = 'a;b\n"x,y,z";1\n"p,q,r";2\n'
        assert detect_delimiter(sample) == ";"

    def test_only_first_rows_sampled(self) -> None:
        rows = ["a,b"] * 10 + ["a;b;c;d"] * 5
        assert detect_delimiter("\n".join(rows) + "\n", max_rows=10) == ","

    def test_tie_defaults_to_comma(self) -> None:
        assert choose_delimiter({";": [1, 1], "|": [1, 1]}) == ","

    def test_highest_consistent_count_wins(self) -> None:
        assert choose_delimiter({",": [1, 1], "\t": [3, 3]}) == "\t"

    def test_zero_count_never_accepted(self) -> None:
        assert choose_delimiter({"\t": [0, 0, 0]}) == ","
