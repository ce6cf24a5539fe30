"""Tests for the read_string / read_file / read_program helpers."""

import logging

import pytest

from lispish.exceptions import FileNotFoundError, LexError, SourceDecodeError, SyntaxError
from lispish.reader import (
    Failure,
    Success,
    read_file,
    read_program,
    read_source,
    read_string,
)
from lispish.tree import Symbol


class TestReadString:
    """Tests for read_string."""

    def test_returns_program(self):
        """read_string runs the full pipeline."""
        tree = read_string("(define foo 3)")
        assert tree.kind is Symbol.Program
        assert [leaf.text for leaf in tree.atoms()] == ["define", "foo", "3"]

    def test_lex_error_propagates(self):
        """Lex errors are raised to the caller."""
        with pytest.raises(LexError):
            read_string('(define foo "bananas)')

    def test_syntax_error_propagates(self):
        """Syntax errors are raised to the caller."""
        with pytest.raises(SyntaxError):
            read_string("(+ 3.14 (* 4 7)")

    def test_strict_flag_passed_through(self):
        """strict=False reaches the parser."""
        tree = read_string(")", strict=False)
        assert len(tree.children) == 1

    def test_logs_counts(self, caplog):
        """Token and expression counts are logged at DEBUG."""
        with caplog.at_level(logging.DEBUG, logger="lispish"):
            read_string("(a) (b)")
        assert "6 tokens" in caplog.text
        assert "2 top-level expressions" in caplog.text


class TestReadFile:
    """Tests for read_file."""

    def test_reads_utf8_file(self, program_file):
        """A multi-line file parses to all its top-level expressions."""
        tree = read_file(program_file)
        assert len(tree.children) == 7

    def test_accepts_str_path(self, program_file):
        """String paths work as well as Path objects."""
        assert read_file(str(program_file)) == read_file(program_file)

    def test_missing_file(self, tmp_path):
        """A missing file raises the package FileNotFoundError."""
        with pytest.raises(FileNotFoundError) as exc:
            read_file(tmp_path / "missing.lsp")
        assert "missing.lsp" in str(exc.value)

    def test_invalid_utf8(self, tmp_path):
        """Undecodable bytes raise SourceDecodeError with the byte offset."""
        path = tmp_path / "latin.lsp"
        path.write_bytes(b"(a \xff)")
        with pytest.raises(SourceDecodeError) as exc:
            read_file(path)
        assert exc.value.offset == 3
        assert exc.value.context["file"] == str(path)
        assert "byte offset: 3" in str(exc.value)

    def test_read_source_returns_text(self, program_file):
        """read_source returns the file text unparsed."""
        assert read_source(program_file) == program_file.read_text(encoding="utf-8")


class TestReadProgram:
    """Tests for the result-returning read_program."""

    def test_success(self):
        """Valid input yields Success with tree and tokens."""
        result = read_program("(+ 3 4)")
        assert isinstance(result, Success)
        assert result.ok is True
        assert len(result.tokens) == 5
        assert result.tree.kind is Symbol.Program

    def test_lex_failure(self):
        """A lex error is returned as a Failure in the lex stage."""
        result = read_program('"abc')
        assert isinstance(result, Failure)
        assert result.ok is False
        assert result.stage == "lex"
        assert isinstance(result.error, LexError)
        assert result.error.offset == 0

    def test_parse_failure(self):
        """A syntax error is returned as a Failure in the parse stage."""
        result = read_program("(+ 3.14 (* 4 7)")
        assert isinstance(result, Failure)
        assert result.stage == "parse"
        assert isinstance(result.error, SyntaxError)

    def test_strict_stray_paren(self):
        """Strict parsing reports a stray ')' as a parse failure."""
        assert read_program("a )").stage == "parse"
        assert read_program("a )", strict=False).ok is True

    def test_empty_input(self):
        """Empty input is a successful, empty program."""
        result = read_program("")
        assert result.ok is True
        assert result.tree.children == ()
        assert result.tokens == ()

    def test_long_list(self):
        """A 1000-element list reads successfully."""
        result = read_program("(" + " ".join(["x"] * 1000) + ")")
        assert result.ok is True
        assert sum(1 for _ in result.tree.atoms()) == 1000

    def test_deep_nesting_is_parse_failure(self):
        """Nesting too deep for the call stack is a parse-stage Failure."""
        result = read_program("(" * 5000 + ")" * 5000)
        assert result.ok is False
        assert result.stage == "parse"
        assert "nested too deeply" in result.error.message
