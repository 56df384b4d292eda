# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for comment stripping and line tokenization.
#
# Test coverage includes:
#   - Comment removal, escaped '#', idempotence, line count preservation
#   - Token types: LABEL, NAME, WORD, EOL
#   - Column tracking for error messages
#   - Error conditions and the section-specific error classes
# =============================================================================

import pytest

from mxasm.assembler.lexer import (
    Lexer,
    TokenType,
    strip_comment,
    strip_comments,
    tokenize_line,
)
from mxasm.errors import MalformedCodeLineError, MalformedSymbolDefError, Section


# =============================================================================
# Helper Function
# =============================================================================

def tokenize(source: str, line_number: int = 1, section: Section = Section.CODE) -> list:
    """Tokenize a line, dropping the trailing EOL token."""
    tokens = tokenize_line(source, "<test>", line_number, section)
    return [t for t in tokens if t.type != TokenType.EOL]


# =============================================================================
# Comment Stripping Tests
# =============================================================================

class TestCommentStripping:
    """Test comment removal."""

    def test_trailing_comment(self):
        """Everything from '#' to end of line is removed."""
        assert strip_comment("ator SUM  # store") == "ator SUM"

    def test_comment_only_line(self):
        """A comment-only line becomes empty."""
        assert strip_comment("   # just a note") == ""

    def test_escaped_hash(self):
        """An escaped '#' does not start a comment."""
        assert strip_comment(r"issue \#12 # real comment") == r"issue \#12"

    def test_trailing_whitespace_trimmed(self):
        """Trailing whitespace is trimmed; leading is kept."""
        assert strip_comment("   inc   ") == "   inc"

    def test_line_count_preserved(self):
        """Stripping keeps one output line per input line."""
        doc = "a # x\n# y\n\nb"
        assert strip_comments(doc).split("\n") == ["a", "", "", "b"]

    def test_idempotent(self, fib_source):
        """Stripping twice equals stripping once."""
        once = strip_comments(fib_source)
        assert strip_comments(once) == once


# =============================================================================
# Token Recognition Tests
# =============================================================================

class TestTokens:
    """Test token recognition."""

    def test_empty_line(self):
        """An empty line produces only EOL."""
        tokens = tokenize_line("")
        assert [t.type for t in tokens] == [TokenType.EOL]

    def test_label(self):
        """An upper-case name followed by ':' is a label."""
        tokens = tokenize("LOOP: inc")
        assert tokens[0].type == TokenType.LABEL
        assert tokens[0].value == "LOOP"
        assert tokens[1].type == TokenType.WORD

    def test_label_without_space(self):
        """A label may be followed directly by the mnemonic."""
        tokens = tokenize("LOOP:inc")
        assert [t.type for t in tokens] == [TokenType.LABEL, TokenType.WORD]

    def test_names_and_words(self):
        """Upper-case runs are names, lower-case/digit runs are words."""
        tokens = tokenize("jumpr N_MAX 1e")
        assert [(t.type, t.value) for t in tokens] == [
            (TokenType.WORD, "jumpr"),
            (TokenType.NAME, "N_MAX"),
            (TokenType.WORD, "1e"),
        ]

    def test_tabs_are_whitespace(self):
        """Tabs separate tokens."""
        tokens = tokenize("\tator\tSUM")
        assert [t.value for t in tokens] == ["ator", "SUM"]


class TestPositionTracking:
    """Test line and column tracking."""

    def test_columns(self):
        """Columns are 1-indexed positions of the first character."""
        tokens = tokenize("LOOP: jumpr N 1e")
        assert [t.column for t in tokens] == [1, 7, 13, 15]

    def test_line_number(self):
        """Tokens carry the document line number given to the lexer."""
        tokens = tokenize("inc", line_number=17)
        assert tokens[0].line == 17
        assert tokens[0].location.line == 17

    def test_location_string(self):
        """Locations format as file:line:column."""
        token = tokenize("  inc", line_number=3)[0]
        assert str(token.location) == "<test>:3:3"


# =============================================================================
# Error Handling Tests
# =============================================================================

class TestErrors:
    """Test lexical errors."""

    def test_unexpected_character(self):
        """Characters outside the grammar are rejected."""
        with pytest.raises(MalformedCodeLineError) as exc_info:
            tokenize("vtoa $10")
        assert exc_info.value.location.column == 6

    def test_mixed_case_name(self):
        """A name running into digits is rejected, not split."""
        with pytest.raises(MalformedCodeLineError):
            tokenize("ator A1")

    def test_upper_case_hex_hint(self):
        """Upper-case hex digits get a hint."""
        with pytest.raises(MalformedCodeLineError) as exc_info:
            tokenize("vtoa 1E")
        assert "lower case" in exc_info.value.hint

    def test_lower_case_label_hint(self):
        """Lower-case labels get a hint."""
        with pytest.raises(MalformedCodeLineError) as exc_info:
            tokenize("loop: inc")
        assert "upper case" in exc_info.value.hint

    def test_symbol_section_error_class(self):
        """Errors in the symbol section use MalformedSymbolDefError."""
        with pytest.raises(MalformedSymbolDefError) as exc_info:
            tokenize("SUM = 02", section=Section.SYMBOLS)
        assert exc_info.value.section == Section.SYMBOLS

    def test_lexer_is_lazy(self):
        """Tokens before an error are still produced."""
        lexer = Lexer("inc ?", "<test>", 1)
        tokens = lexer.tokenize()
        assert next(tokens).value == "inc"
        with pytest.raises(MalformedCodeLineError):
            next(tokens)
