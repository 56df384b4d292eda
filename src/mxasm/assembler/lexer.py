"""
MX Assembly Language Lexer
==========================

This module strips comments from MX documents and splits single source
lines into tokens that the parser can check against the line grammar.

Token Types
-----------
- LABEL: Upper-case name followed by a colon (`LOOP:`)
- NAME: Upper-case name (`[A-Z_]+`), a symbol or label reference
- WORD: Lower-case letters and digits (`[a-z0-9]+`), a mnemonic or a
  hex literal depending on where it appears
- EOL: End of line

Tokens other than LABEL must be followed by whitespace or the end of the
line, so `A1` or `vtoaB` are rejected instead of being read as two tokens.

Comments
--------
A comment starts at the first `#` not preceded by a backslash and runs
to the end of the line. Comments are removed from every line of the
document, including the description section.

Example
-------
>>> from mxasm.assembler.lexer import Lexer
>>> for token in Lexer("LOOP: jumpr N 1e", "fib.mx", 12).tokenize():
...     print(token)
Token(LABEL, 'LOOP', 12:1)
Token(WORD, 'jumpr', 12:7)
Token(NAME, 'N', 12:13)
Token(WORD, '1e', 12:15)
Token(EOL, 12:17)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator
import re
import string

from mxasm.errors import (
    AssemblerError,
    MalformedCodeLineError,
    MalformedSymbolDefError,
    Section,
    SourceLocation,
)


# Comment start: '#' unless escaped with a backslash
COMMENT_PATTERN = re.compile(r"(?<!\\)#.*$")


# =============================================================================
# Comment Stripping
# =============================================================================

def strip_comment(line: str) -> str:
    """
    Remove the comment and trailing whitespace from one line.

    >>> strip_comment("  ator SUM   # store it")
    '  ator SUM'
    """
    return COMMENT_PATTERN.sub("", line).rstrip()


def strip_comments(doc: str) -> str:
    """
    Remove comments from every line of a document.

    The number of lines is preserved, so line numbers in the result match
    the original document. Stripping is idempotent.
    """
    return "\n".join(strip_comment(line) for line in doc.split("\n"))


# =============================================================================
# Token Types
# =============================================================================

class TokenType(Enum):
    """Token types of the MX line grammar."""
    LABEL = auto()   # NAME: prefix
    NAME = auto()    # Upper-case identifier
    WORD = auto()    # Lower-case word: mnemonic or hex literal
    EOL = auto()     # End of line


@dataclass(frozen=True)
class Token:
    """
    A single token from a source line.

    Attributes:
        type: The TokenType classification
        value: Token text (label names without the colon), None for EOL
        line: Document line number (1-indexed)
        column: Column number in the line (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    value: str | None
    line: int
    column: int
    filename: str

    def __repr__(self) -> str:
        if self.value is not None:
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes a single comment-free MX source line.

    Errors are raised as the grammar error of the section the line
    belongs to (MalformedSymbolDefError or MalformedCodeLineError), with
    the exact column of the offending character.

    Usage:
        lexer = Lexer(line_text, filename, line_number, Section.CODE)
        tokens = list(lexer.tokenize())
    """

    NAME_CHARS = string.ascii_uppercase + "_"
    WORD_CHARS = string.ascii_lowercase + string.digits

    ERROR_CLASSES: dict[Section, type[AssemblerError]] = {
        Section.SYMBOLS: MalformedSymbolDefError,
        Section.CODE: MalformedCodeLineError,
    }

    def __init__(self, source: str, filename: str = "<input>",
                 line_number: int = 1, section: Section = Section.CODE):
        """
        Initialize the lexer with one source line.

        Args:
            source: Line text, comment already removed
            filename: Name of the source file (for error messages)
            line_number: Document line number of this line
            section: Section the line belongs to; selects the error class
        """
        self.source = source
        self.filename = filename
        self.line_number = line_number
        self.section = section
        self._pos = 0

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the line.

        Yields:
            Token objects, always terminated by an EOL token

        Raises:
            MalformedSymbolDefError, MalformedCodeLineError: On characters
                outside the grammar
        """
        while self._pos < len(self.source):
            char = self.source[self._pos]

            if char.isspace():
                self._pos += 1
            elif char in self.NAME_CHARS:
                yield self._read_name()
            elif char in self.WORD_CHARS:
                yield self._read_word()
            else:
                raise self._error(f"unexpected character '{char}'", self._pos)

        yield Token(TokenType.EOL, None, self.line_number, self._pos + 1, self.filename)

    def _read_name(self) -> Token:
        """Read an upper-case name, or a label when a colon follows."""
        start = self._pos
        value = self._read_run(self.NAME_CHARS)

        if self._peek() == ":":
            self._pos += 1
            return Token(TokenType.LABEL, value, self.line_number, start + 1, self.filename)

        self._expect_separator(value)
        return Token(TokenType.NAME, value, self.line_number, start + 1, self.filename)

    def _read_word(self) -> Token:
        """Read a lower-case word (mnemonic or hex literal)."""
        start = self._pos
        value = self._read_run(self.WORD_CHARS)
        self._expect_separator(value)
        return Token(TokenType.WORD, value, self.line_number, start + 1, self.filename)

    def _read_run(self, chars: str) -> str:
        start = self._pos
        while self._pos < len(self.source) and self.source[self._pos] in chars:
            self._pos += 1
        return self.source[start:self._pos]

    def _peek(self) -> str:
        if self._pos < len(self.source):
            return self.source[self._pos]
        return ""

    def _expect_separator(self, value: str) -> None:
        """Tokens must be followed by whitespace or the end of the line."""
        char = self._peek()
        if not char or char.isspace():
            return

        hint = None
        if char in "ABCDEF" and all(c in string.hexdigits for c in value):
            hint = "hex literals are written in lower case"
        elif char == ":":
            hint = "label names are upper case, e.g. 'LOOP:'"
        raise self._error(f"unexpected character '{char}' after '{value}'",
                          self._pos, hint=hint)

    def _error(self, message: str, pos: int, hint: str | None = None) -> AssemblerError:
        error_class = self.ERROR_CLASSES.get(self.section, MalformedCodeLineError)
        return error_class(
            message,
            location=SourceLocation(self.filename, self.line_number, pos + 1),
            hint=hint,
            source_line=self.source,
        )


def tokenize_line(source: str, filename: str = "<input>", line_number: int = 1,
                  section: Section = Section.CODE) -> list[Token]:
    """Convenience function: tokenize one line into a list."""
    return list(Lexer(source, filename, line_number, section).tokenize())
