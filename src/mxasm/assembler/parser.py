"""
MX Document Parser
==================

This module splits an MX document into its three sections, parses the
symbol-definitions and code sections into typed line records, and
validates a whole document against the grammar.

Document Structure
------------------
```
Iterative Fibonacci.        <- description: free text
---
N    0f                     <- symbol definitions: NAME 0x
A    00
---
      res                   <- code: [LABEL:] mnemonic [operand [operand]]
LOOP: ctoa
      jumpr N DONE
```

A separator is a line holding three or more hyphens and optional
whitespace. Exactly two separators are required.

Line Records
------------
- **SymbolDef**: `NAME 0x`, a name for one of the sixteen memory slots
- **CodeLine**: optional label, mnemonic and zero to two operands; each
  operand is either a NAME (symbol or label reference) or a lower-case
  hex literal

Validation
----------
`validate()` checks the structure and every line, collecting all
violations in document order. The first one is the verdict; it carries
the line number and the section it was found in.
"""

from dataclasses import dataclass
from typing import Iterator, Optional
import re

from mxasm.assembler.lexer import Lexer, Token, TokenType, strip_comments
from mxasm.errors import (
    AssemblerError,
    ErrorCollector,
    InvalidSlotValueError,
    MalformedCodeLineError,
    MalformedSymbolDefError,
    Section,
    SourceLocation,
    StructuralError,
)
from mxasm.cpu import MAX_OPERANDS


# Section separator: three or more hyphens alone on a line
SEPARATOR_PATTERN = re.compile(r"^\s*-{3,}\s*$")

# Symbol values are written as two hex digits, 00 to 0f
SLOT_VALUE_PATTERN = re.compile(r"^0[0-9a-f]$")

MNEMONIC_PATTERN = re.compile(r"^[a-z]+$")
HEX_PATTERN = re.compile(r"^[0-9a-f]+$")


# =============================================================================
# Sections
# =============================================================================

@dataclass(frozen=True)
class SectionText:
    """
    One section of a document.

    Leading and trailing blank lines are dropped; the remaining lines are
    kept intact so that columns in error messages stay exact.

    Attributes:
        section: Which section this is
        lines: Section lines
        first_line: Document line number of lines[0]
    """
    section: Section
    lines: tuple[str, ...]
    first_line: int

    @property
    def text(self) -> str:
        """Section text with leading and trailing whitespace trimmed."""
        return "\n".join(self.lines).strip()

    def numbered_lines(self) -> Iterator[tuple[int, str]]:
        """Yield (document line number, text) for every non-blank line."""
        for offset, line in enumerate(self.lines):
            if line.strip():
                yield self.first_line + offset, line


@dataclass(frozen=True)
class Sections:
    """The (description, symbols, code) triple of a document."""
    description: SectionText
    symbols: SectionText
    code: SectionText

    def __iter__(self) -> Iterator[SectionText]:
        yield self.description
        yield self.symbols
        yield self.code


def _make_section(section: Section, lines: list[str], first_line: int) -> SectionText:
    start = 0
    end = len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return SectionText(section, tuple(lines[start:end]), first_line + start)


def split_sections(doc: str, filename: str = "<input>") -> Sections:
    """
    Divide a document into its three sections.

    Args:
        doc: The document, normally with comments already stripped
        filename: Name of the source file (for error messages)

    Returns:
        The description, symbol-definitions and code sections

    Raises:
        StructuralError: If there are not exactly two separator lines
    """
    lines = doc.split("\n")
    separators = [i for i, line in enumerate(lines) if SEPARATOR_PATTERN.match(line)]

    if len(separators) != 2:
        location = None
        source_line = None
        if len(separators) > 2:
            # Point at the first separator too many
            extra = separators[2]
            location = SourceLocation(filename, extra + 1, 1)
            source_line = lines[extra]
        raise StructuralError(len(separators), location=location, source_line=source_line)

    first, second = separators
    return Sections(
        description=_make_section(Section.DESCRIPTION, lines[:first], 1),
        symbols=_make_section(Section.SYMBOLS, lines[first + 1:second], first + 2),
        code=_make_section(Section.CODE, lines[second + 1:], second + 2),
    )


# =============================================================================
# Line Records
# =============================================================================

@dataclass(frozen=True)
class SymbolDef:
    """
    Symbol definition line: a name for a memory slot.

    Attributes:
        name: Symbol name
        value: Slot value as written (two lower-case hex digits)
        location: Where the name appears
        source_line: Line text
    """
    name: str
    value: str
    location: SourceLocation
    source_line: str

    @property
    def slot(self) -> int:
        return int(self.value, 16)


@dataclass(frozen=True)
class Operand:
    """
    Operand token of a code line.

    Attributes:
        text: Token text as written
        is_literal: True for hex literals, False for names
        location: Where the operand appears
    """
    text: str
    is_literal: bool
    location: SourceLocation


@dataclass(frozen=True)
class CodeLine:
    """
    Code line: one instruction with an optional label.

    Attributes:
        mnemonic: Instruction mnemonic
        operands: Zero to two operands
        location: Where the mnemonic appears
        source_line: Line text
        label: Label name without the colon, if the line has one
        label_location: Where the label appears
    """
    mnemonic: str
    operands: tuple[Operand, ...]
    location: SourceLocation
    source_line: str
    label: Optional[str] = None
    label_location: Optional[SourceLocation] = None


# =============================================================================
# Line Parsers
# =============================================================================

def parse_symbol_line(text: str, line_number: int, filename: str = "<input>") -> SymbolDef:
    """
    Parse one symbol-definitions line (`NAME 0x`).

    Raises:
        MalformedSymbolDefError: If the line is not a name and a hex value
        InvalidSlotValueError: If the value is not 00 to 0f
    """
    tokens = list(Lexer(text, filename, line_number, Section.SYMBOLS).tokenize())

    def error(message: str, token: Token, hint: Optional[str] = None) -> MalformedSymbolDefError:
        return MalformedSymbolDefError(
            message, location=token.location, hint=hint, source_line=text
        )

    name_token = tokens[0]
    if name_token.type == TokenType.LABEL:
        raise error(f"symbol '{name_token.value}' must not end with ':'", name_token)
    if name_token.type != TokenType.NAME:
        raise error(
            "expected a symbol name", name_token,
            hint="symbol names are upper case, e.g. 'SUM 02'",
        )

    value_token = tokens[1]
    if value_token.type == TokenType.EOL:
        raise error(f"missing slot value for symbol '{name_token.value}'", value_token)
    if value_token.type != TokenType.WORD or not HEX_PATTERN.match(value_token.value):
        raise error(f"expected a hex slot value, got '{value_token.value}'", value_token)

    if tokens[2].type != TokenType.EOL:
        raise error(f"unexpected '{tokens[2].value}' after slot value", tokens[2])

    if not SLOT_VALUE_PATTERN.match(value_token.value):
        raise InvalidSlotValueError(
            name_token.value, value_token.value,
            location=value_token.location, source_line=text,
        )

    return SymbolDef(name_token.value, value_token.value, name_token.location, text)


def parse_code_line(text: str, line_number: int, filename: str = "<input>") -> CodeLine:
    """
    Parse one code line (`[LABEL:] mnemonic [operand [operand]]`).

    Raises:
        MalformedCodeLineError: If the line does not follow the grammar
    """
    tokens = list(Lexer(text, filename, line_number, Section.CODE).tokenize())

    def error(message: str, token: Token, hint: Optional[str] = None) -> MalformedCodeLineError:
        return MalformedCodeLineError(
            message, location=token.location, hint=hint, source_line=text
        )

    pos = 0
    label = None
    label_location = None
    if tokens[pos].type == TokenType.LABEL:
        label = tokens[pos].value
        label_location = tokens[pos].location
        pos += 1

    mnemonic = tokens[pos]
    if mnemonic.type == TokenType.EOL:
        raise error(f"label '{label}' must prefix an instruction", mnemonic)
    if mnemonic.type != TokenType.WORD or not MNEMONIC_PATTERN.match(mnemonic.value):
        raise error(
            f"expected a mnemonic, got '{mnemonic.value}'", mnemonic,
            hint="mnemonics are lower-case letters, e.g. 'ator'",
        )
    pos += 1

    operands = []
    while tokens[pos].type != TokenType.EOL:
        token = tokens[pos]
        if token.type == TokenType.LABEL:
            raise error(f"label '{token.value}:' must start the line", token)
        if token.type == TokenType.WORD and not HEX_PATTERN.match(token.value):
            raise error(
                f"operand '{token.value}' is neither a name nor a hex literal", token,
                hint="names are upper case, literals are lower-case hex",
            )
        if len(operands) == MAX_OPERANDS:
            raise error(f"too many operands for '{mnemonic.value}'", token)
        operands.append(Operand(token.value, token.type == TokenType.WORD, token.location))
        pos += 1

    return CodeLine(
        mnemonic=mnemonic.value,
        operands=tuple(operands),
        location=mnemonic.location,
        source_line=text,
        label=label,
        label_location=label_location,
    )


# =============================================================================
# Section Parsers
# =============================================================================

def parse_symbols(section: SectionText, filename: str = "<input>") -> list[SymbolDef]:
    """Parse every non-blank line of the symbol-definitions section."""
    return [
        parse_symbol_line(text, number, filename)
        for number, text in section.numbered_lines()
    ]


def parse_code(section: SectionText, filename: str = "<input>") -> list[CodeLine]:
    """Parse every non-blank line of the code section."""
    return [
        parse_code_line(text, number, filename)
        for number, text in section.numbered_lines()
    ]


# =============================================================================
# Validation
# =============================================================================

@dataclass(frozen=True)
class ValidationResult:
    """
    Verdict of validating a document.

    Attributes:
        errors: Every violation found, in document order
    """
    errors: tuple[AssemblerError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def error(self) -> Optional[AssemblerError]:
        """The first violation, or None."""
        return self.errors[0] if self.errors else None

    @property
    def line(self) -> Optional[int]:
        """Document line of the first violation."""
        return self.error.line if self.error else None

    @property
    def section(self) -> Optional[Section]:
        """Section of the first violation."""
        return self.error.section if self.error else None

    def raise_for_error(self) -> None:
        """Raise the first violation, if any."""
        if self.error is not None:
            raise self.error


def validate(source: str, filename: str = "<input>") -> ValidationResult:
    """
    Check a raw document against the grammar.

    Comments are removed first. The structure is checked, then every
    symbol-definitions line top to bottom, then every code line top to
    bottom. Structural errors stop the check since lines cannot be
    assigned to sections.

    Args:
        source: The raw document
        filename: Name of the source file (for error messages)

    Returns:
        ValidationResult with all violations; `error` is the first one
    """
    collector = ErrorCollector()

    try:
        sections = split_sections(strip_comments(source), filename)
    except StructuralError as e:
        collector.add(e)
        return ValidationResult(tuple(collector.errors))

    for number, text in sections.symbols.numbered_lines():
        try:
            parse_symbol_line(text, number, filename)
        except MalformedSymbolDefError as e:
            collector.add(e)

    for number, text in sections.code.numbered_lines():
        try:
            parse_code_line(text, number, filename)
        except MalformedCodeLineError as e:
            collector.add(e)

    return ValidationResult(tuple(collector.errors))
