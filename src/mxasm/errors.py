"""
MX Assembler Error Hierarchy
============================

This module defines the exception hierarchy for the MX assembler.
All exceptions inherit from MxError, allowing callers to catch every
assembler-related error with a single except clause if desired.

Exception Hierarchy
-------------------
MxError (base)
└── AssemblerError (assembly-related)
    ├── StructuralError - wrong number of section separators
    ├── MalformedSymbolDefError - grammar violation in the symbol section
    │   └── InvalidSlotValueError - symbol value outside [00, 0f]
    ├── MalformedCodeLineError - grammar violation in the code section
    │   ├── OperandCountError - operand count differs from the catalog
    │   └── OperandRangeError - literal operand wider than one byte
    ├── DuplicateSymbolError - symbol defined more than once
    ├── DuplicateLabelError - label defined more than once
    ├── AmbiguousNameError - name used both as symbol and label
    ├── UnknownMnemonicError - mnemonic not in the instruction catalog
    ├── UnresolvedReferenceError - name survives all substitution passes
    ├── AddressRangeError - label address wider than one byte
    └── EncodingLengthMismatchError - internal consistency failure

Design Philosophy
-----------------
Each exception captures the source location (filename, line, column)
and the document section it was found in. Line numbers always refer to
the original document, not to a section-relative position.

Error messages follow this format:
    filename:line:column: error: description
    source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class MxError(Exception):
    """
    Base exception for all MX assembler errors.

    Callers can catch every assembler error with a single clause:

        try:
            assemble(source)
        except MxError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

class Section(Enum):
    """The three sections of an MX document, in document order."""
    DESCRIPTION = "description"
    SYMBOLS = "symbol-definitions"
    CODE = "code"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in a source document for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number in the whole document (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int = 1

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(MxError):
    """
    Base exception for all assembler-related errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        section: Which document section the error belongs to (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        section: Optional[Section] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.section = section
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    @property
    def line(self) -> Optional[int]:
        """Document line number of the error, if known."""
        return self.location.line if self.location else None

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            fib.mx:14:15: error: unresolved reference 'SUMM'
                    ator SUMM
                         ^
            hint: did you mean 'SUM'?
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class StructuralError(AssemblerError):
    """
    The document does not split into exactly three sections.

    A section separator is a line holding three or more hyphens and
    nothing else but whitespace. Exactly two separators are required.
    """

    def __init__(
        self,
        separator_count: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.separator_count = separator_count
        super().__init__(
            f"expected 2 section separators, found {separator_count}",
            location=location,
            hint="separate description, symbol definitions and code with '---' lines",
            source_line=source_line,
        )


class MalformedSymbolDefError(AssemblerError):
    """
    A symbol-definitions line does not read `NAME 0x`.

    Examples:
        counter 01   ; Error: names are upper case
        COUNTER      ; Error: missing slot value
    """

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("section", Section.SYMBOLS)
        super().__init__(message, **kwargs)


class InvalidSlotValueError(MalformedSymbolDefError):
    """
    Symbol value outside the memory-slot range [00, 0f].

    Example:
        FOO 10       ; Error: there are only sixteen slots
    """

    def __init__(self, name: str, value: str, **kwargs):
        self.name = name
        self.value = value
        kwargs.setdefault("hint", "memory slots are written 00 to 0f")
        super().__init__(
            f"invalid slot value '{value}' for symbol '{name}'", **kwargs
        )


class MalformedCodeLineError(AssemblerError):
    """
    A code line does not read `[LABEL:] mnemonic [operand [operand]]`.

    Examples:
        loop: inc      ; Error: labels are upper case
        vtoa 0 1 2     ; Error: at most two operands
    """

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("section", Section.CODE)
        super().__init__(message, **kwargs)


class OperandCountError(MalformedCodeLineError):
    """Operand count on a code line differs from the catalog arity."""

    def __init__(self, mnemonic: str, expected: int, actual: int, **kwargs):
        self.mnemonic = mnemonic
        self.expected = expected
        self.actual = actual
        plural = "operand" if expected == 1 else "operands"
        super().__init__(
            f"'{mnemonic}' takes {expected} {plural}, got {actual}", **kwargs
        )


class OperandRangeError(MalformedCodeLineError):
    """Hex literal operand that does not fit in a single byte."""

    def __init__(self, literal: str, **kwargs):
        self.literal = literal
        kwargs.setdefault("hint", "operands are single bytes, 00 to ff")
        super().__init__(f"operand '{literal}' does not fit in one byte", **kwargs)


class DuplicateSymbolError(AssemblerError):
    """
    Symbol defined more than once in the symbol-definitions section.

    Any repeat is rejected, even with an identical value.
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{name}' was first defined at {original_location}"

        super().__init__(
            f"duplicate symbol '{name}'",
            location=location,
            section=Section.SYMBOLS,
            hint=hint,
            source_line=source_line,
        )


class DuplicateLabelError(AssemblerError):
    """Label prefixes more than one code line."""

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{name}' was first defined at {original_location}"

        super().__init__(
            f"duplicate label '{name}'",
            location=location,
            section=Section.CODE,
            hint=hint,
            source_line=source_line,
        )


class AmbiguousNameError(AssemblerError):
    """
    Name defined both as a symbol and as a label.

    Operands are resolved against both tables, so a shared name would
    silently pick one meaning. Such collisions are always rejected.
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        symbol_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        self.symbol_location = symbol_location

        hint = None
        if symbol_location:
            hint = f"'{name}' is also a symbol defined at {symbol_location}"

        super().__init__(
            f"'{name}' is both a symbol and a label",
            location=location,
            section=Section.CODE,
            hint=hint,
            source_line=source_line,
        )


class UnknownMnemonicError(AssemblerError):
    """Code line uses a mnemonic absent from the instruction catalog."""

    def __init__(
        self,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar: Optional[list[str]] = None,
    ):
        self.mnemonic = mnemonic
        self.similar = similar or []

        hint = None
        if self.similar:
            suggestions = ", ".join(f"'{s}'" for s in self.similar[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"unknown mnemonic '{mnemonic}'",
            location=location,
            section=Section.CODE,
            hint=hint,
            source_line=source_line,
        )


class UnresolvedReferenceError(AssemblerError):
    """
    Operand name that is neither a symbol nor a label.

    Raised after all three substitution passes when a name token is
    left without a byte value. Similar known names are suggested to
    help catch typos.
    """

    def __init__(
        self,
        token: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar: Optional[list[str]] = None,
    ):
        self.token = token
        self.similar = similar or []

        hint = None
        if self.similar:
            suggestions = ", ".join(f"'{s}'" for s in self.similar[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"unresolved reference '{token}'",
            location=location,
            section=Section.CODE,
            hint=hint,
            source_line=source_line,
        )


class AddressRangeError(AssemblerError):
    """
    Label address does not fit in a single byte.

    Addresses are one-byte operands, so a label can only mark one of the
    first 256 bytes of the program.
    """

    def __init__(
        self,
        name: str,
        address: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        self.address = address
        super().__init__(
            f"label '{name}' at byte {address} is beyond the 256-byte address range",
            location=location,
            section=Section.CODE,
            source_line=source_line,
        )


class EncodingLengthMismatchError(AssemblerError):
    """
    Encoded byte count differs from the size computed for the label table.

    This is an internal consistency check, not a user error.
    """

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"internal error: encoded {actual} bytes, label scan sized {expected}"
        )


# =============================================================================
# Error Collection for Multiple Error Reporting
# =============================================================================

class ErrorCollector:
    """
    Collects multiple errors for batch reporting.

    The validator uses this to keep checking after the first violation,
    so a report lists every problem while the first one stays the
    deterministic verdict.

    Example:
        collector = ErrorCollector()
        collector.add(MalformedCodeLineError(...))
        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self, max_errors: int = 100):
        """
        Initialize the error collector.

        Args:
            max_errors: Maximum errors to collect; later errors are dropped
        """
        self.errors: list[AssemblerError] = []
        self.max_errors = max_errors

    def add(self, error: AssemblerError) -> None:
        """Add an error to the collection."""
        if len(self.errors) < self.max_errors:
            self.errors.append(error)

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def error_count(self) -> int:
        """Return the number of collected errors."""
        return len(self.errors)

    def first(self) -> Optional[AssemblerError]:
        """Return the first collected error, or None."""
        return self.errors[0] if self.errors else None

    def report(self) -> str:
        """
        Format all errors for display.

        Returns:
            Formatted string with all errors and a summary line
        """
        lines = []

        for error in self.errors:
            lines.append(str(error))
            lines.append("")

        error_word = "error" if len(self.errors) == 1 else "errors"
        lines.append(f"{len(self.errors)} {error_word}")

        return "\n".join(lines)
