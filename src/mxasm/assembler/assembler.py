"""
MX Assembler - Main Interface
=============================

This module provides the main Assembler class, the primary interface for
assembling MX documents. It coordinates validation, comment stripping,
section splitting, table building, substitution and encoding.

Example Usage
-------------
>>> from mxasm.assembler import Assembler
>>>
>>> asm = Assembler()
>>> asm.assemble_string('''
... Count to three.
... ---
... LIMIT 00
... ---
...       res
... LOOP: inc
...       ctoa
...       jumpv 3 DONE
...       setpc LOOP
... DONE: halt
... ''')
'C4 00 00 C2 00 00 C5 00 00 B3 03 0F B1 03 00 00 00 00'
>>> asm.get_labels()
{'LOOP': 3, 'DONE': 15}

Callers that prefer a result value over exceptions use `try_assemble()`:

>>> result = try_assemble("no separators here")
>>> result.ok
False
>>> type(result.error).__name__
'StructuralError'

Command-Line Usage
------------------
    $ mxasm fib.mx                 # writes fib.o
    $ mxasm fib.mx -l fib.lst -s fib.sym
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import logging

from mxasm.assembler.codegen import (
    Listing,
    ListingRow,
    ResolvedInstruction,
    encode,
    format_hex,
    substitute,
)
from mxasm.assembler.lexer import strip_comments
from mxasm.assembler.parser import parse_code, parse_symbols, split_sections, validate
from mxasm.assembler.symbols import (
    LabelScan,
    Symbol,
    build_label_table,
    build_symbol_table,
    check_ambiguity,
)
from mxasm.config import AssemblerConfig
from mxasm.errors import AssemblerError

logger = logging.getLogger(__name__)


class Assembler:
    """
    Main MX assembler class.

    The assembly pipeline is:
    1. Validate the raw document against the grammar
    2. Strip comments and split into description, symbols and code
    3. Build the symbol table and the label table
    4. Substitute symbols, then labels, then mnemonics
    5. Encode the resolved program

    Every stage stops at the first error it finds and raises it; no
    partial output is kept.

    Attributes:
        config: AssemblerConfig in effect
    """

    def __init__(self, config: Optional[AssemblerConfig] = None):
        """
        Initialize the assembler.

        Args:
            config: Assembler settings; defaults to AssemblerConfig()
        """
        self.config = config or AssemblerConfig()
        self._reset()

    def _reset(self) -> None:
        self._code = b""
        self._symbols: dict[str, Symbol] = {}
        self._scan = LabelScan()
        self._program: list[ResolvedInstruction] = []

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_string(self, source: str, filename: str = "<input>") -> str:
        """
        Assemble a document from a string.

        Args:
            source: The MX document
            filename: Virtual filename for error messages

        Returns:
            Space-separated upper-case hex bytes

        Raises:
            AssemblerError: If assembly fails
        """
        self._reset()
        fixed_width = self.config.fixed_width

        validate(source, filename).raise_for_error()

        sections = split_sections(strip_comments(source), filename)
        defs = parse_symbols(sections.symbols, filename)
        lines = parse_code(sections.code, filename)
        logger.debug("%s: %d symbol definitions, %d code lines",
                     filename, len(defs), len(lines))

        symbols = build_symbol_table(defs)
        scan = build_label_table(lines, fixed_width=fixed_width)
        check_ambiguity(symbols, scan.labels)

        program = substitute(lines, symbols, scan.labels)
        code = encode(program, fixed_width=fixed_width, expected_size=scan.total_size)
        logger.debug("%s: generated %d bytes", filename, len(code))

        self._code = code
        self._symbols = symbols
        self._scan = scan
        self._program = program
        return format_hex(code)

    def assemble_file(self, filepath: str | Path) -> str:
        """
        Assemble a document from a file.

        Args:
            filepath: Path to the source file

        Returns:
            Space-separated upper-case hex bytes

        Raises:
            AssemblerError: If assembly fails
            FileNotFoundError: If the source file is missing
        """
        filepath = Path(filepath)
        logger.info("Assembling %s", filepath)

        source = filepath.read_text()
        return self.assemble_string(source, str(filepath))

    # =========================================================================
    # Output Methods
    # =========================================================================

    def get_code(self) -> bytes:
        """Get the program bytes of the last assembly."""
        return self._code

    def get_hex(self) -> str:
        """Get the program as space-separated hex bytes."""
        return format_hex(self._code)

    def get_symbols(self) -> dict[str, int]:
        """Get the symbol table (name -> slot)."""
        return {name: sym.value for name, sym in self._symbols.items()}

    def get_labels(self) -> dict[str, int]:
        """Get the label table (name -> byte offset)."""
        return {name: sym.value for name, sym in self._scan.labels.items()}

    def get_listing(self) -> str:
        """
        Get the assembly listing as a string.

        Returns:
            Listing with addresses, code bytes, source lines and tables
        """
        listing = Listing(
            symbols=list(self._symbols.values()) + list(self._scan.labels.values())
        )
        for inst, address in zip(self._program, self._scan.addresses):
            listing.rows.append(ListingRow(
                address=address,
                code=inst.to_bytes(self.config.fixed_width),
                line=inst.location.line,
                source=inst.source_line,
            ))
        return listing.render()

    def write_object(self, filepath: str | Path) -> None:
        """
        Write the object file: one line of hex bytes, no trailing newline.

        Args:
            filepath: Output file path
        """
        Path(filepath).write_text(self.get_hex())
        logger.info("Wrote %d bytes to %s", len(self._code), filepath)

    def write_listing(self, filepath: str | Path) -> None:
        """Write the assembly listing file."""
        Path(filepath).write_text(self.get_listing() + "\n")
        logger.info("Wrote listing to %s", filepath)

    def write_symbols(self, filepath: str | Path) -> None:
        """
        Write the symbol file.

        Format: name value kind (one per line)
        """
        with open(filepath, "w") as f:
            f.write("# Symbol table\n")
            f.write("# Generated by mxasm\n")
            entries = list(self._symbols.values()) + list(self._scan.labels.values())
            for sym in sorted(entries, key=lambda s: s.name):
                f.write(f"{sym.name} {sym.hex} {sym.kind.value}\n")
        logger.info("Wrote symbols to %s", filepath)


# =============================================================================
# Result Type
# =============================================================================

@dataclass(frozen=True)
class AssemblyResult:
    """
    Outcome of assembling a document: either output or an error.

    Attributes:
        output: Space-separated hex bytes on success, else None
        code: Program bytes on success, else empty
        error: The first error on failure, else None
    """
    output: Optional[str] = None
    code: bytes = b""
    error: Optional[AssemblerError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>",
             config: Optional[AssemblerConfig] = None) -> str:
    """
    Convenience function to assemble a document.

    Args:
        source: The MX document
        filename: Virtual filename for errors
        config: Assembler settings

    Returns:
        Space-separated upper-case hex bytes

    Raises:
        AssemblerError: If assembly fails
    """
    return Assembler(config).assemble_string(source, filename)


def try_assemble(source: str, filename: str = "<input>",
                 config: Optional[AssemblerConfig] = None) -> AssemblyResult:
    """
    Assemble a document, returning the error instead of raising it.

    Args:
        source: The MX document
        filename: Virtual filename for errors
        config: Assembler settings

    Returns:
        AssemblyResult holding either the output or the error
    """
    asm = Assembler(config)
    try:
        output = asm.assemble_string(source, filename)
    except AssemblerError as e:
        logger.debug("%s: assembly failed: %s", filename, e.message)
        return AssemblyResult(error=e)
    return AssemblyResult(output=output, code=asm.get_code())


def assemble_file(filepath: str | Path, config: Optional[AssemblerConfig] = None) -> str:
    """
    Convenience function to assemble a file.

    Args:
        filepath: Path to the source file
        config: Assembler settings

    Returns:
        Space-separated upper-case hex bytes

    Raises:
        AssemblerError: If assembly fails
    """
    return Assembler(config).assemble_file(filepath)
