"""
MX Code Generator
=================

This module turns parsed code lines into the final byte stream. It runs
after the symbol and label tables are complete.

Substitution Passes
-------------------
Operands are rewritten in three ordered passes:

1. **Symbols**: names found in the symbol table become slot bytes
2. **Labels**: names found in the label table become address bytes
3. **Mnemonics**: each line's mnemonic becomes its catalog opcode

A name is resolved at most once; the two tables never share a name, so
the passes are disjoint. Any name still unresolved afterwards is an
error. Label prefixes produce no bytes.

Encoding
--------
Resolved instructions are concatenated in line order. In the fixed-width
layout unused operand positions are filled with 00. The result is
rendered as upper-case two-digit hex bytes separated by single spaces:

    C4 00 00 D1 00 00 D2 00 00
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional
import logging

from mxasm.assembler.parser import CodeLine
from mxasm.assembler.symbols import MAX_BYTE, Symbol, find_similar
from mxasm.cpu import INSTRUCTION_WIDTH, get_instruction_info, MNEMONICS
from mxasm.errors import (
    EncodingLengthMismatchError,
    OperandRangeError,
    SourceLocation,
    UnknownMnemonicError,
    UnresolvedReferenceError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Resolved Instructions
# =============================================================================

@dataclass
class ResolvedOperand:
    """
    Operand during substitution.

    Attributes:
        text: Operand text as written
        is_literal: True for hex literals
        location: Where the operand appears
        value: Resolved byte, None until a pass resolves it
    """
    text: str
    is_literal: bool
    location: SourceLocation
    value: Optional[int] = None


@dataclass
class ResolvedInstruction:
    """
    One code line with every operand resolved to a byte.

    Attributes:
        mnemonic: Instruction mnemonic
        operands: Operands in source order
        location: Where the mnemonic appears
        source_line: Line text
        label: Label prefixing the line, if any
        opcode: Opcode byte, None until the mnemonic pass
    """
    mnemonic: str
    operands: list[ResolvedOperand]
    location: SourceLocation
    source_line: str
    label: Optional[str] = None
    opcode: Optional[int] = None

    def to_bytes(self, fixed_width: bool = True) -> bytes:
        """
        Encode the instruction.

        Args:
            fixed_width: Pad operands with 00 to INSTRUCTION_WIDTH bytes
        """
        data = bytearray([self.opcode])
        data.extend(op.value for op in self.operands)
        if fixed_width:
            data.extend(bytes(INSTRUCTION_WIDTH - len(data)))
        return bytes(data)


# =============================================================================
# Substitution
# =============================================================================

def substitute(lines: Iterable[CodeLine], symbols: dict[str, Symbol],
               labels: dict[str, Symbol]) -> list[ResolvedInstruction]:
    """
    Resolve every operand and mnemonic of the code section.

    Args:
        lines: Parsed code lines in source order
        symbols: Symbol table (name -> slot)
        labels: Label table (name -> address)

    Returns:
        Resolved instructions in source order

    Raises:
        UnresolvedReferenceError: If a name is in neither table
        OperandRangeError: If a hex literal does not fit in one byte
        UnknownMnemonicError: If a mnemonic is not in the catalog
    """
    program = [
        ResolvedInstruction(
            mnemonic=line.mnemonic,
            operands=[
                ResolvedOperand(op.text, op.is_literal, op.location)
                for op in line.operands
            ],
            location=line.location,
            source_line=line.source_line,
            label=line.label,
        )
        for line in lines
    ]

    resolved = _substitute_names(program, symbols)
    logger.debug("symbol pass: %d operands resolved", resolved)
    resolved = _substitute_names(program, labels)
    logger.debug("label pass: %d operands resolved", resolved)
    _substitute_mnemonics(program)

    known = list(symbols) + list(labels)
    for inst in program:
        for op in inst.operands:
            if op.is_literal:
                op.value = _literal_value(op, inst.source_line)
            elif op.value is None:
                raise UnresolvedReferenceError(
                    op.text,
                    location=op.location,
                    source_line=inst.source_line,
                    similar=find_similar(op.text, known),
                )

    return program


def _substitute_names(program: list[ResolvedInstruction], table: dict[str, Symbol]) -> int:
    """Resolve unresolved name operands found in `table`; return the count."""
    count = 0
    for inst in program:
        for op in inst.operands:
            if op.is_literal or op.value is not None:
                continue
            entry = table.get(op.text)
            if entry is not None:
                op.value = entry.value
                count += 1
    return count


def _substitute_mnemonics(program: list[ResolvedInstruction]) -> None:
    for inst in program:
        info = get_instruction_info(inst.mnemonic)
        if info is None:
            raise UnknownMnemonicError(
                inst.mnemonic,
                location=inst.location,
                source_line=inst.source_line,
                similar=find_similar(inst.mnemonic, MNEMONICS),
            )
        inst.opcode = info.opcode


def _literal_value(op: ResolvedOperand, source_line: str) -> int:
    value = int(op.text, 16)
    if value > MAX_BYTE:
        raise OperandRangeError(op.text, location=op.location, source_line=source_line)
    return value


# =============================================================================
# Encoding
# =============================================================================

def encode(program: Iterable[ResolvedInstruction], fixed_width: bool = True,
           expected_size: Optional[int] = None) -> bytes:
    """
    Concatenate resolved instructions into the program bytes.

    Args:
        program: Resolved instructions in source order
        fixed_width: Use the three-byte layout
        expected_size: Size computed by the label scan; checked if given

    Returns:
        The program bytes

    Raises:
        EncodingLengthMismatchError: If the size differs from expected_size
    """
    code = b"".join(inst.to_bytes(fixed_width) for inst in program)

    if expected_size is not None and len(code) != expected_size:
        raise EncodingLengthMismatchError(expected_size, len(code))

    return code


def format_hex(code: bytes) -> str:
    """
    Render bytes as space-separated upper-case hex.

    >>> format_hex(bytes([0xC4, 0x00, 0x0F]))
    'C4 00 0F'
    """
    return " ".join(f"{byte:02X}" for byte in code)


# =============================================================================
# Listing
# =============================================================================

@dataclass
class ListingRow:
    """One listing row: address, emitted bytes and source."""
    address: int
    code: bytes
    line: int
    source: str


@dataclass
class Listing:
    """Assembly listing with addresses, code bytes, source and tables."""
    rows: list[ListingRow] = field(default_factory=list)
    symbols: list[Symbol] = field(default_factory=list)

    def render(self) -> str:
        lines = []
        lines.append("MX Assembler Listing")
        lines.append("=" * 60)
        lines.append("")
        lines.append("Addr  Code      Line  Source")
        lines.append("-" * 60)
        for row in self.rows:
            lines.append(
                f"{row.address:02X}    {format_hex(row.code):<8s}  {row.line:4d}  {row.source.strip()}"
            )
        lines.append("")
        lines.append("Symbol Table")
        lines.append("-" * 30)
        for sym in sorted(self.symbols, key=lambda s: s.name):
            lines.append(f"{sym.name:20s} = {sym.hex}  {sym.kind.value}")
        return "\n".join(lines)
