"""
MX Symbol and Label Tables
==========================

This module builds the two name tables used to resolve operands:

- **Symbol table**: symbol name -> memory slot (00 to 0F), from the
  symbol-definitions section
- **Label table**: label name -> byte offset of the instruction the
  label prefixes, from a single left-to-right scan of the code section

Address Calculation
-------------------
The label scan keeps a running byte offset starting at 0. Each code line
first registers its label (if any) at the current offset, then advances
the offset by the instruction size from the catalog. Because every label
is registered before any operand is resolved, a jump may name a label
defined further down the program.

With the default fixed-width layout every instruction is 3 bytes:

    0x00  res
    0x03  vtoa 0
    0x06  LOOP: inc      -> LOOP = 0x06
    0x09  setpc LOOP

Names must be unique across both tables; see `check_ambiguity()`.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable
import logging

from mxasm.assembler.parser import CodeLine, SymbolDef, SLOT_VALUE_PATTERN
from mxasm.cpu import MNEMONICS, get_instruction_info
from mxasm.errors import (
    AddressRangeError,
    AmbiguousNameError,
    DuplicateLabelError,
    DuplicateSymbolError,
    InvalidSlotValueError,
    OperandCountError,
    SourceLocation,
    UnknownMnemonicError,
)

logger = logging.getLogger(__name__)

# Largest value a one-byte operand can hold
MAX_BYTE = 0xFF


# =============================================================================
# Table Entries
# =============================================================================

class SymbolKind(Enum):
    """What a resolved name refers to."""
    SLOT = "SLOT"     # Memory slot from the symbol-definitions section
    LABEL = "LABEL"   # Program address from a code-line label


@dataclass(frozen=True)
class Symbol:
    """
    Symbol or label table entry.

    Attributes:
        name: Name as written
        value: Slot index or byte offset (always one byte)
        kind: SLOT or LABEL
        location: Where the name was defined
        source_line: Text of the defining line
    """
    name: str
    value: int
    kind: SymbolKind
    location: SourceLocation
    source_line: str = ""

    @property
    def hex(self) -> str:
        return f"{self.value:02X}"


@dataclass
class LabelScan:
    """
    Result of the label scan over the code section.

    Attributes:
        labels: Label table, in definition order
        addresses: Start offset of each code line, in line order
        sizes: Byte size of each code line, in line order
        total_size: Program size in bytes
    """
    labels: dict[str, Symbol] = field(default_factory=dict)
    addresses: list[int] = field(default_factory=list)
    sizes: list[int] = field(default_factory=list)
    total_size: int = 0


# =============================================================================
# Symbol Table Builder
# =============================================================================

def build_symbol_table(defs: Iterable[SymbolDef]) -> dict[str, Symbol]:
    """
    Build the symbol table from parsed symbol definitions.

    Any repeated name is rejected, even with the same value. Two different
    names may share a slot.

    Raises:
        DuplicateSymbolError: If a name is defined twice
        InvalidSlotValueError: If a value is outside 00 to 0f
    """
    table: dict[str, Symbol] = {}

    for sym in defs:
        if sym.name in table:
            raise DuplicateSymbolError(
                sym.name,
                location=sym.location,
                original_location=table[sym.name].location,
                source_line=sym.source_line,
            )
        if not SLOT_VALUE_PATTERN.match(sym.value):
            raise InvalidSlotValueError(
                sym.name, sym.value, location=sym.location, source_line=sym.source_line
            )
        table[sym.name] = Symbol(
            sym.name, sym.slot, SymbolKind.SLOT, sym.location, sym.source_line
        )

    logger.debug("symbol table: %d entries", len(table))
    return table


# =============================================================================
# Label Table Builder
# =============================================================================

def build_label_table(lines: Iterable[CodeLine], fixed_width: bool = True) -> LabelScan:
    """
    Scan the code section once, assigning each label its byte offset.

    Args:
        lines: Parsed code lines in source order
        fixed_width: Size every instruction as 3 bytes (default) instead
                     of opcode plus declared operands

    Returns:
        LabelScan with the label table, per-line addresses and program size

    Raises:
        DuplicateLabelError: If a label is defined twice
        AddressRangeError: If a label lands beyond byte 0xFF
        UnknownMnemonicError: If a mnemonic is not in the catalog
        OperandCountError: If a line's operands don't match the catalog
    """
    scan = LabelScan()
    offset = 0

    for line in lines:
        if line.label is not None:
            _define_label(scan, line, offset)

        info = get_instruction_info(line.mnemonic)
        if info is None:
            raise UnknownMnemonicError(
                line.mnemonic,
                location=line.location,
                source_line=line.source_line,
                similar=find_similar(line.mnemonic, MNEMONICS),
            )

        if len(line.operands) != info.operand_count:
            raise OperandCountError(
                info.mnemonic, info.operand_count, len(line.operands),
                location=line.location, source_line=line.source_line,
            )

        size = info.size(fixed_width)
        scan.addresses.append(offset)
        scan.sizes.append(size)
        offset += size

    scan.total_size = offset
    logger.debug("label table: %d labels, program size %d bytes",
                 len(scan.labels), scan.total_size)
    return scan


def _define_label(scan: LabelScan, line: CodeLine, offset: int) -> None:
    """Register a line's label at the current offset."""
    name = line.label

    if name in scan.labels:
        raise DuplicateLabelError(
            name,
            location=line.label_location,
            original_location=scan.labels[name].location,
            source_line=line.source_line,
        )

    if offset > MAX_BYTE:
        raise AddressRangeError(
            name, offset, location=line.label_location, source_line=line.source_line
        )

    scan.labels[name] = Symbol(
        name, offset, SymbolKind.LABEL, line.label_location, line.source_line
    )


# =============================================================================
# Cross-Table Checks
# =============================================================================

def check_ambiguity(symbols: dict[str, Symbol], labels: dict[str, Symbol]) -> None:
    """
    Reject names defined both as a symbol and as a label.

    Labels are checked in definition order so the reported collision is
    the first one in the code section.

    Raises:
        AmbiguousNameError: On the first shared name
    """
    for name, label in labels.items():
        if name in symbols:
            raise AmbiguousNameError(
                name,
                location=label.location,
                symbol_location=symbols[name].location,
                source_line=label.source_line,
            )


def find_similar(name: str, candidates: Iterable[str]) -> list[str]:
    """
    Find names similar to `name` for error hints.

    Uses a simple edit distance heuristic; returns at most 3 names.
    """
    name_lower = name.lower()
    similar = []

    for candidate in candidates:
        cand_lower = candidate.lower()
        if (
            cand_lower == name_lower or
            abs(len(candidate) - len(name)) <= 1 and
            _edit_distance(name_lower, cand_lower) <= 2
        ):
            similar.append(candidate)

    return similar[:3]


def _edit_distance(s1: str, s2: str) -> int:
    """Calculate Levenshtein edit distance between two strings."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    distances = range(len(s2) + 1)
    for i, c1 in enumerate(s1):
        new_distances = [i + 1]
        for j, c2 in enumerate(s2):
            if c1 == c2:
                new_distances.append(distances[j])
            else:
                new_distances.append(1 + min((
                    distances[j],
                    distances[j + 1],
                    new_distances[-1]
                )))
        distances = new_distances

    return distances[-1]
