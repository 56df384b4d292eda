"""
MX Assembler - Toolchain for the MX Teaching Machine
====================================================

This package assembles programs for the MX machine, a small educational
CPU with an accumulator, a counter and sixteen one-byte memory slots.
Source documents (.mx) are translated into a single line of hex bytes
(.o) that the MX interpreter loads directly.

Main Components
---------------
- **assembler**: validation, symbol/label tables, substitution, encoding
- **cpu**: the instruction catalog (mnemonics, opcodes, operand kinds)
- **cli**: the `mxasm` command-line tool

Quick Start
-----------
    >>> from mxasm import Assembler
    >>> asm = Assembler()
    >>> output = asm.assemble_file("fib.mx")
    >>> asm.write_object("fib.o")

Or from the command line:
    $ mxasm fib.mx
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from mxasm.assembler import (
    Assembler,
    AssemblyResult,
    ValidationResult,
    assemble,
    assemble_file,
    try_assemble,
    validate,
)
from mxasm.config import AssemblerConfig
from mxasm.cpu import OPCODE_TABLE, InstructionInfo, OperandKind
from mxasm.errors import (
    MxError,
    AssemblerError,
    Section,
    SourceLocation,
    StructuralError,
    MalformedSymbolDefError,
    MalformedCodeLineError,
    InvalidSlotValueError,
    OperandCountError,
    OperandRangeError,
    DuplicateSymbolError,
    DuplicateLabelError,
    AmbiguousNameError,
    UnknownMnemonicError,
    UnresolvedReferenceError,
    AddressRangeError,
    EncodingLengthMismatchError,
)

__all__ = [
    "__version__",
    # Assembler
    "Assembler",
    "AssemblyResult",
    "ValidationResult",
    "assemble",
    "assemble_file",
    "try_assemble",
    "validate",
    "AssemblerConfig",
    # Instruction catalog
    "OPCODE_TABLE",
    "InstructionInfo",
    "OperandKind",
    # Exception hierarchy
    "MxError",
    "AssemblerError",
    "Section",
    "SourceLocation",
    "StructuralError",
    "MalformedSymbolDefError",
    "MalformedCodeLineError",
    "InvalidSlotValueError",
    "OperandCountError",
    "OperandRangeError",
    "DuplicateSymbolError",
    "DuplicateLabelError",
    "AmbiguousNameError",
    "UnknownMnemonicError",
    "UnresolvedReferenceError",
    "AddressRangeError",
    "EncodingLengthMismatchError",
]
