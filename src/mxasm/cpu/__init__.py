"""
MX CPU Package
==============

Instruction catalog of the MX teaching machine, shared by the
assembler stages that size, resolve and encode instructions.

Usage:
    from mxasm.cpu import OPCODE_TABLE, get_instruction_info
"""

from mxasm.cpu.isa import (
    # Core types
    OperandKind,
    InstructionInfo,
    # Master instruction database
    OPCODE_TABLE,
    MNEMONICS,
    # Layout constants
    INSTRUCTION_WIDTH,
    MAX_OPERANDS,
    MAX_SLOT,
    # Lookup functions
    get_instruction_info,
    is_valid_instruction,
    instruction_size,
)

__all__ = [
    "OperandKind",
    "InstructionInfo",
    "OPCODE_TABLE",
    "MNEMONICS",
    "INSTRUCTION_WIDTH",
    "MAX_OPERANDS",
    "MAX_SLOT",
    "get_instruction_info",
    "is_valid_instruction",
    "instruction_size",
]
