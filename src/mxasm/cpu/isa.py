"""
MX Instruction Set Definition
=============================

This module defines the instruction catalog of the MX teaching machine:
mnemonics, opcodes and operand kinds. The machine has a single
accumulator, a counter, a program counter and sixteen one-byte memory
slots (00 to 0F).

Encoding
--------
Every instruction is an opcode byte followed by up to two operand
bytes. The interpreter always steps the program counter by three bytes,
so by default each instruction occupies `INSTRUCTION_WIDTH` bytes and
unused operand positions are filled with zero:

    res          -> C4 00 00
    ator 02      -> D2 02 00
    jumpr 0F 30  -> B2 0F 30

Operand Kinds
-------------
- **SLOT**: index of a memory slot, 00 to 0F
- **VALUE**: a one-byte literal
- **ADDRESS**: a byte offset into the program (a jump target)

The catalog is immutable: it is built once at import time and exposed
through a read-only mapping.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


# Bytes per instruction in the fixed-width layout: opcode + 2 operands
INSTRUCTION_WIDTH = 3

# Maximum number of operands any instruction takes
MAX_OPERANDS = INSTRUCTION_WIDTH - 1

# Highest memory slot index
MAX_SLOT = 0x0F


# =============================================================================
# Operand Kinds
# =============================================================================

class OperandKind(Enum):
    """What an operand byte means to the interpreter."""
    SLOT = "Memory slot [00-0F]"
    VALUE = "Value"
    ADDRESS = "byte #"

    def __str__(self) -> str:
        return self.value


# =============================================================================
# Instruction Information
# =============================================================================

@dataclass(frozen=True)
class InstructionInfo:
    """
    Catalog entry for one instruction.

    Attributes:
        mnemonic: Lower-case mnemonic as written in source
        opcode: Opcode byte
        operands: Kinds of the operands, in order
        description: What the instruction does
    """
    mnemonic: str
    opcode: int
    operands: tuple[OperandKind, ...]
    description: str

    @property
    def operand_count(self) -> int:
        return len(self.operands)

    @property
    def opcode_hex(self) -> str:
        """Opcode as two upper-case hex digits."""
        return f"{self.opcode:02X}"

    def size(self, fixed_width: bool = True) -> int:
        """
        Number of bytes this instruction occupies in the program.

        Args:
            fixed_width: If True, every instruction takes INSTRUCTION_WIDTH
                         bytes; otherwise opcode plus declared operands.
        """
        if fixed_width:
            return INSTRUCTION_WIDTH
        return 1 + self.operand_count


def _entry(mnemonic: str, opcode: int, operands: tuple[OperandKind, ...],
           description: str) -> tuple[str, InstructionInfo]:
    return mnemonic, InstructionInfo(mnemonic, opcode, operands, description)


_SLOT = OperandKind.SLOT
_VALUE = OperandKind.VALUE
_ADDRESS = OperandKind.ADDRESS


# =============================================================================
# Master Instruction Table
# =============================================================================

OPCODE_TABLE: Mapping[str, InstructionInfo] = MappingProxyType(dict([
    # Control flow
    _entry("setpc", 0xB1, (_ADDRESS,),
           "Set PC to byte #"),
    _entry("jumpr", 0xB2, (_SLOT, _ADDRESS),
           "If accumulator equals memory slot (op1), jump to byte (op2), "
           "otherwise advance to the next instruction"),
    _entry("jumpv", 0xB3, (_VALUE, _ADDRESS),
           "If accumulator equals value (op1), jump to byte (op2), "
           "otherwise advance to the next instruction"),

    # Accumulator arithmetic
    _entry("accr", 0xC0, (_SLOT,),
           "Add memory slot value to accumulator"),
    _entry("accv", 0xC1, (_VALUE,),
           "Add value to accumulator"),

    # Counter
    _entry("inc", 0xC2, (), "Increment the counter"),
    _entry("dec", 0xC3, (), "Decrement the counter"),
    _entry("res", 0xC4, (), "Reset the counter to zero"),
    _entry("ctoa", 0xC5, (), "Copy counter to accumulator"),
    _entry("atoc", 0xC6, (), "Copy accumulator to counter"),

    # Memory transfer
    _entry("rtoa", 0xD0, (_SLOT,),
           "Copy memory slot value to accumulator"),
    _entry("vtoa", 0xD1, (_VALUE,),
           "Set accumulator to value"),
    _entry("ator", 0xD2, (_SLOT,),
           "Store accumulator in memory slot"),

    _entry("halt", 0x00, (), "Halt program execution"),
]))

# All mnemonics in catalog order
MNEMONICS: tuple[str, ...] = tuple(OPCODE_TABLE)


# =============================================================================
# Lookup Functions
# =============================================================================

def get_instruction_info(mnemonic: str) -> Optional[InstructionInfo]:
    """Return the catalog entry for a mnemonic, or None if unknown."""
    return OPCODE_TABLE.get(mnemonic)


def is_valid_instruction(mnemonic: str) -> bool:
    """Check whether a mnemonic is in the catalog."""
    return mnemonic in OPCODE_TABLE


def instruction_size(mnemonic: str, fixed_width: bool = True) -> int:
    """
    Byte size of an instruction.

    Args:
        mnemonic: Catalog mnemonic
        fixed_width: Use the fixed three-byte layout (default)

    Raises:
        KeyError: If the mnemonic is not in the catalog
    """
    return OPCODE_TABLE[mnemonic].size(fixed_width)
