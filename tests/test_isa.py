# =============================================================================
# test_isa.py - Instruction Catalog Tests
# =============================================================================
# Tests for the MX instruction catalog: opcodes, operand kinds, sizes and
# immutability of the table.
# =============================================================================

import pytest

from mxasm.cpu import (
    INSTRUCTION_WIDTH,
    MAX_OPERANDS,
    MNEMONICS,
    OPCODE_TABLE,
    OperandKind,
    get_instruction_info,
    instruction_size,
    is_valid_instruction,
)


class TestCatalog:
    """Test catalog contents."""

    @pytest.mark.parametrize("mnemonic,opcode", [
        ("setpc", 0xB1),
        ("jumpr", 0xB2),
        ("jumpv", 0xB3),
        ("accr", 0xC0),
        ("accv", 0xC1),
        ("inc", 0xC2),
        ("dec", 0xC3),
        ("res", 0xC4),
        ("ctoa", 0xC5),
        ("atoc", 0xC6),
        ("rtoa", 0xD0),
        ("vtoa", 0xD1),
        ("ator", 0xD2),
        ("halt", 0x00),
    ])
    def test_opcodes(self, mnemonic, opcode):
        """Every mnemonic maps to the opcode the interpreter expects."""
        assert OPCODE_TABLE[mnemonic].opcode == opcode

    def test_catalog_size(self):
        """The catalog holds exactly the fourteen MX instructions."""
        assert len(OPCODE_TABLE) == 14
        assert len(MNEMONICS) == 14

    def test_operand_kinds(self):
        """Operand kinds follow the interpreter's operand meaning."""
        assert OPCODE_TABLE["jumpr"].operands == (OperandKind.SLOT, OperandKind.ADDRESS)
        assert OPCODE_TABLE["jumpv"].operands == (OperandKind.VALUE, OperandKind.ADDRESS)
        assert OPCODE_TABLE["setpc"].operands == (OperandKind.ADDRESS,)
        assert OPCODE_TABLE["halt"].operands == ()

    def test_operand_kind_descriptions(self):
        """Operand kinds describe themselves for listings and help."""
        assert str(OperandKind.SLOT) == "Memory slot [00-0F]"
        assert str(OperandKind.ADDRESS) == "byte #"

    def test_no_instruction_exceeds_max_operands(self):
        """No entry takes more operands than fit in one instruction."""
        assert all(info.operand_count <= MAX_OPERANDS for info in OPCODE_TABLE.values())

    def test_opcode_hex(self):
        """Opcodes render as two upper-case hex digits."""
        assert OPCODE_TABLE["res"].opcode_hex == "C4"
        assert OPCODE_TABLE["halt"].opcode_hex == "00"


class TestImmutability:
    """Test that the catalog cannot be altered."""

    def test_table_is_read_only(self):
        """Adding an entry to the table fails."""
        with pytest.raises(TypeError):
            OPCODE_TABLE["nop"] = OPCODE_TABLE["halt"]

    def test_entries_are_frozen(self):
        """Catalog entries cannot be modified."""
        with pytest.raises(AttributeError):
            OPCODE_TABLE["res"].opcode = 0x01


class TestLookup:
    """Test lookup helpers."""

    def test_get_instruction_info(self):
        """Known mnemonics return their entry, unknown ones None."""
        assert get_instruction_info("inc").mnemonic == "inc"
        assert get_instruction_info("nop") is None

    def test_lookup_is_case_sensitive(self):
        """Mnemonics are lower case only."""
        assert is_valid_instruction("halt")
        assert not is_valid_instruction("HALT")

    def test_fixed_width_size(self):
        """In the fixed layout every instruction is three bytes."""
        for mnemonic in MNEMONICS:
            assert instruction_size(mnemonic) == INSTRUCTION_WIDTH

    @pytest.mark.parametrize("mnemonic,size", [
        ("halt", 1),
        ("vtoa", 2),
        ("jumpr", 3),
    ])
    def test_packed_size(self, mnemonic, size):
        """In the packed layout size is opcode plus declared operands."""
        assert instruction_size(mnemonic, fixed_width=False) == size

    def test_size_of_unknown_mnemonic(self):
        """Sizing an unknown mnemonic raises KeyError."""
        with pytest.raises(KeyError):
            instruction_size("nop")
