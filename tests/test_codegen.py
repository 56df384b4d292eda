# =============================================================================
# test_codegen.py - Code Generator Tests
# =============================================================================
# Tests for the substitution passes, encoding and hex formatting.
# =============================================================================

import pytest

from mxasm.assembler.codegen import encode, format_hex, substitute
from mxasm.assembler.parser import parse_code_line, parse_symbol_line
from mxasm.assembler.symbols import build_label_table, build_symbol_table
from mxasm.errors import (
    EncodingLengthMismatchError,
    OperandRangeError,
    UnknownMnemonicError,
    UnresolvedReferenceError,
)


# =============================================================================
# Helper Functions
# =============================================================================

def resolve(code_lines: list[str], symbol_lines: list[str] = ()):
    """Parse, build tables and substitute; return (program, scan)."""
    defs = [parse_symbol_line(text, n) for n, text in enumerate(symbol_lines, 1)]
    lines = [parse_code_line(text, n) for n, text in enumerate(code_lines, 1)]
    table = build_symbol_table(defs)
    scan = build_label_table(lines)
    return substitute(lines, table, scan.labels), scan


# =============================================================================
# Substitution Tests
# =============================================================================

class TestSubstitution:
    """Test substitute()."""

    def test_symbols_resolve_to_slots(self):
        """Symbol operands become slot bytes."""
        program, _ = resolve(["ator SUM"], ["SUM 02"])
        assert program[0].operands[0].value == 0x02

    def test_labels_resolve_to_addresses(self):
        """Label operands become address bytes."""
        program, _ = resolve(["inc", "L: dec", "setpc L"])
        assert program[2].operands[0].value == 0x03

    def test_mnemonics_resolve_to_opcodes(self):
        """Mnemonics become catalog opcodes."""
        program, _ = resolve(["res", "halt"])
        assert [inst.opcode for inst in program] == [0xC4, 0x00]

    def test_literals(self):
        """Lower-case hex literals keep their value."""
        program, _ = resolve(["jumpv ff END", "END: halt"])
        assert [op.value for op in program[0].operands] == [0xFF, 0x03]

    def test_forward_and_backward_references_agree(self):
        """A label resolves to the same byte before and after its definition."""
        program, _ = resolve(["jumpv 1 X", "X: inc", "setpc X"])
        assert program[0].operands[1].value == program[2].operands[0].value == 3

    def test_label_prefix_emits_nothing(self):
        """Labels are source annotations only."""
        program, _ = resolve(["A: halt"])
        assert program[0].to_bytes() == bytes([0x00, 0x00, 0x00])
        assert program[0].to_bytes(fixed_width=False) == bytes([0x00])

    def test_unresolved_reference(self):
        """Names found in neither table are reported with suggestions."""
        with pytest.raises(UnresolvedReferenceError) as exc_info:
            resolve(["vtoa 1", "ator SUMM"], ["SUM 02"])
        assert exc_info.value.token == "SUMM"
        assert exc_info.value.line == 2
        assert exc_info.value.location.column == 6
        assert "SUM" in exc_info.value.similar

    def test_hex_looking_name_is_unresolved(self):
        """Upper-case names are never taken for hex bytes."""
        with pytest.raises(UnresolvedReferenceError):
            resolve(["ator FACE"])

    def test_literal_out_of_range(self):
        """Literals must fit in one byte."""
        with pytest.raises(OperandRangeError) as exc_info:
            resolve(["vtoa 100"])
        assert exc_info.value.literal == "100"

    def test_unknown_mnemonic(self):
        """The mnemonic pass rejects names outside the catalog."""
        line = parse_code_line("nop", 1)
        with pytest.raises(UnknownMnemonicError):
            substitute([line], {}, {})


# =============================================================================
# Encoding Tests
# =============================================================================

class TestEncode:
    """Test encode() and format_hex()."""

    def test_fixed_width_padding(self):
        """Unused operand bytes are zero in the fixed layout."""
        program, scan = resolve(["vtoa 7", "halt"])
        code = encode(program, expected_size=scan.total_size)
        assert code == bytes([0xD1, 0x07, 0x00, 0x00, 0x00, 0x00])

    def test_packed(self):
        """The packed layout emits only declared operands."""
        program, _ = resolve(["vtoa 7", "halt"])
        assert encode(program, fixed_width=False) == bytes([0xD1, 0x07, 0x00])

    def test_length_mismatch(self):
        """Disagreeing with the label scan is an internal error."""
        program, _ = resolve(["halt"])
        with pytest.raises(EncodingLengthMismatchError) as exc_info:
            encode(program, expected_size=4)
        assert exc_info.value.expected == 4
        assert exc_info.value.actual == 3

    def test_format_hex(self):
        """Bytes render as upper-case pairs separated by single spaces."""
        assert format_hex(bytes([0xC4, 0x0F, 0xB2])) == "C4 0F B2"

    def test_format_hex_empty(self):
        """An empty program renders as an empty string."""
        assert format_hex(b"") == ""
