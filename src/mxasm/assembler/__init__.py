"""
MX Assembler
============

This package provides a two-pass assembler for the MX teaching machine.
It converts an MX document (description, symbol definitions and code,
separated by `---` lines) into a flat byte stream for the interpreter.

Main Components
---------------
- **Assembler**: Main class that orchestrates the assembly process
- **Lexer**: Comment stripping and line tokenization
- **Parser**: Section splitting, typed line records and validation
- **Symbol tables**: Symbol table and label table builders
- **Code generator**: Three-pass substitution and encoding

Assembly Process
----------------
1. **Validation**: the raw document is checked against the grammar;
   the first violation is reported with its line and section
2. **Pass 1 (label scan)**: symbol table from the symbol section, label
   addresses from a single scan of the code section
3. **Pass 2 (substitution)**: symbols, then labels, then mnemonics are
   replaced by bytes and the program is encoded

Example Usage
-------------
>>> from mxasm.assembler import assemble
>>> assemble('''
... ---
... ---
... halt
... ''')
'00 00 00'
"""

from mxasm.assembler.assembler import (
    Assembler,
    AssemblyResult,
    assemble,
    assemble_file,
    try_assemble,
)
from mxasm.assembler.lexer import Lexer, Token, TokenType, strip_comment, strip_comments
from mxasm.assembler.parser import (
    CodeLine,
    Operand,
    SectionText,
    Sections,
    SymbolDef,
    ValidationResult,
    parse_code,
    parse_code_line,
    parse_symbol_line,
    parse_symbols,
    split_sections,
    validate,
)
from mxasm.assembler.symbols import (
    LabelScan,
    Symbol,
    SymbolKind,
    build_label_table,
    build_symbol_table,
    check_ambiguity,
)
from mxasm.assembler.codegen import (
    ResolvedInstruction,
    encode,
    format_hex,
    substitute,
)

__all__ = [
    # Main class and functions
    "Assembler",
    "AssemblyResult",
    "assemble",
    "assemble_file",
    "try_assemble",
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "strip_comment",
    "strip_comments",
    # Parser
    "CodeLine",
    "Operand",
    "SectionText",
    "Sections",
    "SymbolDef",
    "ValidationResult",
    "parse_code",
    "parse_code_line",
    "parse_symbol_line",
    "parse_symbols",
    "split_sections",
    "validate",
    # Tables
    "LabelScan",
    "Symbol",
    "SymbolKind",
    "build_label_table",
    "build_symbol_table",
    "check_ambiguity",
    # Code generator
    "ResolvedInstruction",
    "encode",
    "format_hex",
    "substitute",
]
