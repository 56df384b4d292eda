#!/usr/bin/env python3
"""
MX Assembler Demo
=================

This script demonstrates how to use the assembler API to:
1. Assemble a document from a file
2. Inspect the symbol and label tables
3. Print a listing
4. Handle assembly errors without exceptions

Usage:
    python examples/assemble_fibonacci.py
"""

from pathlib import Path

from mxasm import Assembler, AssemblerConfig, try_assemble


def main():
    source_file = Path(__file__).with_name("fibonacci.mx")

    # ==========================================================================
    # 1. Assemble with the default fixed-width layout
    # ==========================================================================

    asm = Assembler()
    output = asm.assemble_file(source_file)
    print(f"Object code ({len(asm.get_code())} bytes):")
    print(f"  {output}")

    # ==========================================================================
    # 2. Symbol and label tables
    # ==========================================================================

    print("\nSymbols:")
    for name, slot in asm.get_symbols().items():
        print(f"  {name:8s} slot {slot:02X}")
    print("Labels:")
    for name, address in asm.get_labels().items():
        print(f"  {name:8s} byte {address:02X}")

    # ==========================================================================
    # 3. Listing
    # ==========================================================================

    print()
    print(asm.get_listing())

    # ==========================================================================
    # 4. Packed layout and error handling
    # ==========================================================================

    packed = Assembler(AssemblerConfig(fixed_width=False))
    print(f"\nPacked ({len(packed.assemble_file(source_file).split())} bytes):")
    print(f"  {packed.get_hex()}")

    broken = source_file.read_text().replace("ator SUM", "ator SUMM")
    result = try_assemble(broken, str(source_file))
    if not result.ok:
        print("\nA typo is reported like this:")
        print(result.error)


if __name__ == "__main__":
    main()
