"""
MX Assembler Command-Line Interface
===================================

This package provides the `mxasm` command-line tool, a Click-based
front end that reads an .mx document, assembles it and writes the .o
object file (plus optional listing and symbol files).
"""

__all__ = ["mxasm"]
