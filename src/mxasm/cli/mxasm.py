"""
mxasm - MX Assembler Command-Line Interface
===========================================

This module implements the command-line interface for the MX assembler.

Usage Examples
--------------
Basic assembly:
    $ mxasm fib.mx

With output file:
    $ mxasm fib.mx -o out.o

Generate all output files:
    $ mxasm fib.mx -o fib.o -l fib.lst -s fib.sym

Packed layout (opcode plus declared operands only):
    $ mxasm --layout packed fib.mx

Verbose mode:
    $ mxasm -v fib.mx
"""

from dataclasses import replace
from pathlib import Path
from typing import Optional
import logging

import click

from mxasm import __version__
from mxasm.assembler import Assembler
from mxasm.cli.errors import MxCommand, UsageError, handle_cli_exception
from mxasm.config import AssemblerConfig

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command(cls=MxCommand)
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output object file (default: input.o)",
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate listing file",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate symbol file",
)
@click.option(
    "--layout",
    type=click.Choice(["fixed", "packed"], case_sensitive=False),
    default=None,
    help="Instruction layout. fixed: 3 bytes per instruction, unused "
         "operands emitted as 00. packed: opcode plus declared operands. "
         "Default: fixed, or MXASM_FIXED_WIDTH from the environment.",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="mxasm")
def main(
    input_file: Path,
    output: Optional[Path],
    listing: Optional[Path],
    symbols: Optional[Path],
    layout: Optional[str],
    verbose: bool,
) -> None:
    """
    Assemble an MX document into object code.

    INPUT_FILE is the source document (.mx) to assemble.

    The object file holds the program as one line of space-separated
    upper-case hex bytes, ready for the MX interpreter.

    \b
    Examples:
        mxasm fib.mx                 # Outputs fib.o
        mxasm fib.mx -o out.o        # Specify output file
        mxasm fib.mx -l fib.lst      # Also write a listing
    """
    setup_logging(verbose)

    config = AssemblerConfig.from_env()
    if layout is not None:
        config = replace(config, fixed_width=layout.lower() == "fixed")

    if input_file.suffix != config.source_suffix:
        raise UsageError(
            f"input file must have the '{config.source_suffix}' extension: {input_file}"
        )

    output_file = output if output is not None else input_file.with_suffix(config.object_suffix)
    asm = Assembler(config)

    try:
        logger.debug("Layout: %s", "fixed" if config.fixed_width else "packed")
        asm.assemble_file(input_file)
        asm.write_object(output_file)

        if listing:
            asm.write_listing(listing)

        if symbols:
            asm.write_symbols(symbols)

        if verbose:
            click.echo(f"Assembly complete: {len(asm.get_code())} bytes")
            click.echo(f"Defined {len(asm.get_symbols())} symbols, "
                       f"{len(asm.get_labels())} labels")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
