"""
CLI Error Handling
==================

Maps exceptions to exit codes and prints them in a consistent format.
Usage errors (bad arguments, wrong extension, missing file) exit with 1,
assembly errors with 2.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Exit codes of the mxasm tool."""
    SUCCESS = 0
    INVALID_ARGS = 1     # Wrong arguments, wrong extension, missing files
    BUILD_ERROR = 2      # Assembly error in the source document
    INTERNAL_ERROR = 3   # Unexpected internal error


class UsageError(click.UsageError):
    """Usage error reported with ExitCode.INVALID_ARGS."""
    exit_code = ExitCode.INVALID_ARGS


class MxCommand(click.Command):
    """
    Click command whose argument-parsing errors exit with INVALID_ARGS.

    Click reports usage errors with exit code 2, which mxasm reserves for
    assembly errors.
    """

    def make_context(self, info_name, args, parent=None, **extra):
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as e:
            e.exit_code = ExitCode.INVALID_ARGS
            raise


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
) -> NoReturn:
    """
    Report an exception raised while assembling and exit.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    from mxasm.errors import MxError

    if isinstance(error, MxError):
        # Assembler errors carry their own "file:line:col: error:" prefix
        click.echo(str(error), err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, (FileNotFoundError, PermissionError, click.BadParameter)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
