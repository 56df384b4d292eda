"""
MX Assembler - Configuration
============================

Assembler settings. Configuration can come from:
- Default values (defined here)
- Environment variables (`AssemblerConfig.from_env`)
- Command-line flags (applied by the CLI on top of the above)

The instruction catalog itself is not configurable; see `mxasm.cpu`.
"""

from dataclasses import dataclass
import logging
import os

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class AssemblerConfig:
    """
    Configuration for an assembly run.

    Attributes:
        fixed_width: Every instruction occupies three bytes, unused operand
                     bytes emitted as 00 (default: True). When False each
                     instruction takes one byte per declared operand plus
                     the opcode.
        source_suffix: Required extension of source files (default: ".mx")
        object_suffix: Extension of the produced object file (default: ".o")
    """

    fixed_width: bool = True
    source_suffix: str = ".mx"
    object_suffix: str = ".o"

    @classmethod
    def from_env(cls) -> "AssemblerConfig":
        """
        Create AssemblerConfig from environment variables.

        Environment variables (all optional):
            MXASM_FIXED_WIDTH: "1"/"true" or "0"/"false"
            MXASM_SOURCE_SUFFIX: Source file extension, e.g. ".mx"
            MXASM_OBJECT_SUFFIX: Object file extension, e.g. ".o"

        Returns:
            AssemblerConfig with values from environment variables
        """
        config = cls()

        if fixed := os.environ.get("MXASM_FIXED_WIDTH"):
            if fixed.lower() in _TRUE_VALUES:
                config.fixed_width = True
            elif fixed.lower() in _FALSE_VALUES:
                config.fixed_width = False
            else:
                logger.warning("ignoring invalid MXASM_FIXED_WIDTH=%r", fixed)

        if suffix := os.environ.get("MXASM_SOURCE_SUFFIX"):
            if suffix.startswith("."):
                config.source_suffix = suffix
            else:
                logger.warning("ignoring invalid MXASM_SOURCE_SUFFIX=%r", suffix)

        if suffix := os.environ.get("MXASM_OBJECT_SUFFIX"):
            if suffix.startswith("."):
                config.object_suffix = suffix
            else:
                logger.warning("ignoring invalid MXASM_OBJECT_SUFFIX=%r", suffix)

        return config
