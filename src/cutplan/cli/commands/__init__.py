"""CLI command implementations for the cutplan application.

This package contains subcommands for the cutplan CLI:
- pack: Compute a cutting plan for a job file
- validate: Validate a job file
"""

from cutplan.cli.commands.pack import pack_command
from cutplan.cli.commands.validate import display_load_error, validate_command

__all__ = ["display_load_error", "pack_command", "validate_command"]
