"""CLI command implementations for the poolfoil application.

This package contains subcommands for the poolfoil CLI:
- validate: Validate a configuration file
"""

from poolfoil.cli.commands.validate import display_load_error, validate_command

__all__ = ["display_load_error", "validate_command"]
