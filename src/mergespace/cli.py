#!/usr/bin/env python3
"""Mergespace CLI - resolution spaces of historical merge conflicts."""

import asyncio

from pydantic_settings import CliApp, CliSubCommand, get_subcommand

from mergespace.command.analyze import AnalyzeCommand
from mergespace.command.clone import CloneCommand
from mergespace.core.config import State
from mergespace.core.log import logger


class CliState(State):
    """Measure how developers resolved merge conflicts.

    For each merge commit of each listed project, mergespace
    recomputes the merge, builds the space of candidate
    resolutions from the conflict hunks, and checks whether the
    committed resolution is one of them.

    Configuration sources (in priority order):
    1. Command-line arguments (--config.analysis.output_dir value)
    2. YAML: --include files, then ./mergespace.yaml, then the
       user config directory, then the built-in defaults
    3. .env file
    4. Environment variables
       (MERGESPACE_CONFIG__ANALYSIS__OUTPUT_DIR=value)
    """

    analyze: CliSubCommand[AnalyzeCommand]
    clone: CliSubCommand[CloneCommand]

    def cli_cmd(self):
        """Dispatch to active subcommand, or show help if none
        provided."""
        subcommand = get_subcommand(self, is_required=False)

        if subcommand is None:
            import sys
            CliApp.run(CliState, cli_args=['--help'])
            sys.exit(1)

        # Logger as context manager closes the log files on exit
        with logger:
            exit_code = asyncio.run(subcommand.run_workflow(self))
            raise SystemExit(exit_code)


def main():
    """Main entry point for CLI."""
    CliApp.run(CliState)


if __name__ == "__main__":
    main()
