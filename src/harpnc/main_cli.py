# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2015-2026 HARPNC Team

"""
harpnc Command-Line Interface entry point.

Provides the main() function that serves as the entry point for the
`harpnc` command. Handles argument parsing, logging setup, command
dispatch, and error handling for all CLI operations.
"""

import logging
import sys

LOG_FORMAT = '[%(asctime)s] [%(levelname)s] [%(name)s] - %(message)s'


def main(argv=None):
    """
    Main entry point for the harpnc CLI.

    Returns:
        Process exit code
    """
    from harpnc.cli.argument_parser import CLIParser
    from harpnc.cli.exit_codes import ExitCode
    from harpnc.core.exceptions import HarpError

    try:
        parser = CLIParser()
        args = parser.parse_args(argv)

        logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)

        return int(args.func(args))

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return ExitCode.INTERRUPTED
    except (HarpError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.PRODUCT_ERROR


if __name__ == "__main__":
    sys.exit(main())
