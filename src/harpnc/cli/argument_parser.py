# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2015-2026 HARPNC Team

"""
harpnc CLI Argument Parser.

Subcommands:
    - info: convention check and global metadata of a product file
    - dump: list the variables of a product file
    - copy: import a product and export it again (rewrite/convert)
"""

import argparse
from typing import List, Optional

from harpnc.core.constants import SUPPORTED_NETCDF_FORMATS

try:
    from harpnc.harpnc_version import __version__
except ImportError:
    __version__ = "0+unknown"


class CLIParser:
    """Builds the argparse parser and binds each subcommand to its handler."""

    def __init__(self) -> None:
        from .commands import ProductCommands

        self.parser = argparse.ArgumentParser(
            prog='harpnc',
            description='Read, inspect and rewrite HARP netCDF products.',
        )
        self.parser.add_argument('--version', action='version', version=f'harpnc {__version__}')
        self.parser.add_argument('--config', help='YAML configuration file')
        self.parser.add_argument('-v', '--verbose', action='store_true', help='enable debug logging')

        subparsers = self.parser.add_subparsers(dest='command', metavar='COMMAND')
        subparsers.required = True

        info = subparsers.add_parser('info', help='show convention and global metadata')
        info.add_argument('file', help='HARP netCDF product')
        info.set_defaults(func=ProductCommands.info)

        dump = subparsers.add_parser('dump', help='list the variables of a product')
        dump.add_argument('file', help='HARP netCDF product')
        dump.set_defaults(func=ProductCommands.dump)

        copy = subparsers.add_parser('copy', help='import a product and export it to a new file')
        copy.add_argument('source', help='HARP netCDF product to read')
        copy.add_argument('destination', help='file to write')
        copy.add_argument('--format', choices=SUPPORTED_NETCDF_FORMATS, dest='netcdf_format',
                          help='netCDF format of the destination')
        copy.add_argument('--no-atomic', action='store_true',
                          help='write the destination in place instead of via a temporary file')
        copy.set_defaults(func=ProductCommands.copy)

    def parse_args(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        return self.parser.parse_args(argv)
