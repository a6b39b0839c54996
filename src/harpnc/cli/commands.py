# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2015-2026 HARPNC Team

"""
Command handlers for the harpnc CLI.

A thin layer over the public import/export API: each handler loads the
configuration, runs one operation and reports the result on the console.
"""

import logging
from argparse import Namespace
from typing import Any, ClassVar, Dict

from harpnc.core.config import HarpncConfig
from harpnc.core.exceptions import ConfigurationError, HarpError
from harpnc.netcdf import export_product, import_product, read_global_metadata

from .console import Console, console as global_console
from .exit_codes import ExitCode

logger = logging.getLogger(__name__)


def load_config(args: Namespace, overrides: Dict[str, Any] = None) -> HarpncConfig:
    """
    Build the configuration for a command.

    Raises:
        ConfigurationError: If the configuration file is invalid
        FileNotFoundError: If ``--config`` names a missing file
    """
    overrides = {k: v for k, v in (overrides or {}).items() if v is not None}
    if getattr(args, 'config', None):
        config = HarpncConfig.from_file(args.config, overrides=overrides)
    else:
        config = HarpncConfig.from_dict(overrides)

    level = logging.DEBUG if getattr(args, 'verbose', False) else config.log_level
    logging.getLogger('harpnc').setLevel(level)
    return config


def cli_exception_handler(func):
    """Turn library errors raised by a handler into an exit code."""
    def wrapper(args: Namespace) -> int:
        try:
            return func(args)
        except ConfigurationError as e:
            ProductCommands._console.error(str(e))
            return ExitCode.CONFIG_ERROR
        except HarpError as e:
            logger.debug("Command failed", exc_info=True)
            ProductCommands._console.error(str(e))
            return ExitCode.PRODUCT_ERROR
    wrapper.__name__ = func.__name__
    wrapper.__doc__ = func.__doc__
    return wrapper


class ProductCommands:
    """Handlers for product inspection and conversion commands."""

    _console: ClassVar[Console] = global_console

    @classmethod
    def set_console(cls, console: Console) -> None:
        """Set the console instance used by all handlers (useful for testing)."""
        cls._console = console

    @staticmethod
    @cli_exception_handler
    def info(args: Namespace) -> int:
        """
        Execute: harpnc info FILE

        Checks the convention and prints the global time range and source product.
        """
        config = load_config(args)
        metadata = read_global_metadata(args.file, config)
        ProductCommands._console.table(
            title=str(args.file),
            columns=['attribute', 'value'],
            rows=[
                ('datetime_start', metadata.datetime_start),
                ('datetime_stop', metadata.datetime_stop),
                ('source_product', metadata.source_product),
            ],
        )
        return ExitCode.SUCCESS

    @staticmethod
    @cli_exception_handler
    def dump(args: Namespace) -> int:
        """
        Execute: harpnc dump FILE

        Imports the product and prints one row per variable.
        """
        config = load_config(args)
        product = import_product(args.file, config)
        rows = []
        for variable in product:
            dims = ', '.join(f"{t.value}={n}" for t, n in variable.dimensions())
            rows.append((variable.name, variable.data_type.value, dims, variable.unit, variable.description))
        ProductCommands._console.table(
            title=str(args.file),
            columns=['name', 'type', 'dimensions', 'unit', 'description'],
            rows=rows,
        )
        if product.source_product is not None:
            ProductCommands._console.info(f"source_product: {product.source_product}")
        if product.history is not None:
            ProductCommands._console.info(f"history: {product.history}")
        return ExitCode.SUCCESS

    @staticmethod
    @cli_exception_handler
    def copy(args: Namespace) -> int:
        """
        Execute: harpnc copy SOURCE DESTINATION

        Imports SOURCE and exports it to DESTINATION with the current
        convention version and the configured netCDF format.
        """
        overrides = {'netcdf_format': args.netcdf_format}
        if args.no_atomic:
            overrides['atomic_write'] = False
        config = load_config(args, overrides)
        product = import_product(args.source, config)
        export_product(args.destination, product, config)
        ProductCommands._console.success(f"Wrote {len(product)} variables to {args.destination}")
        return ExitCode.SUCCESS
