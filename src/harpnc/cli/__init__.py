# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2015-2026 HARPNC Team

"""Command-line interface for harpnc."""

from .argument_parser import CLIParser

__all__ = ['CLIParser']
