# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2015-2026 HARPNC Team

"""Process exit codes returned by the harpnc CLI."""

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    PRODUCT_ERROR = 1
    USAGE_ERROR = 2
    CONFIG_ERROR = 3
    INTERRUPTED = 130
