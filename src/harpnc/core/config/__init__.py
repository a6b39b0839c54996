# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2015-2026 HARPNC Team

"""Configuration models for harpnc."""

from .models import FROZEN_CONFIG, HarpncConfig, resolve_config

__all__ = ['FROZEN_CONFIG', 'HarpncConfig', 'resolve_config']
