# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2015-2026 HARPNC Team

"""
Single source of truth for the harpnc version.
Update this when cutting a release.
"""
# Semantic version (PEP 440-friendly)
__version__ = "1.0.0"
