# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2015-2026 HARPNC Team

"""
Version gate for the ``Conventions`` global attribute.

A readable product declares ``HARP-<major>.<minor>``. Files written with
an older or equal version are accepted; newer ones are rejected with
:class:`UnsupportedVersionError`. A missing, non-text or malformed
declaration means the file is not a HARP product at all.
"""

import logging
import re
from typing import Optional, Tuple

from harpnc.core.constants import FormatVersion, GlobalAttributes
from harpnc.core.exceptions import ProductStructureError, UnsupportedProductError, UnsupportedVersionError

from .attributes import read_optional_text

logger = logging.getLogger(__name__)

_CONVENTION_PATTERN = re.compile(r'^(?P<family>[A-Za-z]+)-(?P<major>[0-9]+)\.(?P<minor>[0-9]+)$')


def parse_convention(text: Optional[str]) -> Tuple[int, int]:
    """
    Parse a ``HARP-<major>.<minor>`` declaration.

    Raises:
        UnsupportedProductError: If ``text`` is None or does not have that shape
    """
    match = _CONVENTION_PATTERN.fullmatch(text) if text is not None else None
    if match is None or match.group('family') != FormatVersion.FAMILY:
        raise UnsupportedProductError("not a valid HARP product")
    return int(match.group('major')), int(match.group('minor'))


def is_supported_version(major: int, minor: int,
                         current_major: int = FormatVersion.MAJOR,
                         current_minor: int = FormatVersion.MINOR) -> bool:
    """True if a file of version ``major.minor`` can be read by version ``current_major.current_minor``."""
    return major < current_major or (major == current_major and minor <= current_minor)


def check_convention(text: Optional[str],
                     current_major: int = FormatVersion.MAJOR,
                     current_minor: int = FormatVersion.MINOR) -> Tuple[int, int]:
    """
    Check a ``Conventions`` value against the supported version.

    Returns:
        The declared ``(major, minor)``

    Raises:
        UnsupportedProductError: If the declaration is missing or malformed
        UnsupportedVersionError: If the declared version is too new
    """
    major, minor = parse_convention(text)
    if not is_supported_version(major, minor, current_major, current_minor):
        raise UnsupportedVersionError(
            f"unsupported HARP format version {major}.{minor}", major=major, minor=minor
        )
    return major, minor


def verify_product(dataset) -> Tuple[int, int]:
    """Read the ``Conventions`` global attribute of an open dataset and check it."""
    try:
        text = read_optional_text(dataset, GlobalAttributes.CONVENTIONS)
    except ProductStructureError:
        text = None
    major, minor = check_convention(text)
    logger.debug("Product declares HARP format version %d.%d", major, minor)
    return major, minor
