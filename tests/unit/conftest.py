"""
Unit test fixtures and configuration.

Fixtures specific to unit tests (fast, isolated tests).
"""

import logging

import pytest


@pytest.fixture(autouse=True)
def quiet_harpnc_logging():
    """Keep the library's INFO summaries out of test output."""
    logger = logging.getLogger("harpnc")
    previous = logger.level
    logger.setLevel(logging.WARNING)
    yield
    logger.setLevel(previous)
