"""
Test configuration and fixtures for pytest.

This file contains fixtures and configuration that will be available to all tests.
"""
import logging

import pytest


@pytest.fixture
def reset_package_logger():
    """Undo logger level changes made by LoggingConfig.apply()."""
    logger = logging.getLogger("floatdiff")
    level = logger.level
    yield
    logger.setLevel(level)
