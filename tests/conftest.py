"""Test configuration for pytest."""

import logging
import os
import pytest


@pytest.fixture(autouse=True)
def configure_test_logging():
    """Configure logging for tests to be minimal."""
    # Set environment variable to ensure minimal logging during tests
    os.environ['PAGEVAULT_LOG_LEVEL'] = 'WARNING'

    # Also configure root logger to be quiet
    logging.getLogger().setLevel(logging.WARNING)

    # Capture failures are logged at ERROR on purpose in several tests
    for logger_name in ['pagevault.capture.service', 'pagevault.export.coordinator']:
        logging.getLogger(logger_name).setLevel(logging.CRITICAL)
