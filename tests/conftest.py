import logging
import logging.handlers
import os
import sys

import pytest

# Ensure project root is on sys.path before imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import logging_config  # noqa: E402
from msrb_pension.config.loaders import get_statutory_tables  # noqa: E402
from msrb_pension.config.models import CalculationInput  # noqa: E402


def pytest_configure(config):
    """
    Register custom markers to avoid pytest warnings.
    """
    config.addinivalue_line("markers", "unit: mark a test as a unit test")
    config.addinivalue_line("markers", "integration: mark a test as an integration test")
    config.addinivalue_line("markers", "config: mark a test as a config test")
    config.addinivalue_line("markers", "engines: mark a test as an engines test")
    config.addinivalue_line("markers", "plan_rules: mark a test as a plan rules test")
    config.addinivalue_line("markers", "projections: mark a test as a projections test")
    config.addinivalue_line("markers", "validation: mark a test as a validation harness test")


@pytest.fixture(scope="session")
def tables():
    return get_statutory_tables()


@pytest.fixture
def make_input():
    """Factory for CalculationInput with a Group 2, pre-2012, $95k default member."""

    def _make(**overrides):
        values = {
            "group": 2,
            "age": 55,
            "years_of_service": 31.0,
            "average_salary": 95000.0,
            "service_entry": "before_2012",
            "retirement_option": "A",
            "beneficiary_age": None,
        }
        values.update(overrides)
        return CalculationInput(**values)

    return _make


@pytest.fixture
def isolated_logging():
    """Remove the handlers setup_logging installs once a CLI test finishes."""
    root = logging.getLogger()
    saved_level = root.level
    yield
    concern_loggers = [
        logging.getLogger(name)
        for name in (logging_config.CALCULATION_LOGGER, logging_config.VALIDATION_LOGGER, logging_config.DEBUG_LOGGER)
    ]
    for lg in [root] + concern_loggers:
        for h in lg.handlers[:]:
            if type(h) in (logging.StreamHandler, logging.handlers.RotatingFileHandler):
                lg.removeHandler(h)
                h.close()
    root.setLevel(saved_level)
    logging_config._LOGGING_CONFIGURED = False
