import sys
import os

import pytest
from hypothesis import HealthCheck, settings

# Ensure the project root is in the python path for all tests
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from receipt_split.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached per process; tests that touch the env need a clean slate."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# Generated examples share one run of the function-scoped fixture above
settings.register_profile(
    "receipt_split",
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.load_profile("receipt_split")
