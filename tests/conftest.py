"""
Pytest Configuration for Expansion Readiness Tests

IMPORTANT: The os.environ values must be set BEFORE settings is imported
(settings reads the environment once, at import time).
"""

import os

# CRITICAL: Set these BEFORE any other imports
os.environ["LOG_TO_FILE"] = "false"
os.environ["DEFAULT_COMPANY_ID"] = "demo-fleet"
os.environ["DEFAULT_TIME_RANGE"] = "month"
os.environ["BUSINESS_TZ"] = "America/Chicago"

import pytest  # noqa: E402

# Import all fixtures
from tests.fixtures.api_fixtures import *  # noqa
from tests.fixtures.fleet_fixtures import *  # noqa
