# tests/conftest.py
import sys
from datetime import date
from pathlib import Path

# ---------------------------------------------------------
# Ensure project root is on PYTHONPATH BEFORE app imports
# ---------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest


@pytest.fixture
def today():
    """Reference day used across the date dialogue tests."""
    return date(2025, 9, 20)


@pytest.fixture
def mid_september():
    return date(2025, 9, 15)
