import os
import sys
import pytest

# Ensure project root is on sys.path for imports like `core.*`
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from core.engine import DetectionEngine
from rules.rules_loader import load_rules


@pytest.fixture(scope="session")
def catalog():
    return tuple(load_rules())


@pytest.fixture
def engine(catalog):
    return DetectionEngine(catalog)
