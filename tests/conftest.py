"""
Pytest fixtures for the village simulation tests.

Provides fresh settlements in a couple of starting shapes.
"""

import sys
from pathlib import Path

import pytest

# Add the project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.model.settlement import Settlement


@pytest.fixture
def village():
    """Default village: 3 starter sites, 6 founders, 3 of them at work."""
    return Settlement()


@pytest.fixture
def idle_village():
    """Default village with every site emptied, so turns produce nothing."""
    settlement = Settlement()
    for site in settlement.sites:
        settlement.fire(site)
    return settlement
