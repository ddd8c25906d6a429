"""
Root test configuration.

Test organization:
- unit/        Fast, isolated, no I/O
- integration/ Component boundaries, real I/O to temp locations

Run specific levels:
    pytest tests/unit -v           # Fast feedback loop
    pytest tests/integration -v    # Before commit
    pytest tests -v                # Everything
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast isolated tests")
    config.addinivalue_line("markers", "integration: Component boundary tests")
    config.addinivalue_line("markers", "slow: Tests that take > 1s")


@pytest.fixture
def sample_items():
    """Standard test items, not yet inserted."""
    from models import Item

    return [
        Item(name="apple", category="fruit", image_name="apple.jpg"),
        Item(name="pineapple", category="fruit", image_name="pineapple.jpg"),
        Item(name="banana", category="fruit"),
    ]
