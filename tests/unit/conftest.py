"""
Unit test fixtures.

All unit tests should be:
- Fast (< 100ms)
- Isolated (no external dependencies)
- Deterministic (same result every time)
"""

import pytest


@pytest.fixture
def item_data():
    """Raw item data dict."""
    return {
        "name": "shirt",
        "category": "fashion",
        "image_name": "a.jpg",
    }


@pytest.fixture
def document_data():
    """Raw document store contents."""
    return {
        "items": [
            {"name": "shirt", "category": "fashion", "image_name": "a.jpg"},
            {"name": "jacket", "category": "fashion", "image_name": ""},
        ]
    }
