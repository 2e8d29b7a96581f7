"""Marks everything under tests/api as an HTTP-level test."""

from pathlib import Path

import pytest

API_TESTS_DIR = Path(__file__).parent


def pytest_collection_modifyitems(config, items):
    for item in items:
        if API_TESTS_DIR in item.path.parents:
            item.add_marker(pytest.mark.api)
