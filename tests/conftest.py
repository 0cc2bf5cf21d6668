"""Shared fixtures."""

import pytest

from constants import Constants


@pytest.fixture(autouse=True)
def restore_constants():
    """CLI/config code mutates Constants; put every attribute back after each test."""
    saved = {k: v for k, v in vars(Constants).items() if k.isupper()}
    yield
    for key, value in saved.items():
        setattr(Constants, key, value)
