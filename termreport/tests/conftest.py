"""Pytest fixtures for termreport tests."""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_termreport_env(monkeypatch):
    """Keep the caller's TERMREPORT_* settings out of the tests.

    A developer running with TERMREPORT_AMBIGUOUS_WIDTH=2 would otherwise
    see box-drawing widths change under them.
    """
    for key in list(os.environ):
        if key.startswith("TERMREPORT_"):
            monkeypatch.delenv(key)
    yield
