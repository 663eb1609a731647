"""Pytest configuration helpers for test collection.

Ensure the project root is on sys.path so tests can import the package
without requiring PYTHONPATH to be set externally, and give every test an
isolated cashola context rooted in its tmp_path.
"""
import sys
from pathlib import Path

import pytest


def pytest_configure(config):
    # Insert repo root (one level up from tests/) to sys.path
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root))


@pytest.fixture(autouse=True)
def _no_ignore_env(monkeypatch):
    monkeypatch.delenv('IGNORE_CASHOLA', raising=False)


@pytest.fixture
def storage_dir(tmp_path):
    return tmp_path / '.cashola'


@pytest.fixture
def ctx(storage_dir):
    from cashola import Cashola, CasholaConfig
    return Cashola(CasholaConfig(storage_dir=str(storage_dir)))
