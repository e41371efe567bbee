# tests/conftest.py
# -*- coding: utf-8 -*-
"""Shared fixtures for the filecipher test-suite."""

from pathlib import Path

import pytest

PLAINTEXT_CONTENT = b"I am the night!"
TEST_PASSWORD = "alakazam"
TEST_PASSWORD_WRONG = "not-alakazam"


@pytest.fixture
def src(tmp_path: Path) -> Path:
    """A plaintext source file."""
    path = tmp_path / "src.txt"
    path.write_bytes(PLAINTEXT_CONTENT)
    return path


@pytest.fixture
def enc(tmp_path: Path) -> Path:
    return tmp_path / "src.txt.enc"


@pytest.fixture
def dec(tmp_path: Path) -> Path:
    return tmp_path / "src.dec.txt"
