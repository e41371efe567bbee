# tests/test_config.py
# -*- coding: utf-8 -*-
"""Tests for loading project defaults from a .filecipherrc file."""

import json
from pathlib import Path

import pytest

from filecipher import api
from filecipher.core.request import DEFAULT_OPTIONS
from filecipher.utils.config import find_rc_file, load_defaults
from filecipher.utils.exceptions import ArgumentError

from conftest import PLAINTEXT_CONTENT, TEST_PASSWORD


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    return home


def test_no_rc_file_gives_builtin_defaults(tmp_path):
    project = tmp_path / "project"
    project.mkdir()
    assert find_rc_file(project) is None
    assert load_defaults(project) == DEFAULT_OPTIONS


def test_rc_file_in_parent_directory_is_found(tmp_path):
    (tmp_path / ".filecipherrc").write_text(json.dumps({"algorithm": "aes-256-cbc", "iterations": 10}))
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    defaults = load_defaults(nested)
    assert defaults.algorithm == "aes-256-cbc"
    assert defaults.iterations == 10
    assert defaults.salt == DEFAULT_OPTIONS.salt


def test_rc_file_in_home_directory_is_found(tmp_path, isolated_home):
    (isolated_home / ".filecipherrc").write_text(json.dumps({"digest": "sha512"}))
    project = tmp_path / "project"
    project.mkdir()
    assert load_defaults(project).digest == "sha512"


def test_unknown_and_path_keys_are_ignored(tmp_path):
    rc = tmp_path / "custom.json"
    rc.write_text(json.dumps({"password": "leaked", "input": "x", "keylen": 64}))
    defaults = load_defaults(path=rc)
    assert defaults.password is None
    assert defaults.input is None
    assert defaults.keylen == 64


@pytest.mark.parametrize("content", ["not json", "[1, 2, 3]"])
def test_malformed_rc_file(tmp_path, content):
    rc = tmp_path / "bad.json"
    rc.write_text(content)
    with pytest.raises(ArgumentError):
        load_defaults(path=rc)


def test_missing_explicit_rc_file(tmp_path):
    with pytest.raises(ArgumentError):
        load_defaults(path=tmp_path / "nope.json")


def test_loaded_defaults_drive_encryption(tmp_path, src, enc, dec):
    rc = tmp_path / "rc.json"
    rc.write_text(json.dumps({"algorithm": "aes-128-cbc", "salt": "project-salt", "iterations": 50}))
    base = load_defaults(path=rc)
    options = {"input": str(src), "output": str(enc), "password": TEST_PASSWORD}
    request = api.encrypt_sync(options, base=base)
    assert request.algorithm == "aes-128-cbc"

    api.decrypt_sync({"input": str(enc), "output": str(dec), "password": TEST_PASSWORD,
                      "algorithm": "aes-128-cbc", "salt": "project-salt", "iterations": 50})
    assert dec.read_bytes() == PLAINTEXT_CONTENT
