# tests/test_cli_e2e.py
# -*- coding: utf-8 -*-
"""
End-to-end tests for the filecipher CLI.
Uses subprocess to run the actual command as `python -m filecipher`.
"""

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from filecipher.api import list_algorithms, list_hashes
from filecipher.utils.constants import (
    EXIT_SUCCESS, EXIT_FILE_ERROR, EXIT_DECRYPT_ERROR, EXIT_ARG_ERROR
)
from filecipher.version import __version__

# --- Test Data ---
PLAINTEXT_CONTENT = b"Test data with different chars: !@#$%^&*()_+`~-=[]{}|\\:;\"'<>,.?/"
TEST_PASSWORD_CORRECT = b"correct_password_123!@#"
TEST_PASSWORD_WRONG = b"wrong_password_XYZ#@!"

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def run_filecipher_cli(args: list[str], cwd: Path, input_data: bytes | None = None) -> subprocess.CompletedProcess:
    """Helper function to run the CLI command via subprocess, isolated from any user rc file."""
    command = [sys.executable, "-m", "filecipher"] + args
    env = dict(os.environ)
    env["HOME"] = str(cwd)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")]))
    print(f"\nAttempting to run command: {' '.join(command)}")
    try:
        result = subprocess.run(
            command, input=input_data, capture_output=True, text=False,
            timeout=60, check=False, cwd=cwd, env=env
        )
    except subprocess.TimeoutExpired:
        pytest.fail("Command execution timed out.", pytrace=False)
    print(f"Return Code: {result.returncode}")
    if result.stdout: print(f"stdout (first 500 bytes):\n{result.stdout[:500].decode(errors='ignore')}...")
    if result.stderr: print(f"stderr (first 1000 bytes):\n{result.stderr[:1000].decode(errors='ignore')}...")
    return result


@pytest.fixture
def files(tmp_path: Path):
    input_file = tmp_path / "input.txt"
    input_file.write_bytes(PLAINTEXT_CONTENT)
    password_file = tmp_path / "pass_correct.key"
    password_file.write_bytes(TEST_PASSWORD_CORRECT)
    wrong_password_file = tmp_path / "pass_wrong.key"
    wrong_password_file.write_bytes(TEST_PASSWORD_WRONG)
    return {
        "dir": tmp_path,
        "input": input_file,
        "password": password_file,
        "wrong_password": wrong_password_file,
        "encrypted": tmp_path / "output.enc",
        "decrypted": tmp_path / "decrypted.txt",
    }


# --- Test Cases ---

def test_encrypt_decrypt_password_file_e2e(files):
    """Tests encrypt/decrypt cycle with correct password from file."""
    result_enc = run_filecipher_cli(
        ["encrypt", str(files["input"]), str(files["encrypted"]), "--password-file", str(files["password"])],
        cwd=files["dir"])
    assert result_enc.returncode == EXIT_SUCCESS, "Encryption failed"
    assert files["encrypted"].exists()
    assert files["encrypted"].read_bytes() != PLAINTEXT_CONTENT

    result_dec = run_filecipher_cli(
        ["dec", str(files["encrypted"]), str(files["decrypted"]), "--password-file", str(files["password"])],
        cwd=files["dir"])
    assert result_dec.returncode == EXIT_SUCCESS, "Decryption failed"
    assert files["decrypted"].read_bytes() == PLAINTEXT_CONTENT


def test_encrypt_decrypt_password_stdin_custom_options_e2e(files):
    """Tests a cycle with the password piped in and every key derivation option set."""
    options = ["-a", "aes-256-cbc", "-s", "pepper", "-i", "20", "-l", "32", "-d", "sha256"]
    result_enc = run_filecipher_cli(
        ["enc", str(files["input"]), str(files["encrypted"]), "--password-stdin"] + options,
        cwd=files["dir"], input_data=TEST_PASSWORD_CORRECT + b"\n")
    assert result_enc.returncode == EXIT_SUCCESS

    result_dec = run_filecipher_cli(
        ["decrypt", str(files["encrypted"]), str(files["decrypted"]), "--password-stdin"] + options,
        cwd=files["dir"], input_data=TEST_PASSWORD_CORRECT + b"\n")
    assert result_dec.returncode == EXIT_SUCCESS
    assert files["decrypted"].read_bytes() == PLAINTEXT_CONTENT


def test_password_option_prints_warning_e2e(files):
    result = run_filecipher_cli(
        ["encrypt", str(files["input"]), str(files["encrypted"]), "-p", "alakazam"], cwd=files["dir"])
    assert result.returncode == EXIT_SUCCESS
    assert "should not be given on the command line" in result.stderr.decode(errors='ignore')


def test_decrypt_wrong_password_e2e(files):
    """Tests decrypt attempt with wrong password, expects EXIT_DECRYPT_ERROR."""
    result_enc = run_filecipher_cli(
        ["encrypt", str(files["input"]), str(files["encrypted"]), "--password-file", str(files["password"])],
        cwd=files["dir"])
    assert result_enc.returncode == EXIT_SUCCESS

    result_dec = run_filecipher_cli(
        ["decrypt", str(files["encrypted"]), str(files["decrypted"]), "--password-file", str(files["wrong_password"])],
        cwd=files["dir"])
    assert result_dec.returncode == EXIT_DECRYPT_ERROR, f"Wrong exit code ({result_dec.returncode})"
    stderr_output = result_dec.stderr.decode(errors='ignore').lower()
    assert "bad decrypt" in stderr_output
    assert "iterations" in stderr_output


def test_file_not_found_error_e2e(files):
    """Tests running commands with a non-existent input file."""
    non_existent_input = files["dir"] / "non_existent_input.txt"
    for command in ("encrypt", "decrypt"):
        result = run_filecipher_cli(
            [command, str(non_existent_input), str(files["encrypted"]), "--password-file", str(files["password"])],
            cwd=files["dir"])
        assert result.returncode == EXIT_FILE_ERROR, \
            f"{command} failed with wrong code ({result.returncode}) instead of File Error ({EXIT_FILE_ERROR})"
        stderr_output = result.stderr.decode(errors='ignore').lower()
        assert "file not found" in stderr_output
        assert str(non_existent_input).lower() in stderr_output
    assert not files["encrypted"].exists()


def test_invalid_algorithm_e2e(files):
    result = run_filecipher_cli(
        ["encrypt", str(files["input"]), str(files["encrypted"]), "--password-file", str(files["password"]),
         "-a", "foobar"], cwd=files["dir"])
    assert result.returncode == EXIT_ARG_ERROR
    stderr_output = result.stderr.decode(errors='ignore')
    assert '"foobar" is not a valid cipher algorithm.' in stderr_output
    assert "--algorithms" in stderr_output


def test_invalid_digest_e2e(files):
    result = run_filecipher_cli(
        ["encrypt", str(files["input"]), str(files["encrypted"]), "--password-file", str(files["password"]),
         "-d", "foobar"], cwd=files["dir"])
    assert result.returncode == EXIT_ARG_ERROR
    assert "--hashes" in result.stderr.decode(errors='ignore')


def test_rc_file_defaults_e2e(files):
    """An rc file in the working directory changes the defaults for both directions."""
    (files["dir"] / ".filecipherrc").write_text(json.dumps({"algorithm": "aes-128-cbc", "salt": "team-salt"}))
    args = ["--password-file", str(files["password"])]
    assert run_filecipher_cli(["encrypt", str(files["input"]), str(files["encrypted"])] + args,
                              cwd=files["dir"]).returncode == EXIT_SUCCESS

    # Without the rc file the built-in defaults no longer match
    (files["dir"] / ".filecipherrc").unlink()
    result = run_filecipher_cli(["decrypt", str(files["encrypted"]), str(files["decrypted"])] + args,
                                cwd=files["dir"])
    assert result.returncode != EXIT_SUCCESS

    result = run_filecipher_cli(["decrypt", str(files["encrypted"]), str(files["decrypted"]),
                                 "-a", "aes-128-cbc", "-s", "team-salt"] + args, cwd=files["dir"])
    assert result.returncode == EXIT_SUCCESS
    assert files["decrypted"].read_bytes() == PLAINTEXT_CONTENT


def test_list_algorithms_e2e(tmp_path):
    result = run_filecipher_cli(["--algorithms"], cwd=tmp_path)
    assert result.returncode == EXIT_SUCCESS
    assert result.stdout.decode().split() == list_algorithms()


def test_list_hashes_e2e(tmp_path):
    result = run_filecipher_cli(["-H"], cwd=tmp_path)
    assert result.returncode == EXIT_SUCCESS
    assert result.stdout.decode().split() == list_hashes()


@pytest.mark.parametrize("flag", ["--help", "-h"])
def test_help_e2e(tmp_path, flag):
    result = run_filecipher_cli([flag], cwd=tmp_path)
    assert result.returncode == EXIT_SUCCESS
    assert b"encrypt" in result.stdout


def test_version_e2e(tmp_path):
    result = run_filecipher_cli(["--version"], cwd=tmp_path)
    assert result.returncode == EXIT_SUCCESS
    assert __version__ in result.stdout.decode()
