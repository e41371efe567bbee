# password_utils.py
# -*- coding: utf-8 -*-
"""Utilities for obtaining the password from various sources."""

import getpass
import sys
import logging
import os

from ..utils.constants import EXIT_INTERRUPT
from ..utils.exceptions import ArgumentError, FileCipherError

logger = logging.getLogger(__name__)


def _decode(password_bytes: bytes, source: str) -> str:
    try:
        return password_bytes.decode('utf-8')
    except UnicodeDecodeError as e:
        msg = f"Password from {source} is not valid UTF-8."
        logger.error(msg)
        raise ArgumentError(msg) from e


def get_interactive_password(confirm: bool = False) -> str:
    """
    Prompts the user interactively for a password.

    Args:
        confirm: Ask a second time and require both entries to match.

    Returns:
        The password.

    Raises:
        ArgumentError: If the password is empty or the entries do not match.
        FileCipherError: If no password can be read from the terminal.
        SystemExit: If the user cancels with Ctrl+C (exits with EXIT_INTERRUPT).
    """
    try:
        password = getpass.getpass(prompt="Enter the password: ")
        if not password:
            raise ArgumentError("Password must not be empty.")
        if confirm and password != getpass.getpass(prompt="Confirm password: "):
            # Avoid logging the password itself, even on mismatch
            logger.error("Interactive password entry failed: passwords mismatch.")
            raise ArgumentError("Passwords do not match.")
        logger.info("Password obtained interactively.")
        return password

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        logger.warning("Password entry cancelled by user (KeyboardInterrupt).")
        sys.exit(EXIT_INTERRUPT) # Exit directly on Ctrl+C during password input
    except EOFError:
        # getpass stdin closed unexpectedly (e.g., redirected from /dev/null)
        msg = "Could not read password from standard input (EOF)."
        logger.error(msg)
        raise FileCipherError(msg) from None


def read_password_file(filepath: str) -> str:
    """
    Reads the password from the first line of the specified file.

    Raises:
        ArgumentError: If the file is missing, unreadable or empty.
    """
    logger.debug(f"Attempting to read password from file: {filepath}")
    if not os.path.exists(filepath):
        msg = f"Password file not found: {filepath}"
        logger.error(msg)
        raise ArgumentError(msg)
    try:
        with open(filepath, 'rb') as f:
            # Read the first line only and strip leading/trailing whitespace/newlines
            password_bytes = f.readline().strip()
    except OSError as e:
        msg = f"Could not read password file {filepath}: {e}"
        logger.error(msg)
        raise ArgumentError(msg) from e

    if not password_bytes:
        msg = f"Password file is empty: {filepath}"
        logger.error(msg)
        raise ArgumentError(msg)

    logger.info(f"Password successfully read from file: {filepath}")
    return _decode(password_bytes, filepath)


def read_password_stdin() -> str:
    """
    Reads the password from the first line of standard input.
    Intended for piped input, not interactive use.

    Raises:
        ArgumentError: If stdin is a TTY or if no data is received.
    """
    logger.debug("Attempting to read password from stdin.")
    if sys.stdin.isatty():
        msg = "Cannot read password from TTY stdin using --password-stdin. Pipe input (e.g., echo 'pass' | ...) or omit it to be prompted."
        logger.error(msg)
        raise ArgumentError(msg)

    password_bytes = sys.stdin.buffer.readline().strip()
    if not password_bytes:
        msg = "No password received from stdin."
        logger.error(msg)
        raise ArgumentError(msg)

    logger.info("Password successfully read from stdin.")
    return _decode(password_bytes, 'stdin')
