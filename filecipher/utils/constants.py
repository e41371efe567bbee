# constants.py
# -*- coding: utf-8 -*-
"""Defines constants used throughout the filecipher application."""

# --- Default Cipher Options ---
# These values are part of the on-disk contract: files encrypted with the
# defaults can only be decrypted with the very same defaults.
DEFAULT_ALGORITHM: str = 'cast5-cbc'
DEFAULT_SALT: str = 'nodecipher'   # Fixed so decryption never needs a stored salt
DEFAULT_ITERATIONS: int = 1000
DEFAULT_KEYLEN: int = 512          # Derived key length in bytes
DEFAULT_DIGEST: str = 'sha1'

# --- Legacy Key/IV Expansion ---
BYTES_TO_KEY_ROUNDS: int = 1       # EVP_BytesToKey iteration count (MD5, no salt)

# --- File I/O ---
CHUNK_SIZE: int = 64 * 1024  # 64 KB buffer size for efficient streaming file I/O

# --- Project Defaults File ---
RC_FILENAME: str = '.filecipherrc'
RC_KEYS: tuple[str, ...] = ('algorithm', 'salt', 'iterations', 'keylen', 'digest')

# --- Exit Codes ---
# Standard exit codes for shell script compatibility and error identification
EXIT_SUCCESS: int = 0        # Operation completed successfully
EXIT_GENERIC_ERROR: int = 1  # Generic or unexpected runtime error
EXIT_FILE_ERROR: int = 2     # Input file missing or unreadable
EXIT_DECRYPT_ERROR: int = 3  # Cipher rejected the data (wrong password or parameters)
EXIT_ARG_ERROR: int = 4      # Invalid options, algorithm or digest
EXIT_INTERRUPT: int = 130    # Process interrupted by user (commonly Ctrl+C -> SIGINT)
