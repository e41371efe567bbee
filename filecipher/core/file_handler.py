# filecipher/core/file_handler.py
# -*- coding: utf-8 -*-
"""
Handles file I/O for encryption and decryption: a streaming path with
constant memory use and progress reporting, and a buffered path that reads
and writes whole files. Uses context managers for streams.
"""

import logging
import os
from contextlib import contextmanager
from typing import Callable

from .request import CipherRequest
from .transform import Direction, new_transform
from ..utils.constants import CHUNK_SIZE
from ..utils.exceptions import (
    FileCipherError, FileAccessError, BadDecryptError, UnknownCipherError, ValidationError
)

logger = logging.getLogger(__name__)

# Errors that mean the input path cannot be read by us
_BAD_INPUT_ERRORS = (FileNotFoundError, PermissionError, IsADirectoryError, NotADirectoryError)


# --- Context Manager for Stream Handling ---
@contextmanager
def stream_handler(filepath: str, mode: str):
    """
    Context manager that opens ``filepath`` in binary ``mode`` and closes it on exit.

    Opening for reading raises FileAccessError when the file is missing or
    unreadable. Opening for writing creates missing parent directories and
    raises UnknownCipherError on failure. Errors raised inside the ``with``
    body are not touched.
    """
    reading = 'r' in mode
    logger.debug(f"Attempting to open '{filepath}' in mode '{mode}'.")
    try:
        if not reading:
            parent = os.path.dirname(os.path.abspath(filepath))
            os.makedirs(parent, exist_ok=True)
        file_stream = open(filepath, mode)
    except _BAD_INPUT_ERRORS as e:
        if reading:
            msg = f"Input file not found or unreadable: {filepath}"
            logger.error(f"{msg} ({e})")
            raise FileAccessError(msg, path=filepath) from e
        msg = f"Cannot open output file '{filepath}': {e}"
        logger.error(msg)
        raise UnknownCipherError(msg) from e
    except OSError as e:
        msg = f"File access error for '{filepath}': {e}"
        logger.error(msg, exc_info=True)
        raise UnknownCipherError(msg) from e

    with file_stream:
        logger.debug(f"Opened file: {filepath} successfully.")
        yield file_stream
    logger.debug(f"Closed file: {filepath}")


def _same_file(input_path: str, output_path: str) -> bool:
    try:
        return os.path.samefile(input_path, output_path)
    except OSError:
        return False


def check_streaming_paths(request: CipherRequest) -> None:
    """Raises ValidationError when streaming would truncate the input before reading it."""
    if _same_file(request.input, request.output):
        msg = f"Input and output must be different files for streaming: {request.input}"
        logger.error(msg)
        raise ValidationError(msg, option='output')


# --- Main I/O Processing Functions ---

def process_cipher_io(
    direction: Direction,
    request: CipherRequest,
    key: bytes,
    *, # Keyword-only marker for subsequent arguments
    progress_callback: Callable[[int], None] | None = None
) -> None:
    """
    Streams ``request.input`` through the cipher into ``request.output``.

    Memory use is bounded by CHUNK_SIZE. The function returns only after the
    final block has been written and the output has been flushed and closed.

    Args:
        direction: Direction.ENCRYPT or Direction.DECRYPT.
        request: A validated, fully-defaulted request.
        key: The PBKDF2-derived key.
        progress_callback: Optional function to report progress (0-100, or -1).

    Raises:
        FileAccessError: If the input file is missing or unreadable.
        BadDecryptError: If the cipher rejects the data.
        UnknownCipherError: For any other I/O failure.
    """
    check_streaming_paths(request)
    input_path, output_path = request.input, request.output

    transform = new_transform(direction, request.algorithm, key)
    bytes_processed = 0
    last_percentage = -1

    # --- Get Input Size ---
    try:
        total_size = os.path.getsize(input_path)
        logger.debug(f"Input file size: {total_size} bytes.")
    except OSError as e:
        total_size = None
        logger.warning(f"Could not get size of input file '{input_path}': {e}")
        if progress_callback: progress_callback(-1) # Signal indeterminate

    try:
        # The input is opened first, so a bad input never touches the output
        with stream_handler(input_path, 'rb') as input_stream, \
             stream_handler(output_path, 'wb') as output_stream:

            logger.info(f"Starting chunk {direction.value}ion of '{input_path}'...")
            while chunk := input_stream.read(CHUNK_SIZE):
                output_stream.write(transform.update(chunk))
                bytes_processed += len(chunk)

                # Report Progress
                if progress_callback and total_size:
                    percentage = min(int((bytes_processed / total_size) * 100), 100)
                    if percentage > last_percentage:
                        progress_callback(percentage)
                        last_percentage = percentage

            output_stream.write(transform.finalize())
            output_stream.flush()

        if bytes_processed == 0: logger.warning("Input data was empty.")
        if progress_callback and total_size is not None and last_percentage < 100:
            progress_callback(100) # Ensure 100%
        logger.info(f"Finished {direction.value}ing {bytes_processed} bytes into '{output_path}'.")

    except BadDecryptError:
        # Reading stopped at the failing chunk; whatever was written stays partial
        logger.warning(f"Output file '{output_path}' may be incomplete.")
        raise
    except FileCipherError:
        raise
    except OSError as e:
        msg = f"File read/write error during {direction.value}ion: {e}"
        logger.error(msg, exc_info=True)
        raise UnknownCipherError(msg) from e


def process_cipher_buffered(direction: Direction, request: CipherRequest, key: bytes) -> None:
    """
    Reads the whole input, transforms it in one shot and writes the complete
    output with a single write. Same error classification as process_cipher_io().
    """
    transform = new_transform(direction, request.algorithm, key)
    try:
        with stream_handler(request.input, 'rb') as input_stream:
            data = input_stream.read()
        logger.debug(f"Read {len(data)} bytes from '{request.input}'.")

        result = transform.update(data) + transform.finalize()

        with stream_handler(request.output, 'wb') as output_stream:
            output_stream.write(result)
        logger.info(f"Finished {direction.value}ing {len(data)} bytes into '{request.output}'.")

    except FileCipherError:
        raise
    except OSError as e:
        msg = f"File read/write error during {direction.value}ion: {e}"
        logger.error(msg, exc_info=True)
        raise UnknownCipherError(msg) from e
