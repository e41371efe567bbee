# filecipher/api.py
# -*- coding: utf-8 -*-
"""
Public entry points: encrypt or decrypt a file with a password, either in the
background (streaming) or blocking the caller (buffered).

    >>> from filecipher.api import encrypt_sync, decrypt_sync
    >>> encrypt_sync({'input': 'config.json', 'output': 'config.json.enc', 'password': 'alakazam'})
    >>> decrypt_sync({'input': 'config.json.enc', 'output': 'config.json', 'password': 'alakazam'})

Decryption only works with the exact salt, iterations, keylen, digest and
algorithm used to encrypt; none of them are stored in the output file.
"""

import logging
from concurrent.futures import Future
from typing import Any, Callable, Mapping

from .core.crypto_logic import derive_key
from .core.file_handler import check_streaming_paths, process_cipher_io, process_cipher_buffered
from .core.providers import list_algorithms, list_hashes
from .core.request import CipherRequest, DEFAULT_OPTIONS, apply_defaults
from .core.transform import Direction
from .core.validation import check_request
from .core.worker import run_in_background
from .utils.exceptions import FileCipherError

logger = logging.getLogger(__name__)

Options = CipherRequest | Mapping[str, Any]
CompletionCallback = Callable[[FileCipherError | None], None]

__all__ = [
    'encrypt', 'decrypt', 'encrypt_sync', 'decrypt_sync',
    'list_algorithms', 'list_hashes', 'defaults',
]


def defaults() -> CipherRequest:
    """Returns the built-in default options."""
    return DEFAULT_OPTIONS


def _prepare(direction: Direction, options: Options | None, base: CipherRequest) -> CipherRequest:
    request = apply_defaults(CipherRequest.from_options(options), base)
    logger.debug(f"{direction.value} attempt with options: {request!r}")
    return check_request(request)


def _cipher_stream(direction: Direction, options: Options | None, base: CipherRequest,
                   progress_callback: Callable[[int], None] | None) -> CipherRequest:
    request = _prepare(direction, options, base)
    check_streaming_paths(request)
    key = derive_key(request.password, request.salt, request.iterations, request.keylen, request.digest)
    process_cipher_io(direction, request, key, progress_callback=progress_callback)
    return request


def _cipher_sync(direction: Direction, options: Options | None, base: CipherRequest) -> CipherRequest:
    request = _prepare(direction, options, base)
    key = derive_key(request.password, request.salt, request.iterations, request.keylen, request.digest)
    process_cipher_buffered(direction, request, key)
    return request


def _start(direction: Direction, options: Options | None, on_complete: CompletionCallback | None,
           base: CipherRequest, progress_callback: Callable[[int], None] | None) -> Future:
    callback = None
    if on_complete is not None:
        callback = lambda error, _request: on_complete(error)
    return run_in_background(_cipher_stream, direction, options, base, progress_callback, callback=callback)


def encrypt(options: Options | None, on_complete: CompletionCallback | None = None, *,
            base: CipherRequest = DEFAULT_OPTIONS,
            progress_callback: Callable[[int], None] | None = None) -> Future:
    """
    Encrypts ``options['input']`` into ``options['output']`` on a background thread.

    Validation, key derivation and the streaming cipher all run on that
    thread. ``on_complete(error)`` is called exactly once, with None on
    success, after the returned Future has been resolved (to the fully
    defaulted CipherRequest, or to the classified error). ``base`` supplies
    the defaults for unset options.
    """
    return _start(Direction.ENCRYPT, options, on_complete, base, progress_callback)


def decrypt(options: Options | None, on_complete: CompletionCallback | None = None, *,
            base: CipherRequest = DEFAULT_OPTIONS,
            progress_callback: Callable[[int], None] | None = None) -> Future:
    """Asynchronous decryption; mirrors encrypt()."""
    return _start(Direction.DECRYPT, options, on_complete, base, progress_callback)


def encrypt_sync(options: Options | None, *, base: CipherRequest = DEFAULT_OPTIONS) -> CipherRequest:
    """
    Blocking encryption that holds the whole file in memory.

    Returns the fully defaulted request; raises a FileCipherError subclass
    on failure.
    """
    return _cipher_sync(Direction.ENCRYPT, options, base)


def decrypt_sync(options: Options | None, *, base: CipherRequest = DEFAULT_OPTIONS) -> CipherRequest:
    """Blocking decryption; mirrors encrypt_sync()."""
    return _cipher_sync(Direction.DECRYPT, options, base)
