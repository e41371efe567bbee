# crypto_logic.py
# -*- coding: utf-8 -*-
"""Core cryptographic primitives: PBKDF2 key derivation and the legacy key/IV expansion."""

import logging
from concurrent.futures import Future
from typing import Callable

from Crypto.Hash import MD5
from Crypto.Protocol.KDF import PBKDF2

from .providers import get_hash_module
from .worker import run_in_background
from ..utils.constants import BYTES_TO_KEY_ROUNDS
from ..utils.exceptions import FileCipherError, UnknownCipherError

logger = logging.getLogger(__name__)


def _to_bytes(value: str | bytes) -> bytes:
    # Strings are UTF-8, matching files encrypted by earlier releases
    return value.encode('utf-8') if isinstance(value, str) else bytes(value)


def derive_key(password: str | bytes, salt: str | bytes, iterations: int, keylen: int, digest: str) -> bytes:
    """
    Derives a key from the password using PBKDF2-HMAC (RFC 8018).

    Args:
        password: The password; strings are UTF-8 encoded.
        salt: The salt; strings are UTF-8 encoded.
        iterations: PBKDF2 iteration count.
        keylen: Requested key length in bytes.
        digest: Name of the HMAC digest, as listed by list_hashes().

    Returns:
        Exactly ``keylen`` bytes of key material.

    Raises:
        BadDigestError: If the provider does not know ``digest``.
        UnknownCipherError: If PBKDF2 fails for any other reason.
    """
    hash_module = get_hash_module(digest)
    logger.info(f"Deriving {keylen}-byte key using PBKDF2-HMAC-{digest.upper()} ({iterations} iterations)...")
    try:
        key = PBKDF2(
            _to_bytes(password),
            _to_bytes(salt),
            dkLen=keylen,
            count=iterations,
            hmac_hash_module=hash_module
        )
    except Exception as e:
        msg = f"PBKDF2 key derivation failed: {e}"
        logger.error(msg, exc_info=True)
        raise UnknownCipherError(msg) from e

    logger.info(f"Key derived successfully ({len(key)} bytes).")
    return key


def derive_key_async(password: str | bytes, salt: str | bytes, iterations: int, keylen: int, digest: str,
                     callback: Callable[[FileCipherError | None, bytes | None], None] | None = None) -> Future:
    """
    Non-blocking derive_key(). The derivation runs on a background thread.

    Returns a Future resolving to the key; ``callback(error, key)`` is
    invoked exactly once after the Future is resolved.
    """
    return run_in_background(derive_key, password, salt, iterations, keylen, digest, callback=callback)


def bytes_to_key(secret: bytes, key_size: int, iv_size: int) -> tuple[bytes, bytes]:
    """
    OpenSSL EVP_BytesToKey with MD5, one round and no salt.

    This is the expansion the legacy "cipher from password" API applies to
    its password argument. The derived PBKDF2 key, as hex text, goes through
    it to produce the actual cipher key and IV.
    """
    material = b''
    block = b''
    while len(material) < key_size + iv_size:
        block = MD5.new(block + secret).digest()
        for _ in range(BYTES_TO_KEY_ROUNDS - 1):
            block = MD5.new(block).digest()
        material += block
    return material[:key_size], material[key_size:key_size + iv_size]
