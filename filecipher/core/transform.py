# filecipher/core/transform.py
# -*- coding: utf-8 -*-
"""
Incremental cipher transform with OpenSSL EVP update/final semantics, built
from an algorithm name and a PBKDF2-derived key.
"""

import logging
from enum import Enum

from Crypto.Util.Padding import pad, unpad

from .crypto_logic import bytes_to_key
from .providers import CipherSpec, get_cipher_spec
from ..utils.exceptions import BadDecryptError, UnknownCipherError

logger = logging.getLogger(__name__)


class Direction(Enum):
    ENCRYPT = 'encrypt'
    DECRYPT = 'decrypt'


def _new_cipher(spec: CipherSpec, key: bytes, iv: bytes):
    module = spec.module
    if spec.mode == 'stream':
        return module.new(key)
    if spec.mode == 'ecb':
        return module.new(key, module.MODE_ECB)
    if spec.mode == 'ctr':
        # The whole IV is the initial counter block
        return module.new(key, module.MODE_CTR, nonce=b'', initial_value=iv)
    if spec.mode == 'ofb':
        return module.new(key, module.MODE_OFB, iv=iv)
    return module.new(key, module.MODE_CBC, iv=iv)


class CipherTransform:
    """
    Stateful encrypt/decrypt transform.

    ``update()`` may be called any number of times with arbitrary chunk
    sizes; ``finalize()`` must be called once at the end. Block modes buffer
    partial blocks, and while decrypting always hold back the last full
    block so the padding can be checked in ``finalize()``. Any failure of
    the underlying cipher surfaces as BadDecryptError.
    """

    def __init__(self, direction: Direction, spec: CipherSpec, key: bytes, iv: bytes):
        self.direction = direction
        self.spec = spec
        self._buffer = b''
        self._finalized = False
        try:
            self._cipher = _new_cipher(spec, key, iv)
        except ValueError as e:
            msg = f"Could not initialise {spec.name} cipher: {e}"
            logger.error(msg)
            raise BadDecryptError(msg) from e
        self._apply = self._cipher.encrypt if direction is Direction.ENCRYPT else self._cipher.decrypt

    def update(self, data: bytes) -> bytes:
        if self._finalized:
            raise UnknownCipherError(f"{self.spec.name} transform already finalized.")
        try:
            if not self.spec.padded:
                return self._apply(data)

            self._buffer += data
            block_size = self.spec.block_size
            usable = len(self._buffer) - (len(self._buffer) % block_size)
            if self.direction is Direction.DECRYPT and usable == len(self._buffer):
                usable -= block_size  # keep the block that carries the padding
            if usable <= 0:
                return b''
            chunk, self._buffer = self._buffer[:usable], self._buffer[usable:]
            return self._apply(chunk)
        except (ValueError, TypeError) as e:
            msg = f"{self.spec.name} {self.direction.value} failed during update: {e}"
            logger.error(msg)
            raise BadDecryptError(msg) from e

    def finalize(self) -> bytes:
        if self._finalized:
            raise UnknownCipherError(f"{self.spec.name} transform already finalized.")
        self._finalized = True
        if not self.spec.padded:
            return b''

        block_size = self.spec.block_size
        remainder, self._buffer = self._buffer, b''
        try:
            if self.direction is Direction.ENCRYPT:
                return self._apply(pad(remainder, block_size, style='pkcs7'))
            if len(remainder) != block_size:
                raise ValueError(f"wrong final block length ({len(remainder)} bytes)")
            return unpad(self._apply(remainder), block_size, style='pkcs7')
        except ValueError as e:
            msg = f"{self.spec.name} {self.direction.value} failed during finalize: {e}"
            logger.error(msg)
            raise BadDecryptError(msg) from e


def new_transform(direction: Direction, algorithm: str, key: bytes) -> CipherTransform:
    """
    Builds the transform for ``algorithm`` from a PBKDF2-derived key.

    The key is handed to the cipher as lowercase hex text and expanded to
    the cipher's key and IV with bytes_to_key(), so the output stays
    byte-compatible with files encrypted by earlier releases.

    Raises:
        BadAlgorithmError: If the provider does not know ``algorithm``.
        BadDecryptError: If the cipher cannot be initialised with the key.
    """
    spec = get_cipher_spec(algorithm)
    cipher_key, iv = bytes_to_key(key.hex().encode('ascii'), spec.key_size, spec.iv_size)
    logger.debug(f"Created {direction.value} transform for {spec.name} (mode {spec.mode}).")
    return CipherTransform(direction, spec, cipher_key, iv)
