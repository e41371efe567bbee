# providers.py
# -*- coding: utf-8 -*-
"""
Tables of the cipher algorithms and HMAC digests offered by the crypto
provider (pycryptodome), keyed by their OpenSSL names so that files written by
older releases keep the names they were encrypted with.
"""

import logging
from dataclasses import dataclass
from types import ModuleType

from Crypto.Cipher import AES, ARC4, Blowfish, CAST, DES, DES3
from Crypto.Hash import (
    MD5, RIPEMD160, SHA1, SHA224, SHA256, SHA384, SHA512,
    SHA3_224, SHA3_256, SHA3_384, SHA3_512
)

from ..utils.exceptions import BadAlgorithmError, BadDigestError

logger = logging.getLogger(__name__)

# Modes that need PKCS#7 padding; every other mode is a stream mode.
PADDED_MODES = frozenset({'cbc', 'ecb'})


@dataclass(frozen=True)
class CipherSpec:
    """Everything needed to build a pycryptodome cipher for one algorithm name."""
    name: str
    module: ModuleType
    mode: str        # 'cbc', 'ecb', 'ctr', 'ofb' or 'stream'
    key_size: int    # bytes
    iv_size: int     # bytes, 0 when the mode takes no IV

    @property
    def padded(self) -> bool:
        return self.mode in PADDED_MODES

    @property
    def block_size(self) -> int:
        return getattr(self.module, 'block_size', 1)


def _family(prefix: str, module: ModuleType, key_size: int, modes: dict[str, str]) -> list[CipherSpec]:
    """Builds the specs of one cipher family. ``modes`` maps name suffix -> mode."""
    specs = []
    for suffix, mode in modes.items():
        iv_size = 0 if mode == 'ecb' else module.block_size
        specs.append(CipherSpec(f"{prefix}{suffix}", module, mode, key_size, iv_size))
    return specs


def _build_cipher_table() -> dict[str, CipherSpec]:
    specs: list[CipherSpec] = []
    for bits in (128, 192, 256):
        specs += _family(f"aes-{bits}-", AES, bits // 8,
                         {'cbc': 'cbc', 'ecb': 'ecb', 'ctr': 'ctr', 'ofb': 'ofb'})
    specs += _family('cast5-', CAST, 16, {'cbc': 'cbc', 'ecb': 'ecb', 'ofb': 'ofb'})
    specs += _family('bf-', Blowfish, 16, {'cbc': 'cbc', 'ecb': 'ecb', 'ofb': 'ofb'})
    specs += _family('des-', DES, 8, {'cbc': 'cbc', 'ecb': 'ecb', 'ofb': 'ofb'})
    # OpenSSL spells the ECB variants of triple DES without a suffix.
    specs += _family('des-ede', DES3, 16, {'-cbc': 'cbc', '': 'ecb', '-ofb': 'ofb'})
    specs += _family('des-ede3', DES3, 24, {'-cbc': 'cbc', '': 'ecb', '-ofb': 'ofb'})
    specs.append(CipherSpec('rc4', ARC4, 'stream', 16, 0))

    table = {spec.name: spec for spec in specs}

    aliases = {
        'aes128': 'aes-128-cbc',
        'aes192': 'aes-192-cbc',
        'aes256': 'aes-256-cbc',
        'bf': 'bf-cbc',
        'blowfish': 'bf-cbc',
        'cast': 'cast5-cbc',
        'cast-cbc': 'cast5-cbc',
        'des': 'des-cbc',
        'des3': 'des-ede3-cbc',
    }
    for alias, target in aliases.items():
        table[alias] = table[target]
    return table


CIPHERS: dict[str, CipherSpec] = _build_cipher_table()

HASHES: dict[str, ModuleType] = {
    'md5': MD5,
    'ripemd160': RIPEMD160,
    'sha1': SHA1,
    'sha224': SHA224,
    'sha256': SHA256,
    'sha384': SHA384,
    'sha512': SHA512,
    'sha3-224': SHA3_224,
    'sha3-256': SHA3_256,
    'sha3-384': SHA3_384,
    'sha3-512': SHA3_512,
}


def list_algorithms() -> list[str]:
    """Returns the sorted names of all supported cipher algorithms."""
    return sorted(CIPHERS)


def list_hashes() -> list[str]:
    """Returns the sorted names of all supported HMAC digests."""
    return sorted(HASHES)


def get_cipher_spec(algorithm: str) -> CipherSpec:
    try:
        return CIPHERS[algorithm]
    except (KeyError, TypeError) as e:
        msg = f'"{algorithm}" is not a valid cipher algorithm.'
        logger.error(msg)
        raise BadAlgorithmError(msg, option='algorithm') from e


def get_hash_module(digest: str) -> ModuleType:
    try:
        return HASHES[digest]
    except (KeyError, TypeError) as e:
        msg = f'"{digest}" is not a valid digest hash.'
        logger.error(msg)
        raise BadDigestError(msg, option='digest') from e
