# filecipher/core/validation.py
# -*- coding: utf-8 -*-
"""Validation of fully-defaulted cipher requests."""

import logging
from dataclasses import dataclass
from typing import Any

from .providers import CIPHERS, HASHES
from .request import CipherRequest
from ..utils.exceptions import ErrorKind, ValidationError, BadAlgorithmError, BadDigestError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptionError:
    option: str
    message: str
    kind: ErrorKind = ErrorKind.VALIDATION


def _is_integer(val: Any) -> bool:
    return isinstance(val, int) and not isinstance(val, bool)


def _required_string(option: str, val: Any) -> list[OptionError]:
    if not isinstance(val, str):
        return [OptionError(option, f'"{option}" is required and must be a string.')]
    return []


def _required_password(option: str, val: Any) -> list[OptionError]:
    errors = _required_string(option, val)
    if not errors and not val:
        errors.append(OptionError(option, f'"{option}" must not be empty.'))
    return errors


def _required_string_or_bytes(option: str, val: Any) -> list[OptionError]:
    if not isinstance(val, (str, bytes, bytearray)):
        return [OptionError(option, f'"{option}" is required and must be a string or bytes.')]
    return []


def _required_positive_integer(option: str, val: Any) -> list[OptionError]:
    if not _is_integer(val):
        return [OptionError(option, f'"{option}" is required and must be an integer.')]
    if val < 1:
        return [OptionError(option, f'"{option}" must be a positive integer. Got {val}.')]
    return []


def _required_digest(option: str, val: Any) -> list[OptionError]:
    errors = _required_string(option, val)
    if not errors and val not in HASHES:
        errors.append(OptionError(option, f'"{val}" is not a valid digest hash.', ErrorKind.BAD_DIGEST))
    return errors


def _required_cipher(option: str, val: Any) -> list[OptionError]:
    errors = _required_string(option, val)
    if not errors and val not in CIPHERS:
        errors.append(OptionError(option, f'"{val}" is not a valid cipher algorithm.', ErrorKind.BAD_ALGORITHM))
    return errors


_RULES = (
    ('input', _required_string),
    ('output', _required_string),
    ('password', _required_password),
    ('salt', _required_string_or_bytes),
    ('iterations', _required_positive_integer),
    ('keylen', _required_positive_integer),
    ('digest', _required_digest),
    ('algorithm', _required_cipher),
)


def validate(request: CipherRequest) -> list[OptionError]:
    """Returns every rule the request violates; an empty list means it is valid."""
    errors: list[OptionError] = []
    for option, rule in _RULES:
        errors.extend(rule(option, getattr(request, option)))
    return errors


_EXCEPTIONS = {
    ErrorKind.VALIDATION: ValidationError,
    ErrorKind.BAD_ALGORITHM: BadAlgorithmError,
    ErrorKind.BAD_DIGEST: BadDigestError,
}


def check_request(request: CipherRequest) -> CipherRequest:
    """
    Raises the first validation error, carrying the full list in ``.errors``.

    Returns the request unchanged when it is valid.
    """
    errors = validate(request)
    if errors:
        first = errors[0]
        for error in errors:
            logger.error(f"Invalid option '{error.option}': {error.message}")
        raise _EXCEPTIONS[first.kind](first.message, option=first.option, errors=errors)
    return request
