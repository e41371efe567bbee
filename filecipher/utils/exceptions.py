# exceptions.py
# -*- coding: utf-8 -*-
"""Custom exception classes for the filecipher application."""

from enum import Enum


class ErrorKind(str, Enum):
    """Classification attached to every filecipher error."""
    VALIDATION = 'Validation'
    BAD_ALGORITHM = 'Bad Algorithm'
    BAD_DIGEST = 'Bad Digest'
    BAD_FILE = 'Bad File'
    BAD_DECRYPT = 'Bad Decrypt'
    UNKNOWN = 'Unknown'


class FileCipherError(Exception):
    """Base class for application-specific errors."""
    kind: ErrorKind = ErrorKind.UNKNOWN


class ValidationError(FileCipherError):
    """A cipher option is missing, has the wrong type or an invalid value.

    ``option`` names the offending field; ``errors`` holds every
    violation found for the request, the first of which is this one.
    """
    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, option: str | None = None, errors: list | None = None):
        super().__init__(message)
        self.option = option
        self.errors = list(errors) if errors else []


class BadAlgorithmError(ValidationError):
    """The cipher algorithm is not offered by the crypto provider."""
    kind = ErrorKind.BAD_ALGORITHM


class BadDigestError(ValidationError):
    """The HMAC digest is not offered by the crypto provider."""
    kind = ErrorKind.BAD_DIGEST


class FileAccessError(FileCipherError):
    """Input file does not exist or cannot be read."""
    kind = ErrorKind.BAD_FILE

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class BadDecryptError(FileCipherError):
    """The cipher rejected the data (wrong password, salt, iterations, keylen, digest or algorithm)."""
    kind = ErrorKind.BAD_DECRYPT


class UnknownCipherError(FileCipherError):
    """Any other I/O or platform failure. The original error is the ``__cause__``."""
    kind = ErrorKind.UNKNOWN


class ArgumentError(FileCipherError):
    """Error related to invalid command-line arguments or configuration."""
    kind = ErrorKind.VALIDATION
