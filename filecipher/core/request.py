# filecipher/core/request.py
# -*- coding: utf-8 -*-
"""The per-call cipher request and the pure defaulting step."""

import dataclasses
from dataclasses import dataclass
from typing import Any, Mapping

from ..utils.constants import (
    DEFAULT_ALGORITHM, DEFAULT_SALT, DEFAULT_ITERATIONS, DEFAULT_KEYLEN, DEFAULT_DIGEST
)

# Field order is also the order in which validation reports problems
FIELD_NAMES: tuple[str, ...] = (
    'input', 'output', 'password', 'salt', 'iterations', 'keylen', 'digest', 'algorithm'
)


@dataclass(frozen=True)
class CipherRequest:
    """
    One encrypt/decrypt operation. ``None`` marks a field as unset.

    Types are not enforced on construction; validate() reports any field
    with the wrong type instead.
    """
    input: str | None = None
    output: str | None = None
    password: str | None = None
    algorithm: str | None = None
    salt: str | bytes | None = None
    iterations: int | None = None
    keylen: int | None = None
    digest: str | None = None

    def __repr__(self) -> str:
        # Never leak the password into logs or tracebacks
        shown = ', '.join(
            f"{name}={'***' if name == 'password' and value is not None else repr(value)}"
            for name, value in self.as_dict().items()
        )
        return f"CipherRequest({shown})"

    def as_dict(self) -> dict[str, Any]:
        return {field.name: getattr(self, field.name) for field in dataclasses.fields(self)}

    @classmethod
    def from_options(cls, options: 'CipherRequest | Mapping[str, Any] | None') -> 'CipherRequest':
        """Accepts a request or a plain mapping; unknown keys are ignored."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls(**{name: options[name] for name in FIELD_NAMES if name in options})


DEFAULT_OPTIONS = CipherRequest(
    algorithm=DEFAULT_ALGORITHM,
    salt=DEFAULT_SALT,
    iterations=DEFAULT_ITERATIONS,
    keylen=DEFAULT_KEYLEN,
    digest=DEFAULT_DIGEST,
)


def apply_defaults(request: CipherRequest, defaults: CipherRequest = DEFAULT_OPTIONS) -> CipherRequest:
    """Returns a new request with every unset field taken from ``defaults``."""
    missing = {
        name: getattr(defaults, name)
        for name in FIELD_NAMES
        if getattr(request, name) is None and getattr(defaults, name) is not None
    }
    return dataclasses.replace(request, **missing)
