# config.py
# -*- coding: utf-8 -*-
"""Loading of project-level default options from a .filecipherrc file."""

import json
import logging
import os
from pathlib import Path

from .constants import RC_FILENAME, RC_KEYS
from .exceptions import ArgumentError
from ..core.request import CipherRequest, DEFAULT_OPTIONS, apply_defaults

logger = logging.getLogger(__name__)


def find_rc_file(start_dir: str | os.PathLike | None = None) -> Path | None:
    """Returns the nearest rc file in ``start_dir`` or its parents, else in the home directory."""
    start = Path(start_dir or os.getcwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / RC_FILENAME
        if candidate.is_file():
            return candidate
    home_candidate = Path.home() / RC_FILENAME
    return home_candidate if home_candidate.is_file() else None


def load_defaults(start_dir: str | os.PathLike | None = None,
                  path: str | os.PathLike | None = None) -> CipherRequest:
    """
    Builds the default options for this project.

    Known keys of the JSON rc file (algorithm, salt, iterations, keylen,
    digest) override the built-in defaults; anything else is ignored. The
    values are not validated here, that happens per request.

    Raises:
        ArgumentError: If the rc file cannot be read or is not a JSON object.
    """
    rc_path = Path(path) if path is not None else find_rc_file(start_dir)
    if rc_path is None:
        logger.debug("No rc file found; using built-in defaults.")
        return DEFAULT_OPTIONS

    logger.debug(f"Loading default options from: {rc_path}")
    try:
        with open(rc_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        msg = f"Could not read rc file {rc_path}: {e}"
        logger.error(msg)
        raise ArgumentError(msg) from e

    if not isinstance(data, dict):
        msg = f"rc file {rc_path} must contain a JSON object."
        logger.error(msg)
        raise ArgumentError(msg)

    ignored = sorted(set(data) - set(RC_KEYS))
    if ignored:
        logger.warning(f"Ignoring unsupported keys in {rc_path}: {', '.join(ignored)}")

    overrides = CipherRequest.from_options({key: data[key] for key in RC_KEYS if key in data})
    return apply_defaults(overrides, DEFAULT_OPTIONS)
