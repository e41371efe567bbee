# filecipher/cli/handlers.py
# -*- coding: utf-8 -*-
"""Command handlers for the filecipher CLI."""

import logging
import sys

from filecipher.api import encrypt, decrypt, list_algorithms, list_hashes
from filecipher.cli.password_utils import (
    get_interactive_password,
    read_password_file,
    read_password_stdin
)
from filecipher.utils.config import load_defaults
from filecipher.utils.exceptions import (
    FileCipherError, ValidationError, BadAlgorithmError, BadDigestError,
    FileAccessError, BadDecryptError, ArgumentError
)
from filecipher.utils.constants import (
    EXIT_SUCCESS, EXIT_GENERIC_ERROR, EXIT_FILE_ERROR, EXIT_DECRYPT_ERROR, EXIT_ARG_ERROR
)

logger = logging.getLogger(__name__)

PASSWORD_WARNING = (
    "Warning: for security reasons the password should not be given on the command line. "
    "Omit --password and you will be prompted for it instead, which keeps it out of your shell history."
)


def _get_password(args, confirm: bool) -> str:
    if args.password is not None:
        print(PASSWORD_WARNING, file=sys.stderr)
        return args.password
    if args.password_file:
        return read_password_file(args.password_file)
    if args.password_stdin:
        return read_password_stdin()
    return get_interactive_password(confirm=confirm)


def _report_error(command: str, error: FileCipherError) -> int:
    """Prints a hint for the error and returns the matching exit code."""
    name = error.kind.value
    if isinstance(error, BadAlgorithmError):
        print(f"Error: {name}. {error} Use `filecipher --algorithms` to see a list of valid algorithms.", file=sys.stderr)
        return EXIT_ARG_ERROR
    if isinstance(error, BadDigestError):
        print(f"Error: {name}. {error} Use `filecipher --hashes` to see a list of valid digest hashes.", file=sys.stderr)
        return EXIT_ARG_ERROR
    if isinstance(error, (ValidationError, ArgumentError)):
        print(f"Error: {error}", file=sys.stderr)
        return EXIT_ARG_ERROR
    if isinstance(error, FileAccessError):
        print(f'Error: {name}. "{error.path}" does not exist or cannot be read (file not found).', file=sys.stderr)
        return EXIT_FILE_ERROR
    if isinstance(error, BadDecryptError):
        print(f"Error: {name}. One or more of the following is likely incorrect:\n\n"
              "  - password\n  - salt\n  - algorithm\n  - iterations\n  - keylen\n  - digest\n",
              file=sys.stderr)
        return EXIT_DECRYPT_ERROR
    print(f"Error: {command} failed: {error}", file=sys.stderr)
    return EXIT_GENERIC_ERROR


def _handle_cipher(command: str, args) -> int:
    logger.info(f"Processing '{command}' command...")
    try:
        base = load_defaults(path=args.rc)
        password = _get_password(args, confirm=(command == 'encrypt'))
        options = {
            'input': args.input,
            'output': args.output,
            'password': password,
            'algorithm': args.algorithm,
            'salt': args.salt,
            'iterations': args.iterations,
            'keylen': args.keylen,
            'digest': args.digest,
        }
        run = encrypt if command == 'encrypt' else decrypt
        run(options, base=base).result()

        logger.info(f"{command.capitalize()} process finished successfully.")
        print(f"Success: {args.input} -> {args.output}", file=sys.stderr)
        return EXIT_SUCCESS

    except FileCipherError as e:
        logger.error(f"{command.capitalize()} failed: {e}")
        return _report_error(command, e)
    except Exception as e: # Catch any other unexpected errors
        logger.critical(f"Unexpected error during {command} handling: {e}", exc_info=True)
        print(f"Error: An unexpected error occurred during {command}. Check logs.", file=sys.stderr)
        return EXIT_GENERIC_ERROR


def handle_encrypt(args) -> int:
    """Handles the 'encrypt' command. Maps exceptions to exit codes."""
    return _handle_cipher('encrypt', args)


def handle_decrypt(args) -> int:
    """Handles the 'decrypt' command. Maps exceptions to exit codes."""
    return _handle_cipher('decrypt', args)


def handle_list(args) -> int:
    """Prints the supported algorithms or hashes, one per line."""
    names = list_algorithms() if args.algorithms else list_hashes()
    print('\n'.join(names))
    return EXIT_SUCCESS
