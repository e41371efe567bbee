#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Main entry point for the filecipher CLI application."""

import argparse
import sys
import logging

from .cli.handlers import handle_encrypt, handle_decrypt, handle_list
from .utils.constants import EXIT_SUCCESS, EXIT_GENERIC_ERROR
from .version import __version__


def _add_cipher_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('input', metavar='INPUT', help='File to encrypt or decrypt.')
    parser.add_argument('output', metavar='OUTPUT', help='File to write the result to (created if missing).')

    pw_group = parser.add_mutually_exclusive_group()
    pw_group.add_argument('-p', '--password', type=str, default=None, help='The password to derive the key from (not recommended, prompts if omitted).')
    pw_group.add_argument('--password-file', type=str, metavar='FILE', help='File containing the password.')
    pw_group.add_argument('--password-stdin', action='store_true', help='Read password from stdin.')

    parser.add_argument('-a', '--algorithm', type=str, default=None, help='Cipher algorithm (default: cast5-cbc).')
    parser.add_argument('-s', '--salt', type=str, default=None, help='Salt used to derive the key (default: nodecipher).')
    parser.add_argument('-i', '--iterations', type=int, default=None, metavar='N', help='Iterations used to derive the key (default: 1000).')
    parser.add_argument('-l', '--keylen', type=int, default=None, metavar='N', help='Byte length of the derived key (default: 512).')
    parser.add_argument('-d', '--digest', type=str, default=None, help='HMAC digest used to derive the key (default: sha1).')
    parser.add_argument('--rc', type=str, default=None, metavar='FILE', help='Defaults file to use instead of the nearest .filecipherrc.')


def create_parser():
    """Creates and configures the argument parser."""
    parser = argparse.ArgumentParser(
        prog="filecipher",
        description="Securely encrypt sensitive files for use in public source control.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Examples:
  filecipher encrypt config.json config.json.enc
  filecipher dec config.json.enc config.json -a aes-256-cbc
  echo 'mypassword' | filecipher encrypt --password-stdin secrets.env secrets.env.enc
  filecipher --algorithms
"""
    )
    parser.add_argument('-V', '--version', action='version', version=f'%(prog)s {__version__}')

    # --- Logging Control Group ---
    log_level_group = parser.add_mutually_exclusive_group()
    log_level_group.add_argument(
        '-q', '--quiet',
        action='store_const',
        const=logging.ERROR,
        dest='log_level',
        help='Show only error messages.'
    )
    log_level_group.add_argument(
        '-v', '--verbose',
        action='store_const',
        const=logging.DEBUG,
        dest='log_level',
        help='Show detailed debug messages.'
    )
    parser.set_defaults(log_level=logging.INFO) # Default log level

    # --- Listing Group ---
    list_group = parser.add_mutually_exclusive_group()
    list_group.add_argument('-A', '--algorithms', action='store_true', help='Output a list of all available cipher algorithms.')
    list_group.add_argument('-H', '--hashes', action='store_true', help='Output a list of all available HMAC hashes.')

    # --- Subparsers ---
    subparsers = parser.add_subparsers(dest='command', help='Available commands (encrypt/decrypt)')

    parser_encrypt = subparsers.add_parser('encrypt', aliases=['enc'], help='Encrypt the input file using the options provided.')
    _add_cipher_arguments(parser_encrypt)
    parser_encrypt.set_defaults(func=handle_encrypt)

    parser_decrypt = subparsers.add_parser('decrypt', aliases=['dec'], help='Decrypt the input file using the options provided.')
    _add_cipher_arguments(parser_decrypt)
    parser_decrypt.set_defaults(func=handle_decrypt)

    return parser


def main(argv=None):
    """Main execution function: parses arguments, sets up logging, and calls the appropriate handler."""
    parser = create_parser()
    exit_code = EXIT_SUCCESS # Default to success

    try:
        args = parser.parse_args(argv)

        # --- Configure Logging ---
        log_level = args.log_level
        log_format = '%(asctime)s - %(levelname)s - %(message)s'
        # Use a more detailed format for debug level
        if log_level <= logging.DEBUG:
            log_format = '%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s'
        logging.basicConfig(level=log_level, format=log_format, stream=sys.stderr, force=True)

        logging.debug(f"Log level set to: {logging.getLevelName(log_level)}")
        logging.debug(f"Command: {args.command}")

        # --- Dispatch to Handler ---
        if args.algorithms or args.hashes:
            exit_code = handle_list(args)
        elif getattr(args, 'func', None) is not None:
            exit_code = args.func(args)
        else:
            parser.print_help()

    except SystemExit as e:
        # argparse help/version, or Ctrl+C during the password prompt
        exit_code = e.code or EXIT_SUCCESS
    except Exception as e:
        logging.critical(f"An unhandled exception reached main: {e}", exc_info=True)
        print(f"\nCritical Error: An unexpected error occurred. Use --verbose for more details.", file=sys.stderr)
        exit_code = EXIT_GENERIC_ERROR
    finally:
        logging.debug(f"Exiting with code: {exit_code}")
        sys.exit(exit_code)

if __name__ == "__main__":
    main()
