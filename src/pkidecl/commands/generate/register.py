# pkidecl/commands/generate/register.py

from __future__ import annotations

import argparse

from .actions import (
    handle_generate_certificate_requests,
    handle_generate_certificates,
    handle_generate_key_pairs,
)
from pkidecl.constants import DEFAULT_OUTPUT_DIR, EXIT_OK
from pkidecl.models.app import App


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('-o', '--output-dir',
        default=DEFAULT_OUTPUT_DIR,
        help='Directory to write PEM files to, and to read private keys from')
    parser.add_argument('--overwrite',
        action='store_true',
        help='Replace files that already exist')
    parser.add_argument('--only',
        action='append',
        metavar='NAME',
        help='Only generate the named item. May be given more than once.')

def _add_key_pairs_subcommand(actions: argparse._SubParsersAction) -> argparse.ArgumentParser:
    """
    Register `generate key-pairs`
    """
    parser = actions.add_parser('key-pairs',
        help='Generate a private key for each key pair')
    _add_common_arguments(parser)

    parser.set_defaults(handler=handle_generate_key_pairs)

    return parser

def _add_certificates_subcommand(actions: argparse._SubParsersAction) -> argparse.ArgumentParser:
    """
    Register `generate certificates`
    """
    parser = actions.add_parser('certificates',
        help='Sign each certificate using previously generated keys')
    _add_common_arguments(parser)

    parser.set_defaults(handler=handle_generate_certificates)

    return parser

def _add_requests_subcommand(actions: argparse._SubParsersAction) -> argparse.ArgumentParser:
    """
    Register `generate certificate-requests`
    """
    parser = actions.add_parser('certificate-requests',
        help='Build a CSR for each certificate request using previously generated keys')
    _add_common_arguments(parser)

    parser.set_defaults(handler=handle_generate_certificate_requests)

    return parser

def register(subparsers: argparse._SubParsersAction) -> None:
    """
    Register the `generate` command and its actions.
    """
    parser = subparsers.add_parser(
        'generate',
        add_help=True,
        help='Generate keys, certificates and certificate requests',
    )

    actions = parser.add_subparsers(
        title='Actions',
        dest='action',
    )

    _add_key_pairs_subcommand(actions)
    _add_certificates_subcommand(actions)
    _add_requests_subcommand(actions)

    parser.set_defaults(handler=_show_help, _parser=parser)

def _show_help(app: App):
    app.args._parser.print_help()
    return EXIT_OK
