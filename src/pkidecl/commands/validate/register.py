# pkidecl/commands/validate/register.py

from __future__ import annotations

import argparse

from .actions import handle_validate


def register(subparsers: argparse._SubParsersAction) -> None:
    """
    Register the `validate` command.
    """
    parser = subparsers.add_parser(
        'validate',
        add_help=True,
        help='Validate the document and elaborate every certificate extension',
    )

    parser.add_argument('-q', '--quiet',
        action='store_true',
        help='Do not print the document summary')

    parser.set_defaults(handler=handle_validate)
