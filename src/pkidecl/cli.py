#!/usr/bin/env python3
"""
#
# pkidecl - Declarative PKI compiler
#

Compile a YAML description of key pairs, entities, certificates and certificate
requests into a validated document, then generate the keys, certificates and CSRs
it describes.

Requirements:
  - Python 3.9+
  - Cryptography (pyca/cryptography) - https://cryptography.io
  - Pydantic - https://docs.pydantic.dev
  - PyYAML - https://pyyaml.org

"""
from __future__ import annotations

import argparse
import logging
from typing import Optional, Callable

from pkidecl import __version__, __title__, __short_title__
from .constants import EXIT_FATAL, EXIT_VALIDATION_ERROR
from .commands import register_all
from .models.app import App
from .utils.formatting import title, error

from .services.pki_errors import PKIError


def build_parser(prog_desc: str) -> argparse.ArgumentParser:
    """ Build the command line argument parser """

    parser = argparse.ArgumentParser(
        prog=__short_title__,
        description=prog_desc,
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument("-c", "--config",
        required=True,
        help="PKI document (YAML or JSON)"
    )

    parser.add_argument("--log-level",
        default="INFO",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Set logging verbosity",
    )

    parser.add_argument("--version",
        action="version",
        version=f"{__title__} {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="command", required=True)

    register_all(subparsers)

    return parser

# ---------------------
# Entry point
# ---------------------

def main(argv: Optional[list[str]] = None) -> int:

    description: str = f'{__title__} - {__short_title__} v{__version__}'

    parser: argparse.ArgumentParser = build_parser(description)
    args: argparse.Namespace = parser.parse_args(argv)
    handler: Optional[Callable[[App], int]] = getattr(args, "handler", None)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    title(description, 1)

    if handler is None:
        logging.error("Unknown command: %s", getattr(args, "command", None))
        return EXIT_FATAL

    try:
        app: App = App.from_args(args=args)

        return handler(app)

    except PKIError as e:
        # Decode, validation, elaboration and signing problems
        error(str(e))
        return EXIT_VALIDATION_ERROR
    except SystemExit:
        raise
    except Exception:
        logging.exception("Unexpected error")
        return EXIT_FATAL

if __name__ == "__main__":
    raise SystemExit(main())
