# pkidecl/commands/__init__.py

from __future__ import annotations

import argparse

from . import generate, validate

def register_all(subparsers: argparse._SubParsersAction) -> None:
    """
    Register all subcommands here
    """
    validate.register(subparsers)
    generate.register(subparsers)
