# pkidecl/models/app.py

import logging
from argparse import Namespace
from dataclasses import dataclass
from pathlib import Path

from pkidecl.models.document import Document
from pkidecl.services.loader import load_and_validate

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class App:
    """
    Lightweight application context passed to all handlers.
    Holds the validated document and shared runtime config.
    """
    args: Namespace
    document: Document

    @classmethod
    def from_args(cls, args: Namespace) -> "App":
        log.debug("Loading document %s", args.config)

        document = load_and_validate(args.config)

        return cls(args=args, document=document)

    @property
    def config_path(self) -> Path:
        return Path(self.args.config)
