# pkidecl/commands/validate/actions.py

from __future__ import annotations

import logging

from pkidecl.constants import (
    EXIT_OK,
    EXIT_VALIDATION_ERROR,
    COLOUR_BRIGHT,
    COLOUR_RESET,
)
from pkidecl.models.app import App
from pkidecl.reports.document_summary import document_summary
from pkidecl.services.elaborate import elaborate_extensions
from pkidecl.services.pki_errors import PKIError
from pkidecl.utils.formatting import error, print_result, title

log = logging.getLogger(__name__)


def handle_validate(app: App) -> int:
    """
    The document has already passed structural validation when the App was built;
    this also elaborates the extensions of each certificate so policy and OID errors
    are reported without generating anything.
    """
    title("Validate Document", level=2, extra=str(app.config_path))

    failures = 0

    for cert in app.document.certificates:
        title(f'Elaborating extensions for {COLOUR_BRIGHT}{cert.name}{COLOUR_RESET}', 9)
        try:
            elaborate_extensions(cert)
        except PKIError as exc:
            print_result(False)
            error(str(exc))
            failures += 1
            continue
        print_result(True)

    if failures:
        log.warning("%d certificate(s) failed extension elaboration", failures)
        return EXIT_VALIDATION_ERROR

    if not getattr(app.args, "quiet", False):
        print()
        document_summary(app.document, report_title="Document Summary")

    return EXIT_OK
