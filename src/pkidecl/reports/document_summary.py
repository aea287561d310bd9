# pkidecl/reports/document_summary.py

from __future__ import annotations

import logging

from pkidecl.constants import (
    EXIT_OK,
    COLOUR,
    COLOUR_RESET,
)
from pkidecl.models.document import Document
from pkidecl.utils.datetime import format_datetime
from pkidecl.utils.formatting import title

log = logging.getLogger(__name__)


def _truncate(text: str, width: int) -> str:
    return text if len(text) <= width else text[:width - 3] + "..."

def document_summary(document: Document, *, report_title: str) -> int:
    """
    Render the key pairs, certificates and requests of a validated document.
    No dependency on `App`.
    """
    title(report_title, level=2)

    title("Key pairs", level=3)

    row_format = "{:<30} {:<10}"
    print(row_format.format("name", "type"))
    print("-" * 41)
    for key_pair in document.key_pairs:
        key_type = key_pair.key_type[0]
        description = key_type.type
        if key_type.type == "rsa":
            description = f"rsa-{key_type.num_bits}"
        print(row_format.format(_truncate(key_pair.name, 30), description))
    print()

    title("Certificates", level=3)

    row_format = "{:<30} {:<30} {:<30} {:<10} {:<20}"
    print(row_format.format("name", "subject", "issuer", "serial", "not_after"))
    print("-" * 124)

    for index, cert in enumerate(document.certificates):
        if cert.is_root:
            issuer = f"{cert.issuer_entity} (entity)"
            colours = [COLOUR["green"], COLOUR["bold_green"]]
        else:
            issuer = f"{cert.issuer_certificate} (certificate)"
            colours = [COLOUR["white"], COLOUR["bright_white"]]

        print(
            colours[index % 2] + row_format.format(
                _truncate(cert.name, 30),
                _truncate(cert.subject_entity, 30),
                _truncate(issuer, 30),
                _truncate(cert.serial_number, 10),
                format_datetime(cert.not_after, output_format="compact"),
            )
            + COLOUR_RESET
        )
    print()

    if document.certificate_requests:
        title("Certificate requests", level=3)

        row_format = "{:<30} {:<30} {:<30}"
        print(row_format.format("name", "subject", "key pair"))
        print("-" * 92)
        for request in document.certificate_requests:
            print(row_format.format(
                _truncate(request.name, 30),
                _truncate(request.subject_entity, 30),
                _truncate(request.subject_key, 30),
            ))
        print()

    return EXIT_OK
