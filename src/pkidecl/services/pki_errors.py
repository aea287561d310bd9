# pkidecl/services/pki_errors.py

from __future__ import annotations

from typing import Optional


class PKIError(Exception):
    """Base class for errors raised while compiling a PKI document."""


class DecodeError(PKIError):
    """Raised when the source document does not match the expected record shapes."""


class KeyTypeCountError(PKIError):
    """Raised when a key pair does not declare exactly one key type."""

    def __init__(self, key_pair: str, count: int):
        self.key_pair = key_pair
        self.count = count
        super().__init__(
            f'key pairs must have exactly one key type. key pair "{key_pair}" has {count}.'
        )


class DuplicateNameError(PKIError):
    """Raised when two records of the same kind share a name."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        plural = 'entities' if kind == 'entity' else f'{kind}s'
        super().__init__(f'{plural} must have unique names. "{name}" is used more than once.')


REFERENCE_LABELS = {
    'subject_entity': 'subject entity',
    'subject_key': 'subject key pair',
    'issuer_entity': 'issuer entity',
    'issuer_certificate': 'issuer certificate',
    'issuer_key': 'issuer key pair',
}


class MissingReferenceError(PKIError):
    """
    Raised when a record names another record that does not exist.

    Args:
        source (str): Name of the referencing record
        field (str): Referencing field, e.g. ``issuer_key``
        target (str): The name that could not be resolved
        kind (str): Kind of the referencing record
    """

    def __init__(self, source: str, field: str, target: str, kind: str = 'certificate'):
        self.source = source
        self.field = field
        self.target = target
        self.kind = kind
        label = REFERENCE_LABELS.get(field, field.replace('_', ' '))
        super().__init__(f'{kind} "{source}" {label} "{target}" does not exist')


class IssuerSelectionError(PKIError):
    """Raised when a certificate names both, or neither, of an issuer entity and certificate."""

    def __init__(self, certificate: str, both: bool):
        self.certificate = certificate
        self.both = both
        if both:
            message = (f'certificate "{certificate}" specifies both an issuer entity and '
                       'certificate.  Only one may be specified.')
        else:
            message = f'certificate "{certificate}" must specify either an issuer entity or certificate'
        super().__init__(message)


class OidFormatError(PKIError):
    """Raised when a raw object identifier string cannot be parsed."""

    def __init__(self, oid: str, context: Optional[str] = None):
        self.oid = oid
        self.context = context
        where = f'{context}: ' if context else ''
        super().__init__(f'{where}"{oid}" is not a valid object identifier')


class ExtensionError(PKIError):
    """Raised when an extension declaration cannot be turned into an X.509 extension."""


class BackendError(PKIError):
    """Raised when the cryptographic library rejects a key, name or certificate."""
