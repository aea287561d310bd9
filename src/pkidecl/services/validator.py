# pkidecl/services/validator.py

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Set

from pkidecl.models.document import Certificate, Document, KeyPair
from pkidecl.services.pki_errors import (
    DuplicateNameError,
    IssuerSelectionError,
    KeyTypeCountError,
    MissingReferenceError,
)

log = logging.getLogger(__name__)


def _unique_names(kind: str, names: Iterable[str]) -> Set[str]:
    """
    Collect names into a set, failing on the first one seen twice.

    Raises:
        DuplicateNameError
    """
    seen: Set[str] = set()

    for name in names:
        if name in seen:
            raise DuplicateNameError(kind, name)
        seen.add(name)

    return seen


def _counted_key_pair_names(key_pairs: Iterable[KeyPair]) -> Iterator[str]:
    """
    Yield key pair names, checking each key type count as the name is reached so a
    duplicate name ahead of a bad key pair is the error reported.
    """
    for key_pair in key_pairs:
        if len(key_pair.key_type) != 1:
            raise KeyTypeCountError(key_pair.name, len(key_pair.key_type))
        yield key_pair.name


def _check_certificate(cert: Certificate,
        key_pair_names: Set[str],
        entity_names: Set[str],
        certificate_names: Set[str],
    ) -> None:
    """ Resolve every reference a certificate makes """

    if cert.subject_entity not in entity_names:
        raise MissingReferenceError(cert.name, 'subject_entity', cert.subject_entity)

    if cert.subject_key not in key_pair_names:
        raise MissingReferenceError(cert.name, 'subject_key', cert.subject_key)

    if cert.issuer_entity is None and cert.issuer_certificate is None:
        raise IssuerSelectionError(cert.name, both=False)

    if cert.issuer_entity is not None and cert.issuer_certificate is not None:
        raise IssuerSelectionError(cert.name, both=True)

    if cert.issuer_entity is not None:
        if cert.issuer_entity not in entity_names:
            raise MissingReferenceError(cert.name, 'issuer_entity', cert.issuer_entity)
    elif cert.issuer_certificate not in certificate_names:
        raise MissingReferenceError(cert.name, 'issuer_certificate', cert.issuer_certificate)

    if cert.issuer_key not in key_pair_names:
        raise MissingReferenceError(cert.name, 'issuer_key', cert.issuer_key)


def validate_document(document: Document) -> Document:
    """
    Check the structure of a decoded document and return it unchanged.

    Checks, stopping at the first failure:
        1. each key pair, in source order, declares exactly one key type and has a
           name not used by an earlier key pair
        2. entity and certificate names are unique within their kind
        3. every certificate reference resolves, and each certificate names exactly
           one of an issuer entity or an issuer certificate

    Certificate requests are not reference checked, and issuer certificate chains are
    not checked for cycles.

    Args:
        document (Document): A decoded document

    Returns:
        Document: the same object

    Raises:
        KeyTypeCountError, DuplicateNameError, IssuerSelectionError, MissingReferenceError
    """
    key_pair_names = _unique_names('key pair', _counted_key_pair_names(document.key_pairs))
    entity_names = _unique_names('entity', (entity.name for entity in document.entities))

    # Certificates can name other certificates as their issuer so all the names have
    # to be known before any reference is checked.
    certificate_names = _unique_names('certificate', (cert.name for cert in document.certificates))

    for cert in document.certificates:
        _check_certificate(cert, key_pair_names, entity_names, certificate_names)

    log.debug(
        "Validated %d key pairs, %d entities, %d certificates, %d certificate requests",
        len(document.key_pairs),
        len(document.entities),
        len(document.certificates),
        len(document.certificate_requests),
    )

    return document
