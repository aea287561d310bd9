# pkidecl/models/__init__.py

from .document import (
    Certificate,
    CertificateRequest,
    DigestAlgorithm,
    Document,
    Ed25519KeyType,
    Entity,
    KeyPair,
    KeyType,
    NameComponent,
    P384KeyType,
    RsaKeyType,
)
from .extensions import (
    AuthorityKeyIdentifierExtension,
    BasicConstraintsExtension,
    CertificatePoliciesExtension,
    CertificatePolicy,
    ExtendedKeyUsageExtension,
    KeyUsageExtension,
    OidPolicy,
    SubjectKeyIdentifierExtension,
    WellKnownPolicy,
    X509Extension,
)

__all__ = [
    "AuthorityKeyIdentifierExtension",
    "BasicConstraintsExtension",
    "Certificate",
    "CertificatePoliciesExtension",
    "CertificatePolicy",
    "CertificateRequest",
    "DigestAlgorithm",
    "Document",
    "Ed25519KeyType",
    "Entity",
    "ExtendedKeyUsageExtension",
    "KeyPair",
    "KeyType",
    "KeyUsageExtension",
    "NameComponent",
    "OidPolicy",
    "P384KeyType",
    "RsaKeyType",
    "SubjectKeyIdentifierExtension",
    "WellKnownPolicy",
    "X509Extension",
]
