# pkidecl/services/elaborate.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from cryptography import x509
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa
from cryptography.x509.oid import ExtendedKeyUsageOID, ExtensionOID

from pkidecl.models.document import Certificate
from pkidecl.models.extensions import (
    AuthorityKeyIdentifierExtension,
    BasicConstraintsExtension,
    CertificatePoliciesExtension,
    ExtendedKeyUsageExtension,
    KeyUsageExtension,
    SubjectKeyIdentifierExtension,
    X509Extension,
)
from pkidecl.services.pki_errors import ExtensionError
from pkidecl.services.policies import parse_oid, resolve_policy

log = logging.getLogger(__name__)

PublicKey = Union[rsa.RSAPublicKey, ec.EllipticCurvePublicKey, ed25519.Ed25519PublicKey]

EXTENDED_KEY_USAGE_OIDS = (
    ('id_kp_server_auth', ExtendedKeyUsageOID.SERVER_AUTH),
    ('id_kp_client_auth', ExtendedKeyUsageOID.CLIENT_AUTH),
    ('id_kp_code_signing', ExtendedKeyUsageOID.CODE_SIGNING),
    ('id_kp_email_protection', ExtendedKeyUsageOID.EMAIL_PROTECTION),
    ('id_kp_time_stamping', ExtendedKeyUsageOID.TIME_STAMPING),
    ('id_kp_ocsp_signing', ExtendedKeyUsageOID.OCSP_SIGNING),
)


@dataclass(frozen=True)
class SigningContext:
    """ Key material and issuer details that key identifier extensions are derived from """
    subject_public_key: PublicKey
    issuer_public_key: PublicKey
    authority_cert_issuer: x509.Name
    authority_cert_serial_number: int


@dataclass(frozen=True)
class ElaboratedExtension:
    """
    An extension ready to be added to a certificate builder.

    Key identifier extensions depend on keys that only exist at signing time, so their
    ``value`` is None until ``build()`` is given a SigningContext.
    """
    oid: x509.ObjectIdentifier
    critical: bool
    value: Optional[x509.ExtensionType] = None
    key_id: bool = False
    issuer: bool = False

    @property
    def deferred(self) -> bool:
        return self.value is None

    def build(self, context: Optional[SigningContext] = None) -> x509.ExtensionType:
        """
        Return the cryptography extension value

        Args:
            context (SigningContext): Required for key identifier extensions

        Returns:
            cryptography.x509.ExtensionType

        Raises:
            ExtensionError: If a key identifier extension is built without a context
        """
        if self.value is not None:
            return self.value

        if context is None:
            raise ExtensionError(f"{self.oid.dotted_string} needs key material to be built")

        if self.oid == ExtensionOID.SUBJECT_KEY_IDENTIFIER:
            return x509.SubjectKeyIdentifier.from_public_key(context.subject_public_key)

        key_identifier = None
        if self.key_id:
            key_identifier = x509.SubjectKeyIdentifier.from_public_key(
                context.issuer_public_key).digest

        if self.issuer:
            return x509.AuthorityKeyIdentifier(
                key_identifier=key_identifier,
                authority_cert_issuer=[x509.DirectoryName(context.authority_cert_issuer)],
                authority_cert_serial_number=context.authority_cert_serial_number,
            )

        return x509.AuthorityKeyIdentifier(
            key_identifier=key_identifier,
            authority_cert_issuer=None,
            authority_cert_serial_number=None,
        )

    def to_extension(self, context: Optional[SigningContext] = None) -> x509.Extension:
        value = self.build(context)
        return x509.Extension(oid=value.oid, critical=self.critical, value=value)


def elaborate_extension(extension: X509Extension, context: str) -> ElaboratedExtension:
    """
    Turn one extension declaration into an ElaboratedExtension.

    Args:
        extension: The declaration
        context (str): Names the certificate and entry, used in error messages

    Raises:
        ExtensionError, OidFormatError
    """
    try:
        if isinstance(extension, BasicConstraintsExtension):
            value = x509.BasicConstraints(ca=extension.ca, path_length=extension.path_len)

        elif isinstance(extension, KeyUsageExtension):
            value = x509.KeyUsage(
                digital_signature=extension.digital_signature,
                content_commitment=extension.non_repudiation,
                key_encipherment=extension.key_encipherment,
                data_encipherment=extension.data_encipherment,
                key_agreement=extension.key_agreement,
                key_cert_sign=extension.key_cert_sign,
                crl_sign=extension.crl_sign,
                encipher_only=extension.encipher_only,
                decipher_only=extension.decipher_only,
            )

        elif isinstance(extension, ExtendedKeyUsageExtension):
            usages = [oid for attr, oid in EXTENDED_KEY_USAGE_OIDS if getattr(extension, attr)]
            usages.extend(parse_oid(oid, f'{context} oid {index}')
                          for index, oid in enumerate(extension.oids))
            value = x509.ExtendedKeyUsage(usages)

        elif isinstance(extension, SubjectKeyIdentifierExtension):
            return ElaboratedExtension(oid=ExtensionOID.SUBJECT_KEY_IDENTIFIER,
                                       critical=extension.critical)

        elif isinstance(extension, AuthorityKeyIdentifierExtension):
            return ElaboratedExtension(oid=ExtensionOID.AUTHORITY_KEY_IDENTIFIER,
                                       critical=extension.critical,
                                       key_id=extension.key_id,
                                       issuer=extension.issuer)

        elif isinstance(extension, CertificatePoliciesExtension):
            value = x509.CertificatePolicies([
                resolve_policy(policy, f'{context} policy {index}')
                for index, policy in enumerate(extension.policies)
            ])

        else:
            raise ExtensionError(f"{context}: unsupported extension {type(extension).__name__}")

    except ValueError as exc:
        raise ExtensionError(f"{context}: {exc}") from exc

    return ElaboratedExtension(oid=value.oid, critical=extension.critical, value=value)


def elaborate_extensions(certificate: Certificate) -> List[ElaboratedExtension]:
    """
    Elaborate every extension of a certificate, in declaration order.

    Repeated extensions of the same kind are passed through as declared.
    """
    elaborated = [
        elaborate_extension(extension,
                            f'certificate "{certificate.name}" extension {index} ({extension.type})')
        for index, extension in enumerate(certificate.extensions)
    ]

    log.debug("Elaborated %d extensions for certificate %s", len(elaborated), certificate.name)

    return elaborated
