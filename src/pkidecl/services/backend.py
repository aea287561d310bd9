# pkidecl/services/backend.py

from __future__ import annotations

import logging
from datetime import datetime
from typing import Mapping, Optional, Union

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa
from cryptography.x509.oid import NameOID

from pkidecl.constants import DEFAULT_DIGEST_ALGORITHM
from pkidecl.models.document import (
    Certificate,
    CertificateRequest,
    DigestAlgorithm,
    Document,
    Ed25519KeyType,
    Entity,
    KeyPair,
    KeyType,
    P384KeyType,
    RsaKeyType,
)
from pkidecl.services.elaborate import SigningContext, elaborate_extensions
from pkidecl.services.pki_errors import BackendError, KeyTypeCountError
from pkidecl.utils.datetime import ensure_utc, format_datetime, now_utc

log = logging.getLogger(__name__)

PrivateKey = Union[rsa.RSAPrivateKey, ec.EllipticCurvePrivateKey, ed25519.Ed25519PrivateKey]

NAME_COMPONENT_OIDS = {
    'country-name': NameOID.COUNTRY_NAME,
    'state-or-province-name': NameOID.STATE_OR_PROVINCE_NAME,
    'locality-name': NameOID.LOCALITY_NAME,
    'organization-name': NameOID.ORGANIZATION_NAME,
    'organizational-unit-name': NameOID.ORGANIZATIONAL_UNIT_NAME,
}

DIGEST_ALGORITHMS = {
    DigestAlgorithm.SHA_256: hashes.SHA256,
    DigestAlgorithm.SHA_384: hashes.SHA384,
    DigestAlgorithm.SHA_512: hashes.SHA512,
}


# ---------------------
# Keys
# ---------------------

def generate_private_key(key_type: KeyType) -> PrivateKey:
    """
    Generate a private key of the declared type

    Args:
        key_type: RsaKeyType, P384KeyType or Ed25519KeyType

    Returns:
        The private key. Its public half is available from ``public_key()``.

    Raises:
        BackendError: If the key parameters are rejected
    """
    if isinstance(key_type, RsaKeyType):
        try:
            return rsa.generate_private_key(
                public_exponent=key_type.public_exponent,
                key_size=key_type.num_bits,
            )
        except ValueError as exc:
            raise BackendError(f"Unable to generate RSA key: {exc}") from exc

    if isinstance(key_type, P384KeyType):
        return ec.generate_private_key(ec.SECP384R1())

    if isinstance(key_type, Ed25519KeyType):
        return ed25519.Ed25519PrivateKey.generate()

    raise BackendError(f"Unsupported key type: {key_type!r}")


def generate_key_pair(key_pair: KeyPair) -> PrivateKey:
    """ Generate the private key for a declared key pair """

    if len(key_pair.key_type) != 1:
        raise KeyTypeCountError(key_pair.name, len(key_pair.key_type))

    log.debug("Generating %s key for key pair %s", key_pair.key_type[0].type, key_pair.name)

    return generate_private_key(key_pair.key_type[0])


def private_key_to_pem(private_key: PrivateKey) -> bytes:
    """ PKCS#8 PEM encoding of a private key, unencrypted """

    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


def load_private_key_pem(data: bytes, name: str = "") -> PrivateKey:
    """
    Load an unencrypted PEM private key written by ``private_key_to_pem``

    Raises:
        BackendError: If the data cannot be parsed or holds an unsupported key type
    """
    try:
        private_key = serialization.load_pem_private_key(data, password=None)
    except (TypeError, ValueError) as exc:
        raise BackendError(f'Unable to load private key "{name}": {exc}') from exc

    if not isinstance(private_key, (rsa.RSAPrivateKey, ec.EllipticCurvePrivateKey,
                                    ed25519.Ed25519PrivateKey)):
        raise BackendError(f'Private key "{name}" has an unsupported key type')

    return private_key


def signature_hash(private_key: PrivateKey,
        digest_algorithm: Optional[DigestAlgorithm]) -> Optional[hashes.HashAlgorithm]:
    """ Ed25519 signs without a separate digest, everything else defaults to SHA-256 """

    if isinstance(private_key, ed25519.Ed25519PrivateKey):
        return None

    return DIGEST_ALGORITHMS[digest_algorithm or DigestAlgorithm(DEFAULT_DIGEST_ALGORITHM)]()


# ---------------------
# Names
# ---------------------

def build_name(entity: Entity) -> x509.Name:
    """
    Build the distinguished name of an entity: the base DN components in declaration
    order, followed by the common name.
    """
    try:
        attributes = [
            x509.NameAttribute(NAME_COMPONENT_OIDS[component.type], component.value)
            for component in entity.base_dn
        ]
        attributes.append(x509.NameAttribute(NameOID.COMMON_NAME, entity.common_name))
    except ValueError as exc:
        raise BackendError(f'entity "{entity.name}": {exc}') from exc

    return x509.Name(attributes)


# ---------------------
# Signing
# ---------------------

class Signer:
    """ Builds and signs the certificates and requests of a validated document """

    def __init__(self, document: Document, keys: Mapping[str, PrivateKey]):
        """
        Args:
            document (Document): A validated document
            keys (dict): Private keys indexed by key pair name
        """
        self.document = document
        self.keys = keys

    def private_key(self, name: str, *, referrer: str, field: str,
            kind: str = 'certificate') -> PrivateKey:
        """ Return the loaded private key for a declared key pair """

        self.document.key_pair(name, referrer=referrer, field=field, kind=kind)

        private_key = self.keys.get(name)

        if private_key is None:
            raise BackendError(f'No private key has been loaded for key pair "{name}"')

        return private_key

    def subject_name(self, cert: Union[Certificate, CertificateRequest],
            kind: str = 'certificate') -> x509.Name:
        entity = self.document.entity(cert.subject_entity, referrer=cert.name,
                                      field='subject_entity', kind=kind)
        return build_name(entity)

    def issuer_name(self, cert: Certificate) -> x509.Name:
        """
        The issuer DN: the named issuer entity, or the subject of the issuer certificate
        """
        if cert.issuer_entity is not None:
            entity = self.document.entity(cert.issuer_entity, referrer=cert.name,
                                          field='issuer_entity')
            return build_name(entity)

        issuer_cert = self.document.certificate(cert.issuer_certificate or '', referrer=cert.name,
                                                field='issuer_certificate')
        return self.subject_name(issuer_cert)

    def signing_context(self, cert: Certificate) -> SigningContext:
        """ Collect what the key identifier extensions of a certificate are derived from """

        subject_key = self.private_key(cert.subject_key, referrer=cert.name, field='subject_key')
        issuer_key = self.private_key(cert.issuer_key, referrer=cert.name, field='issuer_key')

        if cert.issuer_certificate is None:
            # Root: the certificate is its own authority certificate
            authority_issuer = self.issuer_name(cert)
            authority_serial = cert.serial
        else:
            issuer_cert = self.document.certificate(cert.issuer_certificate, referrer=cert.name,
                                                    field='issuer_certificate')
            authority_issuer = self.issuer_name(issuer_cert)
            authority_serial = issuer_cert.serial

        return SigningContext(
            subject_public_key=subject_key.public_key(),
            issuer_public_key=issuer_key.public_key(),
            authority_cert_issuer=authority_issuer,
            authority_cert_serial_number=authority_serial,
        )

    def build_certificate(self, cert: Certificate,
            now: Optional[datetime] = None) -> x509.Certificate:
        """
        Build and sign a certificate with its issuer key

        Args:
            cert (Certificate): The certificate declaration
            now (datetime): Used as not_before when the declaration has none

        Returns:
            cryptography.x509.Certificate

        Raises:
            MissingReferenceError, BackendError, ExtensionError, OidFormatError
        """
        context = self.signing_context(cert)
        issuer_key = self.private_key(cert.issuer_key, referrer=cert.name, field='issuer_key')

        not_before = ensure_utc(cert.not_before) if cert.not_before else (now or now_utc())

        try:
            builder = (x509.CertificateBuilder()
                       .subject_name(self.subject_name(cert))
                       .issuer_name(self.issuer_name(cert))
                       .public_key(context.subject_public_key)
                       .serial_number(cert.serial)
                       .not_valid_before(not_before)
                       .not_valid_after(ensure_utc(cert.not_after)))

            for extension in elaborate_extensions(cert):
                builder = builder.add_extension(extension.build(context),
                                                critical=extension.critical)

            certificate = builder.sign(
                private_key=issuer_key,
                algorithm=signature_hash(issuer_key, cert.digest_algorithm),
            )
        except (TypeError, ValueError) as exc:
            raise BackendError(f'certificate "{cert.name}": {exc}') from exc

        log.info("Signed certificate %s (serial %s, valid %s to %s)", cert.name, cert.serial_number,
                 format_datetime(not_before), format_datetime(cert.not_after))

        return certificate

    def build_certificate_request(self,
            request: CertificateRequest) -> x509.CertificateSigningRequest:
        """ Build a certificate signing request, signed by its own subject key """

        subject_key = self.private_key(request.subject_key, referrer=request.name,
                                       field='subject_key', kind='certificate request')
        subject = self.subject_name(request, kind='certificate request')

        try:
            csr = (x509.CertificateSigningRequestBuilder()
                   .subject_name(subject)
                   .sign(subject_key, signature_hash(subject_key, request.digest_algorithm)))
        except (TypeError, ValueError) as exc:
            raise BackendError(f'certificate request "{request.name}": {exc}') from exc

        log.info("Built certificate request %s", request.name)

        return csr
