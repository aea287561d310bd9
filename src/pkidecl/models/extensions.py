# pkidecl/models/extensions.py

"""
X.509 extension declarations.

Every extension is a record with a literal ``type`` tag used to pick the variant when
decoding, and a ``critical`` flag that must always be given:

    - type: basic-constraints
      critical: true
      ca: true
      path-len: 0

The ``type`` tag may be omitted when constructing a record directly in Python.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import Field

from pkidecl.models.base import DocumentModel


class BasicConstraintsExtension(DocumentModel):
    type: Literal["basic-constraints"] = Field(default="basic-constraints", repr=False)
    critical: bool
    ca: bool = False
    path_len: Optional[int] = Field(default=None, ge=0, le=255)


class KeyUsageExtension(DocumentModel):
    type: Literal["key-usage"] = Field(default="key-usage", repr=False)
    critical: bool
    digital_signature: bool = False
    non_repudiation: bool = False
    key_encipherment: bool = False
    data_encipherment: bool = False
    key_agreement: bool = False
    key_cert_sign: bool = False
    crl_sign: bool = False
    encipher_only: bool = False
    decipher_only: bool = False


class ExtendedKeyUsageExtension(DocumentModel):
    type: Literal["extended-key-usage"] = Field(default="extended-key-usage", repr=False)
    critical: bool
    id_kp_server_auth: bool = False
    id_kp_client_auth: bool = False
    id_kp_code_signing: bool = False
    id_kp_email_protection: bool = False
    id_kp_time_stamping: bool = False
    id_kp_ocsp_signing: bool = False
    oids: Tuple[str, ...] = ()


class SubjectKeyIdentifierExtension(DocumentModel):
    type: Literal["subject-key-identifier"] = Field(default="subject-key-identifier", repr=False)
    critical: bool


class AuthorityKeyIdentifierExtension(DocumentModel):
    type: Literal["authority-key-identifier"] = Field(default="authority-key-identifier", repr=False)
    critical: bool
    key_id: bool = False
    issuer: bool = False


class WellKnownPolicy(str, Enum):
    """
    Certificate policies that can be named instead of spelling out their OID.

    The ``tcg-dice-*`` policies come from the TCG DICE Certificate Profiles (section 5.1.5),
    the ``oana-*`` policies from the Oxide Assigned Number Authority registry.
    """

    TCG_DICE_KP_IDENTITY_INIT = "tcg-dice-kp-identity-init"
    TCG_DICE_KP_IDENTITY_LOC = "tcg-dice-kp-identity-loc"
    TCG_DICE_KP_ATTEST_INIT = "tcg-dice-kp-attest-init"
    TCG_DICE_KP_ATTEST_LOC = "tcg-dice-kp-attest-loc"
    TCG_DICE_KP_ASSERT_INIT = "tcg-dice-kp-assert-init"
    TCG_DICE_KP_ASSERT_LOC = "tcg-dice-kp-assert-loc"
    TCG_DICE_KP_ECA = "tcg-dice-kp-eca"
    OANA_PLATFORM_IDENTITY = "oana-platform-identity"
    OANA_ROT_CODE_SIGNING_DEVELOPMENT = "oana-rot-code-signing-development"
    OANA_ROT_CODE_SIGNING_RELEASE = "oana-rot-code-signing-release"


class OidPolicy(DocumentModel):
    """A certificate policy given by its dotted-decimal OID string."""

    oid: str


CertificatePolicy = Union[WellKnownPolicy, OidPolicy]


class CertificatePoliciesExtension(DocumentModel):
    type: Literal["certificate-policies"] = Field(default="certificate-policies", repr=False)
    critical: bool
    policies: Tuple[CertificatePolicy, ...] = ()


X509Extension = Annotated[
    Union[
        BasicConstraintsExtension,
        KeyUsageExtension,
        ExtendedKeyUsageExtension,
        SubjectKeyIdentifierExtension,
        AuthorityKeyIdentifierExtension,
        CertificatePoliciesExtension,
    ],
    Field(discriminator="type"),
]
