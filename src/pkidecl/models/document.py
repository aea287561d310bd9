# pkidecl/models/document.py

"""
Typed records for a declarative PKI document.

Decoding only checks record shapes. Cross references between records (a certificate
naming its subject entity, an issuer certificate, a key pair...) are left to
``pkidecl.services.validator``.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Tuple, Union

from pydantic import Field, field_validator, model_validator

from pkidecl.constants import (
    DEFAULT_RSA_KEY_SIZE,
    DEFAULT_RSA_PUBLIC_EXPONENT,
    MAX_SERIAL_OCTETS,
)
from pkidecl.models.base import DocumentModel
from pkidecl.models.extensions import X509Extension
from pkidecl.services.pki_errors import MissingReferenceError


# ---------------------
# Key pairs
# ---------------------

class RsaKeyType(DocumentModel):
    type: Literal["rsa"] = "rsa"
    num_bits: int = Field(default=DEFAULT_RSA_KEY_SIZE, gt=0)
    public_exponent: int = Field(default=DEFAULT_RSA_PUBLIC_EXPONENT, gt=0)


class P384KeyType(DocumentModel):
    type: Literal["p-384"] = "p-384"


class Ed25519KeyType(DocumentModel):
    type: Literal["ed25519"] = "ed25519"


KeyType = Annotated[
    Union[RsaKeyType, P384KeyType, Ed25519KeyType],
    Field(discriminator="type"),
]


class KeyPair(DocumentModel):
    name: str
    # A list rather than a single value so the "exactly one" rule is reported by the
    # validator with the observed count.
    key_type: Tuple[KeyType, ...] = ()

    @field_validator("key_type", mode="before")
    @classmethod
    def _expand_shorthand(cls, value: Any) -> Any:
        """Accept ``p-384`` as shorthand for ``{type: p-384}``."""
        if isinstance(value, (str, dict)):
            value = [value]
        if isinstance(value, (list, tuple)):
            return [{"type": item} if isinstance(item, str) else item for item in value]
        return value


# ---------------------
# Entities
# ---------------------

NameComponentType = Literal[
    "country-name",
    "state-or-province-name",
    "locality-name",
    "organization-name",
    "organizational-unit-name",
]


class NameComponent(DocumentModel):
    type: NameComponentType
    value: str

    @model_validator(mode="before")
    @classmethod
    def _expand_shorthand(cls, data: Any) -> Any:
        """Accept ``{country-name: US}`` as shorthand for ``{type: country-name, value: US}``."""
        if isinstance(data, dict) and len(data) == 1 and "type" not in data:
            ((key, value),) = data.items()
            return {"type": key, "value": value}
        return data


class Entity(DocumentModel):
    name: str
    common_name: str
    base_dn: Tuple[NameComponent, ...] = ()


# ---------------------
# Certificates and requests
# ---------------------

class DigestAlgorithm(str, Enum):
    SHA_256 = "sha-256"
    SHA_384 = "sha-384"
    SHA_512 = "sha-512"


class Certificate(DocumentModel):
    name: str

    subject_entity: str
    subject_key: str

    issuer_entity: Optional[str] = None
    issuer_certificate: Optional[str] = None
    issuer_key: str

    digest_algorithm: Optional[DigestAlgorithm] = None

    not_before: Optional[datetime] = None
    not_after: datetime

    serial_number: str

    extensions: Tuple[X509Extension, ...] = ()

    @field_validator("serial_number", mode="before")
    @classmethod
    def _require_string_serial(cls, value: Any) -> Any:
        # YAML has already read unquoted 10, 0123 and 12:34:56 as decimal, octal
        # and base 60 integers, none of which is the hexadecimal value written
        if not isinstance(value, str):
            raise ValueError(
                f"serial number {value!r} must be a quoted hexadecimal string, e.g. \"01\""
            )
        return value

    @field_validator("serial_number")
    @classmethod
    def _check_serial(cls, value: str) -> str:
        digits = value.replace(":", "")
        try:
            serial = int(digits, 16)
        except ValueError:
            raise ValueError(f"serial number {value!r} is not a hexadecimal string") from None
        if serial <= 0:
            raise ValueError("serial number must be positive")
        if (serial.bit_length() + 7) // 8 > MAX_SERIAL_OCTETS:
            raise ValueError(f"serial number must be at most {MAX_SERIAL_OCTETS} octets")
        return value

    @property
    def serial(self) -> int:
        """Serial number as an integer."""
        return int(self.serial_number.replace(":", ""), 16)

    @property
    def is_root(self) -> bool:
        """True when the issuer is named as an entity rather than another certificate."""
        return self.issuer_certificate is None


class CertificateRequest(DocumentModel):
    name: str

    subject_entity: str
    subject_key: str
    digest_algorithm: Optional[DigestAlgorithm] = None


# ---------------------
# Document
# ---------------------

class Document(DocumentModel):
    """
    A whole PKI description.

    Names are scoped per kind: a key pair and a certificate may share a name.
    """

    key_pairs: Tuple[KeyPair, ...] = ()
    entities: Tuple[Entity, ...] = ()
    certificates: Tuple[Certificate, ...] = ()
    certificate_requests: Tuple[CertificateRequest, ...] = ()

    def key_pair(self, name: str, *, referrer: str = "", field: str = "key_pair",
                 kind: str = "certificate") -> KeyPair:
        for key_pair in self.key_pairs:
            if key_pair.name == name:
                return key_pair
        raise MissingReferenceError(referrer, field, name, kind=kind)

    def entity(self, name: str, *, referrer: str = "", field: str = "entity",
               kind: str = "certificate") -> Entity:
        for entity in self.entities:
            if entity.name == name:
                return entity
        raise MissingReferenceError(referrer, field, name, kind=kind)

    def certificate(self, name: str, *, referrer: str = "", field: str = "certificate",
                    kind: str = "certificate") -> Certificate:
        for certificate in self.certificates:
            if certificate.name == name:
                return certificate
        raise MissingReferenceError(referrer, field, name, kind=kind)
