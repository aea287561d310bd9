# tests/unit/conftest.py

from datetime import datetime, timezone

import pytest

from pkidecl.models import (
    Certificate,
    CertificateRequest,
    Document,
    Ed25519KeyType,
    Entity,
    KeyPair,
    NameComponent,
)

NOT_AFTER = datetime(2034, 1, 1, tzinfo=timezone.utc)


MINIMAL_YAML = """\
key-pairs:
  - name: root-key
    key-type: ed25519
entities:
  - name: root
    common-name: Example Root
    base-dn:
      - country-name: US
      - organization-name: Example
certificates:
  - name: root-cert
    subject-entity: root
    subject-key: root-key
    issuer-entity: root
    issuer-key: root-key
    not-after: 2034-01-01T00:00:00Z
    serial-number: "01"
"""


@pytest.fixture
def minimal_yaml():
    return MINIMAL_YAML


@pytest.fixture
def make_key_pair():
    def _make(name, *key_types):
        if not key_types:
            key_types = (Ed25519KeyType(),)
        return KeyPair(name=name, key_type=key_types)
    return _make


@pytest.fixture
def make_entity():
    def _make(name, common_name=None, **components):
        base_dn = [NameComponent(type=key.replace("_", "-"), value=value)
                   for key, value in components.items()]
        return Entity(name=name, common_name=common_name or name, base_dn=base_dn)
    return _make


@pytest.fixture
def make_certificate():
    def _make(name, **overrides):
        fields = {
            "name": name,
            "subject_entity": "root",
            "subject_key": "root-key",
            "issuer_entity": "root",
            "issuer_key": "root-key",
            "not_after": NOT_AFTER,
            "serial_number": "01",
        }
        fields.update(overrides)
        return Certificate(**fields)
    return _make


@pytest.fixture
def minimal_document(make_key_pair, make_entity, make_certificate):
    """One key pair, one entity and a self-signed certificate using both."""
    return Document(
        key_pairs=[make_key_pair("root-key")],
        entities=[make_entity("root", "Example Root", country_name="US")],
        certificates=[make_certificate("root-cert")],
    )


@pytest.fixture
def hierarchy_document(make_key_pair, make_entity, make_certificate):
    """
    Root -> intermediate -> leaf, with the leaf declared first so it forward
    references the intermediate, plus a certificate request for the leaf key.
    """
    return Document(
        key_pairs=[
            make_key_pair("root-key"),
            make_key_pair("intermediate-key"),
            make_key_pair("leaf-key"),
        ],
        entities=[
            make_entity("root", "Example Root", country_name="US", organization_name="Example"),
            make_entity("intermediate", "Example Intermediate", organization_name="Example"),
            make_entity("leaf", "device-0001", organizational_unit_name="Devices"),
        ],
        certificates=[
            make_certificate(
                "leaf-cert",
                subject_entity="leaf",
                subject_key="leaf-key",
                issuer_entity=None,
                issuer_certificate="intermediate-cert",
                issuer_key="intermediate-key",
                serial_number="03",
            ),
            make_certificate(
                "intermediate-cert",
                subject_entity="intermediate",
                subject_key="intermediate-key",
                issuer_entity=None,
                issuer_certificate="root-cert",
                issuer_key="root-key",
                serial_number="02",
            ),
            make_certificate("root-cert"),
        ],
        certificate_requests=[
            CertificateRequest(name="leaf-csr", subject_entity="leaf", subject_key="leaf-key"),
        ],
    )
