# pkidecl/services/policies.py

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Optional

from cryptography import x509

from pkidecl.models.extensions import CertificatePolicy, OidPolicy, WellKnownPolicy
from pkidecl.services.pki_errors import ExtensionError, OidFormatError

log = logging.getLogger(__name__)


WELL_KNOWN_POLICY_OIDS = MappingProxyType({
    WellKnownPolicy.TCG_DICE_KP_IDENTITY_INIT: "2.23.133.5.4.100.6",
    WellKnownPolicy.TCG_DICE_KP_IDENTITY_LOC: "2.23.133.5.4.100.7",
    WellKnownPolicy.TCG_DICE_KP_ATTEST_INIT: "2.23.133.5.4.100.8",
    WellKnownPolicy.TCG_DICE_KP_ATTEST_LOC: "2.23.133.5.4.100.9",
    WellKnownPolicy.TCG_DICE_KP_ASSERT_INIT: "2.23.133.5.4.100.10",
    WellKnownPolicy.TCG_DICE_KP_ASSERT_LOC: "2.23.133.5.4.100.11",
    WellKnownPolicy.TCG_DICE_KP_ECA: "2.23.133.5.4.100.12",
    WellKnownPolicy.OANA_ROT_CODE_SIGNING_RELEASE: "1.3.6.1.4.1.57551.1.1",
    WellKnownPolicy.OANA_ROT_CODE_SIGNING_DEVELOPMENT: "1.3.6.1.4.1.57551.1.2",
    WellKnownPolicy.OANA_PLATFORM_IDENTITY: "1.3.6.1.4.1.57551.1.3",
})


def parse_oid(value: str, context: Optional[str] = None) -> x509.ObjectIdentifier:
    """
    Parse a dotted-decimal object identifier.

    Args:
        value (str): The OID string, e.g. ``1.3.6.1.4.1.57551.1.3``
        context (str): Where the string came from, included in the error message

    Returns:
        cryptography.x509.ObjectIdentifier

    Raises:
        OidFormatError: If the string is not a valid object identifier
    """
    try:
        return x509.ObjectIdentifier(value)
    except (TypeError, ValueError) as exc:
        raise OidFormatError(value, context) from exc


def policy_oid(policy: CertificatePolicy, context: Optional[str] = None) -> x509.ObjectIdentifier:
    """Return the object identifier for a well-known policy name or a raw OID entry."""
    if isinstance(policy, OidPolicy):
        return parse_oid(policy.oid, context)

    try:
        name = WellKnownPolicy(policy)
    except ValueError:
        where = f'{context}: ' if context else ''
        raise ExtensionError(f'{where}"{policy}" is not a known certificate policy') from None

    return x509.ObjectIdentifier(WELL_KNOWN_POLICY_OIDS[name])


def resolve_policy(policy: CertificatePolicy, context: Optional[str] = None) -> x509.PolicyInformation:
    """
    Map a certificate policy entry to the PolicyInformation embedded in a
    CertificatePolicies extension. No policy qualifiers are attached.
    """
    oid = policy_oid(policy, context)

    log.debug("Resolved certificate policy %s to %s", policy, oid.dotted_string)

    return x509.PolicyInformation(policy_identifier=oid, policy_qualifiers=None)
