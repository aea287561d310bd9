"""Unit tests for pkidecl.services.policies module."""

import pytest
from cryptography import x509

from pkidecl.models import OidPolicy, WellKnownPolicy
from pkidecl.services.pki_errors import ExtensionError, OidFormatError
from pkidecl.services.policies import (
    WELL_KNOWN_POLICY_OIDS,
    parse_oid,
    policy_oid,
    resolve_policy,
)


class TestWellKnownPolicies:
    """Tests for the fixed policy name table."""

    @pytest.mark.parametrize("policy, expected", [
        (WellKnownPolicy.TCG_DICE_KP_IDENTITY_INIT, "2.23.133.5.4.100.6"),
        (WellKnownPolicy.TCG_DICE_KP_IDENTITY_LOC, "2.23.133.5.4.100.7"),
        (WellKnownPolicy.TCG_DICE_KP_ATTEST_INIT, "2.23.133.5.4.100.8"),
        (WellKnownPolicy.TCG_DICE_KP_ATTEST_LOC, "2.23.133.5.4.100.9"),
        (WellKnownPolicy.TCG_DICE_KP_ASSERT_INIT, "2.23.133.5.4.100.10"),
        (WellKnownPolicy.TCG_DICE_KP_ASSERT_LOC, "2.23.133.5.4.100.11"),
        (WellKnownPolicy.TCG_DICE_KP_ECA, "2.23.133.5.4.100.12"),
        (WellKnownPolicy.OANA_ROT_CODE_SIGNING_RELEASE, "1.3.6.1.4.1.57551.1.1"),
        (WellKnownPolicy.OANA_ROT_CODE_SIGNING_DEVELOPMENT, "1.3.6.1.4.1.57551.1.2"),
        (WellKnownPolicy.OANA_PLATFORM_IDENTITY, "1.3.6.1.4.1.57551.1.3"),
    ])
    def test_policy_oid(self, policy, expected):
        """Each well-known name resolves to its documented OID."""
        assert policy_oid(policy).dotted_string == expected

    def test_table_covers_every_name(self):
        """Every WellKnownPolicy member has an OID."""
        assert set(WELL_KNOWN_POLICY_OIDS) == set(WellKnownPolicy)

    def test_plain_string_name(self):
        """The kebab-case value works as well as the enum member."""
        assert policy_oid("tcg-dice-kp-eca").dotted_string == "2.23.133.5.4.100.12"

    def test_unknown_plain_string_name(self):
        """A name outside the table is an ExtensionError naming it and its context."""
        with pytest.raises(ExtensionError) as exc_info:
            policy_oid("tcg-dice-kp-unknown", 'certificate "leaf" policy 2')

        assert str(exc_info.value) == (
            'certificate "leaf" policy 2: "tcg-dice-kp-unknown" is not a known certificate policy'
        )


class TestRawOids:
    """Tests for policies given as raw OID strings."""

    def test_valid_oid_is_unchanged(self):
        """An OID entry resolves to itself."""
        assert policy_oid(OidPolicy(oid="1.2.3")).dotted_string == "1.2.3"

    def test_invalid_oid(self):
        """A malformed OID raises OidFormatError naming the string and its context."""
        with pytest.raises(OidFormatError) as exc_info:
            policy_oid(OidPolicy(oid="not-an-oid"), 'certificate "leaf" policy 0')

        assert exc_info.value.oid == "not-an-oid"
        assert exc_info.value.context == 'certificate "leaf" policy 0'
        assert 'certificate "leaf" policy 0' in str(exc_info.value)
        assert '"not-an-oid"' in str(exc_info.value)

    def test_parse_oid_without_context(self):
        """The context is optional."""
        with pytest.raises(OidFormatError) as exc_info:
            parse_oid("1..2")

        assert str(exc_info.value) == '"1..2" is not a valid object identifier'


class TestResolvePolicy:
    """Tests for resolve_policy function."""

    def test_returns_policy_information(self):
        """Resolution yields PolicyInformation with no qualifiers."""
        info = resolve_policy(WellKnownPolicy.OANA_PLATFORM_IDENTITY)

        assert isinstance(info, x509.PolicyInformation)
        assert info.policy_identifier == x509.ObjectIdentifier("1.3.6.1.4.1.57551.1.3")
        assert info.policy_qualifiers is None

    def test_raw_oid_has_no_qualifiers(self):
        info = resolve_policy(OidPolicy(oid="1.3.6.1.4.1.99999.1"))

        assert info.policy_identifier.dotted_string == "1.3.6.1.4.1.99999.1"
        assert info.policy_qualifiers is None
