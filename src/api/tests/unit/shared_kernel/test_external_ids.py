"""Unit tests for the shared provider subject id format."""

import pytest

from iam.domain import value_objects
from shared_kernel.auth import ProviderIdentityInvalidError, google_identity
from shared_kernel.external_ids import MAX_EXTERNAL_ID, is_decimal_string


class TestIsDecimalString:
    @pytest.mark.parametrize("value", ["0", "42", "18446744073709551615", "007"])
    def test_accepts_ascii_digits(self, value):
        assert is_decimal_string(value)

    @pytest.mark.parametrize(
        "value", ["", "-1", "+1", " 1", "1 ", "1.0", "١٢", "0x10", 12, None]
    )
    def test_rejects_everything_else(self, value):
        assert not is_decimal_string(value)


class TestSingleDefinition:
    """The verifier and the domain agree on one range and one format."""

    def test_bound_is_unsigned_64_bit(self):
        assert MAX_EXTERNAL_ID == 2**64 - 1

    def test_verifier_and_domain_share_the_bound(self):
        assert google_identity.MAX_EXTERNAL_ID is MAX_EXTERNAL_ID
        assert value_objects.MAX_EXTERNAL_ID is MAX_EXTERNAL_ID

    @pytest.mark.parametrize("raw", ["18446744073709551615", "18446744073709551616", "1e3"])
    def test_verifier_and_domain_agree(self, raw):
        try:
            parsed = google_identity.parse_external_id(raw)
        except ProviderIdentityInvalidError:
            parsed = None

        try:
            held = value_objects.ExternalId.from_string(raw).value
        except ValueError:
            held = None

        assert parsed == held
