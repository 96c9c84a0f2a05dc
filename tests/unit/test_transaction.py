"""Tests for Transaction persistence and TOTP URIs."""

import json
import pickle

import pytest
from pydantic import ValidationError

from guardian.exceptions import InvalidStateError
from guardian.transaction import PersistedTransaction, Transaction


@pytest.fixture
def transaction() -> Transaction:
    return Transaction(
        transaction_token="THE_TRANSACTION_TOKEN",
        recovery_code="THE_RECOVERY_CODE",
        otp_secret="THE_OTP_SECRET",
    )


class TestTotpUri:
    """Test TOTP URI building."""

    def test_totp_uri(self, transaction):
        """Test the URI format."""
        uri = transaction.totp_uri("user", "issuer")

        assert uri == "otpauth://totp/issuer:user?secret=THE_OTP_SECRET&issuer=issuer"

    def test_totp_uri_encodes_label(self, transaction):
        """Test issuer and user are percent-encoded in the label only."""
        uri = transaction.totp_uri("john doe@example.com", "Acme Inc")

        assert uri == (
            "otpauth://totp/Acme%20Inc:john%20doe%40example.com"
            "?secret=THE_OTP_SECRET&issuer=Acme Inc"
        )

    def test_totp_uri_without_secret(self):
        """Test the URI needs the OTP secret."""
        transaction = Transaction(transaction_token="T", recovery_code="R")

        with pytest.raises(InvalidStateError, match="There is no OTP Secret"):
            transaction.totp_uri("user", "issuer")

    def test_totp_data(self, transaction):
        """Test authenticator parameters."""
        data = transaction.totp_data()

        assert data.secret == "THE_OTP_SECRET"
        assert data.algorithm == "sha1"
        assert data.digits == 6
        assert data.period == 30
        assert data.uri("user", "issuer") == transaction.totp_uri("user", "issuer")


class TestPersistence:
    """Test transaction storage."""

    def test_persist_drops_secret(self, transaction):
        """Test the persisted form has no secret."""
        persisted = transaction.persist()

        assert persisted == PersistedTransaction(
            transaction_token="THE_TRANSACTION_TOKEN",
            recovery_code="THE_RECOVERY_CODE",
        )
        assert not hasattr(persisted, "otp_secret")

    def test_json_layout(self, transaction):
        """Test the stored JSON keys."""
        stored = json.loads(transaction.to_json())

        assert stored == {
            "transactionToken": "THE_TRANSACTION_TOKEN",
            "recoveryCode": "THE_RECOVERY_CODE",
        }

    def test_json_round_trip(self, transaction):
        """Test a restored transaction keeps token and recovery code only."""
        restored = Transaction.from_json(transaction.to_json())

        assert restored.transaction_token == "THE_TRANSACTION_TOKEN"
        assert restored.recovery_code == "THE_RECOVERY_CODE"
        assert restored.otp_secret is None

    def test_restored_transaction_has_no_totp_uri(self, transaction):
        """Test the TOTP URI is unavailable after a round trip."""
        restored = Transaction.from_json(transaction.to_json())

        with pytest.raises(InvalidStateError):
            restored.totp_uri("user", "issuer")

    def test_from_json_ignores_secret(self):
        """Test a secret smuggled into stored data is not restored."""
        restored = Transaction.from_json(
            '{"transactionToken": "T", "recoveryCode": "R", "otpSecret": "S"}'
        )

        assert restored.otp_secret is None

    def test_pickle_drops_secret(self, transaction):
        """Test pickling goes through the persisted form."""
        restored = pickle.loads(pickle.dumps(transaction))

        assert restored.transaction_token == "THE_TRANSACTION_TOKEN"
        assert restored.recovery_code == "THE_RECOVERY_CODE"
        assert restored.otp_secret is None

    def test_model_dump_excludes_secret(self, transaction):
        """Test generic model serialization excludes the secret too."""
        assert "otp_secret" not in transaction.model_dump()
        assert "THE_OTP_SECRET" not in transaction.model_dump_json()
        assert "THE_OTP_SECRET" not in repr(transaction)


class TestImmutability:
    """Test transactions are read-only values."""

    def test_frozen(self, transaction):
        with pytest.raises(ValidationError):
            transaction.transaction_token = "OTHER"

    def test_value_equality(self):
        a = Transaction(transaction_token="T", recovery_code="R")
        b = Transaction(transaction_token="T", recovery_code="R")

        assert a == b
