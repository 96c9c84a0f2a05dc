"""
Enrollment transaction value objects.

A :class:`Transaction` is returned by :meth:`guardian.Guardian.request_enroll`
and is required to confirm the enrollment later. It has two representations:

* the in-memory form, which also carries the OTP secret used to build the
  TOTP enrollment URI;
* the persisted form (:class:`PersistedTransaction`), which only keeps the
  transaction token and the recovery code. The OTP secret never leaves the
  process that started the transaction.
"""

from pydantic import BaseModel, ConfigDict, Field

from guardian.exceptions import InvalidStateError
from guardian.models import TOTPData, build_totp_uri


class PersistedTransaction(BaseModel):
    """Transaction fields that may be stored between requests."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    transaction_token: str | None = Field(None, alias="transactionToken")
    recovery_code: str | None = Field(None, alias="recoveryCode")


class Transaction(BaseModel):
    """An in-progress enrollment attempt."""
    model_config = ConfigDict(frozen=True)

    transaction_token: str | None = None
    recovery_code: str | None = None
    otp_secret: str | None = Field(None, exclude=True, repr=False)

    def persist(self) -> PersistedTransaction:
        """Return the storable form of this transaction (without the OTP secret)."""
        return PersistedTransaction(
            transaction_token=self.transaction_token,
            recovery_code=self.recovery_code,
        )

    @classmethod
    def restore(cls, persisted: PersistedTransaction) -> "Transaction":
        """Rebuild a transaction from its stored form. The OTP secret is not available."""
        return cls(
            transaction_token=persisted.transaction_token,
            recovery_code=persisted.recovery_code,
        )

    def to_json(self) -> str:
        return self.persist().model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, data: str | bytes) -> "Transaction":
        return cls.restore(PersistedTransaction.model_validate_json(data))

    def __reduce__(self):
        # Pickling goes through the persisted form so the secret is dropped
        return (Transaction.restore, (self.persist(),))

    def totp_data(self) -> TOTPData:
        """
        Get the parameters for an authenticator app.

        Raises:
            InvalidStateError: If the transaction has no OTP secret
        """
        if self.otp_secret is None:
            raise InvalidStateError("There is no OTP Secret for this transaction")
        return TOTPData(secret=self.otp_secret)

    def totp_uri(self, user: str, issuer: str) -> str:
        """
        Build the ``otpauth://`` URI to show as a QR code to the user.

        Args:
            user: Account name displayed by the authenticator app
            issuer: Service name displayed by the authenticator app

        Returns:
            ``otpauth://totp/<issuer>:<user>?secret=<secret>&issuer=<issuer>``

        Raises:
            InvalidStateError: If the transaction has no OTP secret, which is always
                the case after it was restored from its persisted form
        """
        if self.otp_secret is None:
            raise InvalidStateError("There is no OTP Secret for this transaction")
        return build_totp_uri(self.otp_secret, user, issuer)
