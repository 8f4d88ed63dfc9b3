"""Exception hierarchy for transaction authentication."""

from __future__ import annotations

__all__ = [
    "LedgerAuthError",
    "MalformedTransactionError",
    "SigningError",
    "InvalidTransactionError",
    "KeyUnavailableError",
    "VerificationError",
]


class LedgerAuthError(Exception):
    """Base class for every error raised by :mod:`ledger_auth`."""


class MalformedTransactionError(LedgerAuthError, ValueError):
    """A transaction field is missing or outside its valid domain.

    Attributes:
        field: Name of the offending field, or ``None`` when the fault is in
            the encoded envelope rather than a single field.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class SigningError(LedgerAuthError):
    """Base class for failures while producing a signature."""


class InvalidTransactionError(SigningError):
    """Signing was refused because the transaction could not be canonicalized."""

    def __init__(self, malformed: MalformedTransactionError) -> None:
        super().__init__(f"cannot sign malformed transaction: {malformed}")
        self.malformed = malformed


class KeyUnavailableError(SigningError):
    """The key provider could not produce a signing operation.

    Raised by key handles (revoked, locked or unconfigured keys). The core
    propagates it untouched.
    """


class VerificationError(LedgerAuthError):
    """Verification could not run because the transaction is malformed.

    A bad signature over a well-formed transaction is not an error; see
    :func:`ledger_auth.verifier.verify`.
    """

    def __init__(self, malformed: MalformedTransactionError) -> None:
        super().__init__(f"cannot verify malformed transaction: {malformed}")
        self.malformed = malformed
