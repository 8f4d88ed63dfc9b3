"""Ed25519 verification of canonical transactions.

Verification outcomes are split three ways:

- ``True``: the signature authenticates exactly this transaction under this
  key.
- ``False``: the transaction is well formed but the signature does not match
  (tampered content, wrong key, corrupted or wrong-length signature). This is
  an expected input, not a fault.
- :class:`~ledger_auth.errors.VerificationError`: the transaction itself is
  malformed, so no cryptographic check was attempted.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from .canonical import canonicalize
from .envelope import SignedTransaction
from .errors import MalformedTransactionError, VerificationError
from .keys import load_public_key
from .signer import SIGNATURE_BYTES
from .transaction import RawTransaction

__all__ = ["SIGNATURE_BYTES", "verify", "verify_signed"]

logger = logging.getLogger(__name__)


def verify(
    tx: RawTransaction | Mapping[str, object],
    public_key: Ed25519PublicKey | bytes | str,
    signature: bytes,
) -> bool:
    """Return whether ``signature`` authenticates ``tx`` under ``public_key``.

    ``public_key`` may be an ``Ed25519PublicKey``, 32 raw bytes, or hex.

    Raises:
        VerificationError: ``tx`` is malformed.
    """

    try:
        message = canonicalize(tx)
    except MalformedTransactionError as exc:
        logger.debug(
            "Refusing to verify malformed transaction",
            extra={"operation": "verify", "field": exc.field},
        )
        raise VerificationError(exc) from exc

    if not isinstance(signature, (bytes, bytearray)) or len(signature) != SIGNATURE_BYTES:
        logger.debug(
            "Rejected signature with invalid length",
            extra={"operation": "verify"},
        )
        return False

    try:
        key = load_public_key(public_key)
    except (TypeError, ValueError) as exc:
        logger.debug(
            "Rejected unusable public key: %s", exc, extra={"operation": "verify"}
        )
        return False

    try:
        key.verify(bytes(signature), message)
    except InvalidSignature:
        logger.debug("Signature mismatch", extra={"operation": "verify"})
        return False
    return True


def verify_signed(signed: SignedTransaction) -> bool:
    """Verify a :class:`SignedTransaction` against its embedded public key.

    Callers must still decide whether that key is authorised to act for
    ``signed.transaction.sender``.
    """

    return verify(signed.transaction, signed.public_key, signed.signature)
