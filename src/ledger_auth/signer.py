"""Ed25519 signing of canonical transactions."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from .canonical import canonicalize
from .envelope import SignedTransaction
from .errors import InvalidTransactionError, MalformedTransactionError, SigningError
from .keys import PrivateKeyHandle, public_key_bytes
from .transaction import RawTransaction

__all__ = ["SIGNATURE_BYTES", "sign", "sign_transaction"]

logger = logging.getLogger(__name__)

SIGNATURE_BYTES: int = 64


def sign(
    tx: RawTransaction | Mapping[str, object], private_key: PrivateKeyHandle
) -> bytes:
    """Return the 64-byte Ed25519 signature over ``canonicalize(tx)``.

    Signing is deterministic: identical ``(tx, private_key)`` pairs yield
    identical signatures.

    Raises:
        InvalidTransactionError: ``tx`` is malformed. The key handle is not
            used.
        KeyUnavailableError: Raised by the key handle and propagated as is.
        SigningError: The key handle returned something other than a
            64-byte signature.
    """

    try:
        message = canonicalize(tx)
    except MalformedTransactionError as exc:
        logger.debug(
            "Refusing to sign malformed transaction",
            extra={"operation": "sign", "field": exc.field},
        )
        raise InvalidTransactionError(exc) from exc
    signature = private_key.sign(message)
    if not isinstance(signature, bytes) or len(signature) != SIGNATURE_BYTES:
        raise SigningError(
            f"key handle returned an invalid signature of type "
            f"{type(signature).__name__} (expected {SIGNATURE_BYTES} bytes)"
        )
    return signature


def sign_transaction(
    tx: RawTransaction | Mapping[str, object], private_key: PrivateKeyHandle
) -> SignedTransaction:
    """Sign ``tx`` and bundle it with the signature and signer public key."""

    if isinstance(tx, Mapping):
        try:
            tx = RawTransaction.from_mapping(tx)
        except MalformedTransactionError as exc:
            raise InvalidTransactionError(exc) from exc
    signature = sign(tx, private_key)
    public_key = public_key_bytes(private_key.public_key())
    logger.debug(
        "Signed transaction",
        extra={"operation": "sign", "public_key": public_key.hex(), "nonce": tx.nonce},
    )
    return SignedTransaction(transaction=tx, signature=signature, public_key=public_key)
