"""Signed transaction envelope and its JSON-compatible form."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .errors import MalformedTransactionError
from .transaction import RawTransaction

__all__ = ["SIGNATURE_ALGORITHM", "SignedTransaction"]

SIGNATURE_ALGORITHM: Literal["ed25519"] = "ed25519"


class SignedTransaction(BaseModel):
    """A transaction together with its signature and signer public key.

    The envelope has no mutators. Producing one with altered content requires
    a new signature, since the signature covers the canonical bytes of
    ``transaction``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, strict=True)

    transaction: RawTransaction
    signature: bytes = Field(..., min_length=64, max_length=64)
    public_key: bytes = Field(..., min_length=32, max_length=32)

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-compatible representation with hex-encoded bytes."""

        return {
            "transaction": self.transaction.model_dump(),
            "signature": self.signature.hex(),
            "public_key": self.public_key.hex(),
            "signature_algorithm": SIGNATURE_ALGORITHM,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> SignedTransaction:
        """Parse the output of :meth:`to_dict`.

        Raises:
            MalformedTransactionError: Non-object input, missing members,
                unknown algorithm, invalid hex, wrong byte lengths, or a
                malformed transaction.
        """

        if not isinstance(data, Mapping):
            raise MalformedTransactionError("envelope: expected an object")

        algorithm = data.get("signature_algorithm", SIGNATURE_ALGORITHM)
        if algorithm != SIGNATURE_ALGORITHM:
            raise MalformedTransactionError(
                f"unsupported signature algorithm: {algorithm!r}",
                field="signature_algorithm",
            )

        payload = data.get("transaction")
        if not isinstance(payload, Mapping):
            raise MalformedTransactionError(
                "transaction: expected an object", field="transaction"
            )
        transaction = RawTransaction.from_mapping(payload)

        signature = _decode_hex(data, "signature", 64)
        public_key = _decode_hex(data, "public_key", 32)
        return cls(transaction=transaction, signature=signature, public_key=public_key)


def _decode_hex(data: Mapping[str, object], name: str, size: int) -> bytes:
    value = data.get(name)
    if not isinstance(value, str):
        raise MalformedTransactionError(f"{name}: expected hex string", field=name)
    try:
        raw = bytes.fromhex(value)
    except ValueError as exc:
        raise MalformedTransactionError(f"{name}: invalid hex", field=name) from exc
    if len(raw) != size:
        raise MalformedTransactionError(
            f"{name}: expected {size} bytes, got {len(raw)}", field=name
        )
    return raw
