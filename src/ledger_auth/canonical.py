"""Deterministic binary canonicalization and hashing of transactions.

The byte layout produced here is the wire-compatibility contract: the signer
and the verifier must both call :func:`canonicalize`, never a local copy.

Layout::

    b"ledger-auth/tx" | version:u8 | sender | recipient | amount:u64 | nonce:u64

where ``sender`` and ``recipient`` are a u32 length followed by UTF-8 bytes
and all integers are big-endian.
"""

from __future__ import annotations

import hashlib
import logging
import struct
from collections.abc import Mapping

from .errors import MalformedTransactionError
from .transaction import FIELD_ORDER, MAX_IDENTITY_BYTES, U64_MAX, RawTransaction

__all__ = [
    "DOMAIN_TAG",
    "FORMAT_VERSION",
    "canonicalize",
    "decode_canonical",
    "transaction_digest",
]

logger = logging.getLogger(__name__)

DOMAIN_TAG: bytes = b"ledger-auth/tx"
FORMAT_VERSION: int = 1

_U32 = struct.Struct(">I")
_U64 = struct.Struct(">Q")
_MISSING = object()


def _encode_identity(name: str, value: object) -> bytes:
    if not isinstance(value, str):
        raise MalformedTransactionError(
            f"{name}: expected str, got {type(value).__name__}", field=name
        )
    try:
        encoded = value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise MalformedTransactionError(
            f"{name}: not encodable as UTF-8", field=name
        ) from exc
    if not encoded:
        raise MalformedTransactionError(f"{name}: must not be empty", field=name)
    if len(encoded) > MAX_IDENTITY_BYTES:
        raise MalformedTransactionError(
            f"{name}: exceeds {MAX_IDENTITY_BYTES} bytes", field=name
        )
    return _U32.pack(len(encoded)) + encoded


def _encode_u64(name: str, value: object) -> bytes:
    # bool is an int subclass but never a valid quantity
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedTransactionError(
            f"{name}: expected int, got {type(value).__name__}", field=name
        )
    if not 0 <= value <= U64_MAX:
        raise MalformedTransactionError(
            f"{name}: {value} outside unsigned 64-bit range", field=name
        )
    return _U64.pack(value)


_ENCODERS = {
    "sender": _encode_identity,
    "recipient": _encode_identity,
    "amount": _encode_u64,
    "nonce": _encode_u64,
}


def canonicalize(tx: RawTransaction | Mapping[str, object]) -> bytes:
    """Return the canonical signing message for ``tx``.

    Mappings are validated into a :class:`RawTransaction` first. Fields are
    re-checked while encoding, so instances created through
    ``model_construct`` are held to the same rules.

    Raises:
        MalformedTransactionError: A required field is missing or out of its
            valid domain.
    """

    if isinstance(tx, Mapping):
        tx = RawTransaction.from_mapping(tx)
    elif not isinstance(tx, RawTransaction):
        raise MalformedTransactionError(
            f"expected RawTransaction, got {type(tx).__name__}"
        )

    parts = [DOMAIN_TAG, bytes([FORMAT_VERSION])]
    for name in FIELD_ORDER:
        value = getattr(tx, name, _MISSING)
        if value is _MISSING:
            logger.debug(
                "Rejected transaction with missing field",
                extra={"operation": "canonicalize", "field": name},
            )
            raise MalformedTransactionError(f"{name}: field required", field=name)
        parts.append(_ENCODERS[name](name, value))
    return b"".join(parts)


def decode_canonical(data: bytes) -> RawTransaction:
    """Parse canonical bytes back into a :class:`RawTransaction`.

    The decoder is strict: any input that :func:`canonicalize` could not have
    produced is rejected, so ``canonicalize(decode_canonical(b)) == b`` holds
    for every accepted ``b``.

    Raises:
        MalformedTransactionError: Non-bytes input, wrong domain tag or version, truncated
            input, trailing bytes, invalid UTF-8, or an out-of-domain field.
    """

    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise MalformedTransactionError(
            f"canonical bytes: expected bytes, got {type(data).__name__}"
        )
    view = memoryview(bytes(data))
    header = len(DOMAIN_TAG) + 1
    if len(view) < header or bytes(view[: len(DOMAIN_TAG)]) != DOMAIN_TAG:
        raise MalformedTransactionError("canonical bytes: unknown domain tag")
    version = view[len(DOMAIN_TAG)]
    if version != FORMAT_VERSION:
        raise MalformedTransactionError(
            f"canonical bytes: unsupported format version {version}"
        )

    offset = header
    values: dict[str, object] = {}
    for name in FIELD_ORDER:
        if _ENCODERS[name] is _encode_u64:
            if len(view) - offset < _U64.size:
                raise MalformedTransactionError(f"{name}: truncated", field=name)
            (values[name],) = _U64.unpack_from(view, offset)
            offset += _U64.size
            continue

        if len(view) - offset < _U32.size:
            raise MalformedTransactionError(f"{name}: truncated", field=name)
        (length,) = _U32.unpack_from(view, offset)
        offset += _U32.size
        if len(view) - offset < length:
            raise MalformedTransactionError(f"{name}: truncated", field=name)
        try:
            values[name] = bytes(view[offset : offset + length]).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedTransactionError(
                f"{name}: invalid UTF-8", field=name
            ) from exc
        offset += length

    if offset != len(view):
        raise MalformedTransactionError(
            f"canonical bytes: {len(view) - offset} trailing bytes"
        )
    return RawTransaction.from_mapping(values)


def transaction_digest(tx: RawTransaction | Mapping[str, object]) -> str:
    """Return the SHA-256 hex digest of the canonical bytes of ``tx``."""

    return hashlib.sha256(canonicalize(tx)).hexdigest()
