"""Unsigned transaction record and its canonical field layout."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import MalformedTransactionError

__all__ = [
    "RawTransaction",
    "FIELD_ORDER",
    "MAX_IDENTITY_BYTES",
    "U64_MAX",
]

U64_MAX: int = 2**64 - 1
"""Largest value representable by the fixed-width integer fields."""

MAX_IDENTITY_BYTES: int = 1024
"""Upper bound on the UTF-8 length of ``sender`` and ``recipient``."""

FIELD_ORDER: tuple[str, ...] = ("sender", "recipient", "amount", "nonce")
"""Protocol-agreed order of fields in the canonical encoding."""


class RawTransaction(BaseModel):
    """Immutable, unsigned transaction payload.

    Every field is required. Fields are encoded by
    :func:`ledger_auth.canonical.canonicalize` in :data:`FIELD_ORDER`:

    - ``sender``: u32 big-endian byte length followed by UTF-8 bytes.
    - ``recipient``: same layout as ``sender``.
    - ``amount``: unsigned 64-bit big-endian integer.
    - ``nonce``: unsigned 64-bit big-endian integer.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, strict=True)

    sender: str = Field(
        ...,
        min_length=1,
        description="Identity of the originator (UTF-8, at most 1024 bytes).",
    )
    recipient: str = Field(
        ...,
        min_length=1,
        description="Identity of the beneficiary (UTF-8, at most 1024 bytes).",
    )
    amount: int = Field(
        ...,
        ge=0,
        le=U64_MAX,
        description="Opaque unsigned quantity transferred.",
    )
    nonce: int = Field(
        ...,
        ge=0,
        le=U64_MAX,
        description="Per-sender sequence number used for replay protection.",
    )

    @field_validator("sender", "recipient")
    @classmethod
    def _check_identity_bytes(cls, value: str) -> str:
        """Reject identities that cannot be length-prefixed within bounds."""

        try:
            encoded = value.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise ValueError("identity is not encodable as UTF-8") from exc
        if len(encoded) > MAX_IDENTITY_BYTES:
            raise ValueError(
                f"identity exceeds {MAX_IDENTITY_BYTES} bytes ({len(encoded)})"
            )
        return value

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> RawTransaction:
        """Build a transaction from untrusted field values.

        Raises:
            MalformedTransactionError: When a field is missing, unexpected,
                of the wrong type, or out of range. ``field`` names the first
                offending field.
        """

        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            first = exc.errors()[0]
            location = first.get("loc") or ()
            field = str(location[0]) if location else None
            raise MalformedTransactionError(
                f"{field or 'transaction'}: {first.get('msg', 'invalid value')}",
                field=field,
            ) from exc
