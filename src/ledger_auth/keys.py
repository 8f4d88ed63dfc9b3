"""Key-provider contract and an in-memory Ed25519 reference provider.

Key storage and lifecycle belong to the embedding application. The
:class:`LocalKeyProvider` here keeps keys in memory only and exists so that
tests and simple deployments have a provider that honours the contract.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from .errors import KeyUnavailableError
from .settings import LedgerAuthSettings, get_settings

__all__ = [
    "SEED_BYTES",
    "PUBLIC_KEY_BYTES",
    "PrivateKeyHandle",
    "KeyProvider",
    "KeyPair",
    "LocalKeyProvider",
    "keypair_from_seed",
    "keypair_from_settings",
    "public_key_bytes",
    "load_public_key",
]

logger = logging.getLogger(__name__)

SEED_BYTES: int = 32
PUBLIC_KEY_BYTES: int = 32


@runtime_checkable
class PrivateKeyHandle(Protocol):
    """Anything able to produce Ed25519 signatures for a single key.

    ``sign`` may raise :class:`~ledger_auth.errors.KeyUnavailableError` when
    the underlying key is revoked or locked.
    """

    def sign(self, data: bytes) -> bytes: ...

    def public_key(self) -> Ed25519PublicKey: ...


class KeyProvider(Protocol):
    """Source of keypairs consumed by the signing core."""

    def generate_keypair(
        self, randomness_source: Callable[[int], bytes] = os.urandom
    ) -> KeyPair: ...

    def public_key_of(self, keypair: KeyPair) -> Ed25519PublicKey: ...


@dataclass(frozen=True, slots=True)
class KeyPair:
    """Ed25519 keypair held in memory.

    Attributes:
        private_key: Handle passed to :func:`ledger_auth.signer.sign`.
    """

    private_key: Ed25519PrivateKey

    @property
    def public_key(self) -> Ed25519PublicKey:
        return self.private_key.public_key()

    @property
    def public_key_hex(self) -> str:
        return public_key_bytes(self.public_key).hex()


def keypair_from_seed(seed: bytes) -> KeyPair:
    """Derive a keypair from a 32-byte Ed25519 seed.

    Raises:
        ValueError: When ``seed`` is not exactly 32 bytes.
    """

    if len(seed) != SEED_BYTES:
        raise ValueError(f"seed must be exactly {SEED_BYTES} bytes for Ed25519")
    return KeyPair(Ed25519PrivateKey.from_private_bytes(bytes(seed)))


class LocalKeyProvider:
    """In-memory :class:`KeyProvider` backed by ``cryptography``."""

    def generate_keypair(
        self, randomness_source: Callable[[int], bytes] = os.urandom
    ) -> KeyPair:
        """Create a keypair from ``randomness_source(32)``.

        The randomness source must be cryptographically secure; it is not
        audited here.
        """

        seed = randomness_source(SEED_BYTES)
        keypair = keypair_from_seed(seed)
        logger.debug(
            "Generated Ed25519 keypair",
            extra={"operation": "generate_keypair", "public_key": keypair.public_key_hex},
        )
        return keypair

    def public_key_of(self, keypair: KeyPair) -> Ed25519PublicKey:
        return keypair.public_key


def keypair_from_settings(settings: LedgerAuthSettings | None = None) -> KeyPair:
    """Load the stable signing keypair configured via ``LEDGER_AUTH_SIGNING_SEED``.

    Raises:
        KeyUnavailableError: When no seed is configured.
    """

    settings = settings or get_settings()
    seed = settings.signing_seed
    if seed is None:
        raise KeyUnavailableError(
            "No signing key configured. Set LEDGER_AUTH_SIGNING_SEED to a "
            "64-character hex Ed25519 seed."
        )
    return keypair_from_seed(seed)


def public_key_bytes(public_key: Ed25519PublicKey) -> bytes:
    """Return the 32 raw bytes of ``public_key``."""

    return public_key.public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )


def load_public_key(value: Ed25519PublicKey | bytes | str) -> Ed25519PublicKey:
    """Coerce raw bytes or hex (optional ``0x`` prefix) into a public key.

    Raises:
        ValueError: When the value is not a 32-byte Ed25519 public key.
    """

    if isinstance(value, Ed25519PublicKey):
        return value
    if isinstance(value, str):
        text = value[2:] if value[:2] in ("0x", "0X") else value
        value = bytes.fromhex(text)
    if len(value) != PUBLIC_KEY_BYTES:
        raise ValueError(
            f"public key must be exactly {PUBLIC_KEY_BYTES} bytes, got {len(value)}"
        )
    return Ed25519PublicKey.from_public_bytes(bytes(value))
