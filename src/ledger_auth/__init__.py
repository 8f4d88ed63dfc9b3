"""Ledger Auth - canonical transactions and their Ed25519 signatures."""

from __future__ import annotations

from importlib import import_module
from typing import Any, TYPE_CHECKING

__all__ = [
    "RawTransaction",
    "SignedTransaction",
    "canonicalize",
    "decode_canonical",
    "transaction_digest",
    "sign",
    "sign_transaction",
    "verify",
    "verify_signed",
    "LocalKeyProvider",
    "KeyPair",
    "LedgerAuthError",
    "MalformedTransactionError",
    "SigningError",
    "InvalidTransactionError",
    "KeyUnavailableError",
    "VerificationError",
]

if TYPE_CHECKING:
    from .canonical import canonicalize, decode_canonical, transaction_digest
    from .envelope import SignedTransaction
    from .errors import (
        InvalidTransactionError,
        KeyUnavailableError,
        LedgerAuthError,
        MalformedTransactionError,
        SigningError,
        VerificationError,
    )
    from .keys import KeyPair, LocalKeyProvider
    from .signer import sign, sign_transaction
    from .transaction import RawTransaction
    from .verifier import verify, verify_signed


_MODULE_MAP = {
    "RawTransaction": "transaction",
    "SignedTransaction": "envelope",
    "canonicalize": "canonical",
    "decode_canonical": "canonical",
    "transaction_digest": "canonical",
    "sign": "signer",
    "sign_transaction": "signer",
    "verify": "verifier",
    "verify_signed": "verifier",
    "LocalKeyProvider": "keys",
    "KeyPair": "keys",
    "LedgerAuthError": "errors",
    "MalformedTransactionError": "errors",
    "SigningError": "errors",
    "InvalidTransactionError": "errors",
    "KeyUnavailableError": "errors",
    "VerificationError": "errors",
}


def __getattr__(name: str) -> Any:
    """Lazily import submodules so ``cryptography`` loads only when needed."""

    if name not in _MODULE_MAP:
        raise AttributeError(name)

    module = import_module(f".{_MODULE_MAP[name]}", __name__)
    return getattr(module, name)
