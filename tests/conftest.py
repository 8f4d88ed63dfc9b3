"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
import sys

import pytest

# Ensure src/ is on sys.path for tests so the src layout is used during test runs
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from ledger_auth.keys import KeyPair, LocalKeyProvider, keypair_from_seed  # noqa: E402
from ledger_auth.transaction import RawTransaction  # noqa: E402

# Deterministic (but non-trivial) key material for reproducible tests
ALICE_SEED = bytes.fromhex(
    "9f2c4b7a1d08e3f5a6b0c3d4e7f812349abcedf00123456789abcdef01234567"
)


@pytest.fixture
def provider() -> LocalKeyProvider:
    return LocalKeyProvider()


@pytest.fixture
def keypair() -> KeyPair:
    return keypair_from_seed(ALICE_SEED)


@pytest.fixture
def other_keypair(provider: LocalKeyProvider) -> KeyPair:
    return provider.generate_keypair()


@pytest.fixture
def alice_to_bob() -> RawTransaction:
    return RawTransaction(sender="alice", recipient="bob", amount=100, nonce=1)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of settings-dependent tests."""

    for name in ("LEDGER_AUTH_LOG_LEVEL", "LEDGER_AUTH_SIGNING_SEED"):
        monkeypatch.delenv(name, raising=False)
