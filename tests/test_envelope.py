"""Tests for SignedTransaction envelopes."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from ledger_auth.envelope import SignedTransaction
from ledger_auth.errors import InvalidTransactionError, MalformedTransactionError
from ledger_auth.keys import KeyPair
from ledger_auth.signer import sign_transaction
from ledger_auth.transaction import RawTransaction
from ledger_auth.verifier import verify_signed


def test_sign_transaction_bundles_signer_key(
    keypair: KeyPair, alice_to_bob: RawTransaction
) -> None:
    signed = sign_transaction(alice_to_bob, keypair.private_key)

    assert signed.transaction == alice_to_bob
    assert signed.public_key.hex() == keypair.public_key_hex
    assert verify_signed(signed) is True


def test_sign_transaction_accepts_mapping(keypair: KeyPair) -> None:
    signed = sign_transaction(
        {"sender": "alice", "recipient": "bob", "amount": 5, "nonce": 9},
        keypair.private_key,
    )
    assert isinstance(signed.transaction, RawTransaction)
    assert verify_signed(signed) is True


def test_sign_transaction_rejects_malformed_mapping(keypair: KeyPair) -> None:
    with pytest.raises(InvalidTransactionError) as excinfo:
        sign_transaction({"sender": "alice"}, keypair.private_key)
    assert excinfo.value.malformed.field == "recipient"


def test_envelope_is_immutable(keypair: KeyPair, alice_to_bob: RawTransaction) -> None:
    signed = sign_transaction(alice_to_bob, keypair.private_key)
    with pytest.raises(ValidationError):
        signed.signature = b"\x00" * 64  # type: ignore[misc]


def test_envelope_survives_json(
    keypair: KeyPair, alice_to_bob: RawTransaction
) -> None:
    signed = sign_transaction(alice_to_bob, keypair.private_key)
    wire = json.dumps(signed.to_dict())

    loaded = SignedTransaction.from_dict(json.loads(wire))

    assert loaded == signed
    assert verify_signed(loaded) is True


def test_tampered_envelope_fails_verification(
    keypair: KeyPair, alice_to_bob: RawTransaction
) -> None:
    data = sign_transaction(alice_to_bob, keypair.private_key).to_dict()
    data["transaction"] = dict(data["transaction"], amount=101)  # type: ignore[arg-type]

    assert verify_signed(SignedTransaction.from_dict(data)) is False


def test_substituted_public_key_fails_verification(
    keypair: KeyPair, other_keypair: KeyPair, alice_to_bob: RawTransaction
) -> None:
    data = sign_transaction(alice_to_bob, keypair.private_key).to_dict()
    data["public_key"] = other_keypair.public_key_hex

    assert verify_signed(SignedTransaction.from_dict(data)) is False


@pytest.mark.parametrize(
    ("member", "value", "field"),
    [
        ("signature_algorithm", "hmac-sha256", "signature_algorithm"),
        ("signature", "abc", "signature"),
        ("signature", "00" * 63, "signature"),
        ("signature", None, "signature"),
        ("public_key", "00" * 33, "public_key"),
        ("transaction", "not-an-object", "transaction"),
        ("transaction", {"sender": "alice"}, "recipient"),
    ],
)
def test_malformed_envelopes_are_rejected(
    keypair: KeyPair,
    alice_to_bob: RawTransaction,
    member: str,
    value: object,
    field: str,
) -> None:
    data = sign_transaction(alice_to_bob, keypair.private_key).to_dict()
    data[member] = value

    with pytest.raises(MalformedTransactionError) as excinfo:
        SignedTransaction.from_dict(data)
    assert excinfo.value.field == field


@pytest.mark.parametrize("data", [["x"], "envelope", 7, None])
def test_non_object_envelope_is_rejected(data: object) -> None:
    with pytest.raises(MalformedTransactionError, match="expected an object"):
        SignedTransaction.from_dict(data)  # type: ignore[arg-type]
