#!/usr/bin/env python3
"""
Sign and Verify Example

This example demonstrates:
- Building a transaction and inspecting its canonical bytes
- Signing it with a key from the in-memory key provider
- Shipping the signed envelope as JSON
- Telling a bad signature apart from a malformed transaction
"""

import json

from ledger_auth import (
    LocalKeyProvider,
    RawTransaction,
    SignedTransaction,
    VerificationError,
    canonicalize,
    sign_transaction,
    transaction_digest,
    verify,
    verify_signed,
)


def main():
    provider = LocalKeyProvider()
    keypair = provider.generate_keypair()

    tx = RawTransaction(sender="alice", recipient="bob", amount=100, nonce=1)
    print("Canonical bytes:", canonicalize(tx).hex())
    print("Digest:         ", transaction_digest(tx))

    signed = sign_transaction(tx, keypair.private_key)
    wire = json.dumps(signed.to_dict())
    print("Envelope:       ", wire)

    received = SignedTransaction.from_dict(json.loads(wire))
    print("Authentic:      ", verify_signed(received))

    tampered = tx.model_copy(update={"amount": 101})
    print("Tampered valid: ", verify(tampered, keypair.public_key, signed.signature))

    broken = RawTransaction.model_construct(sender="alice", recipient="bob", amount=-1, nonce=1)
    try:
        verify(broken, keypair.public_key, signed.signature)
    except VerificationError as exc:
        print("Malformed:      ", exc)


if __name__ == "__main__":
    main()
