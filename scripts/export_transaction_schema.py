"""Write the RawTransaction JSON Schema annotated with its canonical layout.

The ``x-canonical`` block documents the byte encoding other implementations
must reproduce to agree on what was signed.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from ledger_auth.canonical import DOMAIN_TAG, FORMAT_VERSION
from ledger_auth.transaction import FIELD_ORDER, MAX_IDENTITY_BYTES, RawTransaction

_ENCODINGS = {
    "sender": "u32be-length-prefixed-utf8",
    "recipient": "u32be-length-prefixed-utf8",
    "amount": "u64be",
    "nonce": "u64be",
}


def build_schema() -> dict[str, object]:
    schema = RawTransaction.model_json_schema()
    schema["x-canonical"] = {
        "domain_tag": DOMAIN_TAG.decode("ascii"),
        "format_version": FORMAT_VERSION,
        "max_identity_bytes": MAX_IDENTITY_BYTES,
        "fields": [{"name": name, "encoding": _ENCODINGS[name]} for name in FIELD_ORDER],
    }
    return schema


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=Path(__file__).resolve().parent.parent
        / f"transaction_schema_v{FORMAT_VERSION}.json",
        help="Destination file for the schema.",
    )
    args = parser.parse_args(argv)
    args.output.write_text(json.dumps(build_schema(), indent=2), encoding="utf-8")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
