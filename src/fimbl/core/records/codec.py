"""Record serialization: tagged JSON documents stored as UTF-8 bytes.

Layout::

    {"kind": "assert", "at": "<ISO-8601 UTC>",
     "fingerprint": {"content_hash": "<64 hex>", "symlink": false,
                     "created": <ns or null>, "modified": <ns or null>,
                     "unix_mode": <u32 or null>, "read_only": false}}

    {"kind": "retract", "at": "<ISO-8601 UTC>"}

Keys are sorted so that equal records encode to identical bytes. Anything
that does not decode to exactly one of these shapes is a
``RecordDecodeError``.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from fimbl.core.fingerprint import HASH_SIZE, Fingerprint
from fimbl.core.records.models import Assert, FingerprintRecord, Retract
from fimbl.exceptions import RecordDecodeError

KIND_ASSERT = "assert"
KIND_RETRACT = "retract"
MAX_UNIX_MODE = 2**32 - 1


def fingerprint_to_dict(fingerprint: Fingerprint) -> dict[str, Any]:
    """Serialize a fingerprint to a JSON-compatible dict."""
    return {
        "content_hash": fingerprint.content_hex,
        "symlink": fingerprint.is_symlink,
        "created": fingerprint.created,
        "modified": fingerprint.modified,
        "unix_mode": fingerprint.unix_mode,
        "read_only": fingerprint.read_only,
    }


def record_to_dict(record: FingerprintRecord) -> dict[str, Any]:
    """Serialize a record to a JSON-compatible dict."""
    if isinstance(record, Assert):
        return {
            "kind": KIND_ASSERT,
            "at": record.at.isoformat(),
            "fingerprint": fingerprint_to_dict(record.fingerprint),
        }
    return {"kind": KIND_RETRACT, "at": record.at.isoformat()}


def encode_record(record: FingerprintRecord) -> bytes:
    """Encode a record to the bytes stored in the database."""
    return json.dumps(
        record_to_dict(record), sort_keys=True, separators=(",", ":")
    ).encode("utf-8")


def _optional_int(data: dict[str, Any], name: str) -> int | None:
    value = data.get(name)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise RecordDecodeError(f"field {name!r} must be an integer or null")
    return value


def _optional_mode(data: dict[str, Any]) -> int | None:
    value = _optional_int(data, "unix_mode")
    if value is not None and not 0 <= value <= MAX_UNIX_MODE:
        raise RecordDecodeError(f"field 'unix_mode' out of range: {value}")
    return value


def _required_bool(data: dict[str, Any], name: str) -> bool:
    value = data.get(name)
    if not isinstance(value, bool):
        raise RecordDecodeError(f"field {name!r} must be a boolean")
    return value


def _timestamp(data: dict[str, Any]) -> datetime:
    raw = data.get("at")
    if not isinstance(raw, str):
        raise RecordDecodeError("record timestamp missing")
    try:
        return datetime.fromisoformat(raw)
    except ValueError as exc:
        raise RecordDecodeError(f"bad record timestamp {raw!r}") from exc


def fingerprint_from_dict(data: Any) -> Fingerprint:
    """Deserialize a fingerprint dict.

    Raises:
        RecordDecodeError: If a field is missing or has the wrong type,
            or the hash is not exactly ``HASH_SIZE`` bytes.
    """
    if not isinstance(data, dict):
        raise RecordDecodeError("fingerprint must be an object")
    raw_hash = data.get("content_hash")
    if not isinstance(raw_hash, str):
        raise RecordDecodeError("fingerprint content_hash missing")
    try:
        content_hash = bytes.fromhex(raw_hash)
    except ValueError as exc:
        raise RecordDecodeError("fingerprint content_hash is not hex") from exc
    if len(content_hash) != HASH_SIZE:
        raise RecordDecodeError(
            f"fingerprint content_hash must be {HASH_SIZE} bytes, "
            f"got {len(content_hash)}"
        )
    return Fingerprint(
        content_hash=content_hash,
        is_symlink=_required_bool(data, "symlink"),
        created=_optional_int(data, "created"),
        modified=_optional_int(data, "modified"),
        unix_mode=_optional_mode(data),
        read_only=_required_bool(data, "read_only"),
    )


def record_from_dict(data: Any) -> FingerprintRecord:
    """Deserialize a record dict produced by ``record_to_dict``."""
    if not isinstance(data, dict):
        raise RecordDecodeError("record must be an object")
    kind = data.get("kind")
    if kind == KIND_ASSERT:
        return Assert(
            fingerprint=fingerprint_from_dict(data.get("fingerprint")),
            at=_timestamp(data),
        )
    if kind == KIND_RETRACT:
        return Retract(at=_timestamp(data))
    raise RecordDecodeError(f"unknown record kind {kind!r}")


def decode_record(raw: bytes) -> FingerprintRecord:
    """Decode bytes read from the database into a record.

    Raises:
        RecordDecodeError: If the bytes are not a valid record.
    """
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise RecordDecodeError("stored record is not valid JSON") from exc
    return record_from_dict(data)
