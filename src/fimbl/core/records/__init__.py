"""Fingerprint records and the decisions made over them.

Submodules:
    models    -- Assert / Retract record types
    decisions -- pure add / update / remove / verify rules
    codec     -- byte encoding for the database
"""

from fimbl.core.records.models import (
    Assert,
    FingerprintRecord,
    Retract,
    asserted_fingerprint,
    utc_now,
)
from fimbl.core.records.decisions import (
    NOOP,
    Decision,
    decide_add,
    decide_remove,
    decide_update,
    decide_verify,
)
from fimbl.core.records.codec import decode_record, encode_record

__all__ = [
    "NOOP",
    "Assert",
    "Decision",
    "FingerprintRecord",
    "Retract",
    "asserted_fingerprint",
    "decide_add",
    "decide_remove",
    "decide_update",
    "decide_verify",
    "decode_record",
    "encode_record",
    "utc_now",
]
