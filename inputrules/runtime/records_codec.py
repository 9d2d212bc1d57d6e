"""Byte codec for the persisted mapping record list."""

from __future__ import annotations

from collections.abc import Iterable

from inputrules.api.mapping import MappingRecord
from inputrules.diagnostics.json_codec import dumps_bytes, loads

RECORDS_SCHEMA_VERSION = 1


def dumps_records(records: Iterable[MappingRecord], *, pretty: bool = False) -> bytes:
    """Encode records as JSON bytes; the caller owns storage."""
    payload = {
        "schema_version": RECORDS_SCHEMA_VERSION,
        "mappings": [record.to_dict() for record in records],
    }
    return dumps_bytes(payload, pretty=pretty)


def loads_records(raw: bytes | str) -> tuple[MappingRecord, ...]:
    """Decode records produced by ``dumps_records``."""
    payload = loads(raw)
    if not isinstance(payload, dict):
        raise ValueError("mapping records payload must be an object")
    version = payload.get("schema_version")
    if version != RECORDS_SCHEMA_VERSION:
        raise ValueError(f"unsupported mapping records schema_version: {version!r}")
    items = payload.get("mappings")
    if not isinstance(items, list):
        raise ValueError("mapping records payload must contain a 'mappings' list")
    records: list[MappingRecord] = []
    for item in items:
        if not isinstance(item, dict):
            raise ValueError("mapping record must be an object")
        records.append(MappingRecord.from_dict(item))
    return tuple(records)
