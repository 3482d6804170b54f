"""Deterministic serialization and content addressing.

Associative maps and sets have no native JSON form, so before encoding they
are tagged with a ``dataType`` discriminator and converted to arrays::

    {"a1": [1, 1]}   ->  {"dataType": "Map", "value": [["a1", [1, 1]]]}
    {"x", "y"}       ->  {"dataType": "Set", "value": ["x", "y"]}

Pydantic models and dataclasses are written as plain JSON objects (using
their aliases, omitting ``None`` fields). Decoding reverses the tagging.

For identification the value is canonicalised (object keys sorted, map
entries and set members ordered by their own canonical text) and hashed
with a seeded 64-bit FNV-1a. The fingerprint is a deduplication/caching key
only; it offers no protection against deliberate collisions.
"""

from __future__ import annotations

import dataclasses
import json
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .config import FINGERPRINT_SEED

__all__ = [
    "MAP_TAG",
    "SET_TAG",
    "canonical",
    "decode",
    "encode",
    "fingerprint",
    "fnv1a_64",
    "pre_encode",
    "reviver",
]

MAP_TAG = "Map"
SET_TAG = "Set"

FNV64_OFFSET_BASIS = 0xCBF29CE484222325
FNV64_PRIME = 0x100000001B3
FNV64_MASK = 0xFFFFFFFFFFFFFFFF


def _compact(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _model_items(model: BaseModel):
    for name, field in type(model).model_fields.items():
        value = getattr(model, name)
        if value is None:
            continue
        yield field.serialization_alias or field.alias or name, value


def pre_encode(value: Any, sort: bool = False) -> Any:
    """Convert ``value`` into JSON-native structures with tagged maps and sets.

    Set members are always ordered by canonical text so repeated encodings
    of the same set are identical. With ``sort`` the entries of every map
    are ordered the same way.
    """
    if isinstance(value, Enum):
        return pre_encode(value.value, sort)
    if isinstance(value, BaseModel):
        return {key: pre_encode(item, sort) for key, item in _model_items(value)}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: pre_encode(getattr(value, f.name), sort)
            for f in dataclasses.fields(value)
            if getattr(value, f.name) is not None
        }
    if isinstance(value, dict):
        entries = [[pre_encode(k, sort), pre_encode(v, sort)] for k, v in value.items()]
        if sort:
            entries.sort(key=lambda entry: _compact(entry[0]))
        return {"dataType": MAP_TAG, "value": entries}
    if isinstance(value, (set, frozenset)):
        members = [pre_encode(m, sort) for m in value]
        members.sort(key=_compact)
        return {"dataType": SET_TAG, "value": members}
    if isinstance(value, (list, tuple)):
        return [pre_encode(item, sort) for item in value]
    return value


def _hashable(value: Any) -> Any:
    """Arrays decoded as map keys or set members become tuples."""
    if isinstance(value, list):
        return tuple(_hashable(item) for item in value)
    if isinstance(value, set):
        return frozenset(value)
    return value


def reviver(obj: dict[str, Any]) -> Any:
    """``json`` object hook that rebuilds tagged maps and sets."""
    tag = obj.get("dataType")
    if tag is not None and "value" in obj and len(obj) == 2:
        if tag == MAP_TAG:
            return {_hashable(k): v for k, v in obj["value"]}
        if tag == SET_TAG:
            return {_hashable(m) for m in obj["value"]}
    return obj


def encode(value: Any) -> str:
    """Encode ``value`` as JSON text with tagged maps and sets."""
    return json.dumps(pre_encode(value), separators=(",", ":"), ensure_ascii=False)


def decode(text: str | bytes) -> Any:
    """Inverse of :func:`encode`.

    The round trip is exact for values built from ``dict``, ``set``,
    ``list``, ``str``, ``int``, ``float``, ``bool`` and ``None``. Other
    values decode to their JSON shape: tuples come back as lists (except as
    map keys or set members, which become tuples so they stay hashable),
    enums as their values, and pydantic models and dataclasses as plain
    ``dict`` objects. Rebuild models with ``model_validate``.
    """
    return json.loads(text, object_hook=reviver)


def canonical(value: Any) -> str:
    """Canonical text of ``value``: insertion order never affects it."""
    return _compact(pre_encode(value, sort=True))


def fnv1a_64(data: bytes, basis: int = FNV64_OFFSET_BASIS) -> int:
    h = basis
    for byte in data:
        h ^= byte
        h = (h * FNV64_PRIME) & FNV64_MASK
    return h


_SEEDED_BASIS = fnv1a_64(FINGERPRINT_SEED.encode("utf-8"))


def fingerprint(value: Any) -> str:
    """Fixed-width hex identifier of the canonical text of ``value``."""
    digest = fnv1a_64(canonical(value).encode("utf-8"), basis=_SEEDED_BASIS)
    return f"{digest:016x}"
