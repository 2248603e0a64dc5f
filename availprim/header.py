"""Block header carrying a commitment-extended extrinsics root and a data lookup."""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from availprim.codec import CodecError, Reader, blake2_256, encode_bytes, encode_compact
from availprim.data_lookup import DataLookup
from availprim.kate_commitment import HASH_LENGTH, KateCommitment

ENGINE_ID_LENGTH = 4
_U256_LIMIT = 1 << 256
_HEADER_JSON_FIELDS = frozenset(
    {"parentHash", "number", "stateRoot", "extrinsicsRoot", "digest", "appDataLookup"}
)


def serialize_number(number: int) -> str:
    """Render a block number as a minimal 0x-prefixed hex quantity."""
    if isinstance(number, bool) or not isinstance(number, int):
        raise TypeError(f"block number must be an integer: {number!r}")
    if not 0 <= number < _U256_LIMIT:
        raise ValueError(f"block number out of range: {number}")
    return f"0x{number:x}"


def deserialize_number(text: str) -> int:
    """Parse a 0x-prefixed hex quantity into a block number."""
    if not isinstance(text, str) or not text.startswith("0x"):
        raise ValueError(f"expected a 0x-prefixed hex string: {text!r}")
    digits = text[2:]
    if not digits or any(c not in string.hexdigits for c in digits):
        raise ValueError(f"invalid hex quantity: {text!r}")
    value = int(digits, 16)
    if value >= _U256_LIMIT:
        raise ValueError(f"number does not fit in 256 bits: {text!r}")
    return value


class DigestItemKind(IntEnum):
    """Variant tags of a digest log item."""

    OTHER = 0
    CONSENSUS = 4
    SEAL = 5
    PRE_RUNTIME = 6
    RUNTIME_ENVIRONMENT_UPDATED = 8


_ENGINE_KINDS = frozenset(
    {DigestItemKind.CONSENSUS, DigestItemKind.SEAL, DigestItemKind.PRE_RUNTIME}
)


@dataclass
class DigestItem:
    """One log entry of a header digest."""

    kind: DigestItemKind
    data: bytes = b""
    engine_id: bytes | None = None

    def __post_init__(self) -> None:
        self.kind = DigestItemKind(self.kind)
        self.data = bytes(self.data)
        if self.kind in _ENGINE_KINDS:
            if self.engine_id is None or len(bytes(self.engine_id)) != ENGINE_ID_LENGTH:
                raise ValueError(f"{self.kind.name} needs a {ENGINE_ID_LENGTH}-byte engine id")
            self.engine_id = bytes(self.engine_id)
        elif self.engine_id is not None:
            raise ValueError(f"{self.kind.name} takes no engine id")
        if self.kind is DigestItemKind.RUNTIME_ENVIRONMENT_UPDATED and self.data:
            raise ValueError("RUNTIME_ENVIRONMENT_UPDATED carries no data")

    def encode(self) -> bytes:
        out = bytes([self.kind])
        if self.engine_id is not None:
            out += self.engine_id
        if self.kind is not DigestItemKind.RUNTIME_ENVIRONMENT_UPDATED:
            out += encode_bytes(self.data)
        return out

    @classmethod
    def decode(cls, reader: Reader) -> "DigestItem":
        tag = reader.read_byte()
        try:
            kind = DigestItemKind(tag)
        except ValueError:
            raise CodecError(f"unknown digest item variant: {tag}") from None
        if kind is DigestItemKind.RUNTIME_ENVIRONMENT_UPDATED:
            return cls(kind=kind)
        engine_id = reader.read(ENGINE_ID_LENGTH) if kind in _ENGINE_KINDS else None
        return cls(kind=kind, data=reader.read_bytes(), engine_id=engine_id)


@dataclass
class Digest:
    """Chain-specific log items useful to light clients."""

    logs: list[DigestItem] = field(default_factory=list)

    def encode(self) -> bytes:
        return encode_compact(len(self.logs)) + b"".join(item.encode() for item in self.logs)

    @classmethod
    def decode(cls, reader: Reader) -> "Digest":
        count = reader.read_compact()
        return cls(logs=[DigestItem.decode(reader) for _ in range(count)])


def _hex(data: bytes) -> str:
    return "0x" + data.hex()


def _unhex(text: Any, name: str) -> bytes:
    if not isinstance(text, str) or not text.startswith("0x"):
        raise ValueError(f"{name} must be a 0x-prefixed hex string: {text!r}")
    return bytes.fromhex(text[2:])


def _digest_to_json(digest: Digest) -> dict[str, Any]:
    return {"logs": [_hex(item.encode()) for item in digest.logs]}


def _digest_from_json(data: Any) -> Digest:
    if not isinstance(data, dict) or set(data) != {"logs"}:
        raise ValueError("digest must be a mapping with a single 'logs' key")
    logs = []
    for text in data["logs"]:
        reader = Reader(_unhex(text, "digest item"))
        logs.append(DigestItem.decode(reader))
        if reader.remaining():
            raise CodecError("digest item has trailing bytes")
    return Digest(logs=logs)


def _lookup_to_json(lookup: DataLookup) -> dict[str, Any]:
    return {"size": lookup.size, "index": [list(entry) for entry in lookup.index]}


def _lookup_from_json(data: Any) -> DataLookup:
    if not isinstance(data, dict) or not {"size", "index"} <= set(data):
        raise ValueError("appDataLookup must hold 'size' and 'index'")
    index = [(int(app_id), int(start)) for app_id, start in data["index"]]
    return DataLookup(size=int(data["size"]), index=index)


def _check_hash(name: str, value: bytes) -> bytes:
    value = bytes(value)
    if len(value) != HASH_LENGTH:
        raise ValueError(f"{name} must be {HASH_LENGTH} bytes, got {len(value)}")
    return value


@dataclass
class Header:
    """Block header with a commitment-extended extrinsics root."""

    parent_hash: bytes
    number: int
    state_root: bytes
    extrinsics_root: KateCommitment
    digest: Digest = field(default_factory=Digest)
    app_data_lookup: DataLookup = field(default_factory=DataLookup)

    def __post_init__(self) -> None:
        self.parent_hash = _check_hash("parent_hash", self.parent_hash)
        self.state_root = _check_hash("state_root", self.state_root)
        if isinstance(self.number, bool) or not isinstance(self.number, int) or self.number < 0:
            raise ValueError(f"block number must be a non-negative integer: {self.number!r}")

    @classmethod
    def new(
        cls,
        number: int,
        extrinsics_root_hash: bytes,
        state_root: bytes,
        parent_hash: bytes,
        digest: Digest,
    ) -> "Header":
        """Header whose root holds only a hash, with an empty data lookup."""
        return cls(
            parent_hash=parent_hash,
            number=number,
            state_root=state_root,
            extrinsics_root=KateCommitment.from_hash(extrinsics_root_hash),
            digest=digest,
        )

    @classmethod
    def new_extended(
        cls,
        number: int,
        extrinsics_root: KateCommitment,
        state_root: bytes,
        parent_hash: bytes,
        digest: Digest,
        app_data_lookup: DataLookup,
    ) -> "Header":
        """Header with a full commitment root and data lookup."""
        return cls(
            parent_hash=parent_hash,
            number=number,
            state_root=state_root,
            extrinsics_root=extrinsics_root,
            digest=digest,
            app_data_lookup=app_data_lookup,
        )

    def encode(self) -> bytes:
        return b"".join(
            (
                self.parent_hash,
                encode_compact(self.number),
                self.state_root,
                self.extrinsics_root.encode(),
                self.digest.encode(),
                self.app_data_lookup.encode(),
            )
        )

    @classmethod
    def decode(cls, reader: Reader) -> "Header":
        return cls(
            parent_hash=reader.read(HASH_LENGTH),
            number=reader.read_compact(),
            state_root=reader.read(HASH_LENGTH),
            extrinsics_root=KateCommitment.decode(reader),
            digest=Digest.decode(reader),
            app_data_lookup=DataLookup.decode(reader),
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "Header":
        """Decode a header that must occupy the whole of ``data``."""
        reader = Reader(data)
        header = cls.decode(reader)
        if reader.remaining():
            raise CodecError("Input buffer has still data left after decoding!")
        return header

    def hash(self) -> bytes:
        """BLAKE2-256 hash of the encoded header."""
        return blake2_256(self.encode())

    def to_json(self) -> dict[str, Any]:
        return {
            "parentHash": _hex(self.parent_hash),
            "number": serialize_number(self.number),
            "stateRoot": _hex(self.state_root),
            "extrinsicsRoot": self.extrinsics_root.to_json(),
            "digest": _digest_to_json(self.digest),
            "appDataLookup": _lookup_to_json(self.app_data_lookup),
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Header":
        """Build from the mapping produced by :meth:`to_json`; unknown keys are rejected."""
        unknown = set(data) - _HEADER_JSON_FIELDS
        if unknown:
            raise ValueError(f"unknown field(s): {', '.join(sorted(unknown))}")
        missing = _HEADER_JSON_FIELDS - set(data)
        if missing:
            raise ValueError(f"missing field(s): {', '.join(sorted(missing))}")
        return cls(
            parent_hash=_unhex(data["parentHash"], "parentHash"),
            number=deserialize_number(data["number"]),
            state_root=_unhex(data["stateRoot"], "stateRoot"),
            extrinsics_root=KateCommitment.from_json(data["extrinsicsRoot"]),
            digest=_digest_from_json(data["digest"]),
            app_data_lookup=_lookup_from_json(data["appDataLookup"]),
        )