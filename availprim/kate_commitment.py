"""Extrinsics root extended with a polynomial commitment."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from availprim.codec import Reader, encode_bytes, encode_u16

HASH_LENGTH = 32
_JSON_FIELDS = frozenset({"hash", "commitment", "rows", "cols"})


def _check_u16(name: str, value: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value < 1 << 16:
        raise ValueError(f"{name} must be an unsigned 16-bit integer: {value!r}")
    return value


@dataclass
class KateCommitment:
    """Merkle root of the extrinsics plus the commitment and matrix dimensions."""

    hash: bytes
    commitment: bytes = b""
    rows: int = 0
    cols: int = 0

    def __post_init__(self) -> None:
        self.hash = bytes(self.hash)
        if len(self.hash) != HASH_LENGTH:
            raise ValueError(f"hash must be {HASH_LENGTH} bytes, got {len(self.hash)}")
        self.commitment = bytes(self.commitment)
        _check_u16("rows", self.rows)
        _check_u16("cols", self.cols)

    @classmethod
    def from_hash(cls, hash: bytes) -> "KateCommitment":
        """A root with the given hash, no commitment and zero dimensions."""
        return cls(hash=hash)

    def encode(self) -> bytes:
        return (
            self.hash
            + encode_bytes(self.commitment)
            + encode_u16(self.rows)
            + encode_u16(self.cols)
        )

    @classmethod
    def decode(cls, reader: Reader) -> "KateCommitment":
        hash_ = reader.read(HASH_LENGTH)
        commitment = reader.read_bytes()
        rows = reader.read_u16()
        cols = reader.read_u16()
        return cls(hash=hash_, commitment=commitment, rows=rows, cols=cols)

    def to_json(self) -> dict[str, Any]:
        """JSON-ready mapping: hex hash and the commitment as a list of bytes."""
        return {
            "hash": "0x" + self.hash.hex(),
            "commitment": list(self.commitment),
            "rows": self.rows,
            "cols": self.cols,
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "KateCommitment":
        """Build from the mapping produced by :meth:`to_json`; unknown keys are rejected."""
        unknown = set(data) - _JSON_FIELDS
        if unknown:
            raise ValueError(f"unknown field(s): {', '.join(sorted(unknown))}")
        missing = _JSON_FIELDS - set(data)
        if missing:
            raise ValueError(f"missing field(s): {', '.join(sorted(missing))}")
        hash_text = data["hash"]
        if not isinstance(hash_text, str) or not hash_text.startswith("0x"):
            raise ValueError(f"hash must be a 0x-prefixed hex string: {hash_text!r}")
        commitment = data["commitment"]
        if not isinstance(commitment, list):
            raise ValueError("commitment must be a list of bytes")
        return cls(
            hash=bytes.fromhex(hash_text[2:]),
            commitment=bytes(commitment),
            rows=data["rows"],
            cols=data["cols"],
        )