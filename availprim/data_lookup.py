"""Index of application data ranges within a block."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from availprim.codec import CodecError, Reader, encode_compact, encode_u32

_U32_MAX = 2**32 - 1


class DataLookupError(ValueError):
    """Raised when a lookup cannot be built from extrinsics."""


class SizeOverflowError(DataLookupError):
    """The accumulated data size does not fit in 32 bits."""


class UnsortedExtrinsicsError(DataLookupError):
    """Extrinsics are not ordered by application id."""


@dataclass
class DataLookup:
    """Total data size and the start offset of each application's data."""

    size: int = 0
    index: list[tuple[int, int]] = field(default_factory=list)

    @classmethod
    def from_extrinsics(cls, extrinsics: Iterable[tuple[int, int]]) -> "DataLookup":
        """Build a lookup from ``(app_id, data_len)`` pairs sorted by app id.

        Entries with application id 0 are not data transactions and get no
        index entry, though their length still counts towards the size.
        """
        index: list[tuple[int, int]] = []
        size = 0
        prev_app_id = 0
        for app_id, data_len in extrinsics:
            if app_id != 0 and prev_app_id != app_id:
                index.append((app_id, size))
            size += data_len
            if size > _U32_MAX:
                raise SizeOverflowError("data lookup size overflows 32 bits")
            if prev_app_id > app_id:
                raise UnsortedExtrinsicsError("extrinsics are not sorted by app id")
            prev_app_id = app_id
        return cls(size=size, index=index)

    def encode(self) -> bytes:
        parts = [encode_u32(self.size), encode_compact(len(self.index))]
        parts.extend(encode_u32(app_id) + encode_u32(start) for app_id, start in self.index)
        return b"".join(parts)

    @classmethod
    def decode(cls, reader: Reader) -> "DataLookup":
        size = reader.read_u32()
        count = reader.read_compact()
        index = [(reader.read_u32(), reader.read_u32()) for _ in range(count)]
        return cls(size=size, index=index)

    @classmethod
    def from_bytes(cls, data: bytes) -> "DataLookup":
        """Decode a lookup that must occupy the whole of ``data``."""
        reader = Reader(data)
        lookup = cls.decode(reader)
        if reader.remaining():
            raise CodecError("Input buffer has still data left after decoding!")
        return lookup