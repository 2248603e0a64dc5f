"""Compact little-endian binary encoding used by block headers and extrinsics."""

from __future__ import annotations

import hashlib


class CodecError(ValueError):
    """Raised when a byte string cannot be decoded."""


def _check_range(value: int, bits: int, name: str) -> None:
    if not 0 <= value < (1 << bits):
        raise ValueError(f"{name} value out of range: {value}")


def encode_u16(value: int) -> bytes:
    """Encode an unsigned 16-bit integer, little endian."""
    _check_range(value, 16, "u16")
    return value.to_bytes(2, "little")


def encode_u32(value: int) -> bytes:
    """Encode an unsigned 32-bit integer, little endian."""
    _check_range(value, 32, "u32")
    return value.to_bytes(4, "little")


def encode_u64(value: int) -> bytes:
    """Encode an unsigned 64-bit integer, little endian."""
    _check_range(value, 64, "u64")
    return value.to_bytes(8, "little")


_MAX_BIG_LENGTH = (0b111111) + 4


def encode_compact(value: int) -> bytes:
    """Encode a non-negative integer in the compact variable-length form."""
    if value < 0:
        raise ValueError(f"compact value must be non-negative: {value}")
    if value < 1 << 6:
        return bytes([value << 2])
    if value < 1 << 14:
        return ((value << 2) | 0b01).to_bytes(2, "little")
    if value < 1 << 30:
        return ((value << 2) | 0b10).to_bytes(4, "little")
    length = max(4, (value.bit_length() + 7) // 8)
    if length > _MAX_BIG_LENGTH:
        raise ValueError(f"compact value too large: {value}")
    return bytes([((length - 4) << 2) | 0b11]) + value.to_bytes(length, "little")


def encode_bytes(data: bytes) -> bytes:
    """Encode a byte string prefixed with its compact length."""
    data = bytes(data)
    return encode_compact(len(data)) + data


def blake2_256(data: bytes) -> bytes:
    """Return the 32-byte BLAKE2b digest of ``data``."""
    return hashlib.blake2b(bytes(data), digest_size=32).digest()


class Reader:
    """Sequential reader over an immutable byte string."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def remaining(self) -> int:
        """Number of bytes not yet consumed."""
        return len(self._data) - self._pos

    def read(self, n: int) -> bytes:
        """Consume and return exactly ``n`` bytes."""
        if n < 0:
            raise ValueError(f"cannot read a negative number of bytes: {n}")
        if n > self.remaining():
            raise CodecError("Not enough data to fill buffer")
        chunk = self._data[self._pos:self._pos + n]
        self._pos += n
        return chunk

    def read_byte(self) -> int:
        return self.read(1)[0]

    def read_u16(self) -> int:
        return int.from_bytes(self.read(2), "little")

    def read_u32(self) -> int:
        return int.from_bytes(self.read(4), "little")

    def read_u64(self) -> int:
        return int.from_bytes(self.read(8), "little")

    def read_compact(self) -> int:
        """Consume a compact-encoded integer, rejecting non-canonical forms."""
        first = self.read_byte()
        mode = first & 0b11
        if mode == 0b00:
            return first >> 2
        if mode == 0b01:
            value = int.from_bytes(bytes([first]) + self.read(1), "little") >> 2
            if value < 1 << 6:
                raise CodecError("out of range decoding Compact")
            return value
        if mode == 0b10:
            value = int.from_bytes(bytes([first]) + self.read(3), "little") >> 2
            if value < 1 << 14:
                raise CodecError("out of range decoding Compact")
            return value
        raw = self.read((first >> 2) + 4)
        value = int.from_bytes(raw, "little")
        if raw[-1] == 0 or value < 1 << 30:
            raise CodecError("out of range decoding Compact")
        return value

    def read_bytes(self) -> bytes:
        """Consume a compact length prefix and that many bytes."""
        return self.read(self.read_compact())