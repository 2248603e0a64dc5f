"""Chain-wide constants and small helpers shared by the runtime."""

from __future__ import annotations

from enum import IntEnum

KATE_PUBLIC_PARAMS = b":kate_public_params:"
"""Storage key of the public parameters used to build commitments."""

_PERBILL_ACCURACY = 1_000_000_000

NORMAL_DISPATCH_RATIO = 90 * _PERBILL_ACCURACY // 100
"""Share of a block, in parts per billion, that normal extrinsics may fill."""

BLOCK_CHUNK_SIZE = 32

AVL = 1_000_000_000_000_000_000
CENTS = AVL // 100
MILLICENTS = CENTS // 1_000


class InvalidTransactionCustomId(IntEnum):
    """Custom codes for rejected transactions."""

    INVALID_APP_ID = 137
    FORBIDDEN_APP_ID = 138


def perbill_of(percent: int, value: int) -> int:
    """Apply ``percent`` (saturated at 100) to ``value``, rounding to nearest, ties down."""
    if percent < 0 or value < 0:
        raise ValueError("percent and value must be non-negative")
    parts = min(percent, 100) * (_PERBILL_ACCURACY // 100)
    quotient, remainder = divmod(value * parts, _PERBILL_ACCURACY)
    if remainder * 2 > _PERBILL_ACCURACY:
        quotient += 1
    return quotient


def bench_random(subject: bytes, size: int) -> tuple[bytes, int]:
    """Benchmark-only randomness: ``subject`` cut or zero-padded to ``size`` bytes."""
    if size < 0:
        raise ValueError(f"size must be non-negative: {size}")
    output = bytes(subject)[:size].ljust(size, b"\x00")
    return output, 0