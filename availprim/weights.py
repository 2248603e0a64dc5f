"""Benchmarked weights of the system calls."""

from __future__ import annotations

from dataclasses import dataclass

WEIGHT_MAX = 2**64 - 1


def _sat(value: int) -> int:
    return min(value, WEIGHT_MAX)


@dataclass(frozen=True)
class RuntimeDbWeight:
    """Cost of one database read and one database write."""

    read: int
    write: int

    def reads(self, n: int) -> int:
        return _sat(self.read * n)

    def writes(self, n: int) -> int:
        return _sat(self.write * n)

    def reads_writes(self, r: int, w: int) -> int:
        return _sat(self.reads(r) + self.writes(w))


ROCKS_DB_WEIGHT = RuntimeDbWeight(read=25_000_000, write=100_000_000)


@dataclass(frozen=True)
class SystemWeights:
    """Weight functions of the system calls for a given database cost."""

    db_weight: RuntimeDbWeight = ROCKS_DB_WEIGHT

    def remark(self, b: int) -> int:
        return _sat(574_000 + 1_000 * b)

    def remark_with_event(self, b: int) -> int:
        return _sat(2_000 * b)

    def set_heap_pages(self) -> int:
        return _sat(1_891_000 + self.db_weight.writes(1))

    def set_changes_trie_config(self) -> int:
        return _sat(7_370_000 + self.db_weight.reads(1) + self.db_weight.writes(2))

    def set_storage(self, i: int) -> int:
        return _sat(848_000 * i + self.db_weight.writes(i))

    def kill_storage(self, i: int) -> int:
        return _sat(308_000 + 559_000 * i + self.db_weight.writes(i))

    def kill_prefix(self, p: int) -> int:
        return _sat(7_616_000 + 783_000 * p + self.db_weight.writes(p))