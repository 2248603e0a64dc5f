import pytest

from availprim.constants import (
    AVL,
    CENTS,
    InvalidTransactionCustomId,
    bench_random,
    perbill_of,
)


def test_one_percent_of_avl_is_a_cent():
    assert perbill_of(1, AVL) == CENTS


def test_invalid_transaction_ids_from_values():
    assert InvalidTransactionCustomId(137) is InvalidTransactionCustomId.INVALID_APP_ID
    assert InvalidTransactionCustomId(138) is InvalidTransactionCustomId.FORBIDDEN_APP_ID


def test_perbill_bounds():
    assert perbill_of(100, 12345) == 12345
    assert perbill_of(0, 12345) == 0
    assert perbill_of(150, 777) == 777


def test_perbill_ninety_percent():
    assert perbill_of(90, 1000) == 900


def test_perbill_is_monotonic():
    results = [perbill_of(p, 10_007) for p in range(101)]
    assert results == sorted(results)


def test_perbill_rejects_negative():
    with pytest.raises(ValueError):
        perbill_of(-1, 10)


def test_bench_random_pads_with_zeros():
    assert bench_random(b"\x01\x02", 4) == (b"\x01\x02\x00\x00", 0)


def test_bench_random_truncates():
    assert bench_random(b"abcdef", 3) == (b"abc", 0)