"""Exhaustive table-building smoke tests.

These tests encode every state of the classic cube coordinates (8!
corner permutations, 3^7 corner twists, C(12, 4) slice positions) the
way a pruning-table builder would, and verify the codes form exactly
the ranges ``[0, N)`` with no gaps or collisions.  They catch
accidental quadratic blowups in the vectorised paths.

All tests are marked ``@pytest.mark.slow`` and excluded from the
default ``pytest`` run.  Run them explicitly::

    pytest -m slow
"""

from __future__ import annotations

import itertools
import time

import numpy as np
import pytest

from combinatorial_coding import (
    decode_permutations,
    encode_permutations,
    encode_positions,
    encode_properties,
)

# ------------------------------------------------------------------ #
# Helpers
# ------------------------------------------------------------------ #

TIME_LIMIT = 60.0


def _assert_dense(codes: np.ndarray, size: int) -> None:
    """Codes must be exactly 0 .. size-1, each once."""
    assert codes.shape == (size,)
    np.testing.assert_array_equal(np.sort(codes), np.arange(size))


# ------------------------------------------------------------------ #
# Smoke tests
# ------------------------------------------------------------------ #


@pytest.mark.slow
def test_corner_permutation_table():
    rows = np.array(list(itertools.permutations(range(8))), dtype=np.int8)
    start = time.perf_counter()
    codes = encode_permutations(rows, dtype=np.uint16)
    elapsed = time.perf_counter() - start
    _assert_dense(codes, 40320)
    assert elapsed < TIME_LIMIT

    sample = codes[::997]
    np.testing.assert_array_equal(
        decode_permutations(sample, range(8)), rows[::997]
    )


@pytest.mark.slow
def test_corner_twist_table():
    head = np.array(list(itertools.product(range(3), repeat=7)))
    digits = np.column_stack([head, (-head.sum(axis=1)) % 3])
    codes = encode_properties(digits, 3, dtype=np.uint16, check_parity=True)
    _assert_dense(codes, 3**7)


@pytest.mark.slow
def test_ud_slice_table():
    mask = np.array(
        [[i in c for i in range(12)] for c in itertools.combinations(range(12), 4)]
    )
    codes = encode_positions(mask, dtype=np.uint16)
    _assert_dense(codes, 495)
