"""Vectorised encoding and decoding of many arrangements at once.

Search engines rarely encode one state at a time: a breadth-first
frontier, or the full table behind a pruning heuristic, is a 2-D array
with one arrangement per row.  The functions here take such arrays and
return one code per row (or one row per code), matching the scalar
coders in :mod:`~combinatorial_coding.permutation`,
:mod:`~combinatorial_coding.position` and
:mod:`~combinatorial_coding.property` row for row.

Exact arithmetic
----------------
Place values grow fast (``20!`` already needs 62 bits) so codes are
accumulated in object arrays of Python integers and only narrowed at
the end.  The width check covers the whole batch: one code out of range
fails the call.

Lehmer counts without a Python loop
-----------------------------------
For a ``(B, n)`` array ``rows`` the comparison cube

    less[b, i, j] = rows[b, j] < rows[b, i]

masked by the strict lower triangle ``j < i`` and summed over *j* gives
every Lehmer count at once — O(B·n²) work in a single broadcast.
"""

from __future__ import annotations

import logging
import math
from typing import Any

import numpy as np

from ._conversion import (
    CodeConversionError,
    ParityError,
    narrow_array,
    widen_array,
)
from .permutation import _check_distinct, _code_to_counts
from .position import position_count
from .property import _check_base

logger = logging.getLogger(__name__)

# ------------------------------------------------------------------ #
# Helpers
# ------------------------------------------------------------------ #


def _as_rows(rows: Any, name: str) -> np.ndarray:
    arr = np.asarray(rows)
    if arr.ndim != 2:
        raise ValueError(f"'{name}' must be a 2-D array, got ndim={arr.ndim}.")
    return arr


def _weighted_sum(digits: np.ndarray, weights: list[int]) -> np.ndarray:
    """Exact row-wise ``digits @ weights`` as an object array."""
    if not weights:
        return np.zeros(digits.shape[0], dtype=object)
    return np.dot(digits.astype(object), np.array(weights, dtype=object))


def _binomial_table(n: int) -> np.ndarray:
    """Object array ``table[i, k] = C(i, k)`` for ``i, k < n``."""
    table = np.empty((n, n), dtype=object)
    for i in range(n):
        for k in range(n):
            table[i, k] = math.comb(i, k)
    return table


def _narrow_codes(codes: np.ndarray, dtype: Any, what: str) -> np.ndarray:
    try:
        return narrow_array(codes, dtype)
    except CodeConversionError:
        logger.debug("Batch of %d %s codes overflows dtype=%r", len(codes), what, dtype)
        raise


# ------------------------------------------------------------------ #
# Permutations
# ------------------------------------------------------------------ #


def encode_permutations(rows: Any, dtype: Any = None) -> np.ndarray:
    """Encode every row of *rows* with the factorial number system.

    Args:
        rows: Array of shape ``(B, n)``; each row holds n distinct,
            mutually comparable values.
        dtype: Integer dtype of the result.  ``None`` uses the
            configured default.

    Returns:
        Array of shape ``(B,)`` with one code in ``[0, n!)`` per row.

    Raises:
        CodeConversionError: If any code does not fit *dtype*.
        ValueError: If *rows* is not 2-D or a row repeats a value.
    """
    arr = _as_rows(rows, "rows")
    n = arr.shape[1]

    if n > 1:
        ordered = np.sort(arr, axis=1)
        dup_rows = np.flatnonzero(np.any(ordered[:, 1:] == ordered[:, :-1], axis=1))
        if dup_rows.size:
            raise ValueError(
                f"Row {int(dup_rows[0])} of 'rows' repeats a value; "
                f"permutation rows must hold distinct values."
            )

    less = arr[:, np.newaxis, :] < arr[:, :, np.newaxis]
    before = np.tril(np.ones((n, n), dtype=bool), k=-1)
    counts = (less & before).sum(axis=2)

    codes = _weighted_sum(counts, [math.factorial(i) for i in range(n)])
    return _narrow_codes(codes, dtype, "permutation")


def decode_permutations(codes: Any, reference: Any) -> np.ndarray:
    """Decode each permutation code against a shared *reference* set.

    Args:
        codes: 1-D array of codes from :func:`encode_permutations`.
        reference: The n values in any order.

    Returns:
        Array of shape ``(B, n)`` holding the values of *reference* in
        each encoded order.

    Raises:
        CodeConversionError: If a code cannot be read as the working
            integer type.
        ValueError: If a code is not below ``n!`` or *reference* repeats
            a value.
    """
    values = widen_array(codes)
    sorted_reference = _check_distinct(list(reference), "reference")
    n = len(sorted_reference)
    ordered = np.asarray(sorted_reference)
    if ordered.ndim != 1:
        # Composite values such as (piece, orientation) tuples stay whole.
        ordered = np.empty(n, dtype=object)
        for i, value in enumerate(sorted_reference):
            ordered[i] = value
    limit = math.factorial(n)
    if values.size and max(values) >= limit:
        raise ValueError(
            f"Code {max(values)} is out of range for {n} elements "
            f"(must be below {n}! = {limit})."
        )

    # Each row picks indices into the sorted reference; the pool of
    # unplaced indices shrinks from the last position backwards.
    picks = np.empty((len(values), n), dtype=np.intp)
    for row, value in enumerate(values):
        pool = list(range(n))
        for i, count in reversed(list(enumerate(_code_to_counts(value, n)))):
            picks[row, i] = pool.pop(count)
    return ordered[picks]


# ------------------------------------------------------------------ #
# Positions
# ------------------------------------------------------------------ #


def encode_positions(mask: Any, dtype: Any = None) -> np.ndarray:
    """Encode the interesting positions of every row of *mask*.

    Args:
        mask: Array of shape ``(B, n)``; truthy entries mark the
            interesting elements.
        dtype: Integer dtype of the result.  ``None`` uses the
            configured default.

    Returns:
        Array of shape ``(B,)``; row *b* has a code in
        ``[0, C(n, K_b))`` where ``K_b`` is the row's number of truthy
        entries.

    Raises:
        CodeConversionError: If any code does not fit *dtype*.
        ValueError: If *mask* is not 2-D.
    """
    m = _as_rows(mask, "mask").astype(bool)
    n_rows, n = m.shape
    if n == 0:
        return _narrow_codes(np.zeros(n_rows, dtype=object), dtype, "position")

    seen = np.cumsum(m, axis=1)
    index = np.broadcast_to(np.arange(n), m.shape)
    terms = _binomial_table(n)[index, np.maximum(seen - 1, 0)]
    contributes = ~m & (seen > 0)
    codes = np.where(contributes, terms, 0).sum(axis=1)
    return _narrow_codes(codes.astype(object), dtype, "position")


def decode_positions(codes: Any, num_interesting: int, length: int) -> np.ndarray:
    """Decode each position code into a boolean mask row.

    Args:
        codes: 1-D array of codes from :func:`encode_positions`, all
            with the same number of interesting elements.
        num_interesting: K, interesting elements per row.
        length: n, row length.

    Returns:
        Boolean array of shape ``(B, length)``.

    Raises:
        CodeConversionError: If a code cannot be read as the working
            integer type.
        ValueError: If *num_interesting* is not in ``[0, length]`` or a
            code is not below ``C(length, num_interesting)``.
    """
    remaining = widen_array(codes)
    if not 0 <= num_interesting <= length:
        raise ValueError(
            f"num_interesting must be between 0 and length={length}, "
            f"got {num_interesting}."
        )
    total = position_count(length, num_interesting)
    if remaining.size and max(remaining) >= total:
        raise ValueError(
            f"Code {max(remaining)} is out of range for {num_interesting} of "
            f"{length} positions (must be below {total})."
        )

    result = np.zeros((len(remaining), length), dtype=bool)
    if length == 0:
        return result

    table = _binomial_table(length)
    to_place = np.full(len(remaining), num_interesting, dtype=np.intp)
    for index in range(length - 1, -1, -1):
        cutoff = np.where(
            to_place > 0, table[index, np.maximum(to_place - 1, 0)], 0
        ).astype(object)
        take = (remaining < cutoff).astype(bool)
        result[:, index] = take
        to_place -= take
        remaining = np.where(take, remaining, remaining - cutoff).astype(object)
    return result


# ------------------------------------------------------------------ #
# Properties
# ------------------------------------------------------------------ #


def encode_properties(
    digits: Any,
    base: int,
    dtype: Any = None,
    *,
    check_parity: bool = False,
) -> np.ndarray:
    """Encode rows of already-mapped property digits.

    Args:
        digits: Integer array of shape ``(B, n)`` with ``n >= 1`` and
            entries in ``[0, base)``; each row should sum to a multiple
            of *base*.
        base: Cardinality of the property, at least 2.
        dtype: Integer dtype of the result.  ``None`` uses the
            configured default.
        check_parity: Raise :class:`~combinatorial_coding.ParityError`
            for rows that do not sum to a multiple of *base*.

    Returns:
        Array of shape ``(B,)`` with codes in ``[0, base ** (n - 1))``.

    Raises:
        CodeConversionError: If any code does not fit *dtype*.
        ParityError: With ``check_parity=True``, on a parity violation.
        ValueError: If *digits* is not a 2-D integer array with at least
            one column, *base* is below 2, or a digit is out of range.
    """
    _check_base(base)
    d = _as_rows(digits, "digits")
    if d.dtype.kind not in ("u", "i", "b"):
        raise ValueError(f"'digits' must be integers, got dtype {d.dtype.name}.")
    n = d.shape[1]
    if n == 0:
        raise ValueError("'digits' must have at least one column.")
    if d.size and (d.min() < 0 or d.max() >= base):
        raise ValueError(f"'digits' entries must lie in [0, {base}).")

    if check_parity:
        bad = np.flatnonzero(d.astype(np.int64).sum(axis=1) % base)
        if bad.size:
            raise ParityError(
                f"Row {int(bad[0])} of 'digits' does not sum to a multiple "
                f"of {base}."
            )

    weights = [base ** (n - 2 - j) for j in range(n - 1)]
    codes = _weighted_sum(d[:, :-1].astype(np.int64), weights)
    return _narrow_codes(codes, dtype, "property")


def decode_properties(codes: Any, base: int, length: int) -> np.ndarray:
    """Decode each property code into a row of *length* digits.

    Args:
        codes: 1-D array of codes from :func:`encode_properties`.
        base: The base used to encode.
        length: n, digits per row.

    Returns:
        Integer array of shape ``(B, length)``; the last column is
        restored by parity.

    Raises:
        CodeConversionError: If a code cannot be read as the working
            integer type.
        ValueError: If *base* is below 2, *length* is below 1, or a code
            needs more than ``length - 1`` digits.
    """
    remaining = widen_array(codes)
    _check_base(base)
    if length < 1:
        raise ValueError(f"length must be at least 1, got {length}.")

    out = np.zeros((len(remaining), length), dtype=np.intp)
    for position in range(length - 2, -1, -1):
        out[:, position] = (remaining % base).astype(np.intp)
        remaining = remaining // base
    overflow = np.flatnonzero(remaining != 0)
    if overflow.size:
        raise ValueError(
            f"Code at index {int(overflow[0])} needs more than {length - 1} "
            f"base-{base} digits."
        )
    out[:, -1] = (-out[:, :-1].sum(axis=1)) % base
    return out
