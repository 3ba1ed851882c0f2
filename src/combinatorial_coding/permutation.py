"""Permutation coding with the factorial number system.

A total ordering of N distinct, comparable values is mapped to a single
integer in ``[0, N!)`` and back.  Every one of the N! orderings gets a
distinct code, so no state is wasted.

Lehmer counts
-------------
For each position *i* count the elements to its left that compare less
than the element at *i*.  The count lies in ``[0, i]`` — exactly the
number of choices available for a digit whose place value is ``i!``:

    sorted:   7, 6, 5, 4, 3, 2, 1, 0
    shuffled: 3, 6, 5, 7, 0, 2, 1, 4
    counts:   0, 1, 1, 3, 0, 1, 1, 4

    code = 0·0! + 1·1! + 1·2! + 3·3! + 0·4! + 1·5! + 1·6! + 4·7! = 21021

A descending sequence has all-zero counts and therefore code 0.

Decoding runs the other way, most significant digit first: dividing by
``(N−1)!`` yields the last count, the remainder is divided by
``(N−2)!``, and so on.  The last position then takes the
``count``-th smallest value of the whole set, the position before it
the ``count``-th smallest of what is left, etc.

Width
-----
The largest code is ``N! − 1``:

    5!  fits in uint8
    8!  fits in uint16
    12! fits in uint32
    20! fits in uint64

No limit on N is enforced; a code that does not fit the requested
dtype raises :class:`~combinatorial_coding.CodeConversionError`.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

import numpy as np

from ._conversion import narrow, widen


def permutation_count(n: int) -> int:
    """Return ``n!``, the number of codes for *n* elements."""
    return math.factorial(n)


def _check_distinct(items: list, name: str) -> list:
    """Return *items* sorted, raising if any value repeats."""
    ordered = sorted(items)
    for a, b in zip(ordered, ordered[1:]):
        if a == b:
            raise ValueError(
                f"'{name}' must hold distinct values; {a!r} appears more "
                f"than once."
            )
    return ordered


def permutation_counts(data: Sequence[Any]) -> list[int]:
    """Return the Lehmer counts of *data*.

    Entry *i* is the number of elements before position *i* that compare
    less than ``data[i]``, hence always in ``[0, i]``.

    Args:
        data: Distinct, mutually comparable values.

    Returns:
        List of ``len(data)`` non-negative integers.

    Raises:
        ValueError: If *data* contains duplicates.
    """
    items = list(data)
    _check_distinct(items, "data")
    return [sum(1 for y in items[:i] if y < x) for i, x in enumerate(items)]


def _counts_to_code(counts: list[int]) -> int:
    return sum(count * math.factorial(i) for i, count in enumerate(counts))


def _code_to_counts(code: int, n: int) -> list[int]:
    # Highest place value first: each quotient is bounded by the
    # remainder left over from the larger factorials.
    counts = [0] * n
    for i in range(n - 1, -1, -1):
        counts[i], code = divmod(code, math.factorial(i))
    return counts


def encode_permutation(data: Sequence[Any], dtype: Any = None) -> np.integer:
    """Encode the ordering of *data* as a single integer.

    Args:
        data: Sequence of N distinct, mutually comparable values.
        dtype: Integer dtype of the result.  ``None`` uses
            :func:`~combinatorial_coding.get_default_dtype`.

    Returns:
        The code, in ``[0, N!)``, as a numpy scalar of *dtype*.

    Raises:
        CodeConversionError: If the code does not fit *dtype*.
        ValueError: If *data* contains duplicates.

    Examples:
        >>> int(encode_permutation([3, 6, 5, 7, 0, 2, 1, 4]))
        21021
    """
    return narrow(_counts_to_code(permutation_counts(data)), dtype)


def decode_permutation(code: Any, reference: Sequence[Any]) -> list | np.ndarray:
    """Rebuild the ordering identified by *code*.

    Args:
        code: A code produced by :func:`encode_permutation`.
        reference: The same N values in any order.

    Returns:
        The values of *reference* arranged in the encoded order.  A list,
        or an ndarray of the reference's dtype when *reference* is one.

    Raises:
        CodeConversionError: If *code* cannot be read as the working
            integer type.
        ValueError: If *code* is not below ``N!`` or *reference*
            contains duplicates.
    """
    value = widen(code)
    pool = _check_distinct(list(reference), "reference")
    n = len(pool)
    if value >= math.factorial(n):
        raise ValueError(
            f"Code {value} is out of range for {n} elements "
            f"(must be below {n}! = {math.factorial(n)})."
        )

    counts = _code_to_counts(value, n)
    result = [pool.pop(count) for count in reversed(counts)]
    result.reverse()

    if isinstance(reference, np.ndarray):
        return np.array(result, dtype=reference.dtype)
    return result
