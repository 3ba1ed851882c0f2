"""Position coding with the combinatorial number system.

Only *where* the K interesting elements of an N-element sequence sit is
encoded; their order among themselves is ignored.  There are C(N, K)
such placements and each gets a code in ``[0, C(N, K))``.  For a
Rubik's cube, the four UD-slice edges among the twelve edge slots give
the classic 495-state "UDSlice" coordinate.

Scanning left to right with a running count *r* of interesting elements
(the current one included), each non-interesting element at index *i*
that follows at least one interesting element adds ``C(i, r − 1)``:

    data:  0 0 0 1 0 0 1 0 0 1 0 1      (1 = interesting)
    terms: . . . . C(4,0) C(5,0) . C(7,1) C(8,1) . C(10,2) .
    code = 1 + 1 + 7 + 8 + 45 = 62

Codes enumerate the K-subsets in lexicographic order, so interesting
elements packed at the right end give 0 and packed at the left end give
``C(N, K) − 1``.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from typing import Any

import numpy as np

from ._conversion import narrow, widen


def position_count(length: int, num_interesting: int) -> int:
    """Return ``C(length, num_interesting)``, the number of codes."""
    return math.comb(length, num_interesting)


def encode_position(
    data: Sequence[Any],
    is_interesting: Callable[[Any], bool] = bool,
    dtype: Any = None,
) -> np.integer:
    """Encode the positions of the interesting elements of *data*.

    Args:
        data: Sequence of N elements.
        is_interesting: Predicate selecting the elements whose positions
            are encoded.  Defaults to truthiness.
        dtype: Integer dtype of the result.  ``None`` uses
            :func:`~combinatorial_coding.get_default_dtype`.

    Returns:
        The code, in ``[0, C(N, K))``, as a numpy scalar of *dtype*.

    Raises:
        CodeConversionError: If the code does not fit *dtype*.
    """
    code = 0
    seen = 0
    for index, x in enumerate(data):
        if is_interesting(x):
            seen += 1
        elif seen:
            code += math.comb(index, seen - 1)
    return narrow(code, dtype)


def decode_position(code: Any, num_interesting: int, length: int) -> list[bool]:
    """Rebuild the interesting/non-interesting mask identified by *code*.

    Args:
        code: A code produced by :func:`encode_position`.
        num_interesting: K, the number of interesting elements.
        length: N, the length of the encoded sequence.

    Returns:
        List of *length* booleans, ``True`` where an interesting element
        sits.  Usable as a mask over the original positions.

    Raises:
        CodeConversionError: If *code* cannot be read as the working
            integer type.
        ValueError: If *num_interesting* is not in ``[0, length]`` or
            *code* is not below ``C(length, num_interesting)``.
    """
    remaining = widen(code)
    if not 0 <= num_interesting <= length:
        raise ValueError(
            f"num_interesting must be between 0 and length={length}, "
            f"got {num_interesting}."
        )
    total = math.comb(length, num_interesting)
    if remaining >= total:
        raise ValueError(
            f"Code {remaining} is out of range for {num_interesting} of "
            f"{length} positions (must be below {total})."
        )

    to_place = num_interesting
    result: list[bool] = []
    for index in range(length - 1, -1, -1):
        cutoff = math.comb(index, to_place - 1) if to_place else 0
        if remaining < cutoff:
            to_place -= 1
            result.append(True)
        else:
            remaining -= cutoff
            result.append(False)
    result.reverse()
    return result
