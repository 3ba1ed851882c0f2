"""Property coding with parity-based digit omission.

Each element carries a property with finite cardinality B (a cube
corner's twist has B = 3, an edge's flip B = 2).  Mapping every element
to a digit in ``[0, B)`` gives an N-digit base-B number — but when the
digits are known to sum to a multiple of B, the last one is redundant:

    last = (B − (sum of the other digits mod B)) mod B

so only the first N − 1 digits are stored, most significant first, and
the code lies in ``[0, B^(N−1))``.

    digits: 2 0 0 1 1 0 0 | 2        (base 3, sum 6 ≡ 0)
    code  = 2·3⁶ + 0·3⁵ + 0·3⁴ + 1·3³ + 1·3² + 0·3¹ + 0·3⁰ = 1494

The parity condition is a precondition of :func:`encode_property`.  It
is not checked unless ``check_parity=True`` is passed; a violating input
encodes without complaint and decodes to a different last digit.
"""

from __future__ import annotations

import operator
from collections.abc import Callable, Sequence
from typing import Any

import numpy as np

from ._conversion import ParityError, narrow, widen


def property_count(base: int, length: int) -> int:
    """Return ``base ** (length - 1)``, the number of codes."""
    return base ** (length - 1)


def _check_base(base: int) -> None:
    if base < 2:
        raise ValueError(f"base must be at least 2, got {base}.")


def _parity_digit(digits: Sequence[int], base: int) -> int:
    return (base - sum(digits) % base) % base


def encode_property(
    data: Sequence[Any],
    property_mapping: Callable[[Any], int],
    base: int,
    dtype: Any = None,
    *,
    check_parity: bool = False,
) -> np.integer:
    """Encode a finite-cardinality property of each element of *data*.

    Args:
        data: Sequence of N ≥ 1 elements.
        property_mapping: Maps an element to its digit in ``[0, base)``.
            The N digits must sum to a multiple of *base*.
        base: Cardinality B of the property, at least 2.
        dtype: Integer dtype of the result.  ``None`` uses
            :func:`~combinatorial_coding.get_default_dtype`.
        check_parity: Also map the last element and raise
            :class:`~combinatorial_coding.ParityError` if the digits do
            not sum to a multiple of *base*.

    Returns:
        The code, in ``[0, base ** (N - 1))``, as a numpy scalar of
        *dtype*.

    Raises:
        CodeConversionError: If the code does not fit *dtype*.
        ParityError: With ``check_parity=True``, if the parity
            precondition does not hold.
        ValueError: If *data* is empty, *base* is below 2, or a mapped
            digit is outside ``[0, base)``.
        TypeError: If *property_mapping* returns a non-integer digit.
    """
    _check_base(base)
    items = list(data)
    if not items:
        raise ValueError("data must hold at least one element.")

    mapped = items if check_parity else items[:-1]
    digits = []
    for position, x in enumerate(mapped):
        mapped_value = property_mapping(x)
        try:
            digits.append(operator.index(mapped_value))
        except TypeError:
            raise TypeError(
                f"property_mapping must return an integer digit; position "
                f"{position} gave {mapped_value!r}."
            ) from None
    for position, digit in enumerate(digits):
        if not 0 <= digit < base:
            raise ValueError(
                f"Digit {digit} at position {position} is outside "
                f"[0, {base})."
            )
    if check_parity:
        if sum(digits) % base:
            raise ParityError(
                f"Digits {digits} sum to {sum(digits)}, which is not a "
                f"multiple of {base}."
            )
        digits = digits[:-1]

    code = 0
    for digit in digits:
        code = code * base + digit
    return narrow(code, dtype)


def decode_property(code: Any, base: int, length: int) -> list[int]:
    """Rebuild the per-element digits identified by *code*.

    Args:
        code: A code produced by :func:`encode_property`.
        base: The base used to encode.
        length: N, the number of elements.

    Returns:
        List of *length* digits; the last one restored by parity.

    Raises:
        CodeConversionError: If *code* cannot be read as the working
            integer type.
        ValueError: If *base* is below 2, *length* is below 1, or
            *code* needs more than ``length - 1`` digits.
    """
    remaining = widen(code)
    _check_base(base)
    if length < 1:
        raise ValueError(f"length must be at least 1, got {length}.")

    # Least significant first; leading positions stay zero-padded.
    stored = [0] * (length - 1)
    for position in range(length - 2, -1, -1):
        remaining, stored[position] = divmod(remaining, base)
    if remaining:
        raise ValueError(
            f"Code {code} needs more than {length - 1} base-{base} digits."
        )
    return stored + [_parity_digit(stored, base)]
