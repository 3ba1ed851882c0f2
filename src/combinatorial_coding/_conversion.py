"""Checked integer-width conversion at the API boundary.

Every coder computes its result with exact Python integers and only
narrows to a machine width when handing the value back to the caller.
Codes coming *in* are widened the same way: they must be readable as
the working integer type before any arithmetic touches them.

Widths
------
* **Working type** — ``numpy.uint64``.  It is the widest unsigned
  machine integer numpy offers and bounds every code that crosses the
  API in either direction.
* **Output width** — any numpy integer dtype chosen by the caller
  (``np.uint8``, ``"int32"``, …).  ``None`` means the configured
  default, see :func:`combinatorial_coding.get_default_dtype`.

A value that does not fit is reported with :class:`CodeConversionError`,
never wrapped or truncated.
"""

from __future__ import annotations

import operator
from typing import Any

import numpy as np

from ._config import get_default_dtype

WORKING_DTYPE = np.dtype(np.uint64)
_WORKING_MAX = int(np.iinfo(WORKING_DTYPE).max)


class CodeConversionError(OverflowError):
    """An encoded value does not fit the requested integer width.

    Raised by encoders when the natural result is outside the range of
    the output dtype, and by decoders when the code they are given
    cannot be read as the working integer type.
    """


class ParityError(ValueError):
    """Property digits do not sum to a multiple of the base."""


def resolve_dtype(dtype: Any = None) -> np.dtype:
    """Return *dtype* as a numpy integer dtype.

    Args:
        dtype: Anything :class:`numpy.dtype` accepts, or ``None`` for
            the configured default.

    Raises:
        TypeError: If *dtype* is not a signed or unsigned integer dtype.
    """
    if dtype is None:
        return get_default_dtype()
    dt = np.dtype(dtype)
    if dt.kind not in ("u", "i"):
        raise TypeError(
            f"Encoded values need an integer dtype, got '{dt.name}'."
        )
    return dt


def narrow(value: int, dtype: Any = None) -> np.integer:
    """Convert an exact code to a numpy scalar of *dtype*.

    Raises:
        CodeConversionError: If *value* is outside the dtype's range.
    """
    dt = resolve_dtype(dtype)
    info = np.iinfo(dt)
    if not int(info.min) <= value <= int(info.max):
        raise CodeConversionError(
            f"Code {value} does not fit in {dt.name} "
            f"(range [{info.min}, {info.max}])."
        )
    return dt.type(value)


def narrow_array(values: np.ndarray, dtype: Any = None) -> np.ndarray:
    """Array form of :func:`narrow`; the check covers every element.

    *values* is expected to hold exact Python integers (object dtype)
    or any integer dtype.
    """
    dt = resolve_dtype(dtype)
    info = np.iinfo(dt)
    if values.size:
        lo, hi = int(values.min()), int(values.max())
        if lo < int(info.min) or hi > int(info.max):
            bad = hi if hi > int(info.max) else lo
            raise CodeConversionError(
                f"Code {bad} does not fit in {dt.name} "
                f"(range [{info.min}, {info.max}])."
            )
    return values.astype(dt)


def widen(code: Any) -> int:
    """Read *code* as the working integer type and return it as ``int``.

    Accepts Python and numpy integers (anything implementing
    ``__index__``).  Booleans are refused even though they index.

    Raises:
        CodeConversionError: If *code* is not an integer, is negative,
            or exceeds the working type.
    """
    if isinstance(code, (bool, np.bool_)):
        raise CodeConversionError("A boolean is not a valid code.")
    try:
        value = operator.index(code)
    except TypeError:
        raise CodeConversionError(
            f"Code of type {type(code).__name__} cannot be read as "
            f"{WORKING_DTYPE.name}."
        ) from None
    if not 0 <= value <= _WORKING_MAX:
        raise CodeConversionError(
            f"Code {value} cannot be read as {WORKING_DTYPE.name} "
            f"(range [0, {_WORKING_MAX}])."
        )
    return value


def widen_array(codes: Any) -> np.ndarray:
    """Array form of :func:`widen`, returning an object array of ints."""
    arr = np.asarray(codes)
    if arr.dtype.kind not in ("u", "i", "O"):
        raise CodeConversionError(
            f"Codes of dtype {arr.dtype.name} cannot be read as "
            f"{WORKING_DTYPE.name}."
        )
    if arr.ndim != 1:
        raise ValueError(f"Expected a 1-D array of codes, got ndim={arr.ndim}.")
    return np.array([widen(c) for c in arr.tolist()], dtype=object)
