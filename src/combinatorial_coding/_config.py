"""Default output width for the combinatorial_coding package.

Encoders accept a ``dtype`` argument naming the integer width of the
returned code.  When it is omitted the width resolved here is used.

Resolution order (first match wins):
    1. Programmatic override via :func:`set_default_dtype`.
    2. The ``COMBINATORIAL_CODING_DTYPE`` environment variable.
    3. ``uint64``, the working integer type.

Valid names are numpy integer dtype names (``"uint8"``, ``"int32"``,
…, case-insensitive).  ``"auto"`` clears the override.

Examples:
    Narrow every code to 32 bits from the shell::

        export COMBINATORIAL_CODING_DTYPE=uint32

    Or programmatically::

        import combinatorial_coding
        combinatorial_coding.set_default_dtype("uint32")

    Re-enable the default resolution::

        combinatorial_coding.set_default_dtype("auto")
"""

from __future__ import annotations

import logging
import os

import numpy as np

logger = logging.getLogger(__name__)

_ENV_VAR = "COMBINATORIAL_CODING_DTYPE"
_BUILTIN_DEFAULT = "uint64"

# Sentinel indicating "no programmatic override has been set".
_dtype_override: str | None = None


def _parse_integer_dtype(name: str) -> np.dtype | None:
    """Return the integer dtype called *name*, or ``None``."""
    try:
        dt = np.dtype(name)
    except TypeError:
        return None
    if dt.kind not in ("u", "i"):
        return None
    return dt


def get_default_dtype() -> np.dtype:
    """Return the dtype encoders use when called with ``dtype=None``.

    Resolution order:
        1. Value set by :func:`set_default_dtype` (unless ``"auto"``).
        2. ``COMBINATORIAL_CODING_DTYPE`` environment variable.
        3. ``uint64``.

    Returns:
        A numpy integer dtype.
    """
    # 1. Programmatic override
    if _dtype_override is not None and _dtype_override != "auto":
        return np.dtype(_dtype_override)

    # 2. Environment variable
    env = os.environ.get(_ENV_VAR, "").strip().lower()
    if env:
        dt = _parse_integer_dtype(env)
        if dt is not None:
            return dt
        logger.debug("Ignoring %s=%r: not a numpy integer dtype", _ENV_VAR, env)

    # 3. Built-in default
    return np.dtype(_BUILTIN_DEFAULT)


def set_default_dtype(name: str) -> None:
    """Override the default output dtype.

    Args:
        name: A numpy integer dtype name or ``"auto"``
            (case-insensitive).  ``"auto"`` restores the default
            resolution order.

    Raises:
        ValueError: If *name* is not an integer dtype name.
    """
    global _dtype_override
    normalised = name.strip().lower()
    if normalised != "auto" and _parse_integer_dtype(normalised) is None:
        raise ValueError(
            f"Unknown integer dtype '{name}'. Use a numpy integer dtype "
            f"name such as 'uint8', 'uint32' or 'int64', or 'auto'."
        )
    _dtype_override = normalised
