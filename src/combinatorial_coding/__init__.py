"""combinatorial_coding — Compact integer codes for combinatorial states.

Implements three independent, bijective encodings used for puzzle-state
coordinates (Rubik's-cube style) and other combinatorial search keys:
permutation coding with the factorial number system (Lehmer code),
position coding with the combinatorial number system, and property
coding with parity-based omission of the last base-B digit.  Every code
is returned as a numpy integer of a caller-chosen width and overflow is
reported, never truncated.

Public API:
    .. autosummary::
        encode_permutation
        decode_permutation
        permutation_counts
        permutation_count
        encode_position
        decode_position
        position_count
        encode_property
        decode_property
        property_count
        encode_permutations
        decode_permutations
        encode_positions
        decode_positions
        encode_properties
        decode_properties
        get_default_dtype
        set_default_dtype
        CodeConversionError
        ParityError
"""

from ._config import get_default_dtype, set_default_dtype
from ._conversion import CodeConversionError, ParityError
from .batch import (
    decode_permutations,
    decode_positions,
    decode_properties,
    encode_permutations,
    encode_positions,
    encode_properties,
)
from .permutation import (
    decode_permutation,
    encode_permutation,
    permutation_count,
    permutation_counts,
)
from .position import decode_position, encode_position, position_count
from .property import decode_property, encode_property, property_count

__all__ = [
    "encode_permutation",
    "decode_permutation",
    "permutation_counts",
    "permutation_count",
    "encode_position",
    "decode_position",
    "position_count",
    "encode_property",
    "decode_property",
    "property_count",
    "encode_permutations",
    "decode_permutations",
    "encode_positions",
    "decode_positions",
    "encode_properties",
    "decode_properties",
    "get_default_dtype",
    "set_default_dtype",
    "CodeConversionError",
    "ParityError",
]

__version__ = "0.1.0"
