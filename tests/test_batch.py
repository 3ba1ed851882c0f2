"""Tests for the vectorised batch coders."""

import itertools
import logging
import math

import numpy as np
import pytest

from combinatorial_coding import CodeConversionError, ParityError
from combinatorial_coding.batch import (
    decode_permutations,
    decode_positions,
    decode_properties,
    encode_permutations,
    encode_positions,
    encode_properties,
)
from combinatorial_coding.permutation import decode_permutation, encode_permutation
from combinatorial_coding.position import encode_position
from combinatorial_coding.property import encode_property

SEQ = [3, 6, 5, 7, 0, 2, 1, 4]


class TestPermutationBatch:
    """Tests for encode_permutations / decode_permutations."""

    def test_known_code(self):
        codes = encode_permutations([SEQ])
        assert codes.tolist() == [21021]
        assert codes.dtype == np.uint64

    def test_matches_scalar_exhaustive(self):
        rows = np.array(list(itertools.permutations(range(5))))
        codes = encode_permutations(rows, dtype=np.uint8)
        expected = [int(encode_permutation(r)) for r in rows.tolist()]
        assert codes.tolist() == expected

    def test_round_trip(self):
        rng = np.random.default_rng(42)
        rows = np.array([rng.permutation(10) for _ in range(40)])
        codes = encode_permutations(rows, dtype=np.uint32)
        np.testing.assert_array_equal(decode_permutations(codes, range(10)), rows)

    def test_shuffled_reference(self):
        out = decode_permutations(np.array([21021, 0]), [4, 1, 7, 0, 2, 6, 5, 3])
        np.testing.assert_array_equal(out[0], SEQ)
        np.testing.assert_array_equal(out[1], [7, 6, 5, 4, 3, 2, 1, 0])

    def test_tuple_reference_matches_scalar(self):
        # (piece, orientation) pairs must stay whole, one per cell
        ref = [(0, 1), (1, 0), (2, 2)]
        out = decode_permutations(np.array([3, 0]), ref)
        assert out.shape == (2, 3)
        assert out[0].tolist() == decode_permutation(3, ref)
        assert out[1].tolist() == decode_permutation(0, ref)

    def test_overflow_fails_whole_batch(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="combinatorial_coding.batch"):
            with pytest.raises(CodeConversionError, match="21021"):
                encode_permutations([[7, 6, 5, 4, 3, 2, 1, 0], SEQ], dtype=np.uint8)
        assert "overflows" in caplog.text

    def test_twenty_elements_exact(self):
        codes = encode_permutations([list(range(20))])
        assert int(codes[0]) == math.factorial(20) - 1

    def test_duplicate_row_rejected(self):
        with pytest.raises(ValueError, match="Row 1"):
            encode_permutations([[0, 1, 2], [0, 0, 2]])

    def test_requires_two_dimensions(self):
        with pytest.raises(ValueError, match="2-D"):
            encode_permutations(SEQ)

    def test_code_beyond_factorial_rejected(self):
        with pytest.raises(ValueError, match="out of range"):
            decode_permutations(np.array([0, 24]), range(4))

    def test_empty_rows(self):
        assert encode_permutations(np.zeros((3, 0))).tolist() == [0, 0, 0]


class TestPositionBatch:
    """Tests for encode_positions / decode_positions."""

    def test_matches_scalar_exhaustive(self):
        rows = np.array(
            [[i in c for i in range(12)] for c in itertools.combinations(range(12), 4)]
        )
        codes = encode_positions(rows, dtype=np.uint16)
        expected = [int(encode_position(r)) for r in rows.tolist()]
        assert codes.tolist() == expected
        assert sorted(expected) == list(range(495))

    def test_round_trip(self):
        rows = np.array(
            [[i in c for i in range(9)] for c in itertools.combinations(range(9), 3)]
        )
        codes = encode_positions(rows)
        np.testing.assert_array_equal(decode_positions(codes, 3, 9), rows)

    def test_known_codes(self):
        mask = [[0] * 8 + [1] * 4, [1] * 4 + [0] * 8]
        assert encode_positions(mask).tolist() == [0, 494]

    def test_truthy_values_accepted(self):
        assert encode_positions([[0, 5, 0, 7]]).tolist() == [
            int(encode_position([0, 5, 0, 7]))
        ]

    def test_decode_zero_interesting(self):
        out = decode_positions(np.array([0, 0]), 0, 3)
        assert out.shape == (2, 3)
        assert not out.any()

    def test_code_out_of_range(self):
        with pytest.raises(ValueError, match="out of range"):
            decode_positions(np.array([495]), 4, 12)

    def test_empty_length(self):
        assert encode_positions(np.zeros((2, 0), dtype=bool)).tolist() == [0, 0]
        assert decode_positions(np.array([0]), 0, 0).shape == (1, 0)


class TestPropertyBatch:
    """Tests for encode_properties / decode_properties."""

    def test_known_code(self):
        digits = np.array([[2, 0, 0, 1, 1, 0, 0, 2]])
        assert encode_properties(digits, 3).tolist() == [1494]

    def test_matches_scalar(self):
        rng = np.random.default_rng(5)
        head = rng.integers(0, 3, size=(30, 7))
        digits = np.column_stack([head, (-head.sum(axis=1)) % 3])
        codes = encode_properties(digits, 3, dtype=np.uint16, check_parity=True)
        expected = [int(encode_property(r, int, 3)) for r in digits.tolist()]
        assert codes.tolist() == expected

    def test_round_trip(self):
        head = np.array(list(itertools.product(range(2), repeat=6)))
        digits = np.column_stack([head, head.sum(axis=1) % 2])
        codes = encode_properties(digits, 2)
        np.testing.assert_array_equal(decode_properties(codes, 2, 7), digits)

    def test_decode_known_code(self):
        assert decode_properties(np.array([1494]), 3, 8).tolist() == [
            [2, 0, 0, 1, 1, 0, 0, 2]
        ]

    def test_parity_checked_on_request(self):
        with pytest.raises(ParityError, match="Row 1"):
            encode_properties([[0, 0], [1, 0]], 2, check_parity=True)

    def test_overflow(self):
        with pytest.raises(CodeConversionError):
            encode_properties([[2, 0, 0, 1, 1, 0, 0, 2]], 3, dtype=np.uint8)

    def test_digit_out_of_range(self):
        with pytest.raises(ValueError, match="entries"):
            encode_properties([[0, 3]], 3)

    def test_decode_too_many_digits(self):
        with pytest.raises(ValueError, match="more than"):
            decode_properties(np.array([0, 3**7]), 3, 8)
