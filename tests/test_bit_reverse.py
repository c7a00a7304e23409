"""Tests for the bit-reversal primitive."""

import numpy as np
import pytest

from primitives.bit_reverse import bit_reverse_indices, bit_reverse_permutation, bitreverse, log2


class TestBitreverse:
    """Scalar bit reversal."""

    @pytest.mark.parametrize("value,width,expected", [
        (0b0001, 4, 0b1000),
        (0b1101, 4, 0b1011),
        (0b0110, 4, 0b0110),
        (1, 1, 1),
        (23, 16, 59392),
        (837, 16, 41664),
    ])
    def test_known_values(self, value: int, width: int, expected: int) -> None:
        assert bitreverse(value, width) == expected

    def test_width_zero(self) -> None:
        assert bitreverse(0, 0) == 0

    @pytest.mark.parametrize("width", [0, 1, 2, 5, 8, 10])
    def test_involution(self, width: int) -> None:
        """bitreverse(bitreverse(x)) == x for every x < 2^width."""
        for x in range(1 << width):
            assert bitreverse(bitreverse(x, width), width) == x

    def test_high_bits_ignored(self) -> None:
        assert bitreverse(0b110001, 4) == bitreverse(0b0001, 4)

    def test_wide_values(self) -> None:
        """Python ints have no word size: 64-bit domains reverse exactly."""
        assert bitreverse(1, 64) == 1 << 63
        assert bitreverse((1 << 64) - 1, 64) == (1 << 64) - 1

    def test_negative_width_rejected(self) -> None:
        with pytest.raises(ValueError):
            bitreverse(1, -1)


class TestBitReversePermutation:
    """Vectorised bit reversal over whole domains."""

    def test_indices_small(self) -> None:
        assert bit_reverse_indices(3).tolist() == [0, 4, 2, 6, 1, 5, 3, 7]

    @pytest.mark.parametrize("n_bits", [0, 1, 4, 9])
    def test_indices_match_scalar(self, n_bits: int) -> None:
        expected = [bitreverse(i, n_bits) for i in range(1 << n_bits)]
        assert bit_reverse_indices(n_bits).tolist() == expected

    @pytest.mark.parametrize("n_bits", [1, 3, 6])
    def test_permutation_is_involution(self, n_bits: int) -> None:
        values = np.arange(1 << n_bits) * 7
        assert np.array_equal(bit_reverse_permutation(bit_reverse_permutation(values)), values)

    def test_permutation_preserves_field_type(self, FF) -> None:
        values = FF.Random(8)
        permuted = bit_reverse_permutation(values)
        assert type(permuted) is FF
        assert permuted[1] == values[4]

    def test_non_power_of_two_rejected(self) -> None:
        with pytest.raises(AssertionError):
            bit_reverse_permutation(np.arange(6))

    def test_log2(self) -> None:
        assert log2(1) == 0
        assert log2(65536) == 16
