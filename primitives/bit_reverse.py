"""Bit-reversal permutation over power-of-two domains."""

import numpy as np

# --- Scalar ---

def bitreverse(value: int, width: int) -> int:
    """Reverse the lowest `width` bits of value.

    Bit 0 swaps with bit width-1, bit 1 with bit width-2, and so on. Bits at
    or above `width` are ignored. For value < 2^width this is an involution.
    """
    if width < 0:
        raise ValueError(f"width must be non-negative, got {width}")

    result = 0
    for _ in range(width):
        result = (result << 1) | (value & 1)
        value >>= 1
    return result


def log2(size: int) -> int:
    """Compute log2 of size (must be a positive power of 2)."""
    assert size > 0, "Size must be positive"
    assert (size & (size - 1)) == 0, "Size must be power of 2"
    return size.bit_length() - 1


# --- Vectorised ---

def bit_reverse_indices(n_bits: int) -> np.ndarray:
    """Return rev[i] = bitreverse(i, n_bits) for every i < 2^n_bits."""
    if n_bits < 0:
        raise ValueError(f"n_bits must be non-negative, got {n_bits}")
    if n_bits > 62:
        raise ValueError(f"n_bits={n_bits} does not fit an int64 index array")

    idx = np.arange(1 << n_bits, dtype=np.int64)
    rev = np.zeros_like(idx)
    for b in range(n_bits):
        rev |= ((idx >> b) & 1) << (n_bits - 1 - b)
    return rev


def bit_reverse_permutation(values: np.ndarray) -> np.ndarray:
    """Reorder values (along axis 0) into bit-reversed order.

    Works on any numpy array, galois field arrays included; the element type
    is preserved.
    """
    n_bits = log2(len(values))
    return values[bit_reverse_indices(n_bits)]
