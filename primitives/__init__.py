"""Primitives - Low-level index building blocks."""

from primitives.bit_reverse import (
    bit_reverse_indices,
    bit_reverse_permutation,
    bitreverse,
    log2,
)

__all__ = [
    "bitreverse",
    "bit_reverse_indices",
    "bit_reverse_permutation",
    "log2",
]
