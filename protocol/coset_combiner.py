"""Natural index <-> coset storage index translation for FRI oracles.

FRI oracles store evaluations in bit-reversed order so that the 2^cf points
folded together in one round sit next to each other (one coset per Merkle
leaf). Reading "the i-th evaluation" therefore means finding the coset that
holds it and the slot inside that coset.

Terminology:
    natural index: position of an evaluation point in natural (unreversed) order
    tree index:    physical storage slot, bitreverse(natural index)
    collapsing factor (cf): log2 of the coset size
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from primitives.bit_reverse import bitreverse

# --- Type Aliases ---

CosetRange = range  # Half-open storage interval [start, start + 2^cf)
Offset = int


# --- Errors ---

class CosetIndexError(ValueError):
    """Invalid parameters passed to coset index translation."""


class IndexOutOfRangeError(CosetIndexError):
    """Natural or tree index is not in [0, domain_size)."""


class DomainSizeMismatchError(CosetIndexError):
    """domain_size is not 2^log_domain_size."""


class CollapsingFactorError(CosetIndexError):
    """Collapsing factor is negative or larger than log_domain_size."""


# --- Precondition Checks ---

def _check_domain(domain_size: int, log_domain_size: int) -> None:
    if log_domain_size < 0 or (1 << log_domain_size) != domain_size:
        raise DomainSizeMismatchError(
            f"domain size {domain_size} does not match log domain size {log_domain_size}"
        )


def _check_index(index: int, domain_size: int) -> None:
    if index < 0 or index >= domain_size:
        raise IndexOutOfRangeError(f"asking for index {index} for domain size {domain_size}")


def _check_collapsing_factor(collapsing_factor: int, log_domain_size: Optional[int] = None) -> None:
    if collapsing_factor < 0:
        raise CollapsingFactorError(f"collapsing factor must be non-negative, got {collapsing_factor}")
    if log_domain_size is not None and collapsing_factor > log_domain_size:
        raise CollapsingFactorError(
            f"collapsing factor {collapsing_factor} exceeds log domain size {log_domain_size}"
        )


def _endpoint_mask(collapsing_factor: int) -> int:
    return (1 << collapsing_factor) - 1


# --- Translator ---

class CosetCombiner:
    """Index translation between natural order and coset-grouped storage."""

    @staticmethod
    def get_coset_idx_for_natural_index(
        natural_index: int,
        domain_size: int,
        log_domain_size: int,
        collapsing_factor: int,
    ) -> CosetRange:
        """Storage range of the coset holding the element at natural_index."""
        _check_domain(domain_size, log_domain_size)
        _check_index(natural_index, domain_size)
        _check_collapsing_factor(collapsing_factor, log_domain_size)

        return CosetCombiner._coset_range(natural_index, log_domain_size, collapsing_factor)

    @staticmethod
    def get_coset_idx_for_natural_index_extended(
        natural_index: int,
        domain_size: int,
        log_domain_size: int,
        collapsing_factor: int,
    ) -> Tuple[CosetRange, Offset]:
        """Storage range of the coset holding natural_index, plus its offset inside it.

        The element itself lives at tree index coset_range.start + offset.
        """
        _check_domain(domain_size, log_domain_size)
        _check_index(natural_index, domain_size)
        _check_collapsing_factor(collapsing_factor, log_domain_size)

        coset_range = CosetCombiner._coset_range(natural_index, log_domain_size, collapsing_factor)
        # Offset is taken from the reversed index, not the natural one
        offset = bitreverse(natural_index, log_domain_size) & _endpoint_mask(collapsing_factor)
        return coset_range, offset

    @staticmethod
    def get_natural_idx_for_coset_index(
        coset_index: int,
        domain_size: int,
        log_domain_size: int,
        collapsing_factor: Optional[int] = None,
    ) -> int:
        """Natural index of the element stored at tree index coset_index.

        Any storage slot is accepted, not only coset starts. The collapsing
        factor does not affect the result: reversal over the full width is its
        own inverse however the slots are grouped.
        """
        _check_domain(domain_size, log_domain_size)
        _check_index(coset_index, domain_size)

        return bitreverse(coset_index, log_domain_size)

    @staticmethod
    def get_next_layer_coset_idx_extended(
        coset_index_start: int,
        collapsing_factor: int,
        next_collapsing_factor: Optional[int] = None,
    ) -> Tuple[CosetRange, Offset]:
        """Coset range and offset in the next FRI layer.

        Folding a coset of 2^collapsing_factor values into one value shifts
        the tree index right by collapsing_factor. The folded index is then
        split by the next layer's coset size (next_collapsing_factor, which
        defaults to collapsing_factor for uniform folding).
        """
        if next_collapsing_factor is None:
            next_collapsing_factor = collapsing_factor
        if coset_index_start < 0:
            raise IndexOutOfRangeError(f"tree index must be non-negative, got {coset_index_start}")
        _check_collapsing_factor(collapsing_factor)
        _check_collapsing_factor(next_collapsing_factor)

        temp = coset_index_start >> collapsing_factor
        endpoint_mask = _endpoint_mask(next_collapsing_factor)

        new_start = temp & ~endpoint_mask
        offset = temp & endpoint_mask
        return range(new_start, new_start + (1 << next_collapsing_factor)), offset

    # --- Internal ---

    @staticmethod
    def _coset_range(natural_index: int, log_domain_size: int, collapsing_factor: int) -> CosetRange:
        """Clear the top cf bits before reversal, i.e. the low cf bits after it."""
        endpoint_mask = _endpoint_mask(collapsing_factor)
        mask = ~(endpoint_mask << (log_domain_size - collapsing_factor))

        start = bitreverse(natural_index & mask, log_domain_size)
        return range(start, start + (1 << collapsing_factor))


# --- Layout Configuration ---

@dataclass(frozen=True)
class CosetLayout:
    """Coset layout of one oracle: domain of 2^log_domain_size points, cosets of 2^collapsing_factor.

    Binds the protocol-wide parameters once so callers do not thread
    (domain_size, log_domain_size, collapsing_factor) through every call.
    """

    log_domain_size: int
    collapsing_factor: int

    def __post_init__(self) -> None:
        if self.log_domain_size < 0:
            raise DomainSizeMismatchError(
                f"log domain size must be non-negative, got {self.log_domain_size}"
            )
        _check_collapsing_factor(self.collapsing_factor, self.log_domain_size)

    @property
    def domain_size(self) -> int:
        return 1 << self.log_domain_size

    @property
    def coset_size(self) -> int:
        return 1 << self.collapsing_factor

    @property
    def n_cosets(self) -> int:
        """Number of cosets, i.e. Merkle leaves, in the oracle."""
        return 1 << (self.log_domain_size - self.collapsing_factor)

    def coset_range_for(self, natural_index: int) -> CosetRange:
        return CosetCombiner.get_coset_idx_for_natural_index(
            natural_index, self.domain_size, self.log_domain_size, self.collapsing_factor
        )

    def coset_for(self, natural_index: int) -> Tuple[CosetRange, Offset]:
        return CosetCombiner.get_coset_idx_for_natural_index_extended(
            natural_index, self.domain_size, self.log_domain_size, self.collapsing_factor
        )

    def natural_index_of(self, tree_index: int) -> int:
        return CosetCombiner.get_natural_idx_for_coset_index(
            tree_index, self.domain_size, self.log_domain_size, self.collapsing_factor
        )

    def coset_of_tree_index(self, tree_index: int) -> int:
        """Leaf number (row of the coset layout) holding tree_index."""
        _check_index(tree_index, self.domain_size)
        return tree_index >> self.collapsing_factor
