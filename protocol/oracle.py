"""FRI oracle storage: evaluations laid out as bit-reversed cosets."""

from dataclasses import dataclass

import numpy as np

from primitives.bit_reverse import bit_reverse_permutation, log2
from protocol.coset_combiner import CosetLayout, CosetRange, IndexOutOfRangeError, Offset


# --- Data Layout ---

def coset_layout(evals: np.ndarray, collapsing_factor: int) -> np.ndarray:
    """Reorder natural-order evaluations into rows of cosets.

    Row k holds tree indices [k * 2^cf, (k + 1) * 2^cf), i.e. one Merkle leaf.
    The returned array has shape (n_cosets, coset_size).
    """
    return _arrange(evals, _layout_for(len(evals), collapsing_factor))


def _layout_for(n: int, collapsing_factor: int) -> CosetLayout:
    """Validate the oracle size and bind it to its coset layout."""
    if n == 0 or (n & (n - 1)) != 0:
        raise ValueError(f"Oracle size must be a positive power of 2, got {n}")
    return CosetLayout(log2(n), collapsing_factor)


def _arrange(evals: np.ndarray, layout: CosetLayout) -> np.ndarray:
    return bit_reverse_permutation(evals).reshape(layout.n_cosets, layout.coset_size)


@dataclass
class CosetOpening:
    """One authenticated read: the whole coset plus the requested slot.

    Attributes:
        coset_range: Tree indices covered by the coset
        offset: Slot of the requested element inside values
        values: The 2^cf stored values of the coset, in tree order
    """
    coset_range: CosetRange
    offset: Offset
    values: np.ndarray

    @property
    def value(self):
        """The requested element."""
        return self.values[self.offset]

    @property
    def tree_index(self) -> int:
        return self.coset_range.start + self.offset


# --- Oracle ---

class CosetOracle:
    """Evaluations of one FRI layer stored in coset-grouped bit-reversed order."""

    def __init__(self, evals: np.ndarray, collapsing_factor: int) -> None:
        """Build the oracle from evaluations given in natural order."""
        self.layout = _layout_for(len(evals), collapsing_factor)
        self.leaves = _arrange(evals, self.layout)

    @property
    def storage(self) -> np.ndarray:
        """Flat view of the stored values, indexed by tree index."""
        return self.leaves.reshape(-1)

    def leaf(self, coset_idx: int) -> np.ndarray:
        """Values of the coset stored as leaf coset_idx."""
        if coset_idx < 0 or coset_idx >= self.layout.n_cosets:
            raise IndexOutOfRangeError(
                f"Coset index {coset_idx} out of range [0, {self.layout.n_cosets})"
            )
        return self.leaves[coset_idx]

    def read_coset(self, natural_index: int) -> CosetOpening:
        """Fetch the coset holding natural_index and locate the element in it."""
        coset_range, offset = self.layout.coset_for(natural_index)
        coset_idx = coset_range.start >> self.layout.collapsing_factor
        return CosetOpening(coset_range=coset_range, offset=offset, values=self.leaves[coset_idx])

    def value_at(self, tree_index: int):
        """Stored value at a tree index."""
        coset_idx = self.layout.coset_of_tree_index(tree_index)
        return self.leaves[coset_idx, tree_index & (self.layout.coset_size - 1)]

    def natural_evals(self) -> np.ndarray:
        """Undo the layout: evaluations back in natural order."""
        return bit_reverse_permutation(self.storage)
