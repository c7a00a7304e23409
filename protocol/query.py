"""Following FRI queries through successive folding rounds.

A query starts as a natural index into the initial (extended) domain. In
round 0 the verifier opens the coset holding it; every later round opens the
coset holding the folded value, located from the previous round's tree index
alone.
"""

from dataclasses import dataclass, field
from typing import List

from primitives.bit_reverse import bitreverse
from protocol.coset_combiner import CosetCombiner, CosetRange, Offset

# --- Type Aliases ---

QueryIndex = int


# --- Configuration ---

@dataclass
class FriQueryConfig:
    """FRI folding schedule.

    Attributes:
        n_bits_ext: Log2 of the initial (extended) domain size
        fri_round_log_sizes: Log2 domain size of each FRI layer, starting at
            n_bits_ext and strictly decreasing; the last entry is the final
            polynomial's domain
    """
    n_bits_ext: int
    fri_round_log_sizes: List[int]

    def __post_init__(self) -> None:
        sizes = self.fri_round_log_sizes
        if not sizes:
            raise ValueError("fri_round_log_sizes must not be empty")
        if sizes[0] != self.n_bits_ext:
            raise ValueError(
                f"First FRI round must cover the extended domain: {sizes[0]} != {self.n_bits_ext}"
            )
        if sizes[-1] < 0:
            raise ValueError(f"FRI round log sizes must be non-negative, got {sizes[-1]}")
        for prev_bits, curr_bits in zip(sizes, sizes[1:]):
            if curr_bits >= prev_bits:
                raise ValueError(f"FRI round log sizes must strictly decrease: {prev_bits} -> {curr_bits}")

    @property
    def n_rounds(self) -> int:
        """Number of folding rounds (opened layers)."""
        return len(self.fri_round_log_sizes) - 1

    @property
    def collapsing_factors(self) -> List[int]:
        """Log2 of the coset size folded in each round."""
        sizes = self.fri_round_log_sizes
        return [prev_bits - curr_bits for prev_bits, curr_bits in zip(sizes, sizes[1:])]


# --- Query Path ---

@dataclass
class QueryStep:
    """Coset opened for one query in one FRI round."""
    round: int
    domain_bits: int
    collapsing_factor: int
    coset_range: CosetRange
    offset: Offset

    @property
    def tree_index(self) -> int:
        return self.coset_range.start + self.offset


@dataclass
class QueryPath:
    """All openings of one query, plus its position in the final polynomial."""
    natural_index: QueryIndex
    steps: List[QueryStep] = field(default_factory=list)
    final_index: int = 0


def trace_query(natural_index: QueryIndex, config: FriQueryConfig) -> QueryPath:
    """Locate the coset opened in every FRI round for one query."""
    factors = config.collapsing_factors
    sizes = config.fri_round_log_sizes
    path = QueryPath(natural_index=natural_index)

    if config.n_rounds == 0:
        # No folding: the query reads the final polynomial directly
        coset_range, _ = CosetCombiner.get_coset_idx_for_natural_index_extended(
            natural_index, 1 << sizes[0], sizes[0], 0
        )
        path.final_index = coset_range.start
        return path

    coset_range, offset = CosetCombiner.get_coset_idx_for_natural_index_extended(
        natural_index, 1 << sizes[0], sizes[0], factors[0]
    )
    path.steps.append(QueryStep(0, sizes[0], factors[0], coset_range, offset))

    for r in range(1, config.n_rounds):
        prev = path.steps[-1]
        coset_range, offset = CosetCombiner.get_next_layer_coset_idx_extended(
            prev.tree_index, prev.collapsing_factor, factors[r]
        )
        path.steps.append(QueryStep(r, sizes[r], factors[r], coset_range, offset))

    last = path.steps[-1]
    path.final_index = last.tree_index >> last.collapsing_factor
    return path


def trace_queries(queries: List[QueryIndex], config: FriQueryConfig) -> List[QueryPath]:
    """Trace a batch of transcript-derived queries, reduced to the initial domain."""
    domain_size = 1 << config.fri_round_log_sizes[0]
    return [trace_query(q % domain_size, config) for q in queries]


# --- Verification ---

def verify_query_path(path: QueryPath, config: FriQueryConfig) -> bool:
    """Check a traced path against indices recomputed from the natural index.

    The value folded into round r's domain comes from natural index
    n mod 2^bits_r, stored at tree index bitreverse(n mod 2^bits_r, bits_r).
    """
    sizes = config.fri_round_log_sizes
    factors = config.collapsing_factors
    if len(path.steps) != config.n_rounds:
        print(f"ERROR: Query {path.natural_index} has {len(path.steps)} steps, expected {config.n_rounds}")
        return False

    for i, step in enumerate(path.steps):
        bits, cf = sizes[i], factors[i]
        if (step.round, step.domain_bits, step.collapsing_factor) != (i, bits, cf):
            print(f"ERROR: Query {path.natural_index} step {i}: round {step.round}, "
                  f"domain bits {step.domain_bits}, collapsing factor {step.collapsing_factor}, "
                  f"expected round {i}, domain bits {bits}, collapsing factor {cf}")
            return False
        expected = bitreverse(path.natural_index % (1 << bits), bits)
        if step.tree_index != expected:
            print(f"ERROR: Query {path.natural_index} round {i}: "
                  f"tree index {step.tree_index}, expected {expected}")
            return False
        if (len(step.coset_range) != 1 << cf or step.coset_range.start % (1 << cf) != 0
                or step.coset_range.stop > 1 << bits):
            print(f"ERROR: Query {path.natural_index} round {i}: "
                  f"coset {step.coset_range} is not an aligned coset of size {1 << cf} "
                  f"in domain of size {1 << bits}")
            return False

    final_bits = sizes[-1]
    expected_final = bitreverse(path.natural_index % (1 << final_bits), final_bits)
    if path.final_index != expected_final:
        print(f"ERROR: Query {path.natural_index}: final index {path.final_index}, expected {expected_final}")
        return False
    return True
