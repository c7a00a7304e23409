"""Protocol - FRI oracle index translation, storage layout and query tracing."""

from protocol.coset_combiner import (
    CollapsingFactorError,
    CosetCombiner,
    CosetIndexError,
    CosetLayout,
    DomainSizeMismatchError,
    IndexOutOfRangeError,
)
from protocol.oracle import CosetOpening, CosetOracle, coset_layout
from protocol.query import (
    FriQueryConfig,
    QueryPath,
    QueryStep,
    trace_queries,
    trace_query,
    verify_query_path,
)

__all__ = [
    # Translation
    "CosetCombiner",
    "CosetLayout",
    # Errors
    "CosetIndexError",
    "IndexOutOfRangeError",
    "DomainSizeMismatchError",
    "CollapsingFactorError",
    # Oracle
    "CosetOracle",
    "CosetOpening",
    "coset_layout",
    # Queries
    "FriQueryConfig",
    "QueryPath",
    "QueryStep",
    "trace_query",
    "trace_queries",
    "verify_query_path",
]
