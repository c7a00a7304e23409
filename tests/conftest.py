"""
Pytest configuration for coset index tests.
"""

import sys
from pathlib import Path

import galois
import pytest

# Add the repository root to the path so absolute imports work
# (tests/ is inside the repository root, so parent is the root)
root_dir = Path(__file__).parent.parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))

GOLDILOCKS_PRIME = 0xFFFFFFFF00000001


@pytest.fixture(scope="session")
def FF():
    """Goldilocks base field, for oracles holding real field elements."""
    return galois.GF(GOLDILOCKS_PRIME)
