"""Many-body Hilbert spaces, symmetry sectors, Bose-Hubbard Hamiltonians and quasi-ETH measures."""

__version__ = "0.1.0"

__all__ = [
    "microcanonical",
    "distribute",
    "spaces",
    "sectors",
    "global_op",
    "eth",
    "hubbard",
]