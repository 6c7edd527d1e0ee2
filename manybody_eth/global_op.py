"""Translation-invariant operators built from a local term, restricted to a sector."""

from __future__ import annotations

import numpy as np
from scipy import sparse

from .sectors import Sector


def construct_global_op(loc_op, sector: Sector) -> np.ndarray:
    """Matrix of ``loc_op`` acting on the lowest sites, in the basis of ``sector``.

    ``loc_op`` acts on the lowest digits of a total-space state number
    (``state % loc_op.shape[0]``) and as the identity on the rest. The
    result is made Hermitian from its upper triangle.
    """
    loc = np.asarray(loc_op, dtype=complex)
    if loc.ndim != 2 or loc.shape[0] != loc.shape[1] or loc.shape[0] == 0:
        raise ValueError("loc_op must be a non-empty square matrix")
    dim = sector.dim()
    if dim == 0:
        return np.zeros((0, 0), dtype=complex)

    basis = sector.basis
    n_total = basis.shape[0]
    d_loc = loc.shape[0]
    n_res = -(-n_total // d_loc)
    full = sparse.kron(
        sparse.identity(n_res, dtype=complex, format="csr"),
        sparse.csr_matrix(loc),
        format="csr",
    )[:n_total, :n_total]
    reduced = (basis.conj().T @ (full @ basis)).toarray()
    upper = np.triu(reduced, 1)
    return upper + upper.conj().T + np.diag(reduced.diagonal().real).astype(complex)


def ising_local_hamiltonian(jx: float, bz: float, bx: float) -> np.ndarray:
    """Two-site term ``Jx sx sx + Bz sz + Bx sx`` of the transverse-field Ising chain."""
    return np.array(
        [
            [bz, 0, bx, jx],
            [0, bz, jx, bx],
            [bx, jx, -bz, 0],
            [jx, bx, 0, -bz],
        ],
        dtype=complex,
    )