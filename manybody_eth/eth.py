"""Squared deviation of eigenstate expectation values from microcanonical averages."""

from __future__ import annotations

import numpy as np
from scipy import sparse


def _shell_bounds(eig_vals: np.ndarray, shell_width: float) -> tuple[np.ndarray, np.ndarray]:
    """First and last index of the energy shell centred on each eigenvalue."""
    size = eig_vals.size
    low = np.empty(size, dtype=np.int64)
    high = np.empty(size, dtype=np.int64)
    for j, center in enumerate(eig_vals):
        lo = j
        while lo >= 0 and center - eig_vals[lo] <= shell_width:
            lo -= 1
        hi = j
        while hi < size and eig_vals[hi] - center <= shell_width:
            hi += 1
        low[j] = lo + 1
        high[j] = hi - 1
    return low, high


def _unpack(item):
    """Split an operator entry into ``(operator, weight)``."""
    if isinstance(item, tuple) and len(item) == 2 and np.ndim(item[1]) == 0:
        return item[0], float(item[1])
    return item, 1.0


def _as_basis(basis):
    if basis is None:
        return None
    if hasattr(basis, "basis"):
        basis = basis.basis
    if sparse.issparse(basis):
        return sparse.csc_matrix(basis)
    return np.asarray(basis)


def eth_measure_sq(eig_vecs, eig_vals, operators, basis, shell_width: float) -> np.ndarray:
    """Sum over operators of the squared distance to the microcanonical average.

    ``eig_vecs`` holds one eigenvector per column, written in the basis of a
    sector whose vectors are the columns of ``basis`` (a matrix, an object
    with a ``basis`` attribute, or ``None`` for the identity). Each entry of
    ``operators`` is a matrix on the enclosing space, or a pair
    ``(matrix, weight)``. For every eigenstate ``j`` the result accumulates
    ``weight * (<j|O|j> - <O>_shell(j))**2``, the shell holding the
    eigenvalues within ``shell_width`` of ``eig_vals[j]``.
    """
    vecs = np.asarray(eig_vecs)
    vals = np.asarray(eig_vals, dtype=float)
    if vecs.ndim != 2 or vals.ndim != 1 or vecs.shape[1] != vals.size:
        raise ValueError("eig_vecs must hold one column per eigenvalue")
    if vecs.shape[0] != vals.size:
        raise ValueError("eig_vecs must be square, one row per sector basis vector")

    basis_mat = _as_basis(basis)
    if basis_mat is None:
        states = vecs
    else:
        if basis_mat.ndim != 2 or basis_mat.shape[1] != vecs.shape[0]:
            raise ValueError("basis must have one column per row of eig_vecs")
        states = np.asarray(basis_mat @ vecs)
    dim_tot = states.shape[0]

    low, high = _shell_bounds(vals, shell_width)
    counts = (high - low + 1).astype(float)

    result = np.zeros(vals.size, dtype=float)
    for item in operators:
        op, weight = _unpack(item)
        op = sparse.csr_matrix(op) if sparse.issparse(op) else np.asarray(op)
        if op.shape != (dim_tot, dim_tot):
            raise ValueError(
                f"operator of shape {op.shape} does not act on a space of dimension {dim_tot}"
            )
        applied = np.asarray(op @ states)
        expvals = np.real(np.sum(states.conj() * applied, axis=0))
        cumulative = np.concatenate(([0.0], np.cumsum(expvals)))
        averages = (cumulative[high + 1] - cumulative[low]) / counts
        result += weight * (expvals - averages) ** 2
    return result


def eth_sum_rule(shell_dimensions) -> np.ndarray:
    """Value ``1 - 1/d`` that the measure summed over a complete operator basis takes."""
    dims = np.asarray(shell_dimensions, dtype=float)
    if np.any(dims < 1):
        raise ValueError("shell dimensions must be at least 1")
    return 1.0 - 1.0 / dims