"""Bose-Hubbard Hamiltonians on a periodic chain, and a command to print them."""

from __future__ import annotations

import argparse
import enum
import logging
import math
import time

import numpy as np
from scipy import sparse

from .spaces import ManyBodyBosonSpace

logger = logging.getLogger(__name__)


class BoundaryCondition(enum.Enum):
    """Open or periodic chain."""

    OBC = "obc"
    PBC = "pbc"


def _hopping(space, state, config, target, source, cap):
    """Apply ``b†_target b_source`` to a basis state; ``None`` if it vanishes."""
    n_source = int(config[source])
    if n_source == 0:
        return None
    if target == source:
        return state, float(n_source)
    n_target = int(config[target])
    if n_target + 1 > cap:
        return None
    moved = config.copy()
    moved[source] -= 1
    moved[target] += 1
    return space.config_to_ordinal(moved), math.sqrt(n_source * (n_target + 1))


def _cap(space) -> int:
    cap = getattr(space, "max_occupation", None)
    return cap if cap is not None else getattr(space, "n_particles", 0)


def bose_hubbard(
    space: ManyBodyBosonSpace,
    j1: float,
    u1: float,
    j2: float = 0.0,
    u2: float = 0.0,
    bc: BoundaryCondition = BoundaryCondition.PBC,
) -> sparse.csr_matrix:
    """Hamiltonian with nearest (``j1``) and next-nearest (``j2``) hopping,
    on-site interaction ``u1`` and nearest-neighbour interaction ``u2``.

    Only periodic chains are supported. A space of dimension at most one
    yields the zero matrix.
    """
    if bc is not BoundaryCondition.PBC:
        raise ValueError("open boundary conditions are not supported")
    dim = space.dim()
    length = space.sys_size
    logger.debug("Hamiltonian: L=%d, N=%d, dim=%d", length, space.n_particles, dim)
    if dim <= 1:
        return sparse.csr_matrix((dim, dim), dtype=float)

    cap = _cap(space)
    rows: list[int] = []
    cols: list[int] = []
    vals: list[float] = []
    diag = np.zeros(dim, dtype=float)
    for state in range(dim):
        config = space.ordinal_to_config(state)
        for pos in range(length):
            for dist, amplitude in ((1, j1), (2, j2)):
                if amplitude == 0:
                    continue
                hop = _hopping(space, state, config, pos, (pos + dist) % length, cap)
                if hop is None:
                    continue
                out, coeff = hop
                rows.append(out)
                cols.append(state)
                vals.append(-amplitude * coeff)
        occ = config.astype(float)
        diag[state] = np.sum(u1 * occ * (occ - 1) / 2.0 + u2 * occ * np.roll(occ, -1))

    kinetic = sparse.coo_matrix((vals, (rows, cols)), shape=(dim, dim)).tocsr()
    result = (kinetic + kinetic.T + sparse.diags(diag)).tocsr()
    result.eliminate_zeros()
    result.sort_indices()
    logger.debug("Hamiltonian done: nonzeros=%d", result.nnz)
    return result


def bose_hubbard_ref(
    space: ManyBodyBosonSpace,
    t1: float,
    u1: float,
    t2: float = 0.0,
    u2: float = 0.0,
    bc: BoundaryCondition = BoundaryCondition.PBC,
) -> sparse.csr_matrix:
    """Straightforward dense construction with nearest-neighbour hopping ``t1``
    and on-site interaction ``u1``; ``t2`` and ``u2`` are not used.
    """
    dim = space.dim()
    length = space.sys_size
    cap = _cap(space)
    res = np.zeros((dim, dim), dtype=float)

    bonds = [(site - 1, site) for site in range(1, length)]
    if bc is BoundaryCondition.PBC and length > 0:
        bonds.append((length - 1, 0))

    for state in range(dim):
        config = space.ordinal_to_config(state)
        for a, b in bonds:
            for source, target in ((a, b), (b, a)):
                hop = _hopping(space, state, config, target, source, cap)
                if hop is not None:
                    out, coeff = hop
                    res[out, state] += -t1 * coeff
        occ = config.astype(float)
        res[state, state] += np.sum(u1 * occ * (occ - 1) / 2.0)

    result = sparse.csr_matrix(res)
    result.eliminate_zeros()
    return result


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Print the Bose-Hubbard Hamiltonian and its reference construction."
    )
    for name in ("LMax", "LMin", "NMax", "NMin"):
        parser.add_argument(name, type=int)
    for name in ("t1", "V1", "t2", "V2"):
        parser.add_argument(name, type=float)
    return parser


def main(argv=None) -> int:
    """Build and print both Hamiltonians for every chain length and filling."""
    args = _parser().parse_args(argv)
    for length in range(args.LMin, args.LMax + 1):
        for n in range(args.NMin, min(args.NMax, length) + 1):
            space = ManyBodyBosonSpace(length, n)
            for label, build in (("Hamiltonian", bose_hubbard), ("Reference Hamiltonian", bose_hubbard_ref)):
                start = time.perf_counter()
                ham = build(space, args.t1, args.V1, args.t2, args.V2, BoundaryCondition.PBC)
                elapsed = time.perf_counter() - start
                print(
                    f"# Constructed the Hamiltonian: Nonzeros = {ham.nnz}, "
                    f"elapsed = {elapsed} (sec)"
                )
                print(f"# {label}:\n{ham.toarray()}")
    return 0