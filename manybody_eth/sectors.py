"""Symmetry sectors (translation, parity, both) of many-body Hilbert spaces."""

from __future__ import annotations

import numpy as np
from scipy import sparse

from .spaces import ManyBodySpace


def _csc_from_columns(n_rows: int, columns) -> sparse.csc_matrix:
    """Build a complex CSC matrix from ``(rows, values)`` pairs, one per column."""
    indptr = [0]
    indices: list[int] = []
    data: list[complex] = []
    for rows, values in columns:
        rows = np.asarray(rows, dtype=np.int64)
        values = np.asarray(values, dtype=complex)
        order = np.argsort(rows, kind="stable")
        indices.extend(rows[order].tolist())
        data.extend(values[order].tolist())
        indptr.append(len(indices))
    return sparse.csc_matrix(
        (
            np.array(data, dtype=complex),
            np.array(indices, dtype=np.int64),
            np.array(indptr, dtype=np.int64),
        ),
        shape=(n_rows, len(columns)),
    )


class Sector:
    """A subspace of ``total_space`` spanned by the columns of ``basis``."""

    def __init__(self, total_space: ManyBodySpace, basis: sparse.spmatrix) -> None:
        self.total_space = total_space
        basis = sparse.csc_matrix(basis, dtype=complex)
        basis.sort_indices()
        self.basis = basis

    def dim(self) -> int:
        """Number of basis vectors of the sector."""
        return self.basis.shape[1]

    def dim_tot(self) -> int:
        """Dimension of the enclosing space."""
        return self.basis.shape[0]

    def period(self, j: int) -> int:
        """Number of total-space states that make up basis vector ``j``."""
        if not 0 <= j < self.dim():
            raise IndexError(f"basis vector {j} out of range for dimension {self.dim()}")
        return int(self.basis.indptr[j + 1] - self.basis.indptr[j])

    def rep_state(self, j: int, trans: int = 0) -> int:
        """The ``trans``-th (cyclically) total-space state in basis vector ``j``."""
        period = self.period(j)
        return int(self.basis.indices[self.basis.indptr[j] + trans % period])


class TransSector(Sector):
    """States of crystal momentum ``2 pi momentum / L`` on a periodic chain."""

    def __init__(self, total_space: ManyBodySpace, momentum: int = 0) -> None:
        self.momentum = int(momentum)
        length = total_space.sys_size
        columns = []
        if length:
            for eq_class in range(total_space.trans_eq_dim()):
                period = total_space.trans_period(eq_class)
                if (period * self.momentum) % length:
                    continue
                rep = total_space.trans_eq_class_rep(eq_class)
                shifts = np.arange(period)
                rows = [total_space.translate(rep, int(t)) for t in shifts]
                values = np.exp(-1j * np.pi * (2 * self.momentum * shifts) / length) / np.sqrt(
                    period
                )
                columns.append((rows, values))
        super().__init__(total_space, _csc_from_columns(total_space.dim(), columns))


class TransParitySector(Sector):
    """Zero-momentum states that are even (``parity=+1``) or odd (``-1``) under reflection."""

    def __init__(self, total_space: ManyBodySpace, parity: int = 1) -> None:
        self.momentum = 0
        self.parity = int(parity)
        columns = []
        if total_space.sys_size:
            if self.parity not in (1, -1):
                raise ValueError(f"parity must be either +1 or -1, got {parity}")
            columns = self._columns(total_space)
        super().__init__(total_space, _csc_from_columns(total_space.dim(), columns))

    def _columns(self, space: ManyBodySpace) -> list:
        class_of = np.empty(space.dim(), dtype=np.int64)
        for eq_class in range(space.trans_eq_dim()):
            rep = space.trans_eq_class_rep(eq_class)
            for trans in range(space.trans_period(eq_class)):
                class_of[space.translate(rep, trans)] = eq_class

        eigens: list[int] = []
        pairs: list[tuple[int, int]] = []
        for eq_class in range(space.trans_eq_dim()):
            rev_class = int(class_of[space.reverse(space.trans_eq_class_rep(eq_class))])
            if eq_class > rev_class:
                continue
            if eq_class == rev_class:
                eigens.append(eq_class)
            else:
                pairs.append((eq_class, rev_class))

        columns = []
        for eq_class, rev_class in pairs:
            period = space.trans_period(eq_class)
            norm = np.sqrt(2.0 * period)
            rep = space.trans_eq_class_rep(eq_class)
            rev_rep = space.trans_eq_class_rep(rev_class)
            rows = [space.translate(rep, t) for t in range(period)]
            rows += [space.translate(rev_rep, t) for t in range(period)]
            values = [1.0 / norm] * period + [self.parity / norm] * period
            columns.append((rows, values))

        if self.parity == 1:
            for eq_class in eigens:
                period = space.trans_period(eq_class)
                rep = space.trans_eq_class_rep(eq_class)
                rows = [space.translate(rep, t) for t in range(period)]
                columns.append((rows, [1.0 / np.sqrt(period)] * period))
        return columns


class ParitySector(Sector):
    """States that are even (``parity=+1``) or odd under reflection of the chain."""

    def __init__(self, total_space: ManyBodySpace, parity: int = 1) -> None:
        self.parity = int(parity)
        columns = []
        if total_space.sys_size:
            eigen_cols = []
            pair_cols = []
            inv_sqrt2 = 1.0 / np.sqrt(2.0)
            for state in range(total_space.dim()):
                reversed_state = total_space.reverse(state)
                if reversed_state == state and self.parity == 1:
                    eigen_cols.append(([state], [1.0]))
                elif reversed_state > state:
                    pair_cols.append(
                        ([state, reversed_state], [inv_sqrt2, self.parity * inv_sqrt2])
                    )
            columns = eigen_cols + pair_cols
        super().__init__(total_space, _csc_from_columns(total_space.dim(), columns))