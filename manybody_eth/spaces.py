"""Many-body Hilbert spaces of spins, bosons and fermions on a periodic chain."""

from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property

import numpy as np


class ManyBodySpace(ABC):
    """Basis states of a chain of ``sys_size`` sites, numbered ``0 .. dim() - 1``."""

    def __init__(self, sys_size: int, dim_loc: int) -> None:
        if sys_size < 0 or dim_loc < 0:
            raise ValueError("sys_size and dim_loc must be non-negative")
        self.sys_size = int(sys_size)
        self.dim_loc = int(dim_loc)

    @abstractmethod
    def dim(self) -> int:
        """Number of basis states."""

    @abstractmethod
    def ordinal_to_config(self, state: int) -> np.ndarray:
        """Site occupations of basis state ``state``."""

    @abstractmethod
    def config_to_ordinal(self, config) -> int:
        """Number of the basis state with the given site occupations."""

    def _check_state(self, state: int) -> None:
        if not 0 <= state < self.dim():
            raise IndexError(f"state {state} out of range for dimension {self.dim()}")

    def _check_trans(self, trans: int) -> None:
        if not 0 <= trans < self.sys_size:
            raise ValueError(f"translation {trans} out of range for {self.sys_size} sites")

    def loc_state(self, state: int, pos: int) -> int:
        """Local state at site ``pos`` of basis state ``state``."""
        self._check_state(state)
        if not 0 <= pos < self.sys_size:
            raise IndexError(f"site {pos} out of range")
        return int(self.ordinal_to_config(state)[pos])

    def translate(self, state: int, trans: int) -> int:
        """Shift every site ``l`` of ``state`` to site ``(l + trans) % sys_size``."""
        self._check_trans(trans)
        return self.config_to_ordinal(np.roll(self.ordinal_to_config(state), trans))

    def reverse(self, state: int) -> int:
        """Mirror ``state`` so that site ``l`` goes to site ``sys_size - 1 - l``."""
        return self.config_to_ordinal(self.ordinal_to_config(state)[::-1])

    @cached_property
    def _trans_classes(self) -> tuple[tuple[int, ...], tuple[int, ...]]:
        dim = self.dim()
        seen = np.zeros(dim, dtype=bool)
        reps: list[int] = []
        periods: list[int] = []
        step = 1 % self.sys_size if self.sys_size else 0
        for state in range(dim):
            if seen[state]:
                continue
            seen[state] = True
            period = 1
            current = self.translate(state, step)
            while current != state:
                seen[current] = True
                period += 1
                current = self.translate(current, step)
            reps.append(state)
            periods.append(period)
        return tuple(reps), tuple(periods)

    def trans_eq_dim(self) -> int:
        """Number of classes of states related by translation."""
        return len(self._trans_classes[0])

    def trans_eq_class_rep(self, eq_class: int) -> int:
        """Smallest state in translation class ``eq_class``."""
        return self._trans_classes[0][eq_class]

    def trans_period(self, eq_class: int) -> int:
        """Number of distinct states in translation class ``eq_class``."""
        return self._trans_classes[1][eq_class]


class ManyBodySpinSpace(ManyBodySpace):
    """Chain of spins with ``dim_loc`` local states each; site 0 is the lowest digit."""

    def __init__(self, sys_size: int = 0, dim_loc: int = 0) -> None:
        super().__init__(sys_size, dim_loc)

    def dim(self) -> int:
        return 0 if self.sys_size == 0 else self.dim_loc**self.sys_size

    def loc_state(self, state: int, pos: int) -> int:
        self._check_state(state)
        if not 0 <= pos < self.sys_size:
            raise IndexError(f"site {pos} out of range")
        return (state // self.dim_loc**pos) % self.dim_loc

    def ordinal_to_config(self, state: int) -> np.ndarray:
        self._check_state(state)
        config = np.empty(self.sys_size, dtype=np.int64)
        for pos in range(self.sys_size):
            state, config[pos] = divmod(state, self.dim_loc)
        return config

    def config_to_ordinal(self, config) -> int:
        values = [int(c) for c in config]
        if len(values) < self.sys_size:
            raise ValueError("configuration is shorter than the chain")
        values = values[: self.sys_size]
        if any(not 0 <= v < self.dim_loc for v in values):
            raise ValueError("local state out of range")
        return sum(v * self.dim_loc**pos for pos, v in enumerate(values))

    def translate(self, state: int, trans: int) -> int:
        self._check_state(state)
        self._check_trans(trans)
        base = self.dim_loc**trans
        complement = self.dim() // base
        return state // complement + (state % complement) * base

    def reverse(self, state: int) -> int:
        self._check_state(state)
        dim = self.dim()
        result = 0
        base = 1
        for _ in range(self.sys_size):
            result += (dim // base // self.dim_loc) * ((state // base) % self.dim_loc)
            base *= self.dim_loc
        return result


class _Compositions:
    """Ranking of ``total`` particles on ``length`` sites with at most ``cap`` per site."""

    def __init__(self, length: int, total: int, cap: int) -> None:
        self.length = length
        self.total = total
        self.cap = cap
        table = [[1] + [0] * total]
        for _ in range(length):
            prev = table[-1]
            table.append(
                [sum(prev[t - v] for v in range(min(cap, t) + 1)) for t in range(total + 1)]
            )
        self._table = table

    @property
    def dim(self) -> int:
        return self._table[self.length][self.total] if self.length else 0

    def rank(self, config) -> int:
        values = [int(c) for c in config]
        if len(values) < self.length:
            raise ValueError("configuration is shorter than the chain")
        remaining = self.total
        result = 0
        for pos, value in enumerate(values[: self.length]):
            if not 0 <= value <= min(self.cap, remaining):
                raise ValueError(f"invalid occupation {value} at site {pos}")
            rest = self._table[self.length - pos - 1]
            result += sum(rest[remaining - v] for v in range(value))
            remaining -= value
        if remaining:
            raise ValueError("configuration does not hold the right number of particles")
        return result

    def unrank(self, index: int) -> np.ndarray:
        config = np.zeros(self.length, dtype=np.int64)
        remaining = self.total
        for pos in range(self.length):
            rest = self._table[self.length - pos - 1]
            value = 0
            while index >= rest[remaining - value]:
                index -= rest[remaining - value]
                value += 1
            config[pos] = value
            remaining -= value
        return config


class _CompositionSpace(ManyBodySpace):
    def __init__(self, sys_size: int, dim_loc: int, n_particles: int, cap: int) -> None:
        super().__init__(sys_size, dim_loc)
        if n_particles < 0 or cap < 0:
            raise ValueError("particle number and occupation limit must be non-negative")
        self.n_particles = int(n_particles)
        self.max_occupation = int(cap)
        self._comp = _Compositions(self.sys_size, self.n_particles, self.max_occupation)

    def dim(self) -> int:
        return self._comp.dim

    def ordinal_to_config(self, state: int) -> np.ndarray:
        self._check_state(state)
        return self._comp.unrank(state)

    def config_to_ordinal(self, config) -> int:
        return self._comp.rank(config)

    def translate(self, state: int, trans: int) -> int:
        self._check_state(state)
        return super().translate(state, trans)

    def reverse(self, state: int) -> int:
        self._check_state(state)
        return super().reverse(state)


class ManyBodyBosonSpace(_CompositionSpace):
    """``n_bosons`` bosons on a chain, at most ``max_occupation`` per site."""

    def __init__(
        self, sys_size: int = 0, n_bosons: int = 0, max_occupation: int | None = None
    ) -> None:
        cap = n_bosons if max_occupation is None else max_occupation
        super().__init__(sys_size, n_bosons + 1, n_bosons, cap)


class ManyBodyFermionSpace(_CompositionSpace):
    """``n_fermions`` spinless fermions on a chain."""

    def __init__(self, sys_size: int = 0, n_fermions: int = 0) -> None:
        super().__init__(sys_size, 2, n_fermions, 1)