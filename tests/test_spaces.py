from math import comb

import numpy as np
import pytest

from manybody_eth.spaces import (
    ManyBodyBosonSpace,
    ManyBodyFermionSpace,
    ManyBodySpinSpace,
)


def _sample_states(space, count=60):
    dim = space.dim()
    return range(0, dim, max(1, dim // count))


def _check_space(space, sys_size):
    assert space.sys_size == sys_size
    for state in _sample_states(space):
        config = space.ordinal_to_config(state)
        assert len(config) == sys_size
        assert space.config_to_ordinal(config) == state
        for pos in range(sys_size):
            assert space.loc_state(state, pos) == config[pos]
        if sys_size:
            for trans in range(sys_size):
                moved = space.translate(state, trans)
                assert 0 <= moved < space.dim()
                assert np.array_equal(space.ordinal_to_config(moved), np.roll(config, trans))
            rev = space.reverse(state)
            assert np.array_equal(space.ordinal_to_config(rev), config[::-1])
            assert space.reverse(rev) == state


def _check_trans_classes(space):
    periods = [space.trans_period(c) for c in range(space.trans_eq_dim())]
    assert sum(periods) == space.dim()
    for c, period in enumerate(periods):
        assert space.sys_size % period == 0
        rep = space.trans_eq_class_rep(c)
        orbit = {space.translate(rep, t) for t in range(space.sys_size)}
        assert len(orbit) == period
        assert min(orbit) == rep


def test_spin_default():
    space = ManyBodySpinSpace()
    assert space.dim() == 0
    _check_space(space, 0)


def test_spin_zero_sites():
    space = ManyBodySpinSpace(0, 2)
    assert space.dim() == 0
    _check_space(space, 0)


@pytest.mark.parametrize("sys_size", range(1, 21))
def test_spin_space(sys_size):
    space = ManyBodySpinSpace(sys_size, 2)
    assert space.dim() == 2**sys_size
    _check_space(space, sys_size)


def test_spin_translate_composition():
    space = ManyBodySpinSpace(5, 3)
    for state in _sample_states(space):
        assert space.translate(space.translate(state, 2), 4) == space.translate(state, 1)


@pytest.mark.parametrize("sys_size", [1, 4, 6])
def test_spin_trans_classes(sys_size):
    _check_trans_classes(ManyBodySpinSpace(sys_size, 2))


def test_boson_default():
    space = ManyBodyBosonSpace()
    assert space.dim() == 0
    _check_space(space, 0)


@pytest.mark.parametrize("n", range(4, 12))
def test_boson_dims(n):
    assert ManyBodyBosonSpace(n, n).dim() == comb(2 * n - 1, n)
    assert ManyBodyBosonSpace(n, n, 1).dim() == comb(n, n)


@pytest.mark.parametrize("n", range(4, 8))
def test_boson_space(n):
    for space in (ManyBodyBosonSpace(n, n), ManyBodyBosonSpace(n, n, 1)):
        _check_space(space, n)
        for state in _sample_states(space):
            config = space.ordinal_to_config(state)
            assert config.sum() == n
            assert config.max() <= space.max_occupation


def test_boson_partial_max():
    space = ManyBodyBosonSpace(5, 4, 2)
    configs = {tuple(space.ordinal_to_config(s)) for s in range(space.dim())}
    assert len(configs) == space.dim()
    assert all(max(c) <= 2 and sum(c) == 4 for c in configs)
    _check_trans_classes(space)


def test_fermion_default():
    space = ManyBodyFermionSpace()
    assert space.dim() == 0
    _check_space(space, 0)


@pytest.mark.parametrize("n", range(4, 12))
def test_fermion_dims(n):
    assert ManyBodyFermionSpace(2 * n, n).dim() == comb(2 * n, n)


@pytest.mark.parametrize("n", range(4, 7))
def test_fermion_space(n):
    space = ManyBodyFermionSpace(2 * n, n)
    _check_space(space, 2 * n)
    for state in _sample_states(space):
        config = space.ordinal_to_config(state)
        assert set(config.tolist()) <= {0, 1}
        assert config.sum() == n


def test_fermion_trans_classes():
    _check_trans_classes(ManyBodyFermionSpace(8, 4))


def test_errors():
    spin = ManyBodySpinSpace(3, 2)
    with pytest.raises(IndexError):
        spin.ordinal_to_config(8)
    with pytest.raises(ValueError):
        spin.translate(0, 3)
    with pytest.raises(ValueError):
        spin.config_to_ordinal([0, 2, 0])

    boson = ManyBodyBosonSpace(3, 2)
    with pytest.raises(ValueError):
        boson.config_to_ordinal([1, 0, 0])
    with pytest.raises(IndexError):
        boson.reverse(boson.dim())

    fermion = ManyBodyFermionSpace(4, 2)
    with pytest.raises(ValueError):
        fermion.config_to_ordinal([2, 0, 0, 0])
    with pytest.raises(IndexError):
        fermion.loc_state(0, 4)