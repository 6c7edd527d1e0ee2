import numpy as np
import pytest
from scipy import sparse

from manybody_eth.hubbard import BoundaryCondition, bose_hubbard, bose_hubbard_ref, main
from manybody_eth.spaces import ManyBodyBosonSpace


@pytest.mark.parametrize(
    "length,n",
    [(2, 1), (2, 2), (3, 1), (3, 2), (3, 3), (4, 2), (4, 4), (5, 3)],
)
def test_matches_reference(length, n):
    space = ManyBodyBosonSpace(length, n)
    ham = bose_hubbard(space, 1.3, 0.7, 0.0, 0.0, BoundaryCondition.PBC)
    ref = bose_hubbard_ref(space, 1.3, 0.7, 0.0, 0.0, BoundaryCondition.PBC)
    assert np.max(np.abs((ham - ref).toarray())) < 1.0e-10


def test_matches_reference_hard_core():
    space = ManyBodyBosonSpace(4, 2, 1)
    ham = bose_hubbard(space, 0.9, 0.0)
    ref = bose_hubbard_ref(space, 0.9, 0.0)
    assert np.max(np.abs((ham - ref).toarray())) < 1.0e-10


def test_interaction_diagonal():
    space = ManyBodyBosonSpace(2, 2)
    ham = bose_hubbard(space, 0.0, 1.0, 0.0, 1.0)
    assert np.allclose(ham.toarray(), np.diag([1.0, 2.0, 1.0]))


def test_two_site_hopping():
    space = ManyBodyBosonSpace(2, 1)
    ham = bose_hubbard(space, 1.0, 0.0)
    assert np.allclose(ham.toarray(), [[0.0, -2.0], [-2.0, 0.0]])


def test_three_site_ring_spectrum():
    space = ManyBodyBosonSpace(3, 1)
    ham = bose_hubbard(space, 1.0, 0.0).toarray()
    assert np.allclose(np.linalg.eigvalsh(ham), [-2.0, 1.0, 1.0])


def test_reference_open_chain_spectrum():
    space = ManyBodyBosonSpace(3, 1)
    ham = bose_hubbard_ref(space, 1.0, 0.0, bc=BoundaryCondition.OBC).toarray()
    assert np.allclose(np.linalg.eigvalsh(ham), [-np.sqrt(2.0), 0.0, np.sqrt(2.0)])


def test_full_hamiltonian_is_symmetric_and_translation_invariant():
    space = ManyBodyBosonSpace(5, 3)
    ham = bose_hubbard(space, 1.0, 0.8, 0.4, 0.3).toarray()
    assert np.allclose(ham, ham.T)
    dim = space.dim()
    shift = sparse.coo_matrix(
        (np.ones(dim), ([space.translate(s, 1) for s in range(dim)], list(range(dim)))),
        shape=(dim, dim),
    ).toarray()
    assert np.allclose(shift @ ham, ham @ shift)
    reflect = sparse.coo_matrix(
        (np.ones(dim), ([space.reverse(s) for s in range(dim)], list(range(dim)))),
        shape=(dim, dim),
    ).toarray()
    assert np.allclose(reflect @ ham, ham @ reflect)


def test_tiny_space_gives_zero_matrix():
    space = ManyBodyBosonSpace(1, 3)
    ham = bose_hubbard(space, 1.0, 1.0)
    assert ham.shape == (1, 1)
    assert ham.nnz == 0


def test_open_boundary_rejected():
    space = ManyBodyBosonSpace(3, 2)
    with pytest.raises(ValueError):
        bose_hubbard(space, 1.0, 1.0, bc=BoundaryCondition.OBC)


def test_main_prints_both_hamiltonians(capsys):
    assert main(["2", "2", "1", "1", "1", "0", "0", "0"]) == 0
    out = capsys.readouterr().out
    assert out.count("Nonzeros = 2") == 2
    assert "# Reference Hamiltonian:" in out


def test_main_rejects_wrong_arguments():
    with pytest.raises(SystemExit):
        main(["2", "2"])