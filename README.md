# manybody_eth

Building blocks for exact-diagonalization studies of one-dimensional lattice
models with periodic boundary conditions.

## Modules

- `manybody_eth.spaces` — many-body Hilbert spaces on a chain:
  `ManyBodySpinSpace(sys_size, dim_loc)`,
  `ManyBodyBosonSpace(sys_size, n_bosons, max_occupation=None)` and
  `ManyBodyFermionSpace(sys_size, n_fermions)`. All share the
  `ManyBodySpace` interface: `dim()`, `loc_state()`, `ordinal_to_config()`,
  `config_to_ordinal()`, `translate()`, `reverse()`, and the translation
  classes `trans_eq_dim()`, `trans_eq_class_rep()`, `trans_period()`.
  Out-of-range states raise `IndexError`, invalid configurations and
  translations raise `ValueError`.
- `manybody_eth.sectors` — symmetry-adapted bases stored as sparse CSC
  matrices (`Sector.basis`): `TransSector(space, momentum)`,
  `ParitySector(space, parity)` and `TransParitySector(space, parity)`
  (zero momentum plus reflection). `Sector` offers `dim()`, `dim_tot()`,
  `period(j)` and `rep_state(j, trans)`.
- `manybody_eth.global_op` — `construct_global_op(loc_op, sector)` returns
  the matrix, in the basis of `sector`, of a local operator acting on the
  lowest sites (the lowest digits of the state number) and as the identity
  elsewhere, made Hermitian from its upper triangle.
  `ising_local_hamiltonian(jx, bz, bx)` gives the two-site
  `Jx sx sx + Bz sz + Bx sx` term.
- `manybody_eth.hubbard` — the periodic Bose–Hubbard Hamiltonian
  `bose_hubbard(space, j1, u1, j2, u2, bc)` with nearest and next-nearest
  hopping, on-site and nearest-neighbour interaction, and a dense reference
  construction `bose_hubbard_ref(space, t1, u1, t2, u2, bc)` that uses only
  nearest-neighbour hopping and on-site interaction. Only
  `BoundaryCondition.PBC` is accepted by `bose_hubbard`; anything else raises
  `ValueError`.
- `manybody_eth.microcanonical` — `mc_energy_shell(eig_vals, ndiv)` splits a
  sorted spectrum into equal energy windows, `shell_dims(...)` counts the
  eigenvalues within a shell width of each center, and `mc_averages(...)`
  averages per-eigenstate values over each shell.
- `manybody_eth.eth` — `eth_measure_sq(eig_vecs, eig_vals, operators, basis,
  shell_width)` sums, over the given operators (optionally as
  `(matrix, weight)` pairs), the squared deviation of each eigenstate
  expectation value from its microcanonical shell average.
  `eth_sum_rule(shell_dimensions)` gives `1 - 1/d`, the value this sum takes
  over a complete operator basis.
- `manybody_eth.distribute` — `distribute_blocks(blocks, ndev)` shares blocks
  of work among devices so that their costs (size to the power 1.5) are
  balanced; it returns one `Assignment` per device and a table of block sizes,
  counts and costs.

## Installation

```
pip install .
```

For the tests: `pip install .[test]`, then `pytest`.

## Example

```python
import numpy as np
from manybody_eth.spaces import ManyBodySpinSpace
from manybody_eth.sectors import TransSector
from manybody_eth.global_op import construct_global_op, ising_local_hamiltonian
from manybody_eth.microcanonical import shell_dims
from manybody_eth.eth import eth_sum_rule

space = ManyBodySpinSpace(8, 2)
sector = TransSector(space, 0)
h = construct_global_op(ising_local_hamiltonian(1.0, 0.9, 0.8), sector)
energies, states = np.linalg.eigh(h)

width = 0.1 * (energies[-1] - energies[0])
dims = shell_dims(energies, width, energies)
print(dims)
print(eth_sum_rule(dims))
```

## Command

`manybody-eth-show-hamiltonian` builds the periodic Bose–Hubbard Hamiltonian
with `bose_hubbard` and with `bose_hubbard_ref` for every chain length from
`LMin` to `LMax` and every particle number from `NMin` to `min(NMax, L)`, and
prints the number of nonzeros, the build time and the dense matrix of each:

```
manybody-eth-show-hamiltonian LMax LMin NMax NMin t1 U1 t2 U2
```

## What this package does not do

- It has no spaces of m-body operators; `eth_measure_sq` works on whatever
  operator matrices the caller supplies.
- It has no Fermi–Hubbard Hamiltonian and no level-spacing-ratio statistics.
- It offers no command that computes quasi-ETH measures over a range of
  system sizes, and it does not read or write result files.
- Open boundary conditions are not supported by `bose_hubbard`.