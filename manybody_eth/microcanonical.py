"""Microcanonical energy shells and averages over sorted eigenvalue spectra."""

from __future__ import annotations

import numpy as np


def _lower_edge(eig_vals: np.ndarray, center: float, width: float, start: int) -> int:
    """Scan downwards from ``start`` and return the first index inside the shell."""
    idx = start
    while idx >= 0 and center - eig_vals[idx] <= width:
        idx -= 1
    return idx + 1


def _upper_edge(eig_vals: np.ndarray, center: float, width: float, start: int) -> int:
    """Scan upwards from ``start`` and return the last index inside the shell."""
    idx = start
    while idx < eig_vals.size and eig_vals[idx] - center <= width:
        idx += 1
    return idx - 1


def mc_energy_shell(eig_vals, ndiv: int) -> np.ndarray:
    """Split the spectrum into ``ndiv`` equal energy windows.

    Returns ``ndiv + 1`` indices; window ``j`` holds the eigenvalues with
    indices ``res[j]`` up to (excluding) ``res[j + 1]``.
    """
    if ndiv < 1:
        raise ValueError("ndiv must be positive")
    eig = np.asarray(eig_vals, dtype=float)
    if eig.size == 0:
        raise ValueError("the spectrum is empty")
    ground = eig[0]
    span = eig[-1] - ground
    with np.errstate(divide="ignore", invalid="ignore"):
        scaled = (eig - ground) / span

    bounds = np.zeros(ndiv + 1, dtype=np.int64)
    idx = 0
    for j in range(1, ndiv + 1):
        div = j / ndiv
        while idx < eig.size and scaled[idx] < div:
            idx += 1
        bounds[j] = idx
    return bounds


def shell_dims(shell_centers, shell_width: float, eig_vals) -> np.ndarray:
    """Number of eigenvalues within ``shell_width`` of each shell center.

    The scan for center ``j`` starts at eigenvalue ``j``, so there may not be
    more centers than eigenvalues.
    """
    centers = np.asarray(shell_centers, dtype=float)
    eig = np.asarray(eig_vals, dtype=float)
    if centers.size > eig.size:
        raise ValueError("more shell centers than eigenvalues")
    dims = np.empty(centers.size, dtype=np.int64)
    for j, center in enumerate(centers):
        low = _lower_edge(eig, center, shell_width, j)
        high = _upper_edge(eig, center, shell_width, j)
        dims[j] = high - low + 1
    return dims


def mc_averages(shell_centers, shell_width: float, eig_vals, values) -> np.ndarray:
    """Microcanonical averages of ``values`` (one row per eigenvalue) per shell."""
    centers = np.asarray(shell_centers, dtype=float)
    eig = np.asarray(eig_vals, dtype=float)
    vals = np.asarray(values)
    one_dim = vals.ndim == 1
    if one_dim:
        vals = vals[:, np.newaxis]
    if vals.shape[0] != eig.size:
        raise ValueError("values must have one row per eigenvalue")

    dtype = np.result_type(vals.dtype, float)
    result = np.full((centers.size, vals.shape[1]), np.nan, dtype=dtype)
    for j, center in enumerate(centers):
        low = _lower_edge(eig, center, shell_width, eig.size - 1)
        high = _upper_edge(eig, center, shell_width, 0)
        if high >= low:
            result[j] = vals[low : high + 1].mean(axis=0)
    return result[:, 0] if one_dim else result