"""
Per-unit coordinate transforms and ensemble mean fields.

All functions take the flat state of an ensemble (N * d values, unit after
unit) together with the per-unit dimension d.

Generalized spherical coordinates for a unit (x_1, ..., x_d), d >= 2:
  r       = |x|
  theta_k = atan2(|(x_{k+1}, ..., x_d)|, x_k)   k = 1 .. d-2, in [0, pi]
  theta_  = atan2(x_d, x_{d-1})                 last angle, in [0, 2 pi)
For d = 1 the coordinate is returned unchanged.
"""

import numpy as np

TWO_PI = 2.0 * np.pi


def _units(x: np.ndarray, dimension: int) -> np.ndarray:
    """Reshape a flat ensemble state to (N, d)."""
    if dimension <= 0:
        raise ValueError(f"dimension must be positive, got {dimension}")
    x = np.asarray(x, dtype=float).ravel()
    if x.size % dimension != 0:
        raise ValueError(f"State of length {x.size} is not a multiple of dimension {dimension}")
    return x.reshape(-1, dimension)


def cartesian_to_spherical(x: np.ndarray, dimension: int) -> np.ndarray:
    """
    Convert every unit of a flat state to generalized spherical coordinates.

    Args:
        x: flat state (N * d,)
        dimension: per-unit dimension d

    Returns:
        Flat array (N * d,) of (r, theta_1, ..., theta_{d-1}) per unit.
    """
    units = _units(x, dimension)
    if dimension == 1:
        return units.ravel().copy()

    out = np.empty_like(units)
    out[:, 0] = np.linalg.norm(units, axis=1)
    # tail[:, k] = |(x_{k+1}, ..., x_d)|
    tail = np.sqrt(np.cumsum(units[:, ::-1] ** 2, axis=1)[:, ::-1])
    for k in range(dimension - 2):
        out[:, k + 1] = np.arctan2(tail[:, k + 1], units[:, k])
    out[:, -1] = np.mod(np.arctan2(units[:, -1], units[:, -2]), TWO_PI)
    return out.ravel()


def spherical_to_cartesian(s: np.ndarray, dimension: int) -> np.ndarray:
    """Inverse of cartesian_to_spherical."""
    units = _units(s, dimension)
    if dimension == 1:
        return units.ravel().copy()

    r = units[:, 0]
    angles = units[:, 1:]
    out = np.empty_like(units)
    sin_prod = r.copy()
    for k in range(dimension - 1):
        out[:, k] = sin_prod * np.cos(angles[:, k])
        sin_prod = sin_prod * np.sin(angles[:, k])
    out[:, -1] = sin_prod
    return out.ravel()


def mean_field(x: np.ndarray, dimension: int) -> np.ndarray:
    """Componentwise mean over units, shape (d,)."""
    return _units(x, dimension).mean(axis=0)


def mean_field_spherical(x: np.ndarray, dimension: int) -> np.ndarray:
    """
    Order parameter of the ensemble.

    For d = 1 units are phases and the result is (|Z|, arg Z) with
    Z = mean(exp(i x_j)), phase in [0, 2 pi). For d >= 2 it is the spherical
    form of the Cartesian mean field.
    """
    if dimension == 1:
        z = np.mean(np.exp(1j * _units(x, 1)[:, 0]))
        return np.array([np.abs(z), np.mod(np.angle(z), TWO_PI)])
    return cartesian_to_spherical(mean_field(x, dimension), dimension)
