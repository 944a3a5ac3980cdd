"""
Fixed-step integrators: x_{n+1} = step(f, x_n, t_n, dt).

Pure numerical level: no dependency on GenericSystem. The same step is used to
advance a system in time and, in sam.analysis.henon, to advance the
reformulated system along the crossing coordinate.
"""

from typing import Callable

import numpy as np

# Type for a right-hand side: (x, t) -> dx/dt
RHS = Callable[[np.ndarray, float], np.ndarray]


def rk4_step(f: RHS, x: np.ndarray, t: float, dt: float) -> np.ndarray:
    """Runge-Kutta 4, order 4."""
    k1 = f(x, t)
    k2 = f(x + 0.5 * dt * k1, t + 0.5 * dt)
    k3 = f(x + 0.5 * dt * k2, t + 0.5 * dt)
    k4 = f(x + dt * k3, t + dt)
    return x + (dt / 6.0) * (k1 + 2 * k2 + 2 * k3 + k4)


class RK4Integrator:
    """Runge-Kutta 4 integrator, order 4."""

    @staticmethod
    def step(f: RHS, x: np.ndarray, t: float, dt: float) -> np.ndarray:
        return rk4_step(f, x, t, dt)
