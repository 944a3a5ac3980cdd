"""
Ready-made right-hand sides.

Subclasses of ODE with rhs() already implemented; pass the class and its
parameters to GenericSystem / RK4System. Useful as reference models and as
templates for new ones.
"""

import numpy as np

from sam.core.ode import ODE
from sam.core.parameters import ParameterSpec, VECTOR


class HarmonicOscillatorODE(ODE):
    """
    Uncoupled harmonic oscillators: d²x/dt² + omega² x = 0.
    Units have d = 2, state [x1, v1, x2, v2, ...]; all share the same omega.
    """

    parameters = (ParameterSpec("omega", description="natural frequency (rad/s)"),)

    def rhs(self, x: np.ndarray, t: float) -> np.ndarray:
        units = np.asarray(x, dtype=float).reshape(-1, 2)
        dxdt = np.empty_like(units)
        dxdt[:, 0] = units[:, 1]
        dxdt[:, 1] = -self.omega ** 2 * units[:, 0]
        return dxdt.ravel()


class CoupledHarmonicOscillatorODE(ODE):
    """
    Chain of N harmonic oscillators with nearest-neighbor coupling.

    State: [x1, v1, x2, v2, ..., xN, vN] (length 2*N).
    Dynamics: for each oscillator i (position xi, velocity vi),
      dxi/dt = vi
      dvi/dt = -omega_i^2 * xi + coupling * (x_{i+1} - 2*xi + x_{i-1})
    with free endpoints (no coupling beyond boundaries).

    Frequencies may be given as one sequence or as one scalar per oscillator:
    CoupledHarmonicOscillatorODE([2, 3], 0.5) == CoupledHarmonicOscillatorODE(2, 3, 0.5).
    """

    parameters = (
        ParameterSpec("omega", VECTOR, "natural frequency per oscillator (rad/s)"),
        ParameterSpec("coupling", description="coupling strength between neighbors"),
    )

    def rhs(self, x: np.ndarray, t: float) -> np.ndarray:
        x = np.asarray(x, dtype=float).ravel()
        n = self.omega.size
        if x.size != 2 * n:
            raise ValueError(f"Expected state size 2*{n}, got {x.size}")
        pos = x[0::2]
        vel = x[1::2]

        # Coupling: (x_{i-1} - 2*x_i + x_{i+1}), zero at boundaries
        lap = np.zeros(n)
        lap[1:] += pos[:-1] - pos[1:]
        lap[:-1] += pos[1:] - pos[:-1]

        dxdt = np.empty(2 * n)
        dxdt[0::2] = vel
        dxdt[1::2] = -self.omega ** 2 * pos + self.coupling * lap
        return dxdt


class KuramotoODE(ODE):
    """
    Kuramoto phase oscillators (d = 1):
      dphi_i/dt = omega_i + (K / N) * sum_j sin(phi_j - phi_i)
    """

    parameters = (
        ParameterSpec("omega", VECTOR, "natural frequency per oscillator (rad/s)"),
        ParameterSpec("coupling", description="global coupling K"),
    )

    def rhs(self, x: np.ndarray, t: float) -> np.ndarray:
        phi = np.asarray(x, dtype=float).ravel()
        if phi.size != self.omega.size:
            raise ValueError(f"Expected state size {self.omega.size}, got {phi.size}")
        # Mean-field form: (K/N) sum_j sin(phi_j - phi_i) = K * Im(Z exp(-i phi_i))
        z = np.mean(np.exp(1j * phi))
        return self.omega + self.coupling * np.imag(z * np.exp(-1j * phi))
