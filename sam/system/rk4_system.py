"""GenericSystem advanced in time with a fixed-step Runge-Kutta 4 scheme."""

import numbers
from typing import Any, Callable, Optional

from sam.core.ode import ODE
from sam.system.generic_system import GenericSystem
from sam.system.integrators import RK4Integrator


class RK4System(GenericSystem):
    """
    Ensemble integrated with classical RK4 and a fixed step.

    There is no step-size control and no error estimate: integrate(dt, n)
    always performs exactly n steps of size dt.
    """

    def __init__(
        self,
        ode: Callable[..., ODE],
        n_units: int,
        dimension: int,
        *parameters: Any,
        integrator: Optional[Any] = None,
    ) -> None:
        """
        Args:
            ode, n_units, dimension, *parameters: see GenericSystem
            integrator: object with step(f, x, t, dt). Default: RK4.
        """
        super().__init__(ode, n_units, dimension, *parameters)
        self.integrator = integrator or RK4Integrator()

    def integrate(self, dt: float, steps: int = 1) -> None:
        """
        Advance position and time by `steps` steps of size `dt`.

        Args:
            dt: time step (may be negative to integrate backwards)
            steps: number of steps, non-negative integer
        """
        if isinstance(steps, bool) or not isinstance(steps, numbers.Integral) or steps < 0:
            raise ValueError(f"steps must be a non-negative integer, got {steps!r}")
        dt = float(dt)
        x = self._x
        t = self._t
        for _ in range(int(steps)):
            x = self.integrator.step(self.evaluate, x, t, dt)
            t += dt
        self._x = x
        self._t = t
