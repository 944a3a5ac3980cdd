"""State container for an ensemble of N identical units of dimension d."""

import copy
import logging
import numbers
from typing import Any, Callable, List, Tuple, Union

import numpy as np

from sam.core.ode import ODE
from sam.exceptions import LengthError
from sam.system.coordinates import (
    cartesian_to_spherical,
    mean_field,
    mean_field_spherical,
)

logger = logging.getLogger(__name__)


def _positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    return int(value)


class GenericSystem:
    """
    Ensemble of N units with d coordinates each, driven by an ODE.

    Holds the flat position vector (length N * d), the simulation time and its
    own ODE instance. Copies are deep: position, time and ODE parameters are
    never shared between instances.

    Example:
        >>> system = GenericSystem(HarmonicOscillatorODE, 1, 2, 2.0)
        >>> system.set_position([0.5, 0.1])
        >>> system.get_derivative()
        array([ 0.1, -2. ])
    """

    def __init__(
        self,
        ode: Callable[..., ODE],
        n_units: int,
        dimension: int,
        *parameters: Any,
    ) -> None:
        """
        Args:
            ode: ODE class (or factory) called as ode(*parameters)
            n_units: number of units N
            dimension: coordinates per unit d
            *parameters: ODE parameters, shape as declared by the ODE

        Raises:
            ValueError: if N or d is not a positive integer
            ParameterShapeError: if the parameters do not fit the ODE
        """
        self._n = _positive_int("n_units", n_units)
        self._d = _positive_int("dimension", dimension)
        self._ode = ode(*parameters)
        self._x = np.zeros(self._n * self._d)
        self._t: float = 0.0

    @property
    def ode(self) -> ODE:
        """The owned right-hand side."""
        return self._ode

    def get_position(self) -> np.ndarray:
        """Copy of the flat position vector."""
        return self._x.copy()

    def set_position(self, x: Union[List[float], np.ndarray]) -> None:
        """
        Replace the position vector.

        Raises:
            LengthError: if len(x) != N * d; the position is left unchanged.
        """
        arr = np.asarray(x, dtype=float).ravel()
        if arr.size != self._x.size:
            raise LengthError(
                f"Position must have length {self._x.size} (N={self._n}, d={self._d}), got {arr.size}"
            )
        self._x = arr.copy()

    def get_derivative(self) -> np.ndarray:
        """Evaluate the ODE at the current position and time without integrating."""
        return self.evaluate(self._x.copy(), self._t)

    def get_time(self) -> float:
        return self._t

    def set_time(self, t: float) -> None:
        self._t = float(t)

    def get_dimension(self) -> Tuple[int, int]:
        """(N, d)."""
        return self._n, self._d

    def resize(self, n_units: int) -> None:
        """
        Change the number of units. The position vector is reallocated to
        n_units * d and zero-filled; previous values are discarded.
        """
        n = _positive_int("n_units", n_units)
        logger.debug("Resizing system from %d to %d units (d=%d)", self._n, n, self._d)
        self._n = n
        self._x = np.zeros(self._n * self._d)

    def set_parameters(self, *args: Any) -> None:
        """Replace the ODE parameters (see ODE.set_parameters)."""
        self._ode.set_parameters(*args)

    def get_position_spherical(self) -> np.ndarray:
        """Position with every unit in generalized spherical coordinates."""
        return cartesian_to_spherical(self._x, self._d)

    def calculate_mean_field(self) -> np.ndarray:
        """Cartesian mean of all units, shape (d,)."""
        return mean_field(self._x, self._d)

    def calculate_mean_field_spherical(self) -> np.ndarray:
        """Order parameter: (|Z|, arg Z) for d = 1, spherical mean field otherwise."""
        return mean_field_spherical(self._x, self._d)

    def copy(self) -> "GenericSystem":
        """Independent deep copy (position, time and ODE parameters)."""
        return copy.deepcopy(self)

    def __copy__(self) -> "GenericSystem":
        return self.copy()

    def evaluate(self, x: np.ndarray, t: float) -> np.ndarray:
        """
        Evaluate the ODE at an arbitrary state and time.

        Raises:
            LengthError: if the ODE returns a derivative of a different length.
        """
        dxdt = self._ode(x, t)
        if dxdt.shape != x.shape:
            raise LengthError(
                f"{type(self._ode).__name__} returned a derivative of shape {dxdt.shape}, "
                f"expected {x.shape}"
            )
        return dxdt

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._ode!r}, N={self._n}, d={self._d}, t={self._t})"
