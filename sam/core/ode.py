"""Base interface for right-hand sides dx/dt = f(x; parameters)."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

import numpy as np

from sam.core.parameters import ParameterSpec, bind_parameters, describe


class ODE(ABC):
    """
    Base class for the right-hand side of an ensemble ODE.

    Subclasses declare their parameter shape in ``parameters`` (a tuple of
    ParameterSpec) and implement rhs(). Bound values are stored as attributes
    named after each spec, so rhs() reads e.g. ``self.omega``.

    The state passed to rhs() is the flat vector of all units
    (N * d entries, unit after unit).
    """

    parameters: Tuple[ParameterSpec, ...] = ()

    def __init__(self, *args: Any) -> None:
        self.set_parameters(*args)

    @abstractmethod
    def rhs(self, x: np.ndarray, t: float) -> np.ndarray:
        """Right-hand side: dx/dt = rhs(x, t). Same length as x."""
        pass

    def __call__(self, x: np.ndarray, t: float = 0.0) -> np.ndarray:
        return np.asarray(self.rhs(x, t), dtype=float)

    def set_parameters(self, *args: Any) -> None:
        """
        Replace the whole parameter set.

        Raises:
            ParameterShapeError: if args do not match ``parameters``; current
                values are left untouched.
        """
        bound = bind_parameters(self.parameters, args)
        for spec, value in zip(self.parameters, bound):
            setattr(self, spec.name, value)

    def get_parameters(self) -> Dict[str, Any]:
        """Current parameter values by name (vectors copied)."""
        out: Dict[str, Any] = {}
        for spec in self.parameters:
            value = getattr(self, spec.name)
            out[spec.name] = value.copy() if isinstance(value, np.ndarray) else value
        return out

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(describe(self.parameters))})"
