"""Core: right-hand side interface, parameter shapes and crossing history."""

from sam.core.history import CrossingHistory
from sam.core.ode import ODE
from sam.core.parameters import ParameterSpec, bind_parameters

__all__ = ["ODE", "ParameterSpec", "bind_parameters", "CrossingHistory"]
