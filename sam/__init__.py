"""
sam: simulation and analysis of coupled oscillator ensembles.
"""

__version__ = "0.1.0"

from sam.analysis.henon import (
    CrossingParameters,
    henon_trick,
    integrate_to_crossing,
    integrate_to_crossing_conditional,
    poincare_map,
)
from sam.core.ode import ODE
from sam.core.parameters import ParameterSpec
from sam.system.generic_system import GenericSystem
from sam.system.rk4_system import RK4System

__all__ = [
    "__version__",
    "ODE",
    "ParameterSpec",
    "GenericSystem",
    "RK4System",
    "CrossingParameters",
    "henon_trick",
    "integrate_to_crossing",
    "integrate_to_crossing_conditional",
    "poincare_map",
]
