"""
Ensemble state and time integration.

Hierarchy:
  - integrators: fixed-step numerical integration (rk4_step, RK4Integrator)
  - coordinates: spherical transforms and mean fields of a flat ensemble state
  - generic_system: state container (GenericSystem)
  - rk4_system: container advanced with fixed-step RK4 (RK4System)
"""

from sam.system.coordinates import (
    cartesian_to_spherical,
    mean_field,
    mean_field_spherical,
    spherical_to_cartesian,
)
from sam.system.generic_system import GenericSystem
from sam.system.integrators import RK4Integrator, rk4_step
from sam.system.rk4_system import RK4System

__all__ = [
    "RK4Integrator",
    "rk4_step",
    "cartesian_to_spherical",
    "spherical_to_cartesian",
    "mean_field",
    "mean_field_spherical",
    "GenericSystem",
    "RK4System",
]
