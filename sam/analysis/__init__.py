"""
Analysis of trajectories: exact Poincaré-section crossings (Hénon trick) and
optional plotting helpers (requires matplotlib).
"""

from sam.analysis.henon import (
    ASCENDING,
    BOTH,
    DESCENDING,
    CrossingParameters,
    henon_trick,
    integrate_to_crossing,
    integrate_to_crossing_conditional,
    poincare_map,
)
from sam.analysis.plotting import plot_poincare_section, plot_return_times

__all__ = [
    "ASCENDING",
    "DESCENDING",
    "BOTH",
    "CrossingParameters",
    "henon_trick",
    "integrate_to_crossing",
    "integrate_to_crossing_conditional",
    "poincare_map",
    "plot_poincare_section",
    "plot_return_times",
]
