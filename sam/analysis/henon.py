"""
Exact location of Poincaré-section crossings with the Hénon trick.

The section is the hyperplane where one coordinate c of the flat state is
zero. The system is stepped with its fixed-step integrator until c changes
sign; from that point the ODE is rewritten with c as independent variable,

    dy/dc = f_y(x) / f_c(x),    dt/dc = 1 / f_c(x),

and a single RK4 step of size -c lands exactly on c = 0. No interpolation is
involved, so the crossing time and state carry the accuracy of the RK4 step.

M. Hénon, "On the numerical computation of Poincaré maps",
Physica D 5, 412-414 (1982).
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np

from sam.core.history import CrossingHistory
from sam.exceptions import CrossingSearchLimitError, SingularCrossingError
from sam.system.generic_system import GenericSystem
from sam.system.integrators import rk4_step
from sam.system.rk4_system import RK4System

logger = logging.getLogger(__name__)

ASCENDING = "ascending"
DESCENDING = "descending"
BOTH = "both"

Crossing = Tuple[float, np.ndarray]
Condition = Callable[[np.ndarray], bool]


@dataclass
class CrossingParameters:
    """
    Selects the section coordinate and bounds the search.

    Attributes:
        n_osc: unit whose coordinate defines the section
        dimension: coordinate of that unit
        direction: "ascending" (negative to non-negative), "descending"
            (positive to non-positive) or "both"
        max_crossings: crossings a conditional search may reject before giving
            up (None = unbounded)
        max_steps: integration steps a single search may take without an
            accepted crossing (None = unbounded; a search on a trajectory
            that stops crossing then never returns)
    """

    n_osc: int = 0
    dimension: int = 0
    direction: str = ASCENDING
    max_crossings: Optional[int] = 1000
    max_steps: Optional[int] = 1_000_000

    def __post_init__(self) -> None:
        if self.direction not in (ASCENDING, DESCENDING, BOTH):
            raise ValueError(
                f"direction must be '{ASCENDING}', '{DESCENDING}' or '{BOTH}', got {self.direction!r}"
            )
        if self.n_osc < 0 or self.dimension < 0:
            raise ValueError("n_osc and dimension must be non-negative")

    def index(self, system: GenericSystem) -> int:
        """Position of the selected coordinate in the flat state of `system`."""
        n, d = system.get_dimension()
        if self.n_osc >= n or self.dimension >= d:
            raise IndexError(
                f"Crossing coordinate (n_osc={self.n_osc}, dimension={self.dimension}) "
                f"outside system of size (N={n}, d={d})"
            )
        return self.n_osc * d + self.dimension

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "CrossingParameters":
        return cls(**config)


def _is_crossing(previous: float, current: float, direction: str) -> bool:
    ascending = previous < 0.0 <= current
    descending = previous > 0.0 >= current
    if direction == ASCENDING:
        return ascending
    if direction == DESCENDING:
        return descending
    return ascending or descending


def henon_trick(system: GenericSystem, params: Optional[CrossingParameters] = None) -> Crossing:
    """
    Integrate from the current state exactly onto the section.

    The system itself is not modified.

    Args:
        system: system close to the section (usually just past it)
        params: section coordinate (default: unit 0, coordinate 0)

    Returns:
        (time, state) on the section; state[c] is exactly 0.

    Raises:
        SingularCrossingError: if dc/dt vanishes (tangential section) or the
            step produces non-finite values.
    """
    params = params or CrossingParameters()
    idx = params.index(system)
    x = system.get_position()

    def reformulated(y: np.ndarray, c: float) -> np.ndarray:
        dxdt = system.evaluate(y[:-1], y[-1])
        fc = dxdt[idx]
        if fc == 0.0 or not np.isfinite(fc):
            raise SingularCrossingError(
                f"Velocity of coordinate {idx} is {fc} at c={c}; cannot use it as independent variable"
            )
        out = np.empty_like(y)
        out[:-1] = dxdt / fc
        out[-1] = 1.0 / fc
        return out

    y0 = np.append(x, system.get_time())
    y1 = rk4_step(reformulated, y0, x[idx], -x[idx])
    if not np.all(np.isfinite(y1)):
        raise SingularCrossingError("Hénon step produced non-finite values")

    state = y1[:-1].copy()
    state[idx] = 0.0
    return float(y1[-1]), state


def _search(
    system: RK4System,
    dt: float,
    condition: Optional[Condition],
    params: Optional[CrossingParameters],
) -> Crossing:
    params = params or CrossingParameters()
    idx = params.index(system)
    previous = system.get_position()[idx]
    steps = 0
    rejected = 0
    while True:
        if params.max_steps is not None and steps >= params.max_steps:
            logger.warning("No accepted crossing after %d steps (t=%g)", steps, system.get_time())
            raise CrossingSearchLimitError(f"No accepted crossing within {steps} steps")
        system.integrate(dt, 1)
        steps += 1
        current = system.get_position()[idx]
        if not _is_crossing(previous, current, params.direction):
            previous = current
            continue

        time, state = henon_trick(system, params)
        system.set_time(time)
        system.set_position(state)
        if condition is None or condition(state.copy()):
            logger.debug("Crossing at t=%.10g after %d steps", time, steps)
            return time, state

        rejected += 1
        logger.debug("Crossing at t=%.10g rejected by condition (%d so far)", time, rejected)
        if params.max_crossings is not None and rejected >= params.max_crossings:
            logger.warning("Condition rejected %d crossings (t=%g)", rejected, time)
            raise CrossingSearchLimitError(f"Condition not met within {rejected} crossings")
        previous = 0.0


def integrate_to_crossing(
    system: RK4System,
    dt: float,
    params: Optional[CrossingParameters] = None,
) -> Crossing:
    """
    Integrate until the next crossing of the section and return it exactly.

    The system is left on the section at the returned time and state, so
    repeated calls walk through successive crossings.

    Args:
        system: system to integrate (modified in place)
        dt: step of the fixed-step search
        params: section coordinate, direction and step budget

    Returns:
        (time, state) of the crossing.
    """
    return _search(system, dt, None, params)


def integrate_to_crossing_conditional(
    system: RK4System,
    dt: float,
    condition: Condition,
    params: Optional[CrossingParameters] = None,
) -> Crossing:
    """
    Like integrate_to_crossing, but skip crossings whose state does not satisfy
    `condition`. Gives up after params.max_crossings rejected crossings.

    Raises:
        CrossingSearchLimitError: if the crossing or step budget is exhausted.
    """
    return _search(system, dt, condition, params)


def poincare_map(
    system: RK4System,
    dt: float,
    n_crossings: int,
    params: Optional[CrossingParameters] = None,
    condition: Optional[Condition] = None,
    max_length: Optional[int] = None,
) -> CrossingHistory:
    """
    Collect `n_crossings` successive crossings.

    With `max_length` set, only the last `max_length` crossings are kept.

    Returns:
        CrossingHistory with keys 'time' and 'state'.
    """
    history = CrossingHistory(max_length=max_length)
    for _ in range(n_crossings):
        time, state = _search(system, dt, condition, params)
        history.append(time=time, state=state)
    return history
