"""
Run snapshots as JSON.

A snapshot records everything needed to resume a Poincaré-section run: the
ODE class, ensemble size, ODE parameters, position and time of an RK4System,
the crossing selector and any extra settings (step size, number of
crossings, ...). load_run() rebuilds an equivalent system from it.
"""

import importlib
import json
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Type, Union

import numpy as np

from sam.analysis.henon import CrossingParameters
from sam.core.ode import ODE
from sam.system.rk4_system import RK4System


def _to_builtin(obj: Any) -> Any:
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, dict):
        return {k: _to_builtin(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_to_builtin(x) for x in obj]
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.integer):
        return int(obj)
    return obj


def _ode_path(ode_cls: type) -> str:
    return f"{ode_cls.__module__}:{ode_cls.__qualname__}"


def _import_ode(path: str) -> Type[ODE]:
    module_name, _, qualname = path.partition(":")
    try:
        obj: Any = importlib.import_module(module_name)
        for part in qualname.split("."):
            obj = getattr(obj, part)
    except (ImportError, AttributeError) as exc:
        raise ValueError(f"Cannot import ODE class {path!r}; pass it as ode=") from exc
    return obj


def run_to_dict(
    system: RK4System,
    params: Optional[CrossingParameters] = None,
    **settings: Any,
) -> Dict[str, Any]:
    """
    Snapshot of a system (and its crossing selector) as plain Python types.

    Args:
        system: system to record; it is not modified
        params: crossing selector (default: CrossingParameters())
        **settings: extra JSON-compatible run settings, e.g. dt=0.01

    Returns:
        Dict with keys 'ode', 'n_units', 'dimension', 'parameters',
        'position', 'time', 'crossing' and 'settings'.
    """
    n_units, dimension = system.get_dimension()
    return _to_builtin(
        {
            "ode": _ode_path(type(system.ode)),
            "n_units": n_units,
            "dimension": dimension,
            "parameters": system.ode.get_parameters(),
            "position": system.get_position(),
            "time": system.get_time(),
            "crossing": (params or CrossingParameters()).to_dict(),
            "settings": settings,
        }
    )


def run_from_dict(
    run: Dict[str, Any],
    ode: Optional[Type[ODE]] = None,
) -> Tuple[RK4System, CrossingParameters, Dict[str, Any]]:
    """
    Rebuild (system, params, settings) from a run_to_dict() snapshot.

    Args:
        run: snapshot
        ode: ODE class to use instead of the recorded import path (needed for
            classes that are not importable, e.g. defined inside a function)
    """
    ode_cls = ode or _import_ode(run["ode"])
    values = run["parameters"]
    args = [values[spec.name] for spec in ode_cls.parameters]
    system = RK4System(ode_cls, run["n_units"], run["dimension"], *args)
    system.set_position(run["position"])
    system.set_time(run["time"])
    params = CrossingParameters.from_dict(run["crossing"])
    return system, params, dict(run.get("settings", {}))


def save_run(
    system: RK4System,
    path: Union[str, Path],
    params: Optional[CrossingParameters] = None,
    **settings: Any,
) -> None:
    """Write run_to_dict(system, params, **settings) to `path` (parents created)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(run_to_dict(system, params, **settings), f, indent=2)


def load_run(
    path: Union[str, Path],
    ode: Optional[Type[ODE]] = None,
) -> Tuple[RK4System, CrossingParameters, Dict[str, Any]]:
    """Read a snapshot written by save_run() and rebuild the run."""
    with open(path, "r", encoding="utf-8") as f:
        return run_from_dict(json.load(f), ode=ode)
