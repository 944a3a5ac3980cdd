"""
Plotting helpers for Poincaré sections.

Functions accept either a CrossingHistory (keys 'time' and 'state') or raw
arrays (time, state). Matplotlib is optional; the functions raise ImportError
if it is not installed.
"""

from typing import Any, Optional, Tuple

import numpy as np


def _get_time_and_state(
    history: Optional[Any] = None,
    time: Optional[np.ndarray] = None,
    state: Optional[np.ndarray] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Resolve (time, state) from a history or from (time, state) arrays."""
    if history is not None:
        data = history.to_dict()
        if "state" not in data:
            raise ValueError("History has no 'state' key.")
        st = np.atleast_2d(data["state"])
        t = data.get("time")
        time_arr = np.asarray(t, dtype=float).ravel() if t is not None else np.arange(len(st))
        return time_arr, st
    if time is not None and state is not None:
        return np.asarray(time, dtype=float).ravel(), np.atleast_2d(state)
    raise ValueError("Provide either history= or (time=, state=).")


def plot_poincare_section(
    history: Optional[Any] = None,
    time: Optional[np.ndarray] = None,
    state: Optional[np.ndarray] = None,
    x_idx: int = 0,
    y_idx: int = 1,
    ax: Optional[Any] = None,
    xlabel: Optional[str] = None,
    ylabel: Optional[str] = None,
    title: str = "Poincaré section",
    **kwargs: Any,
) -> Any:
    """
    Scatter state[:, x_idx] against state[:, y_idx] for every crossing,
    colored by crossing order.

    Args:
        history: CrossingHistory from poincare_map().
        time, state: raw arrays if history is not used.
        x_idx, y_idx: indices into the flat state.
        ax: matplotlib axes (if None, creates a new figure).
        xlabel, ylabel, title: labels (default x[i]).
        **kwargs: passed to ax.scatter().

    Returns:
        matplotlib axes.
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError("matplotlib is required for plot_poincare_section.")
    _, st = _get_time_and_state(history=history, time=time, state=state)
    if ax is None:
        _, ax = plt.subplots(1, 1, figsize=(6, 5))
    kwargs.setdefault("s", 12)
    kwargs.setdefault("c", np.arange(len(st)))
    ax.scatter(st[:, x_idx], st[:, y_idx], **kwargs)
    ax.set_xlabel(xlabel or f"x[{x_idx}]")
    ax.set_ylabel(ylabel or f"x[{y_idx}]")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    return ax


def plot_return_times(
    history: Optional[Any] = None,
    time: Optional[np.ndarray] = None,
    state: Optional[np.ndarray] = None,
    ax: Optional[Any] = None,
    title: str = "Return times",
    **kwargs: Any,
) -> Any:
    """Plot the time between successive crossings against the crossing number."""
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError("matplotlib is required for plot_return_times.")
    t, _ = _get_time_and_state(history=history, time=time, state=state)
    if ax is None:
        _, ax = plt.subplots(1, 1, figsize=(8, 4))
    ax.plot(np.arange(1, len(t)), np.diff(t), marker="o", **kwargs)
    ax.set_xlabel("crossing")
    ax.set_ylabel("return time")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    return ax
