"""
Example: Poincaré map of two coupled harmonic oscillators.

Integrates a chain of two weakly coupled oscillators with fixed-step RK4,
collects successive crossings of x1 = 0 (ascending) with the Hénon trick,
saves a snapshot of the initial run next to the figure and plots the section.
Requires: pip install sam[plot]
"""

import logging
import sys
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from sam import CrossingParameters, RK4System, poincare_map
from sam.io import save_run
from sam.models import CoupledHarmonicOscillatorODE

OUTPUT = Path(__file__).resolve().parent / "output"


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    omega = np.array([1.0, 1.3])
    coupling = 0.05
    dt = 0.01
    n_crossings = 200
    params = CrossingParameters(n_osc=0, dimension=0)

    system = RK4System(CoupledHarmonicOscillatorODE, 2, 2, omega, coupling)
    system.set_position([1.0, 0.0, 0.5, 0.0])

    # initial state; load_run(OUTPUT / "run.json") reproduces the run
    save_run(system, OUTPUT / "run.json", params, dt=dt, n_crossings=n_crossings)

    history = poincare_map(system, dt, n_crossings, params)
    logging.info("Collected %d crossings up to t=%.3f", len(history), history.times[-1])
    logging.info("Mean return time: %.6f", np.mean(np.diff(history.times)))

    try:
        import matplotlib.pyplot as plt
        from sam.analysis import plot_poincare_section

        ax = plot_poincare_section(history, x_idx=2, y_idx=3, xlabel="x2", ylabel="v2",
                                   title="Section x1 = 0 (ascending)")
        ax.figure.tight_layout()
        ax.figure.savefig(OUTPUT / "poincare_section.png", dpi=120)
        plt.close(ax.figure)
        logging.info("Saved %s", OUTPUT / "poincare_section.png")
    except ImportError:
        logging.warning("matplotlib not available, skip plotting")


if __name__ == "__main__":
    main()
