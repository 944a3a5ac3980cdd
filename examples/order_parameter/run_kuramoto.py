"""
Example: synchronization of Kuramoto phase oscillators.

Tracks the order parameter (|Z|, arg Z) returned by
calculate_mean_field_spherical() while the ensemble locks.
"""

import logging
import sys
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from sam import RK4System
from sam.models import KuramotoODE


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    n = 100
    rng = np.random.default_rng(42)
    omega = rng.normal(loc=0.0, scale=0.5, size=n)
    dt = 0.02

    for coupling in (0.2, 1.0, 3.0):
        system = RK4System(KuramotoODE, n, 1, omega, coupling)
        system.set_position(rng.uniform(0.0, 2 * np.pi, size=n))
        r_values = []
        for _ in range(100):
            system.integrate(dt, 10)
            r_values.append(system.calculate_mean_field_spherical()[0])
        logging.info(
            "K=%.1f: r(t=%.0f)=%.3f, mean r over last half=%.3f",
            coupling,
            system.get_time(),
            r_values[-1],
            np.mean(r_values[len(r_values) // 2:]),
        )


if __name__ == "__main__":
    main()
