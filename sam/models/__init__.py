"""Ready-made ODE models."""

from sam.models.library import (
    CoupledHarmonicOscillatorODE,
    HarmonicOscillatorODE,
    KuramotoODE,
)

__all__ = ["HarmonicOscillatorODE", "CoupledHarmonicOscillatorODE", "KuramotoODE"]
