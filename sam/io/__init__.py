"""Run snapshot input/output."""

from sam.io.serializers import load_run, run_from_dict, run_to_dict, save_run

__all__ = ["save_run", "load_run", "run_to_dict", "run_from_dict"]
