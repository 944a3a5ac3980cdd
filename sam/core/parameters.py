"""Declared parameter shapes for ODE models (names, scalar or vector)."""

from dataclasses import dataclass
from numbers import Real
from typing import Any, List, Sequence, Tuple

import numpy as np

from sam.exceptions import ParameterShapeError

SCALAR = "scalar"
VECTOR = "vector"


@dataclass(frozen=True)
class ParameterSpec:
    """Specification of one ODE parameter: name, kind (scalar or vector), description."""

    name: str
    kind: str = SCALAR
    description: str = ""

    def __post_init__(self) -> None:
        if self.kind not in (SCALAR, VECTOR):
            raise ValueError(f"kind must be '{SCALAR}' or '{VECTOR}', got {self.kind!r}")

    @property
    def is_vector(self) -> bool:
        return self.kind == VECTOR


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (Real, np.number)) and not isinstance(value, (bool, np.bool_))


def _as_scalar(spec: ParameterSpec, value: Any) -> float:
    if not _is_scalar(value):
        raise ParameterShapeError(
            f"Parameter '{spec.name}' expects a real number, got {type(value).__name__}"
        )
    return float(value)


def _as_vector(spec: ParameterSpec, value: Any) -> np.ndarray:
    if _is_scalar(value) or isinstance(value, (str, bytes)):
        raise ParameterShapeError(
            f"Parameter '{spec.name}' expects a sequence of reals, got {type(value).__name__}"
        )
    try:
        arr = np.asarray(value, dtype=float)
    except (TypeError, ValueError) as exc:
        raise ParameterShapeError(f"Parameter '{spec.name}' is not a sequence of reals") from exc
    if arr.ndim != 1:
        raise ParameterShapeError(
            f"Parameter '{spec.name}' expects a 1-D sequence, got shape {arr.shape}"
        )
    return arr.copy()


def bind_parameters(specs: Sequence[ParameterSpec], args: Sequence[Any]) -> List[Any]:
    """
    Match positional arguments against declared parameter specs.

    If exactly one spec is a vector and every argument is a scalar, the vector
    absorbs the surplus scalars at its position: for specs (omega: vector,
    coupling: scalar), both ``([2, 3], 0.5)`` and ``(2, 3, 0.5)`` bind to
    ``omega=[2, 3], coupling=0.5``. Otherwise arguments bind one to one and
    their count must equal the number of specs.

    Args:
        specs: declared specs, in order
        args: positional arguments

    Returns:
        List of bound values (float for scalars, fresh float arrays for vectors).

    Raises:
        ParameterShapeError: if the arguments cannot be bound.
    """
    specs = tuple(specs)
    args = tuple(args)
    vector_positions = [i for i, spec in enumerate(specs) if spec.is_vector]
    n_scalars = len(specs) - 1
    expand = (
        len(vector_positions) == 1
        and len(args) > n_scalars
        and all(_is_scalar(a) for a in args)
    )
    if not expand:
        if len(args) != len(specs):
            raise ParameterShapeError(
                f"Expected parameters ({', '.join(describe(specs))}), got {len(args)} argument(s)"
            )
        return [
            _as_vector(spec, arg) if spec.is_vector else _as_scalar(spec, arg)
            for spec, arg in zip(specs, args)
        ]

    pos = vector_positions[0]
    n_vector = len(args) - n_scalars
    bound: List[Any] = []
    for spec, arg in zip(specs[:pos], args[:pos]):
        bound.append(_as_scalar(spec, arg))
    spec = specs[pos]
    bound.append(np.array([_as_scalar(spec, a) for a in args[pos:pos + n_vector]]))
    for spec, arg in zip(specs[pos + 1:], args[pos + n_vector:]):
        bound.append(_as_scalar(spec, arg))
    return bound


def describe(specs: Sequence[ParameterSpec]) -> Tuple[str, ...]:
    """Human readable parameter names, e.g. ('omega[]', 'coupling')."""
    return tuple(f"{s.name}[]" if s.is_vector else s.name for s in specs)
