"""Errors raised by sam. Each also derives from the closest builtin exception."""


class SamError(Exception):
    """Base class for all sam errors."""


class LengthError(SamError, ValueError):
    """A vector does not have the length the system expects (N * d)."""


class ParameterShapeError(SamError, TypeError):
    """Arguments do not match the parameter shape declared by an ODE."""


class SingularCrossingError(SamError, ArithmeticError):
    """The crossing coordinate has zero (or non-finite) velocity during a Hénon step."""


class CrossingSearchLimitError(SamError, RuntimeError):
    """A crossing search exceeded its configured step or crossing budget."""
