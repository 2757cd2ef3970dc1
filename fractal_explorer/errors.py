"""Exceptions raised by the fractal engine."""


class InvalidParameterError(ValueError):
    """Raised when a caller supplies a parameter outside its valid domain."""
