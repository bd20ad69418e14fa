"""Exceptions raised by the adaptive curve rate model."""


class IRMError(Exception):
    """Base class for rate model failures."""


class InvalidConfiguration(IRMError, ValueError):
    """Parameters that cannot be used for a rate calculation."""


class FixedPointOverflow(IRMError, OverflowError):
    """A fixed-point result fell outside the representable range."""


class FixedPointDivisionByZero(IRMError, ZeroDivisionError):
    """A fixed-point division with a zero divisor."""
