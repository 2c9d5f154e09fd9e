"""Exception types raised by icedrift."""


class IceDriftError(Exception):
    """Base class for all icedrift errors."""


class ConfigurationError(IceDriftError, ValueError):
    """Invalid threshold, parameter, or input table layout."""


class InsufficientDataError(IceDriftError):
    """Not enough usable data to produce a result (e.g. a power-law fit)."""


class AnalysisCancelled(IceDriftError):
    """Triangle enumeration was stopped through a cancellation event."""
