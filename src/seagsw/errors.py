"""Exceptions raised by the dispatch layer."""


class SeagswError(ValueError):
    """Base class for all dispatch-layer errors"""


class ShapeUnsupportedError(SeagswError):
    """Argument shape cannot be handled by the requested operation"""


class ArgumentLengthError(SeagswError):
    """Argument length cannot be recycled unambiguously (strict mode only)"""


class UnknownOperationError(SeagswError):
    """Kernel has no implementation for the requested operation"""
