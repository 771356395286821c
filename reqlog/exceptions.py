"""Exception types raised by reqlog."""


class ReqlogError(Exception):
    """Base class for all reqlog errors."""


class HijackNotSupportedError(ReqlogError):
    """The wrapped response writer cannot hand over its raw connection."""

    def __init__(self, message: str = "response writer does not support connection hijacking"):
        super().__init__(message)
