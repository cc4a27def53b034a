"""
Host protocol errors.

Raised by the decoding layer only; the turn engine itself never raises.
"""


class ProtocolError(Exception):
    """Base class for host protocol errors."""


class RequestDecodeError(ProtocolError):
    """
    Raised when an inbound request cannot be mapped to a turn event.

    The request is unsafe to process and must be rejected.
    """


class AttributeDecodeError(ProtocolError):
    """
    Raised when the round-tripped session attribute record is malformed.

    Indicates the host returned a record this service never produced.
    """
