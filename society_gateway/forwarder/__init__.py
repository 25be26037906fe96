"""
society_gateway.forwarder — validate, relay and normalize dashboard calls.

    from society_gateway.forwarder import Forwarder
"""

from society_gateway.forwarder.client import Forwarder
from society_gateway.forwarder.descriptors import OPERATIONS, Operation, get_operation
from society_gateway.forwarder.errors import (
    BackendFailure,
    ForwarderError,
    RequestValidationFailure,
    TransportFailure,
    UnknownOperation,
)

__all__ = [
    "Forwarder",
    "OPERATIONS",
    "Operation",
    "get_operation",
    "BackendFailure",
    "ForwarderError",
    "RequestValidationFailure",
    "TransportFailure",
    "UnknownOperation",
]
