"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    EmptyBodyError,
    InvalidBodyShapeError,
    MissingCredentialsError,
    OperationFailedError,
    RedirectNotFollowedError,
    RequestBuildError,
    ResponseDecodeError,
    TransportError,
    UnrecognizedContentTypeError,
    WorkersKvError,
)
from .serialize import serialize_error

__all__ = [
    "EmptyBodyError",
    "InvalidBodyShapeError",
    "MissingCredentialsError",
    "OperationFailedError",
    "RedirectNotFollowedError",
    "RequestBuildError",
    "ResponseDecodeError",
    "TransportError",
    "UnrecognizedContentTypeError",
    "WorkersKvError",
    "serialize_error",
]
