"""Protocolos e contratos do core da aplicação."""

from .http_client import KvTransportProtocol
from .outcome_handler import ActivitySinkProtocol, OutcomeHandlerProtocol

__all__ = [
    "ActivitySinkProtocol",
    "KvTransportProtocol",
    "OutcomeHandlerProtocol",
]
