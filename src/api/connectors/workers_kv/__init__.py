"""Conector HTTP da API Workers KV (Cloudflare).

Montagem de requisição, transporte, normalização e classificação.
"""

from .http_client import HttpClientConfig, KvHttpClient
from .models import (
    CanonicalResponse,
    CommandInput,
    CommandRecord,
    ContentType,
    OperationDescriptor,
    OperationOutcome,
    OwnResponse,
    SuccessVerdict,
    TransportRequest,
    ValidationMode,
    Verdict,
)
from .request_builder import build_transport_request, encode_query
from .response_normalizer import normalize_response, shorten_content_type
from .success_classifier import (
    classify,
    determine_success,
    extract_error,
    is_response_well_formed,
)

__all__ = [
    "CanonicalResponse",
    "CommandInput",
    "CommandRecord",
    "ContentType",
    "HttpClientConfig",
    "KvHttpClient",
    "OperationDescriptor",
    "OperationOutcome",
    "OwnResponse",
    "SuccessVerdict",
    "TransportRequest",
    "ValidationMode",
    "Verdict",
    "build_transport_request",
    "classify",
    "determine_success",
    "encode_query",
    "extract_error",
    "is_response_well_formed",
    "normalize_response",
    "shorten_content_type",
]
