"""Classificação de sucesso de respostas normalizadas.

Três etapas:
1. Formato (is_response_well_formed): True, False ou None (validação desligada)
2. Sucesso (determine_success): Verdict em três valores
3. Erro (extract_error): lista `errors` do envelope quando não houve sucesso
"""

from __future__ import annotations

from typing import Any

from .models import CanonicalResponse, SuccessVerdict, ValidationMode, Verdict

FULL_ENVELOPE_KEYS = frozenset({"success", "errors", "messages", "result"})
ENVELOPE_KEYS_WITHOUT_RESULT = frozenset({"success", "errors", "messages"})


def _has_keys(payload: Any, keys: frozenset[str]) -> bool:
    return isinstance(payload, dict) and keys.issubset(payload.keys())


def is_response_well_formed(
    response: CanonicalResponse,
    mode: ValidationMode,
) -> bool | None:
    """Verifica o formato do payload para o modo de validação.

    Returns:
        True/False, ou None quando mode é False (indeterminado)

    Raises:
        ValueError: modo desconhecido
    """
    if mode is False:
        return None
    if mode == "full":
        return response.short_content_type == "object" and _has_keys(
            response.payload, FULL_ENVELOPE_KEYS
        )
    if mode == "withoutResult":
        return response.short_content_type == "object" and _has_keys(
            response.payload, ENVELOPE_KEYS_WITHOUT_RESULT
        )
    if mode == "string":
        return response.short_content_type == "string" and isinstance(response.payload, str)
    raise ValueError(f"Modo de validação desconhecido: {mode!r}")


def determine_success(response: CanonicalResponse, well_formed: bool | None) -> Verdict:
    """Decide o veredito a partir do formato e do payload."""
    if well_formed is None:
        return Verdict.INDETERMINATE
    if not well_formed or not response.http_success:
        return Verdict.FAILURE

    if response.short_content_type == "string":
        return Verdict.SUCCESS

    payload = response.payload
    envelope_success = payload.get("success", False) if isinstance(payload, dict) else False
    return Verdict.SUCCESS if envelope_success is True else Verdict.FAILURE


def extract_error(
    response: CanonicalResponse,
    verdict: Verdict,
) -> list[dict[str, Any]] | None:
    """Extrai `errors` do envelope quando o veredito não é SUCCESS.

    Payload "string" não tem erro estruturado: retorna None.
    """
    if verdict == Verdict.SUCCESS or response.short_content_type == "string":
        return None
    payload = response.payload
    if isinstance(payload, dict) and "errors" in payload:
        return payload["errors"]
    return None


def classify(response: CanonicalResponse, mode: ValidationMode = "full") -> SuccessVerdict:
    """Executa as três etapas e retorna o SuccessVerdict."""
    well_formed = is_response_well_formed(response, mode)
    verdict = determine_success(response, well_formed)
    return SuccessVerdict(
        verdict=verdict,
        well_formed=well_formed,
        error=extract_error(response, verdict),
    )
