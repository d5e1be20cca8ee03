"""Modelos de domínio do cliente Workers KV."""

from app.domain.kv import KeyInfo, KeyListPage, Namespace, ResultInfo

__all__ = ["KeyInfo", "KeyListPage", "Namespace", "ResultInfo"]
