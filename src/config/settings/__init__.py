"""Agregador de settings do cliente Workers KV.

Re-exporta settings e funções de carga.
"""

from __future__ import annotations

from config.settings.workers_kv import (
    CF_API_BASE_URL,
    CF_KV_API_PATH,
    WorkersKvSettings,
    get_workers_kv_settings,
)

__all__ = [
    "CF_API_BASE_URL",
    "CF_KV_API_PATH",
    "WorkersKvSettings",
    "get_workers_kv_settings",
]
