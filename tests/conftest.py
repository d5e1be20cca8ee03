"""Configuração do pytest para o cliente Workers KV."""

import sys
from pathlib import Path

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

import pytest  # noqa: E402

from config.settings import WorkersKvSettings  # noqa: E402


@pytest.fixture
def kv_settings() -> WorkersKvSettings:
    """Credenciais fictícias para testes."""
    return WorkersKvSettings(
        account_email="dev@example.com",
        account_id="acc-123",
        global_api_key="secret-key",
    )
