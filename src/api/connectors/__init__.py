"""Connectors por serviço: adapters de borda para APIs externas.

Estrutura:
- workers_kv/: Cloudflare Workers KV (storage/kv da API v4)

Cada serviço tem seu próprio connector, garantindo SRP e isolamento de falhas.
"""

__all__: list[str] = []
