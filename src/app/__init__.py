"""App: orquestração das operações Workers KV.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- bridge/: execução de operações e publicação de resultados
- domain/: modelos tipados de resultado
- protocols/: contratos/interfaces
- observability/: logs estruturados, correlação, métricas, atividade

Módulos:
- workers_kv: cliente com um método por operação remota

Padrão: app orquestra; api adapta; config configura; utils apoia.
"""
