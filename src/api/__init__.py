"""API: camada de borda com serviços externos.

Responsabilidades:
- Montar requisições HTTP a partir de descrições lógicas de operação
- Executar a chamada HTTP (sem retry)
- Normalizar respostas para modelos internos
- Classificar o resultado do envelope da API

Subpastas:
- connectors/: adapters HTTP por serviço

NÃO PODE conter: orquestração de operações, broadcast de atividade.
"""
