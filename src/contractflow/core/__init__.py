# src/contractflow/core/__init__.py
"""
Core do ContractFlow.

Reúne as responsabilidades independentes de domínio de um run:
configuração, modelo de grafo e contexto, planejamento e execução,
e rastreabilidade.

Componentes principais:
    - config       → resolução de configuração (merge, hashing)
    - pipeline     → grafo, kinds, contexto de execução e registry
    - engine       → planner, dispatcher, eventos e cancelamento
    - traceability → Manifest e Event Log

Limites explícitos:
    - Não contém handlers de Step concretos
    - Não fala diretamente com compilador, wallet ou IA
"""
