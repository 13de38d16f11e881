# src/contractflow/core/engine/__init__.py
"""
Engine do ContractFlow.

Componentes principais:
    - planner      → ordem linear (Kahn FIFO) e detecção de ciclos
    - engine       → dispatch sequencial, fail-fast, RunResult
    - events       → eventos tipados do run
    - reporter     → adaptador de callbacks sobre os eventos
    - cancellation → flag de parada cooperativa

Invariantes:
    - Nenhum Step executa antes de seus predecessores
    - Cada Step é executado no máximo uma vez por run
    - No máximo um Step está em RUNNING por vez
"""
