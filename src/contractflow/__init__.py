# src/contractflow/__init__.py
"""
ContractFlow: engine de execução de workflows de smart contracts.

Um workflow é um grafo dirigido de Steps heterogêneos (inicialização do
projeto → validação do código → compilação → extração de artefatos →
deploy → análise → conclusão), desenhado pelo usuário em um editor
externo e executado aqui em ordem de dependência.

Princípios centrais:
    - O grafo precisa ser um DAG; ciclos são rejeitados antes de qualquer Step
    - Execução sequencial, fail-fast, com atribuição precisa da falha
    - Saídas de Steps circulam apenas pelo ExecutionContext (write-once)
    - Status em tempo real via stream de eventos tipados
    - Cancelamento cooperativo entre Steps

Arquitetura em alto nível:
    - core.config       → defaults empacotados, override local, deep-merge, hashing
    - core.pipeline     → grafo, kinds, contexto de execução, registry de handlers
    - core.engine       → planner (Kahn), dispatcher, eventos, cancelamento
    - core.traceability → Manifest e Event Log por run
    - steps             → handlers dos 8 kinds de Step
    - services          → contratos dos serviços delegados (compilador, wallet, IA)
    - contracts         → utilitários Solidity e de argumentos de construtor
    - report            → resumo textual e relatório Markdown
    - templates         → grafo canônico de compilação e deploy

Limites explícitos:
    - Não implementa compilador, wallet nem provedor de IA
    - Não renderiza o editor de grafos
"""

from .core.engine.engine import Engine
from .core.engine.events import RunResult
from .core.pipeline.graph import Connection, Node, WorkflowGraph
from .core.pipeline.types import StepKind, StepStatus
from .services.base import ServiceBundle

__version__ = "0.1.0"

__all__ = [
    "Connection",
    "Engine",
    "Node",
    "RunResult",
    "ServiceBundle",
    "StepKind",
    "StepStatus",
    "WorkflowGraph",
    "__version__",
]
