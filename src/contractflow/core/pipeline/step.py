# src/contractflow/core/pipeline/step.py
"""
Contrato canônico de handler de Step do ContractFlow.

Este módulo define o protocolo formal que qualquer handler deve
satisfazer para ser despachado pelo Engine.

Um handler é responsável por exatamente um `StepKind` e representa
uma operação atômica: recebe o Step (com seu próprio payload) e o
ExecutionContext em modo leitura, e produz um `StepOutput` ou levanta
uma exceção tipada.

Princípios fundamentais:
    - Handlers não conhecem o Engine nem o planner
    - Handlers não controlam ordem de execução
    - Comunicação entre Steps é mediada pelo ExecutionContext
    - Handlers não mutam Steps que não sejam o próprio
    - Conformidade é garantida por duck typing (@runtime_checkable)

Limites explícitos:
    - Não registra saídas no contexto (responsabilidade do Engine)
    - Não emite eventos de status
    - Não decide políticas de execução (fail-fast, cancelamento)
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .context import ExecutionContext
from .graph import Node
from .types import StepKind, StepOutput


@runtime_checkable
class StepHandler(Protocol):
    """
    Contrato canônico de um handler de Step.

    Atributos obrigatórios:
        - kind: o `StepKind` tratado por este handler

    Invariantes:
        - `run` é chamado no máximo uma vez por Step por run
        - O retorno de `run` é sempre um `StepOutput`
        - Falhas são sinalizadas por `WorkflowException` e subclasses
    """
    kind: StepKind

    async def run(self, node: Node, ctx: ExecutionContext) -> StepOutput:
        """Executa o Step uma única vez usando exclusivamente o ExecutionContext."""
        ...
