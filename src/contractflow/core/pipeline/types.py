# src/contractflow/core/pipeline/types.py
"""
Tipos canônicos do pipeline do ContractFlow.

Este módulo define as estruturas e enums fundamentais que padronizam
a comunicação entre o grafo do editor, os handlers de Step e o Engine.

Componentes principais:
    - StepKind   → enum fechado dos 8 tipos de Step reconhecidos
    - StepStatus → estados do ciclo de vida de um Step (idle → running → success|error)
    - StepOutput → resultado imutável produzido por um handler bem-sucedido

Princípios fundamentais:
    - Tipos são estáveis e serializáveis
    - Valores textuais são o contrato com o editor externo
    - Nenhuma lógica de execução vive neste módulo

Limites explícitos:
    - Não executa Steps
    - Não planeja o grafo
    - Não contém lógica de domínio
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class StepKind(str, Enum):
    """
    Conjunto fechado de tipos de Step do workflow.

    O valor textual é a tag produzida pelo editor externo e consumida
    pelo Engine. Cada valor possui exatamente um handler no registry
    padrão (verificado em `HandlerRegistry.ensure_complete`).

    Tipos definidos:
        - PROJECT_INIT: inicialização do projeto (título, descrição)
        - SOURCE_INPUT: código-fonte Solidity validado
        - COMPILE: compilação delegada ao serviço de compilador
        - EXTRACT_ABI: extração do ABI da compilação
        - EXTRACT_BYTECODE: extração do bytecode da compilação
        - DEPLOY: deploy delegado à wallet
        - AI_AUDIT: análise delegada ao serviço de IA
        - COMPLETION: resumo final do run

    Invariantes:
        - O conjunto é fechado; tags desconhecidas falham no dispatch
        - O valor textual é estável e canônico
    """
    PROJECT_INIT = "project_init"
    SOURCE_INPUT = "source_input"
    COMPILE = "compile"
    EXTRACT_ABI = "extract_abi"
    EXTRACT_BYTECODE = "extract_bytecode"
    DEPLOY = "deploy"
    AI_AUDIT = "ai_audit"
    COMPLETION = "completion"

    @classmethod
    def parse(cls, value: Any) -> Optional["StepKind"]:
        """Retorna o StepKind correspondente a `value` ou None se a tag for desconhecida."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class StepStatus(str, Enum):
    """
    Estados do ciclo de vida de um Step dentro de um run.

    Máquina de estados (independente do kind):
        IDLE → RUNNING → SUCCESS | ERROR

    SUCCESS e ERROR são terminais. No máximo um Step está em RUNNING
    a cada instante (execução sequencial).
    """
    IDLE = "idle"
    RUNNING = "running"
    SUCCESS = "success"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in (StepStatus.SUCCESS, StepStatus.ERROR)


@dataclass(frozen=True)
class StepOutput:
    """
    Resultado imutável de um handler bem-sucedido.

    Campos:
        - data: saída registrada no ExecutionContext (opaca para o Engine)
        - message: resumo textual da execução (ex.: "Contract compiled successfully")
        - display: campos adicionais para o editor (ex.: nome de contrato derivado)

    Falhas não são representadas aqui: handlers levantam exceções tipadas
    (`core.exceptions`) e o Engine as converte em ErrorPayload.
    """
    data: Dict[str, Any]
    message: str = ""
    display: Dict[str, Any] = field(default_factory=dict)
