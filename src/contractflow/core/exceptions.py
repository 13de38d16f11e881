"""
ContractFlow: Canonical Exceptions (v1)

Este módulo define as exceções tipadas internas do ContractFlow.

Objetivo:
- Permitir que handlers e Engine levantem falhas semânticas tipadas
- Facilitar o mapeamento determinístico para ErrorPayload
- Evitar ValueError/RuntimeError genéricos nos guardrails do run

Taxonomia:
- ValidationError       → campo obrigatório ausente/malformado (inclui grafo vazio e ids duplicados)
- CycleError            → grafo não acíclico, detectado antes de qualquer dispatch
- UpstreamMissingError  → saída de Step predecessor ausente no ExecutionContext
- UnknownKindError      → dispatch sobre um kind não reconhecido
- ExternalServiceError  → falha reportada por um serviço delegado (mensagem verbatim)
- RunInProgressError    → tentativa de iniciar um segundo run no mesmo Engine

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- Mensagens são curtas e humanas; o nome da classe é o código estável.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(eq=False)
class WorkflowException(Exception):
    """Base class para exceções internas do ContractFlow.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Validação de payload / grafo
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class ValidationError(WorkflowException):
    """Campo obrigatório ausente ou malformado."""


@dataclass(eq=False)
class EmptyGraphError(ValidationError):
    """O grafo submetido não possui nenhum Step."""


@dataclass(eq=False)
class DuplicateStepIdError(ValidationError):
    """Dois ou mais Steps compartilham o mesmo id."""


# ---------------------------------------------------------------------------
# Planejamento
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class CycleError(WorkflowException):
    """As conexões formam ao menos um ciclo; nenhum Step é executado."""


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class UpstreamMissingError(WorkflowException):
    """A saída exigida de um Step predecessor não está no contexto."""


@dataclass(eq=False)
class UnknownKindError(WorkflowException):
    """Nenhum handler reconhece o kind do Step."""


@dataclass(eq=False)
class ExternalServiceError(WorkflowException):
    """Falha reportada por um serviço delegado (compilador, wallet, IA)."""


@dataclass(eq=False)
class ServiceUnavailableError(ExternalServiceError):
    """O serviço delegado exigido pelo Step não foi configurado."""


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class RunInProgressError(WorkflowException):
    """Já existe um run ativo neste Engine."""
