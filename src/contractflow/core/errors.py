"""
ContractFlow: Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do ContractFlow.
Erros são artefatos do run e fazem parte do contrato operacional
do Engine, devendo ser:

- explícitos
- serializáveis
- atribuídos a um Step
- acionáveis

Nenhuma falha é engolida silenciosamente.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .exceptions import WorkflowException


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro do ContractFlow.

    Campos:
    - type: código estável do erro (nome da exceção tipada ou código do engine)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    - step_id: Step ao qual a falha é atribuída, quando houver
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None
    step_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo de códigos do engine (v1)
# ---------------------------------------------------------------------------

ENGINE_EXECUTION_ERROR = "ENGINE_EXECUTION_ERROR"
ENGINE_STOPPED = "ENGINE_STOPPED"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def from_exception(exc: BaseException, *, step_id: Optional[str] = None) -> ErrorPayload:
    """Converte uma exceção em ErrorPayload.

    Regras:
    - WorkflowException: já vem com message/details/hint; o nome da classe é o código.
    - Outras exceções: encapsular como ENGINE_EXECUTION_ERROR sem expor stack trace.
    """
    if isinstance(exc, WorkflowException):
        return ErrorPayload(
            type=exc.__class__.__name__,
            message=exc.message or "Erro de execução",
            details=dict(exc.details or {}),
            hint=exc.hint,
            step_id=step_id,
        )

    return engine_execution_error(
        step_id=step_id,
        exc_type=exc.__class__.__name__,
        exc_message=str(exc) or None,
    )


def engine_execution_error(
    *,
    step_id: Optional[str] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Verifique o log do run e a configuração do Step. Nenhum fallback é aplicado automaticamente.",
) -> ErrorPayload:
    return ErrorPayload(
        type=ENGINE_EXECUTION_ERROR,
        message=exc_message or "Step execution failed",
        details={
            "exception_class": exc_type,
        },
        hint=hint,
        step_id=step_id,
    )


def engine_stopped() -> ErrorPayload:
    return ErrorPayload(
        type=ENGINE_STOPPED,
        message="Workflow execution stopped by user",
        details={},
        hint=None,
    )
