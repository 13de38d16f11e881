# src/contractflow/core/pipeline/registry.py
"""
Registro de handlers por kind (tabela de dispatch).

Este módulo define o `HandlerRegistry`, responsável por associar cada
`StepKind` ao seu handler e por garantir, antes de qualquer run, que a
tabela de dispatch cobre o conjunto fechado de kinds.

Responsabilidades do módulo:
    - Validar unicidade de handler por kind
    - Resolver o handler de um Step no dispatch
    - Verificar exaustividade (`ensure_complete`)

Decisões arquiteturais:
    - Um kind sem handler é erro de montagem do registry, detectado na
      construção do registry padrão e não no meio de um run
    - Tags desconhecidas (fora de `StepKind`) falham no dispatch com
      `UnknownKindError`, atribuídas ao Step

Limites explícitos:
    - Não planeja execução
    - Não executa handlers
    - Não interage com ExecutionContext
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from ..exceptions import UnknownKindError
from .graph import Node
from .step import StepHandler
from .types import StepKind


class DuplicateHandlerError(ValueError):
    """Dois handlers registrados para o mesmo kind."""


class IncompleteRegistryError(ValueError):
    """Algum StepKind não possui handler registrado."""


@dataclass
class HandlerRegistry:
    """
    Tabela canônica kind → handler.

    Invariantes:
        - Cada kind possui no máximo um handler
        - A ordem de registro é preservada
    """

    _handlers: Dict[StepKind, StepHandler] = field(default_factory=dict, init=False, repr=False)

    def add(self, handler: StepHandler) -> None:
        kind = StepKind.parse(getattr(handler, "kind", None))
        if kind is None:
            raise ValueError("handler.kind must be a StepKind")
        if kind in self._handlers:
            raise DuplicateHandlerError(f"Duplicate handler for kind: {kind.value}")
        self._handlers[kind] = handler

    def get(self, kind: StepKind) -> StepHandler:
        return self._handlers[kind]

    def kinds(self) -> List[StepKind]:
        return list(self._handlers)

    def missing_kinds(self) -> List[StepKind]:
        return [k for k in StepKind if k not in self._handlers]

    def ensure_complete(self) -> "HandlerRegistry":
        missing = self.missing_kinds()
        if missing:
            raise IncompleteRegistryError(
                "No handler registered for kinds: " + ", ".join(k.value for k in missing)
            )
        return self

    def resolve(self, node: Node) -> StepHandler:
        kind = node.step_kind
        if kind is None or kind not in self._handlers:
            raise UnknownKindError(
                f"Unknown step kind: {node.kind}",
                details={"step_id": node.id, "kind": node.kind},
                hint="Use um dos kinds suportados: " + ", ".join(k.value for k in StepKind),
            )
        return self._handlers[kind]
