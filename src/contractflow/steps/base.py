"""
Utilitários compartilhados pelos handlers de Step.

Concentra as verificações repetidas entre kinds: leitura de campos
textuais do payload, resolução da saída de um Step predecessor e
presença do serviço delegado exigido.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional, TypeVar

from contractflow.core.exceptions import ServiceUnavailableError, UpstreamMissingError
from contractflow.core.pipeline.context import ExecutionContext
from contractflow.core.pipeline.graph import Node
from contractflow.core.pipeline.types import StepKind

T = TypeVar("T")


def text_field(payload: Mapping[str, Any], key: str, default: str = "") -> str:
    value = payload.get(key)
    if value is None:
        return default
    return str(value).strip()


def require_upstream(
    ctx: ExecutionContext,
    node: Node,
    kind: StepKind,
    message: str,
    *,
    accept: Optional[Callable[[Dict[str, Any]], bool]] = None,
) -> Dict[str, Any]:
    """
    Saída do predecessor de `kind` vista por `node`, segundo a política do contexto.

    Raises:
        UpstreamMissingError: Se não houver saída do kind ou se `accept` a rejeitar.
    """
    found = ctx.resolve_upstream(node.id, kind)
    if not isinstance(found, dict) or (accept is not None and not accept(found)):
        raise UpstreamMissingError(
            message,
            details={"step_id": node.id, "required_kind": StepKind(kind).value},
            hint=f"Conecte um Step '{StepKind(kind).value}' antes deste Step",
        )
    return found


def require_service(service: Optional[T], name: str, node: Node) -> T:
    if service is None:
        raise ServiceUnavailableError(
            f"No {name} service configured",
            details={"step_id": node.id, "service": name},
            hint=f"Informe o serviço '{name}' em ServiceBundle ao criar o Engine",
        )
    return service
