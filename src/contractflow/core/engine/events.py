# src/contractflow/core/engine/events.py
"""
Eventos tipados de um run e resultado agregado (RunResult v1).

O Engine produz um stream ordenado destes eventos; consumidores (UI,
testes, reporters) reagem a eles sem acoplar o Engine a nenhum estado
de aplicação.

Ordem garantida dentro de um run:
    RunStarted
    (StepStarted, ConnectionStatusChanged*, StepSucceeded, StepOutputUpdated,
     ConnectionStatusChanged*)*
    [StepStarted, ConnectionStatusChanged*, StepFailed, ConnectionStatusChanged*]
    RunFinished

Grafos inválidos (vazio, ids duplicados, ciclo) produzem apenas
`RunFinished`: nenhum Step sai de IDLE.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Union

from contractflow.core.errors import ErrorPayload
from contractflow.core.pipeline.types import StepOutput, StepStatus


@dataclass(frozen=True)
class RunResult:
    """
    Resultado agregado de um run.

    Campos:
        - success: True somente se todos os Steps atingiram SUCCESS
        - message: resumo humano ("Workflow executed successfully", falha atribuída, parada)
        - data: {"summary", "context_snapshot"} também em runs abortados
        - failed_step: id do Step que falhou, quando houver
        - error: ErrorPayload serializado, quando houver
        - statuses: status final de cada Step (valores de StepStatus)
        - order: ordem linear planejada (vazia se o planejamento falhou)
        - stopped: True quando o run terminou por pedido de parada
        - manifest: Manifest v1 serializado
        - log: eventos estruturados do ExecutionContext
    """

    success: bool
    message: str
    data: Optional[Dict[str, Any]] = None
    failed_step: Optional[str] = None
    error: Optional[Dict[str, Any]] = None
    statuses: Dict[str, str] = field(default_factory=dict)
    order: List[str] = field(default_factory=list)
    stopped: bool = False
    manifest: Dict[str, Any] = field(default_factory=dict)
    log: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RunStarted:
    run_id: str
    order: List[str]


@dataclass(frozen=True)
class StepStarted:
    step_id: str
    kind: str
    label: str

    @property
    def status(self) -> StepStatus:
        return StepStatus.RUNNING


@dataclass(frozen=True)
class StepSucceeded:
    step_id: str
    output: StepOutput

    @property
    def status(self) -> StepStatus:
        return StepStatus.SUCCESS


@dataclass(frozen=True)
class StepFailed:
    step_id: str
    error: ErrorPayload

    @property
    def status(self) -> StepStatus:
        return StepStatus.ERROR


@dataclass(frozen=True)
class StepOutputUpdated:
    """Campos a mesclar na representação do Step no editor (`data`, `message`, `display`)."""

    step_id: str
    payload: Dict[str, Any]


@dataclass(frozen=True)
class ConnectionStatusChanged:
    """Estado atual das duas pontas de uma conexão após uma transição."""

    connection_id: str
    source_status: Optional[StepStatus]
    target_status: Optional[StepStatus]


@dataclass(frozen=True)
class RunFinished:
    result: RunResult


RunEvent = Union[
    RunStarted,
    StepStarted,
    StepSucceeded,
    StepFailed,
    StepOutputUpdated,
    ConnectionStatusChanged,
    RunFinished,
]
