# src/contractflow/core/engine/reporter.py
"""
Adaptador de callbacks sobre o stream de eventos do run.

Consumidores que preferem callbacks (ex.: um store de UI) implementam
`Reporter`; `dispatch_event` traduz cada evento tipado na chamada
correspondente. Callbacks são síncronos e chamados na ordem do stream.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, runtime_checkable

from contractflow.core.pipeline.types import StepStatus

from .events import (
    ConnectionStatusChanged,
    RunEvent,
    StepFailed,
    StepOutputUpdated,
    StepStarted,
    StepSucceeded,
)


@runtime_checkable
class Reporter(Protocol):
    def on_step_status(self, step_id: str, status: StepStatus) -> None:
        ...

    def on_step_output(self, step_id: str, payload: Dict[str, Any]) -> None:
        ...

    def on_connection_status(
        self,
        connection_id: str,
        source_status: Optional[StepStatus],
        target_status: Optional[StepStatus],
    ) -> None:
        ...


def dispatch_event(reporter: Optional[Reporter], event: RunEvent) -> None:
    """Entrega `event` ao reporter; RunStarted e RunFinished não têm callback."""
    if reporter is None:
        return
    if isinstance(event, (StepStarted, StepSucceeded, StepFailed)):
        reporter.on_step_status(event.step_id, event.status)
    elif isinstance(event, StepOutputUpdated):
        reporter.on_step_output(event.step_id, event.payload)
    elif isinstance(event, ConnectionStatusChanged):
        reporter.on_connection_status(event.connection_id, event.source_status, event.target_status)
