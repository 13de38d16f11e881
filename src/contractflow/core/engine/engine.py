# src/contractflow/core/engine/engine.py
"""
Engine de execução do workflow do ContractFlow.

O Engine recebe um `WorkflowGraph`, planeja a ordem linear de execução
e despacha cada Step ao handler do seu kind, um por vez, encadeando as
saídas pelo ExecutionContext.

Política de execução:
    - Validação estrutural e detecção de ciclo antes de qualquer dispatch
    - Fail-fast: a primeira falha encerra o run; nenhum Step posterior inicia
    - Cancelamento cooperativo: `stop()` é consultado antes de cada Step
    - Um run por instância: iniciar um segundo run levanta RunInProgressError

Guardrails:
    - Exceções de handlers são convertidas em ErrorPayload (sem stack trace)
    - O Step que falhou é sempre identificado no RunResult
    - O contexto parcial é preservado em `RunResult.data` mesmo em runs abortados
    - Os Nodes do chamador nunca são mutados; status vive no run e nos eventos

Rastreabilidade:
    - Cada run possui seu próprio Manifest v1 (hashes de config e grafo,
      estado por Step, Event Log) persistido em `engine.manifest_dir`
      quando configurado
"""

from __future__ import annotations

import asyncio
import uuid
import weakref
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, AsyncGenerator, Dict, List, Optional, Union

from contractflow.core.config import compute_config_hash, compute_graph_hash, load_config
from contractflow.core.errors import ErrorPayload, engine_stopped, from_exception
from contractflow.core.exceptions import RunInProgressError, WorkflowException
from contractflow.core.pipeline.context import ExecutionContext
from contractflow.core.pipeline.graph import Node, WorkflowGraph
from contractflow.core.pipeline.registry import HandlerRegistry
from contractflow.core.pipeline.types import StepOutput, StepStatus
from contractflow.core.traceability.manifest import (
    RunManifest,
    add_event,
    create_manifest,
    finish_run,
    save_manifest,
    step_failed,
    step_finished,
    step_started,
)
from contractflow.report.summary import render_summary
from contractflow.services.base import ServiceBundle
from contractflow.services.networks import Network, find_network
from contractflow.steps import default_registry

from .cancellation import StopFlag
from .events import (
    ConnectionStatusChanged,
    RunEvent,
    RunFinished,
    RunResult,
    RunStarted,
    StepFailed,
    StepOutputUpdated,
    StepStarted,
    StepSucceeded,
)
from .planner import plan_execution
from .reporter import Reporter, dispatch_event

ENGINE_LOG_ID = "engine"

MSG_SUCCESS = "Workflow executed successfully"
MSG_STOPPED = "Workflow execution stopped by user"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Engine:
    """Engine canônico do ContractFlow (planner + dispatcher)."""

    def __init__(
        self,
        *,
        services: Optional[ServiceBundle] = None,
        config: Optional[Dict[str, Any]] = None,
        network: Union[Network, str, None] = None,
        handlers: Optional[HandlerRegistry] = None,
    ):
        self.services: ServiceBundle = services or ServiceBundle()
        self.config: Dict[str, Any] = config if config is not None else load_config()
        if isinstance(network, str):
            network = find_network(self.config, network)
        self.network: Optional[Network] = network
        self.handlers: HandlerRegistry = handlers or default_registry()
        self._stop = StopFlag()
        self._active: Optional["weakref.ReferenceType[AsyncGenerator[RunEvent, None]]"] = None

    # ------------------------------------------------------------------
    # Controle
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        # Um stream abandonado e coletado libera o Engine mesmo sem aclose().
        stream = self._active() if self._active is not None else None
        return stream is not None and stream.ag_frame is not None

    def stop(self) -> None:
        """Pede a parada do run atual; o Step em andamento sempre termina."""
        self._stop.request()

    def _engine_cfg(self) -> Dict[str, Any]:
        value = (self.config or {}).get("engine", {}) or {}
        return value if isinstance(value, dict) else {}

    def _step_delay(self) -> float:
        return float(self._engine_cfg().get("step_delay_seconds", 0) or 0)

    def _manifest_dir(self) -> Optional[Path]:
        raw = self._engine_cfg().get("manifest_dir") or ""
        return Path(raw) if raw else None

    # ------------------------------------------------------------------
    # Entradas públicas
    # ------------------------------------------------------------------

    async def start(self, graph: WorkflowGraph, reporter: Optional[Reporter] = None) -> RunResult:
        """Executa o grafo até o fim, entregando eventos ao reporter, e retorna o RunResult."""
        finished: Optional[RunFinished] = None
        stream = self.run_events(graph)
        try:
            async for event in stream:
                dispatch_event(reporter, event)
                if isinstance(event, RunFinished):
                    finished = event
        finally:
            await stream.aclose()
        if finished is None:
            raise WorkflowException(
                "Workflow finished without a result",
                details={"steps": len(graph.nodes)},
            )
        return finished.result

    def run_events(self, graph: WorkflowGraph) -> AsyncGenerator[RunEvent, None]:
        """
        Registra um novo run e retorna o stream ordenado de eventos dele.

        O último evento é sempre `RunFinished`. O Engine fica ocupado
        enquanto o stream estiver aberto: quem parar de consumir antes do
        fim deve chamar `aclose()` (por exemplo num `try/finally`).
        Um stream descartado sem referências também libera o Engine.

        Raises:
            RunInProgressError: Se este Engine já estiver executando um run.
        """
        if self.running:
            raise RunInProgressError(
                "Workflow is already running",
                hint="Aguarde o término do run atual ou chame stop()",
            )
        self._stop.reset()
        stream = self._execute(graph)
        self._active = weakref.ref(stream)
        return stream

    # ------------------------------------------------------------------
    # Execução
    # ------------------------------------------------------------------

    async def _execute(self, graph: WorkflowGraph) -> AsyncGenerator[RunEvent, None]:
        started_at = _now()
        run_id = uuid.uuid4().hex
        ctx = ExecutionContext(
            run_id=run_id,
            created_at=started_at,
            graph=graph,
            config=self.config,
            services=self.services,
            network=self.network,
        )
        manifest = create_manifest(
            run_id=run_id,
            started_at=started_at,
            engine_version=str(self._engine_cfg().get("version", "")),
            config_hash=compute_config_hash(self.config),
            graph_hash=compute_graph_hash(graph.to_dict()),
        )
        add_event(manifest, event_type="run_started", ts=started_at, payload={"steps": len(graph.nodes)})
        statuses: Dict[str, StepStatus] = {n.id: StepStatus.IDLE for n in graph.nodes}

        try:
            graph.validate()
            order = plan_execution(graph)
        except WorkflowException as e:
            error = from_exception(e)
            ctx.log(step_id=ENGINE_LOG_ID, level="error", message=e.message, error_type=error.type)
            yield RunFinished(
                self._finish(ctx, manifest, statuses, [], success=False, message=e.message, error=error)
            )
            return

        order_ids = [n.id for n in order]
        ctx.log(step_id=ENGINE_LOG_ID, level="info", message="run started", order=order_ids)
        for conn in graph.dangling_connections():
            ctx.log(
                step_id=ENGINE_LOG_ID,
                level="warning",
                message=f"Ignoring connection with unknown endpoint: {conn.id}",
                connection=conn.to_dict(),
            )
        yield RunStarted(run_id=run_id, order=order_ids)

        delay = self._step_delay()
        for index, node in enumerate(order):
            if self._stop.requested:
                ctx.log(step_id=ENGINE_LOG_ID, level="warning", message="run stopped", next_step=node.id)
                yield RunFinished(
                    self._finish(
                        ctx,
                        manifest,
                        statuses,
                        order_ids,
                        success=False,
                        message=MSG_STOPPED,
                        error=engine_stopped(),
                        stopped=True,
                    )
                )
                return

            statuses[node.id] = StepStatus.RUNNING
            step_started(manifest, step_id=node.id, kind=node.kind, label=node.label, ts=_now())
            ctx.log(step_id=node.id, level="info", message="step started", kind=node.kind)
            yield StepStarted(step_id=node.id, kind=node.kind, label=node.label)
            for event in self._connection_events(graph, node.id, statuses):
                yield event

            try:
                output = await self._dispatch(node, ctx)
            except Exception as e:
                error = from_exception(e, step_id=node.id)
                statuses[node.id] = StepStatus.ERROR
                step_failed(
                    manifest,
                    step_id=node.id,
                    ts=_now(),
                    error=error.to_dict(),
                    warnings=ctx.warnings.get(node.id),
                )
                ctx.log(step_id=node.id, level="error", message=error.message, error_type=error.type)
                yield StepFailed(step_id=node.id, error=error)
                for event in self._connection_events(graph, node.id, statuses):
                    yield event
                yield RunFinished(
                    self._finish(
                        ctx,
                        manifest,
                        statuses,
                        order_ids,
                        success=False,
                        message=f'Failed at step "{node.label}": {error.message}',
                        error=error,
                        failed_step=node.id,
                    )
                )
                return

            ctx.record(node.id, output.data)
            statuses[node.id] = StepStatus.SUCCESS
            step_finished(
                manifest,
                step_id=node.id,
                ts=_now(),
                message=output.message,
                warnings=ctx.warnings.get(node.id),
            )
            ctx.log(step_id=node.id, level="info", message=output.message or "step finished")
            yield StepSucceeded(step_id=node.id, output=output)
            yield StepOutputUpdated(
                step_id=node.id,
                payload={"data": dict(output.data), "message": output.message, "display": dict(output.display)},
            )
            for event in self._connection_events(graph, node.id, statuses):
                yield event

            if delay > 0 and index < len(order) - 1:
                await asyncio.sleep(delay)

        yield RunFinished(
            self._finish(ctx, manifest, statuses, order_ids, success=True, message=MSG_SUCCESS)
        )

    async def _dispatch(self, node: Node, ctx: ExecutionContext) -> StepOutput:
        handler = self.handlers.resolve(node)
        output = await handler.run(node, ctx)
        if not isinstance(output, StepOutput):
            raise TypeError(f"Handler for kind '{node.kind}' must return StepOutput")
        return output

    def _connection_events(
        self,
        graph: WorkflowGraph,
        step_id: str,
        statuses: Dict[str, StepStatus],
    ) -> List[ConnectionStatusChanged]:
        """Conexões que tocam `step_id`, com o estado atual de cada ponta."""
        events: List[ConnectionStatusChanged] = []
        for conn in graph.active_connections():
            if step_id not in (conn.source, conn.target):
                continue
            source_status = statuses.get(conn.source)
            target_status = statuses.get(conn.target)
            events.append(
                ConnectionStatusChanged(
                    connection_id=conn.id,
                    source_status=None if source_status is StepStatus.IDLE else source_status,
                    target_status=None if target_status is StepStatus.IDLE else target_status,
                )
            )
        return events

    def _finish(
        self,
        ctx: ExecutionContext,
        manifest: RunManifest,
        statuses: Dict[str, StepStatus],
        order: List[str],
        *,
        success: bool,
        message: str,
        error: Optional[ErrorPayload] = None,
        failed_step: Optional[str] = None,
        stopped: bool = False,
    ) -> RunResult:
        status = "success" if success else ("stopped" if stopped else "failed")
        finish_run(manifest, ts=_now(), status=status, message=message)

        manifest_dir = self._manifest_dir()
        if manifest_dir is not None:
            path = manifest_dir / f"{ctx.run_id}.json"
            save_manifest(manifest, path)
            ctx.log(step_id=ENGINE_LOG_ID, level="info", message="manifest saved", path=str(path))

        data: Optional[Dict[str, Any]] = None
        if order:
            data = {"summary": render_summary(ctx), "context_snapshot": ctx.snapshot()}

        return RunResult(
            success=success,
            message=message,
            data=data,
            failed_step=failed_step,
            error=error.to_dict() if error is not None else None,
            statuses={sid: st.value for sid, st in statuses.items()},
            order=list(order),
            stopped=stopped,
            manifest=manifest.to_dict(),
            log=list(ctx.events),
        )
