# tests/core/engine/test_engine_cancellation.py
"""
Testes de cancelamento cooperativo do Engine.

`stop()` é consultado antes de cada Step: o Step em andamento sempre
termina, nenhum Step posterior inicia e o run é reportado como parado.
"""

import pytest

from contractflow.core.engine.cancellation import StopFlag
from contractflow.core.engine.engine import MSG_STOPPED
from contractflow.core.errors import ENGINE_STOPPED
from contractflow.core.pipeline.types import StepStatus

from tests._fakes import RecordingReporter


class StopAfter(RecordingReporter):
    """Pede a parada quando `step_id` atinge SUCCESS."""

    def __init__(self, engine, step_id):
        super().__init__()
        self.engine = engine
        self.step_id = step_id

    def on_step_status(self, step_id, status):
        super().on_step_status(step_id, status)
        if step_id == self.step_id and status is StepStatus.SUCCESS:
            self.engine.stop()


@pytest.mark.asyncio
async def test_stop_after_second_step(engine, token_workflow, compiler):
    reporter = StopAfter(engine, "contract-t")

    result = await engine.start(token_workflow, reporter)

    assert result.success is False
    assert result.stopped is True
    assert result.message == MSG_STOPPED
    assert result.error["type"] == ENGINE_STOPPED
    assert result.failed_step is None

    assert result.statuses["project-t"] == "success"
    assert result.statuses["contract-t"] == "success"
    assert result.statuses["compile-t"] == "idle"
    assert reporter.statuses_of("compile-t") == []
    assert compiler.calls == []


@pytest.mark.asyncio
async def test_stopped_run_is_recorded_in_manifest(engine, token_workflow):
    result = await engine.start(token_workflow, StopAfter(engine, "project-t"))

    assert result.manifest["run"]["status"] == "stopped"
    assert result.manifest["events"][-1]["event_type"] == "run_stopped"
    assert list(result.data["context_snapshot"]) == ["project-t"]


@pytest.mark.asyncio
async def test_stop_requested_on_last_step_does_not_abort(engine, token_workflow):
    result = await engine.start(token_workflow, StopAfter(engine, "completion-t"))

    assert result.success is True
    assert result.stopped is False


@pytest.mark.asyncio
async def test_stop_before_start_is_discarded(engine, token_workflow):
    engine.stop()
    result = await engine.start(token_workflow)
    assert result.success is True


@pytest.mark.asyncio
async def test_stop_between_events_with_stream(engine, token_workflow):
    seen = []
    async for event in engine.run_events(token_workflow):
        seen.append(type(event).__name__)
        if type(event).__name__ == "StepSucceeded":
            engine.stop()
    assert seen.count("StepStarted") == 1
    assert seen[-1] == "RunFinished"


def test_stop_flag_lifecycle():
    flag = StopFlag()
    assert flag.requested is False
    flag.request()
    flag.request()
    assert flag.requested is True
    flag.reset()
    assert flag.requested is False


def test_only_success_and_error_are_terminal():
    assert [s for s in StepStatus if s.is_terminal] == [StepStatus.SUCCESS, StepStatus.ERROR]
