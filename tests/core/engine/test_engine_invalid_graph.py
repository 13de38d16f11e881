# tests/core/engine/test_engine_invalid_graph.py
"""
Testes de grafos rejeitados antes de qualquer dispatch.

Grafo vazio, ids duplicados e ciclos produzem apenas RunFinished:
nenhum Step sai de IDLE e nenhum serviço é chamado.
"""

import pytest

from contractflow.core.engine.events import RunFinished
from contractflow.core.pipeline.graph import WorkflowGraph

from tests._fakes import RecordingReporter


@pytest.mark.asyncio
async def test_empty_graph(engine):
    events = [e async for e in engine.run_events(WorkflowGraph())]

    assert len(events) == 1 and isinstance(events[0], RunFinished)
    result = events[0].result
    assert result.success is False
    assert result.message == "No steps to execute. Please add steps to your workflow."
    assert result.error["type"] == "EmptyGraphError"
    assert result.data is None
    assert result.order == []


@pytest.mark.asyncio
async def test_cycle_leaves_every_step_idle(engine, make_graph, compiler):
    graph = make_graph(
        [("a", "project_init", {"title": "A"}), ("b", "compile", {})],
        [("a", "b"), ("b", "a")],
    )
    reporter = RecordingReporter()

    result = await engine.start(graph, reporter)

    assert result.success is False
    assert result.message == "Workflow contains a cycle. Please check your connections."
    assert result.error["type"] == "CycleError"
    assert result.statuses == {"a": "idle", "b": "idle"}
    assert reporter.calls == []
    assert compiler.calls == []


@pytest.mark.asyncio
async def test_duplicate_ids_are_rejected(engine, make_graph):
    graph = make_graph([("a", "project_init", {"title": "A"}), ("a", "compile", {})])
    result = await engine.start(graph)
    assert result.error["type"] == "DuplicateStepIdError"
    assert result.manifest["run"]["status"] == "failed"


@pytest.mark.asyncio
async def test_dangling_connection_is_logged_and_ignored(engine, make_graph):
    graph = make_graph([("a", "project_init", {"title": "A"})], [("a", "ghost")])

    result = await engine.start(graph)

    assert result.success is True
    warnings = [e for e in result.log if e["step_id"] == "engine" and e["level"] == "warning"]
    assert warnings[0]["message"] == "Ignoring connection with unknown endpoint: a-ghost"
