# tests/conftest.py
"""
Fixtures compartilhados para testes do ContractFlow.

Este módulo define fixtures reutilizáveis que fornecem:
- configuração efetiva carregada dos defaults empacotados
- serviços delegados falsos (compilador, wallet, IA) com respostas determinísticas
- uma fábrica de grafos a partir de tuplas simples
- um ExecutionContext isolado para testes de handlers

O objetivo destas fixtures é permitir testes do core e dos handlers
sem depender de:
- compilador Solidity real
- wallet ou rede blockchain
- provedores de IA

Decisões arquiteturais:
    - Serviços falsos (tests/_fakes.py) satisfazem os Protocols por duck typing
    - Respostas dos serviços são configuráveis por atributo
    - Chamadas recebidas ficam registradas para asserts

Invariantes:
    - Nenhuma fixture faz I/O de rede
    - Nenhuma fixture compartilha estado entre testes
"""

from datetime import datetime, timezone
from typing import Any, Dict, Sequence, Tuple

import pytest

from contractflow.core.config import load_config
from contractflow.core.engine.engine import Engine
from contractflow.core.pipeline.context import ExecutionContext
from contractflow.core.pipeline.graph import Connection, Node, WorkflowGraph
from contractflow.services.base import ServiceBundle
from contractflow.services.networks import find_network
from contractflow.templates.workflow import build_contract_workflow

from tests._fakes import TOKEN_SOURCE, FakeAI, FakeCompiler, FakeWallet


@pytest.fixture
def config() -> Dict[str, Any]:
    """Configuração efetiva a partir do `defaults.yaml` empacotado."""
    return load_config()


@pytest.fixture
def sepolia(config):
    return find_network(config, "sepolia")


@pytest.fixture
def compiler():
    return FakeCompiler()


@pytest.fixture
def wallet():
    return FakeWallet()


@pytest.fixture
def ai():
    return FakeAI()


@pytest.fixture
def services(compiler, wallet, ai) -> ServiceBundle:
    return ServiceBundle(compiler=compiler, wallet=wallet, ai=ai)


@pytest.fixture
def make_graph():
    """
    Fábrica de grafos.

    Uso:
        make_graph([("a", "project_init", {"title": "T"}), ...], [("a", "b")])
    """

    def _make(
        nodes: Sequence[Tuple[str, str, Dict[str, Any]]],
        edges: Sequence[Tuple[str, str]] = (),
    ) -> WorkflowGraph:
        return WorkflowGraph(
            nodes=[Node(id=i, kind=k, payload=dict(p)) for i, k, p in nodes],
            connections=[Connection(source=s, target=t) for s, t in edges],
        )

    return _make


@pytest.fixture
def make_ctx(config, services):
    """Fábrica de ExecutionContext isolado para testes de handlers."""

    def _make(graph: WorkflowGraph, *, network=None, services_override=None, config_override=None):
        return ExecutionContext(
            run_id="run-test-001",
            created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
            graph=graph,
            config=config_override if config_override is not None else config,
            services=services_override if services_override is not None else services,
            network=network,
        )

    return _make


@pytest.fixture
def token_workflow() -> WorkflowGraph:
    """Workflow canônico do SimpleToken com ids determinísticos (sufixo `t`)."""
    return build_contract_workflow(TOKEN_SOURCE, constructor_args=["Token", 1000], suffix="t")


@pytest.fixture
def engine(services, config, sepolia) -> Engine:
    return Engine(services=services, config=config, network=sepolia)
