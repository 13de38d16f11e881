"""
Workflow canônico de contrato a partir de um código-fonte.

Topologia produzida:

    project → source → compile → {abi, bytecode} → deploy → completion
                  └──────────→ ai_audit   (opcional, `with_ai=True`)

Os ids seguem o padrão `<prefixo>-<sufixo>`, com um sufixo comum por
grafo gerado, para que dois workflows gerados nunca compartilhem ids.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional, Sequence

from contractflow.contracts.solidity import extract_contract_name
from contractflow.core.pipeline.graph import Connection, Node, WorkflowGraph
from contractflow.core.pipeline.types import StepKind
from contractflow.steps.ai_audit import DEFAULT_PROMPT
from contractflow.steps.compile import DEFAULT_COMPILER_VERSION

DEFAULT_LABELS: Dict[StepKind, str] = {
    StepKind.PROJECT_INIT: "Create Project",
    StepKind.SOURCE_INPUT: "Contract Input",
    StepKind.COMPILE: "Compile Contract",
    StepKind.EXTRACT_ABI: "Generate ABI",
    StepKind.EXTRACT_BYTECODE: "Generate Bytecode",
    StepKind.DEPLOY: "Deploy Contract",
    StepKind.AI_AUDIT: "AI Audit",
    StepKind.COMPLETION: "Workflow Complete",
}


def _node(kind: StepKind, node_id: str, payload: Optional[Dict[str, Any]] = None) -> Node:
    return Node(id=node_id, kind=kind, label=DEFAULT_LABELS[kind], payload=dict(payload or {}))


def build_contract_workflow(
    source: str,
    *,
    title: Optional[str] = None,
    description: str = "",
    constructor_args: Optional[Sequence[Any]] = None,
    compiler_version: str = DEFAULT_COMPILER_VERSION,
    with_ai: bool = False,
    ai_prompt: str = DEFAULT_PROMPT,
    suffix: Optional[str] = None,
) -> WorkflowGraph:
    """
    Monta o grafo canônico de compilação e deploy para `source`.

    O título padrão é `"<Contrato> Project"`, com o nome extraído do
    código (ou `MyContract` quando nenhum nome puder ser derivado).
    """
    suffix = suffix or uuid.uuid4().hex[:8]
    name = extract_contract_name(source) or "MyContract"
    args: List[Any] = list(constructor_args or [])

    project = _node(
        StepKind.PROJECT_INIT,
        f"project-{suffix}",
        {"title": title or f"{name} Project", "description": description},
    )
    contract = _node(StepKind.SOURCE_INPUT, f"contract-{suffix}", {"source": source, "name": name})
    compile_ = _node(StepKind.COMPILE, f"compile-{suffix}", {"compiler_version": compiler_version})
    abi = _node(StepKind.EXTRACT_ABI, f"abi-{suffix}")
    bytecode = _node(StepKind.EXTRACT_BYTECODE, f"bytecode-{suffix}")
    deploy = _node(
        StepKind.DEPLOY,
        f"deploy-{suffix}",
        {"constructor_args": args},
    )
    completion = _node(StepKind.COMPLETION, f"completion-{suffix}")

    nodes = [project, contract, compile_, abi, bytecode, deploy, completion]
    pairs = [
        (project, contract),
        (contract, compile_),
        (compile_, abi),
        (compile_, bytecode),
        (abi, deploy),
        (bytecode, deploy),
        (deploy, completion),
    ]

    if with_ai:
        ai = _node(StepKind.AI_AUDIT, f"ai-{suffix}", {"prompt": ai_prompt})
        nodes.append(ai)
        pairs.append((contract, ai))

    return WorkflowGraph(
        nodes=nodes,
        connections=[Connection(source=s.id, target=t.id) for s, t in pairs],
    )
