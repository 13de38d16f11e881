# src/contractflow/core/pipeline/graph.py
"""
Modelo de grafo do workflow.

Este módulo define a representação tipada do grafo produzido pelo
editor externo: Steps (`Node`) e conexões (`Connection`), além da
validação estrutural mínima exigida antes do planejamento.

O grafo atua como uma camada de proteção antecipada, garantindo que:
    - o run possua ao menos um Step
    - cada Step possua um identificador válido e único
    - a ordem de declaração dos Steps seja preservada explicitamente

Decisões arquiteturais:
    - A validação ocorre antes do planner e do Engine
    - Completude de payload por kind NÃO é validada aqui; cada handler
      valida o próprio payload, pois os requisitos variam por kind
    - Tags de kind desconhecidas são preservadas como texto e falham
      somente no dispatch (UnknownKindError), atribuídas ao Step
    - O Engine nunca muta os Nodes do chamador; status vive no run

Limites explícitos:
    - Não planeja execução (não é planner)
    - Não executa Steps
    - Não interage com ExecutionContext
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..exceptions import DuplicateStepIdError, EmptyGraphError, ValidationError
from .types import StepKind


@dataclass
class Node:
    """
    Step do workflow, como autorado no editor.

    Atributos:
        - id: identificador único, atribuído na criação e nunca reutilizado
        - kind: tag do tipo de Step (valor de `StepKind` ou tag desconhecida)
        - label: rótulo de exibição usado na atribuição de falhas
        - payload: campos específicos do kind (interpretados pelo handler)
    """
    id: str
    kind: str
    label: str = ""
    payload: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.kind, StepKind):
            self.kind = self.kind.value
        if not self.label:
            self.label = self.id

    @property
    def step_kind(self) -> Optional[StepKind]:
        return StepKind.parse(self.kind)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind,
            "label": self.label,
            "payload": dict(self.payload),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Node":
        if not isinstance(data, Mapping):
            raise ValidationError(
                "Step definition must be a mapping",
                details={"received": type(data).__name__},
            )
        payload = data.get("payload")
        if payload is None:
            payload = data.get("data") or {}
        if not isinstance(payload, Mapping):
            raise ValidationError(
                "Step payload must be a mapping",
                details={"step_id": str(data.get("id") or ""), "received": type(payload).__name__},
            )
        return cls(
            id=str(data.get("id") or ""),
            kind=str(data.get("kind") or data.get("type") or ""),
            label=str(data.get("label") or ""),
            payload=dict(payload),
        )


@dataclass(frozen=True)
class Connection:
    """Conexão dirigida `source → target` entre dois Steps."""

    source: str
    target: str
    id: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            object.__setattr__(self, "id", f"{self.source}-{self.target}")

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "source": self.source, "target": self.target}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Connection":
        if not isinstance(data, Mapping):
            raise ValidationError(
                "Connection definition must be a mapping",
                details={"received": type(data).__name__},
            )
        return cls(
            source=str(data.get("source") or ""),
            target=str(data.get("target") or ""),
            id=str(data.get("id") or ""),
        )


@dataclass
class WorkflowGraph:
    """
    Conjunto completo de Steps e conexões de um run.

    Invariantes (após `validate`):
        - Existe ao menos um Step
        - Cada `node.id` é uma string não vazia e única
        - `nodes` reflete exatamente a ordem de declaração
    """
    nodes: List[Node] = field(default_factory=list)
    connections: List[Connection] = field(default_factory=list)

    def validate(self) -> None:
        if not self.nodes:
            raise EmptyGraphError(
                "No steps to execute. Please add steps to your workflow.",
                hint="Adicione ao menos um Step ao workflow antes de executar",
            )

        seen: Dict[str, Node] = {}
        for node in self.nodes:
            if not isinstance(node.id, str) or not node.id.strip():
                raise ValidationError(
                    "step.id must be a non-empty string",
                    details={"label": node.label},
                )
            if node.id in seen:
                raise DuplicateStepIdError(
                    f"Duplicate step id: {node.id}",
                    details={"step_id": node.id},
                )
            seen[node.id] = node

    def get(self, step_id: str) -> Node:
        for node in self.nodes:
            if node.id == step_id:
                return node
        raise KeyError(step_id)

    def node_ids(self) -> List[str]:
        return [n.id for n in self.nodes]

    def active_connections(self) -> List[Connection]:
        """Conexões cujas duas pontas existem no grafo."""
        ids = set(self.node_ids())
        return [c for c in self.connections if c.source in ids and c.target in ids]

    def dangling_connections(self) -> List[Connection]:
        ids = set(self.node_ids())
        return [c for c in self.connections if c.source not in ids or c.target not in ids]

    def predecessors(self, step_id: str) -> List[str]:
        """Ids de origem das conexões que chegam em `step_id`, em ordem de declaração."""
        return [c.source for c in self.active_connections() if c.target == step_id]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "connections": [c.to_dict() for c in self.connections],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WorkflowGraph":
        """Constrói o grafo a partir do JSON do editor (`nodes` + `connections`|`edges`)."""
        if not isinstance(data, Mapping):
            raise ValidationError(
                "Workflow definition must be a mapping",
                details={"received": type(data).__name__},
            )
        raw_connections: Iterable[Any] = data.get("connections")
        if raw_connections is None:
            raw_connections = data.get("edges") or []
        return cls(
            nodes=[Node.from_dict(n) for n in (data.get("nodes") or [])],
            connections=[Connection.from_dict(c) for c in raw_connections],
        )

    @classmethod
    def from_json(cls, text: str) -> "WorkflowGraph":
        return cls.from_dict(json.loads(text))
