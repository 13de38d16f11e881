# src/contractflow/core/pipeline/context.py
"""
Contexto de execução compartilhado do run (data bus).

Este módulo define o `ExecutionContext`, a estrutura canônica utilizada
para compartilhar estado explícito entre Steps durante um run do workflow.

O ExecutionContext atua como o único meio permitido de:
    - troca indireta de saídas entre Steps (store append-only)
    - localização da saída de um Step predecessor por kind
    - registro de logs estruturados de execução
    - coleta de warnings não fatais associados a Steps

Política de lookup (configurável em `engine.upstream_lookup`):
    - "nearest_ancestor" (padrão): o ancestral mais próximo por distância
      de arestas que já tenha sucesso registrado; quando nenhum ancestral
      do kind existe, recai para o primeiro registro do kind
    - "first_recorded": o primeiro registro do kind em ordem de inserção

Invariantes:
    - Cada saída é gravada exatamente uma vez, logo após o sucesso do Step
    - Saídas nunca são sobrescritas nem removidas durante o run
    - Uma saída está visível se e somente se o Step atingiu SUCCESS
    - Logs sempre incluem `run_id` e `step_id`

Limites explícitos:
    - Não executa Steps
    - Não planeja nem coordena execução
    - Não persiste dados automaticamente
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from contractflow.services.base import ServiceBundle
from contractflow.services.networks import Network

from .graph import WorkflowGraph
from .types import StepKind

LOOKUP_NEAREST_ANCESTOR = "nearest_ancestor"
LOOKUP_FIRST_RECORDED = "first_recorded"


@dataclass
class ExecutionContext:
    """
    Contexto de execução de um único run do workflow.

    O ExecutionContext consolida:
        - identidade da execução (run_id, created_at)
        - grafo e configuração efetiva do run
        - serviços delegados e rede selecionada
        - saídas registradas por Step (insertion-ordered)
        - logs estruturados e warnings por Step

    Handlers recebem o contexto com acesso de leitura; somente o Engine
    chama `record`.
    """
    run_id: str
    created_at: datetime
    graph: WorkflowGraph
    config: Dict[str, Any]
    services: ServiceBundle = field(default_factory=ServiceBundle)
    network: Optional[Network] = None

    _outputs: Dict[str, Any] = field(default_factory=dict, init=False, repr=False)
    _kinds: Dict[str, str] = field(default_factory=dict, init=False, repr=False)
    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    def __post_init__(self) -> None:
        for node in self.graph.nodes:
            self._kinds.setdefault(node.id, node.kind)

    # -----------------------------
    # Output store
    # -----------------------------
    def record(self, step_id: str, output: Any) -> None:
        if step_id in self._outputs:
            raise ValueError(f"Output already recorded for step: {step_id}")
        self._outputs[step_id] = output

    def has_output(self, step_id: str) -> bool:
        return step_id in self._outputs

    def get_output(self, step_id: str) -> Any:
        if step_id not in self._outputs:
            raise KeyError(step_id)
        return self._outputs[step_id]

    def recorded_ids(self) -> List[str]:
        return list(self._outputs)

    def recorded_kinds(self) -> List[str]:
        return [self._kinds.get(sid, "") for sid in self._outputs]

    def snapshot(self) -> Dict[str, Any]:
        return dict(self._outputs)

    # -----------------------------
    # Lookup por kind
    # -----------------------------
    def find_output_of_kind(self, kind: StepKind) -> Optional[Any]:
        wanted = StepKind(kind).value
        for step_id, output in self._outputs.items():
            if self._kinds.get(step_id) == wanted:
                return output
        return None

    def find_upstream_output(self, step_id: str, kind: StepKind) -> Optional[Any]:
        """Saída do ancestral mais próximo de `step_id` com o kind pedido.

        BFS sobre conexões de entrada; empates na mesma distância seguem
        a ordem de declaração das conexões.
        """
        wanted = StepKind(kind).value
        visited = {step_id}
        queue = deque(self.graph.predecessors(step_id))
        while queue:
            current = queue.popleft()
            if current in visited:
                continue
            visited.add(current)
            if self._kinds.get(current) == wanted and current in self._outputs:
                return self._outputs[current]
            queue.extend(self.graph.predecessors(current))
        return None

    def resolve_upstream(self, step_id: str, kind: StepKind) -> Optional[Any]:
        engine_cfg = (self.config or {}).get("engine", {}) or {}
        policy = engine_cfg.get("upstream_lookup", LOOKUP_NEAREST_ANCESTOR)
        if policy == LOOKUP_FIRST_RECORDED:
            return self.find_output_of_kind(kind)
        found = self.find_upstream_output(step_id, kind)
        if found is None:
            found = self.find_output_of_kind(kind)
        return found

    # -----------------------------
    # Config helpers
    # -----------------------------
    def section(self, name: str) -> Dict[str, Any]:
        value = (self.config or {}).get(name, {}) or {}
        return value if isinstance(value, dict) else {}

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, step_id: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "step_id": step_id,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, step_id: str, message: str) -> None:
        if step_id not in self.warnings:
            self.warnings[step_id] = []
        self.warnings[step_id].append(message)
