# src/contractflow/core/engine/planner.py
"""
Planejador de execução do workflow (DAG).

Este módulo é responsável por produzir a ordem linear de execução dos
Steps de um `WorkflowGraph`, respeitando integralmente as conexões
desenhadas pelo usuário, e por rejeitar grafos cíclicos antes que
qualquer handler seja invocado.

Princípios fundamentais:
    - O workflow deve formar um DAG válido
    - A ordenação é determinística para a mesma entrada
    - A ordem é calculada uma única vez por run, antes do dispatch

Decisões arquiteturais:
    - Algoritmo de Kahn com fila FIFO
    - Empates iniciais seguem a ordem de inserção dos Steps no grafo
    - Sucessores são visitados na ordem de declaração das conexões
    - Conexões com pontas inexistentes não participam do planejamento
      (o Engine registra um warning para cada uma)

Invariantes:
    - Para toda conexão u → v, u aparece antes de v
    - Todos os Steps aparecem exatamente uma vez
    - A mesma definição de grafo produz sempre a mesma ordem

Limites explícitos:
    - Não executa Steps
    - Não interage com ExecutionContext
    - Não valida payloads por kind
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, List

from contractflow.core.exceptions import CycleError
from contractflow.core.pipeline.graph import Node, WorkflowGraph


def plan_execution(graph: WorkflowGraph) -> List[Node]:
    """
    Produz a ordem linear de execução dos Steps do grafo.

    Args:
        graph (WorkflowGraph): Grafo já validado estruturalmente.

    Returns:
        List[Node]: Steps em ordem topológica de execução.

    Raises:
        CycleError: Se as conexões formarem ao menos um ciclo. `details`
            lista os Steps que não puderam ser ordenados.
    """
    by_id: Dict[str, Node] = {n.id: n for n in graph.nodes}

    in_degree: Dict[str, int] = {sid: 0 for sid in by_id}
    outgoing: Dict[str, List[str]] = {sid: [] for sid in by_id}
    for conn in graph.active_connections():
        outgoing[conn.source].append(conn.target)
        in_degree[conn.target] += 1

    queue: Deque[str] = deque(n.id for n in graph.nodes if in_degree[n.id] == 0)
    order_ids: List[str] = []

    while queue:
        sid = queue.popleft()
        order_ids.append(sid)
        for child in outgoing[sid]:
            in_degree[child] -= 1
            if in_degree[child] == 0:
                queue.append(child)

    if len(order_ids) != len(by_id):
        scheduled = set(order_ids)
        raise CycleError(
            "Workflow contains a cycle. Please check your connections.",
            details={"unscheduled": [n.id for n in graph.nodes if n.id not in scheduled]},
            hint="Remova a conexão que fecha o ciclo entre os Steps listados",
        )

    return [by_id[sid] for sid in order_ids]
