# src/contractflow/core/traceability/manifest.py
"""
Manifest v1: rastreabilidade de runs do ContractFlow.

Este módulo define a estrutura e as operações canônicas do Manifest,
o registro auditável de um run do workflow.

O Manifest consolida, de forma determinística:
    - metadados do run (run_id, started_at, engine_version, status final)
    - hashes semânticos das entradas (config efetiva e grafo)
    - estado incremental de cada Step
    - Event Log ordenado de eventos explícitos

Princípios fundamentais:
    - Nenhum evento é emitido implicitamente
    - Toda mutação ocorre por chamadas explícitas da API
    - A ordem do Event Log reflete a ordem real de execução
    - O Manifest é serializável e reconstruível (round-trip)

Decisões arquiteturais:
    - UTC é o timezone canônico para todos os timestamps
    - O formato de persistência é JSON determinístico (sort_keys)
    - Steps que nunca iniciaram não aparecem em `steps`

Limites explícitos:
    - Não executa o workflow
    - Não decide políticas de execução (fail-fast, cancelamento)
    - Não realiza migração de versões de schema
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

MANIFEST_VERSION = 1


def _utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _iso(dt: datetime) -> str:
    return _utc(dt).isoformat()


def _ms_between(start: datetime, end: datetime) -> int:
    """Duração em milissegundos, nunca negativa."""
    return max(0, int((_utc(end) - _utc(start)).total_seconds() * 1000))


@dataclass
class RunManifest:
    """
    Registro de um run do workflow.

    Campos:
        - run: metadados do run (run_id, started_at, engine_version, finished_at, status)
        - inputs: hashes semânticos (config_hash, graph_hash)
        - steps: estado incremental por step_id
        - events: Event Log ordenado

    Invariantes:
        - `steps` é sempre um dicionário indexado por step_id
        - `events` é sempre uma lista ordenada
        - A estrutura completa é serializável em JSON
    """

    run: Dict[str, Any]
    inputs: Dict[str, Any]
    steps: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "manifest_version": MANIFEST_VERSION,
            "run": dict(self.run),
            "inputs": dict(self.inputs),
            "steps": {k: dict(v) for k, v in self.steps.items()},
            "events": [dict(e) for e in self.events],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RunManifest":
        return cls(
            run=dict(data.get("run", {})),
            inputs=dict(data.get("inputs", {})),
            steps={k: dict(v) for k, v in (data.get("steps", {}) or {}).items()},
            events=[dict(e) for e in (data.get("events", []) or [])],
        )


def create_manifest(
    *,
    run_id: str,
    started_at: datetime,
    engine_version: str,
    config_hash: str,
    graph_hash: str,
) -> RunManifest:
    """
    Cria o Manifest inicial de um run.

    Importante: esta função não registra `run_started`; o Engine chama
    `add_event` explicitamente.
    """
    return RunManifest(
        run={
            "run_id": run_id,
            "started_at": _iso(started_at),
            "engine_version": engine_version,
        },
        inputs={
            "config_hash": config_hash,
            "graph_hash": graph_hash,
        },
    )


def add_event(
    manifest: RunManifest,
    *,
    event_type: str,
    ts: datetime,
    step_id: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> None:
    """Adiciona exatamente um evento ao Event Log, na ordem de chamada."""
    ev: Dict[str, Any] = {"event_type": event_type, "timestamp": _iso(ts)}
    if step_id is not None:
        ev["step_id"] = step_id
    if payload is not None:
        ev["payload"] = payload
    manifest.events.append(ev)


def step_started(manifest: RunManifest, *, step_id: str, kind: str, label: str, ts: datetime) -> None:
    s = manifest.steps.setdefault(step_id, {})
    s.update(
        {
            "step_id": step_id,
            "kind": kind,
            "label": label,
            "status": "running",
            "started_at": _iso(ts),
        }
    )
    add_event(manifest, event_type="step_started", ts=ts, step_id=step_id, payload={"kind": kind})


def step_finished(
    manifest: RunManifest,
    *,
    step_id: str,
    ts: datetime,
    message: str,
    warnings: Optional[List[str]] = None,
) -> None:
    """
    Registra a conclusão bem-sucedida de um Step.

    A duração é calculada a partir de `started_at` quando disponível.
    """
    s = manifest.steps.setdefault(step_id, {"step_id": step_id})
    started_iso = s.get("started_at")
    started_dt = datetime.fromisoformat(started_iso) if started_iso else ts
    s.update(
        {
            "status": "success",
            "finished_at": _iso(ts),
            "duration_ms": _ms_between(started_dt, ts),
            "message": message,
            "warnings": list(warnings or []),
        }
    )
    add_event(
        manifest,
        event_type="step_finished",
        ts=ts,
        step_id=step_id,
        payload={"status": "success", "duration_ms": s["duration_ms"]},
    )


def step_failed(
    manifest: RunManifest,
    *,
    step_id: str,
    ts: datetime,
    error: Dict[str, Any],
    warnings: Optional[List[str]] = None,
) -> None:
    """Registra a falha de um Step com o ErrorPayload serializado."""
    s = manifest.steps.setdefault(step_id, {"step_id": step_id})
    s.update(
        {
            "status": "error",
            "finished_at": _iso(ts),
            "error": dict(error),
            "warnings": list(warnings or []),
        }
    )
    add_event(
        manifest,
        event_type="step_failed",
        ts=ts,
        step_id=step_id,
        payload={"type": error.get("type"), "message": error.get("message")},
    )


def finish_run(manifest: RunManifest, *, ts: datetime, status: str, message: str) -> None:
    """Fecha o run: `status` é "success", "failed" ou "stopped"."""
    started_iso = manifest.run.get("started_at")
    started_dt = datetime.fromisoformat(started_iso) if started_iso else ts
    manifest.run.update(
        {
            "finished_at": _iso(ts),
            "duration_ms": _ms_between(started_dt, ts),
            "status": status,
        }
    )
    event_type = "run_stopped" if status == "stopped" else "run_finished"
    add_event(manifest, event_type=event_type, ts=ts, payload={"status": status, "message": message})


def save_manifest(manifest: RunManifest, path: Path) -> None:
    """Persiste o Manifest em JSON determinístico, criando diretórios intermediários."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(manifest.to_dict(), ensure_ascii=False, indent=2, sort_keys=True, default=str),
        encoding="utf-8",
    )


def load_manifest(path: Path) -> RunManifest:
    data = json.loads(path.read_text(encoding="utf-8"))
    return RunManifest.from_dict(data)
