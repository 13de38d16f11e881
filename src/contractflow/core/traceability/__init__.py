# src/contractflow/core/traceability/__init__.py
"""
Rastreabilidade de runs do ContractFlow (Manifest v1).

API pública exposta:
    - RunManifest     → estrutura canônica do Manifest
    - create_manifest → criação explícita do Manifest
    - add_event       → registro explícito de eventos no Event Log
    - step_started / step_finished / step_failed → estado incremental por Step
    - finish_run      → fechamento do run (success | failed | stopped)
    - save_manifest / load_manifest → persistência JSON determinística
"""

from .manifest import (
    RunManifest,
    add_event,
    create_manifest,
    finish_run,
    load_manifest,
    save_manifest,
    step_failed,
    step_finished,
    step_started,
)

__all__ = [
    "RunManifest",
    "create_manifest",
    "add_event",
    "step_started",
    "step_finished",
    "step_failed",
    "finish_run",
    "save_manifest",
    "load_manifest",
]
