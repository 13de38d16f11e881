"""
src/contractflow/report/report_md.py

Gerador canônico do relatório Markdown de um run (v1).

Regras:
- O relatório é derivado do Manifest final (dict) e, opcionalmente,
  do resumo textual do run (`RunResult.data["summary"]`).
- Não infere nem recalcula nada que não esteja registrado.
- Mesmo Manifest => mesmo relatório (ordem estável pelo Event Log).

Estrutura mínima obrigatória:
# Workflow Execution Report

## Outcome
## Steps
## Failure
## Summary
## Traceability
## Execution Metadata
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional


REQUIRED_SECTIONS: List[str] = [
    "# Workflow Execution Report",
    "## Outcome",
    "## Steps",
    "## Failure",
    "## Summary",
    "## Traceability",
    "## Execution Metadata",
]


def _as_pretty_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, sort_keys=True, indent=2, default=str)


def _require_manifest(manifest: Dict[str, Any]) -> Dict[str, Any]:
    if not isinstance(manifest, dict) or not manifest:
        raise ValueError("Manifest is required to generate the execution report")
    return manifest


def _steps_in_execution_order(steps: Dict[str, Any], events: List[Any]) -> List[Dict[str, Any]]:
    ordered: List[Dict[str, Any]] = []
    seen = set()
    for ev in events:
        if not isinstance(ev, dict) or ev.get("event_type") != "step_started":
            continue
        sid = ev.get("step_id")
        if sid in seen or not isinstance(steps.get(sid), dict):
            continue
        seen.add(sid)
        ordered.append(steps[sid])
    return ordered


def generate_report_md(manifest: Dict[str, Any], summary: Optional[str] = None) -> str:
    """Gera o conteúdo completo do relatório a partir do Manifest final."""
    manifest = _require_manifest(manifest)

    run = manifest.get("run") if isinstance(manifest.get("run"), dict) else {}
    inputs = manifest.get("inputs") if isinstance(manifest.get("inputs"), dict) else {}
    steps = manifest.get("steps") if isinstance(manifest.get("steps"), dict) else {}
    events = manifest.get("events") if isinstance(manifest.get("events"), list) else []

    lines: List[str] = []

    lines.append("# Workflow Execution Report\n")

    lines.append("## Outcome")
    lines.append(f"- **Run ID**: `{run.get('run_id', '<unknown>')}`")
    lines.append(f"- **Status**: `{run.get('status', '<unknown>')}`")
    lines.append(f"- **Started At (UTC)**: `{run.get('started_at', '<unknown>')}`")
    lines.append(f"- **Finished At (UTC)**: `{run.get('finished_at', '<unknown>')}`")
    if "duration_ms" in run:
        lines.append(f"- **Duration**: `{run['duration_ms']} ms`")
    lines.append("")

    lines.append("## Steps")
    ordered = _steps_in_execution_order(steps, events)
    if ordered:
        for step in ordered:
            label = step.get("label") or step.get("step_id")
            status = step.get("status", "unknown")
            kind = step.get("kind", "unknown")
            message = step.get("message") or ""
            line = f"- **{label}** (`{kind}`): status `{status}`"
            if message:
                line += f", {message}"
            lines.append(line)
            for w in step.get("warnings") or []:
                lines.append(f"  - warning: {w}")
    else:
        lines.append("No step was started in this run.")
    lines.append("")

    lines.append("## Failure")
    failed = [s for s in ordered if s.get("status") == "error"]
    if failed:
        for step in failed:
            error = step.get("error") or {}
            lines.append(f"- **{step.get('label') or step.get('step_id')}**: {error.get('message', '')}")
            lines.append(f"  - type: `{error.get('type', '<unknown>')}`")
            if error.get("hint"):
                lines.append(f"  - hint: {error['hint']}")
    elif run.get("status") == "stopped":
        lines.append("Run stopped by user before completion.")
    else:
        lines.append("No step failed.")
    lines.append("")

    lines.append("## Summary")
    if summary:
        lines.append("```text")
        lines.append(summary)
        lines.append("```")
    else:
        lines.append("No summary available.")
    lines.append("")

    lines.append("## Traceability")
    lines.append("- Source of truth: `Manifest` (final) only.")
    lines.append(f"- Events recorded: `{len(events)}`\n")

    lines.append("## Execution Metadata")
    lines.append("### run")
    lines.append("```json")
    lines.append(_as_pretty_json(run))
    lines.append("```")
    lines.append("### inputs")
    lines.append("```json")
    lines.append(_as_pretty_json(inputs))
    lines.append("```")

    content = "\n".join(lines)

    for sec in REQUIRED_SECTIONS:
        if sec not in content:
            raise RuntimeError(f"Report generation failed: missing required section: {sec}")

    return content
