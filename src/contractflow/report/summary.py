# src/contractflow/report/summary.py
"""
Resumo textual de um run do workflow.

O resumo é montado exclusivamente a partir das saídas registradas no
ExecutionContext, em ordem narrativa fixa:

    projeto → contrato → compilação → deploy → análise por IA → horário

Seções cujo kind não possui saída registrada são omitidas, de modo que
o mesmo gerador serve a runs completos e a runs abortados.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from contractflow.core.pipeline.context import ExecutionContext
from contractflow.core.pipeline.types import StepKind

SUMMARY_TITLE = "Workflow Execution Summary"


def _format_ts(ts: datetime) -> str:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def render_summary(ctx: ExecutionContext, *, completed_at: Optional[datetime] = None) -> str:
    lines: List[str] = [SUMMARY_TITLE, "=" * 40, ""]

    project = ctx.find_output_of_kind(StepKind.PROJECT_INIT)
    if project:
        lines.append(f"Project: {project.get('title', '')}")
        if project.get("description"):
            lines.append(f"Description: {project['description']}")
        lines.append("")

    source = ctx.find_output_of_kind(StepKind.SOURCE_INPUT)
    if source:
        lines.append(f"Contract Name: {source.get('name', '')}")

    if ctx.find_output_of_kind(StepKind.COMPILE) is not None:
        lines.append("✓ Compilation: Success")

    deploy = ctx.find_output_of_kind(StepKind.DEPLOY)
    if deploy:
        lines.append("✓ Deployment: Success")
        lines.append(f"  Contract Address: {deploy.get('contract_address', '')}")
        lines.append(f"  Transaction Hash: {deploy.get('transaction_hash', '')}")
        network_name = deploy.get("network") or (ctx.network.name if ctx.network else None)
        if network_name:
            lines.append(f"  Network: {network_name}")
        if deploy.get("explorer_url"):
            lines.append(f"  Explorer: {deploy['explorer_url']}")

    if ctx.find_output_of_kind(StepKind.AI_AUDIT) is not None:
        lines.append("✓ AI Analysis: Completed")

    lines.append("")
    lines.append(f"Execution completed at: {_format_ts(completed_at or datetime.now(timezone.utc))}")

    return "\n".join(lines)
