"""Step canônico: completion (v1). Produz o resumo textual do run até este ponto."""

from __future__ import annotations

from dataclasses import dataclass

from contractflow.core.pipeline.context import ExecutionContext
from contractflow.core.pipeline.graph import Node
from contractflow.core.pipeline.types import StepKind, StepOutput
from contractflow.report.summary import render_summary


@dataclass
class CompletionHandler:
    kind: StepKind = StepKind.COMPLETION

    async def run(self, node: Node, ctx: ExecutionContext) -> StepOutput:
        summary = render_summary(ctx)
        return StepOutput(data={"summary": summary}, message="Workflow completed", display={"summary": summary})
