"""Step canônico: ai_audit (v1).

Envia o código do Step `source_input` predecessor ao AIService com o
prompt do payload ou o padrão da configuração (`audit.default_prompt`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from contractflow.core.exceptions import ExternalServiceError
from contractflow.core.pipeline.context import ExecutionContext
from contractflow.core.pipeline.graph import Node
from contractflow.core.pipeline.types import StepKind, StepOutput

from .base import require_service, require_upstream, text_field

DEFAULT_PROMPT = "Analyze this smart contract for security vulnerabilities and suggest improvements."


@dataclass(frozen=True)
class AiAuditPayload:
    prompt: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "AiAuditPayload":
        return cls(prompt=text_field(payload, "prompt"))


@dataclass
class AiAuditHandler:
    kind: StepKind = StepKind.AI_AUDIT

    async def run(self, node: Node, ctx: ExecutionContext) -> StepOutput:
        payload = AiAuditPayload.from_payload(node.payload)
        source = require_upstream(
            ctx,
            node,
            StepKind.SOURCE_INPUT,
            "No contract code found for analysis.",
            accept=lambda out: bool(out.get("source")),
        )
        ai = require_service(ctx.services.ai, "ai", node)

        prompt = payload.prompt or str(ctx.section("audit").get("default_prompt") or DEFAULT_PROMPT)
        result = await ai.analyze(source["source"], prompt)
        if not result.success:
            raise ExternalServiceError(
                result.error or "AI analysis failed",
                details={"step_id": node.id},
            )

        return StepOutput(
            data={"analysis_text": result.analysis_text or "", "prompt": prompt},
            message="AI analysis completed",
        )
