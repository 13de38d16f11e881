"""Step canônico: project_init (v1).

Responsabilidades:
- exigir um título de projeto não vazio
- registrar título, descrição e o instante de inicialização
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

from contractflow.core.exceptions import ValidationError
from contractflow.core.pipeline.context import ExecutionContext
from contractflow.core.pipeline.graph import Node
from contractflow.core.pipeline.types import StepKind, StepOutput

from .base import text_field


@dataclass(frozen=True)
class ProjectInitPayload:
    title: str
    description: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ProjectInitPayload":
        return cls(title=text_field(payload, "title"), description=text_field(payload, "description"))


@dataclass
class ProjectInitHandler:
    kind: StepKind = StepKind.PROJECT_INIT

    async def run(self, node: Node, ctx: ExecutionContext) -> StepOutput:
        payload = ProjectInitPayload.from_payload(node.payload)
        if not payload.title:
            raise ValidationError(
                "Project title is required",
                details={"step_id": node.id, "field": "title"},
                hint="Preencha o título do projeto",
            )

        return StepOutput(
            data={
                "title": payload.title,
                "description": payload.description,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
            message="Project initialized",
        )
