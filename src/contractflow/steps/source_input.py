"""Step canônico: source_input (v1).

Responsabilidades:
- exigir código-fonte Solidity não vazio
- aplicar a pré-validação textual (pragma + definição de contrato)
- determinar o nome do contrato (informado ou derivado do código)

O nome derivado é devolvido em `display` para o editor preencher o campo.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping

from contractflow.contracts.solidity import (
    extract_contract_name,
    extract_solidity_version,
    validate_source,
)
from contractflow.core.exceptions import ValidationError
from contractflow.core.pipeline.context import ExecutionContext
from contractflow.core.pipeline.graph import Node
from contractflow.core.pipeline.types import StepKind, StepOutput

from .base import text_field


@dataclass(frozen=True)
class SourceInputPayload:
    source: str
    name: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SourceInputPayload":
        raw = payload.get("source")
        return cls(source="" if raw is None else str(raw), name=text_field(payload, "name"))


@dataclass
class SourceInputHandler:
    kind: StepKind = StepKind.SOURCE_INPUT

    async def run(self, node: Node, ctx: ExecutionContext) -> StepOutput:
        payload = SourceInputPayload.from_payload(node.payload)
        if not payload.source.strip():
            raise ValidationError(
                "Contract code is required",
                details={"step_id": node.id, "field": "source"},
                hint="Cole o código Solidity no Step",
            )

        check = validate_source(payload.source)
        if not check.valid:
            raise ValidationError(
                check.message or "Invalid Solidity code",
                details={"step_id": node.id, "field": "source"},
            )

        display: Dict[str, Any] = {}
        name = payload.name
        if not name:
            name = extract_contract_name(payload.source) or ""
            if not name:
                raise ValidationError(
                    "Could not extract contract name. Please specify it manually.",
                    details={"step_id": node.id, "field": "name"},
                )
            display["name"] = name
            ctx.log(step_id=node.id, level="info", message="contract name derived from source", name=name)

        return StepOutput(
            data={
                "source": payload.source,
                "name": name,
                "pragma_version": extract_solidity_version(payload.source),
            },
            message="Contract code validated",
            display=display,
        )
