"""Step canônico: compile (v1).

Responsabilidades:
- obter código e nome do contrato do Step `source_input` predecessor
- delegar a compilação ao CompilerService com a versão do compilador
  do payload ou a padrão da configuração (`compile.default_compiler_version`)
- falhar com os erros do compilador, unidos por quebra de linha
- registrar warnings do compilador como warnings do Step
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from contractflow.contracts.solidity import format_compilation_errors
from contractflow.core.exceptions import ExternalServiceError
from contractflow.core.pipeline.context import ExecutionContext
from contractflow.core.pipeline.graph import Node
from contractflow.core.pipeline.types import StepKind, StepOutput

from .base import require_service, require_upstream, text_field

DEFAULT_COMPILER_VERSION = "0.8.20"


@dataclass(frozen=True)
class CompilePayload:
    compiler_version: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "CompilePayload":
        return cls(compiler_version=text_field(payload, "compiler_version"))


@dataclass
class CompileHandler:
    kind: StepKind = StepKind.COMPILE

    async def run(self, node: Node, ctx: ExecutionContext) -> StepOutput:
        payload = CompilePayload.from_payload(node.payload)
        source = require_upstream(
            ctx,
            node,
            StepKind.SOURCE_INPUT,
            "No contract code found. Please add a source input step before compilation.",
            accept=lambda out: bool(out.get("source")),
        )
        compiler = require_service(ctx.services.compiler, "compiler", node)

        version = payload.compiler_version or str(
            ctx.section("compile").get("default_compiler_version") or DEFAULT_COMPILER_VERSION
        )
        result = await compiler.compile(source["source"], source.get("name", ""), version)

        if not result.success:
            errors = [str(e) for e in result.errors]
            raise ExternalServiceError(
                "\n".join(errors) or "Compilation failed",
                details={
                    "step_id": node.id,
                    "errors": errors,
                    "formatted": format_compilation_errors(errors),
                    "compiler_version": version,
                },
                hint="Corrija o código-fonte e execute novamente",
            )

        for warning in result.warnings:
            ctx.add_warning(step_id=node.id, message=str(warning))

        return StepOutput(
            data={
                "abi": result.abi,
                "bytecode": result.bytecode,
                "warnings": list(result.warnings),
                "compiler_version": version,
                "contract_name": source.get("name", ""),
            },
            message="Contract compiled successfully",
        )
