"""Step canônico: extract_bytecode (v1).

Expõe o bytecode da compilação predecessora e mede seu tamanho.
Bytecode próximo ou acima do limite de 24KB da mainnet gera warning
no Step (limites em `bytecode.warn_size_kb` / `bytecode.max_size_kb`).
"""

from __future__ import annotations

from dataclasses import dataclass

from contractflow.contracts.solidity import (
    MAINNET_SIZE_LIMIT_KB,
    SIZE_WARNING_KB,
    analyze_bytecode_size,
)
from contractflow.core.pipeline.context import ExecutionContext
from contractflow.core.pipeline.graph import Node
from contractflow.core.pipeline.types import StepKind, StepOutput

from .base import require_upstream
from .extract_abi import MISSING_COMPILATION


@dataclass
class ExtractBytecodeHandler:
    kind: StepKind = StepKind.EXTRACT_BYTECODE

    async def run(self, node: Node, ctx: ExecutionContext) -> StepOutput:
        compiled = require_upstream(
            ctx,
            node,
            StepKind.COMPILE,
            MISSING_COMPILATION,
            accept=lambda out: bool(out.get("bytecode")),
        )
        bytecode = str(compiled["bytecode"])

        limits = ctx.section("bytecode")
        size = analyze_bytecode_size(
            bytecode,
            warn_kb=float(limits.get("warn_size_kb", SIZE_WARNING_KB)),
            max_kb=float(limits.get("max_size_kb", MAINNET_SIZE_LIMIT_KB)),
        )
        if size.warning:
            ctx.add_warning(step_id=node.id, message=size.warning)

        return StepOutput(
            data={"bytecode": bytecode, "size_bytes": size.size_bytes, "size_kb": size.size_kb},
            message="Bytecode generated successfully",
        )
