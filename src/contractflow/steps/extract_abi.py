"""Step canônico: extract_abi (v1).

Expõe o ABI da compilação predecessora e os parâmetros do construtor
declarados nele, usados pelo deploy para formatar os argumentos.
"""

from __future__ import annotations

from dataclasses import dataclass

from contractflow.contracts.constructor_args import extract_constructor_params
from contractflow.core.pipeline.context import ExecutionContext
from contractflow.core.pipeline.graph import Node
from contractflow.core.pipeline.types import StepKind, StepOutput

from .base import require_upstream

MISSING_COMPILATION = "No compilation result found. Please compile the contract first."


@dataclass
class ExtractAbiHandler:
    kind: StepKind = StepKind.EXTRACT_ABI

    async def run(self, node: Node, ctx: ExecutionContext) -> StepOutput:
        compiled = require_upstream(
            ctx,
            node,
            StepKind.COMPILE,
            MISSING_COMPILATION,
            accept=lambda out: out.get("abi") is not None,
        )
        abi = list(compiled["abi"])
        params = extract_constructor_params(abi)

        return StepOutput(
            data={"abi": abi, "constructor_params": [p.to_dict() for p in params]},
            message="ABI generated successfully",
        )
