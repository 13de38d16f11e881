"""Step canônico: deploy (v1).

Responsabilidades:
- obter ABI e bytecode dos Steps extract_abi e extract_bytecode predecessores
- exigir uma rede selecionada no Engine
- montar e validar os argumentos do construtor
- conectar a wallet e trocar de chain quando ela estiver em outra rede
- delegar o deploy ao WalletService

Argumentos do construtor (payload):
- `constructor_arg_values`: valores textuais do formulário, um por
  parâmetro do construtor no ABI; validados e convertidos por tipo
- `constructor_args`: lista pronta, ou texto JSON; texto inválido vira `[]`

Quando os dois estão presentes, `constructor_arg_values` prevalece.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from contractflow.contracts.constructor_args import (
    ConstructorParam,
    coerce_constructor_args,
    extract_constructor_params,
    format_constructor_args,
    validate_constructor_arg,
)
from contractflow.core.exceptions import ExternalServiceError, UpstreamMissingError, ValidationError
from contractflow.core.pipeline.context import ExecutionContext
from contractflow.core.pipeline.graph import Node
from contractflow.core.pipeline.types import StepKind, StepOutput
from contractflow.services.networks import explorer_url

from .base import require_service

MISSING_ARTIFACTS = "ABI and bytecode are required. Please generate them first."


@dataclass(frozen=True)
class DeployPayload:
    constructor_args: Any = None
    constructor_arg_values: Optional[List[str]] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "DeployPayload":
        values = payload.get("constructor_arg_values")
        if values is not None:
            values = ["" if v is None else str(v) for v in values]
        return cls(constructor_args=payload.get("constructor_args"), constructor_arg_values=values)


@dataclass
class DeployHandler:
    kind: StepKind = StepKind.DEPLOY

    def _artifacts(self, node: Node, ctx: ExecutionContext) -> Dict[str, Any]:
        abi_out = ctx.resolve_upstream(node.id, StepKind.EXTRACT_ABI) or {}
        code_out = ctx.resolve_upstream(node.id, StepKind.EXTRACT_BYTECODE) or {}

        abi = abi_out.get("abi")
        bytecode = code_out.get("bytecode")

        if abi is None or not bytecode:
            raise UpstreamMissingError(
                MISSING_ARTIFACTS,
                details={"step_id": node.id, "has_abi": abi is not None, "has_bytecode": bool(bytecode)},
                hint="Conecte Steps 'extract_abi' e 'extract_bytecode' antes do deploy",
            )
        return {"abi": list(abi), "bytecode": str(bytecode)}

    def _constructor_args(self, node: Node, payload: DeployPayload, abi: Sequence[Any]) -> List[Any]:
        if payload.constructor_arg_values is None:
            return coerce_constructor_args(payload.constructor_args)

        params: List[ConstructorParam] = extract_constructor_params(abi)
        values = payload.constructor_arg_values
        problems: Dict[str, str] = {}
        for index, param in enumerate(params):
            value = values[index] if index < len(values) else ""
            problem = validate_constructor_arg(value, param.type)
            if problem:
                problems[param.name] = problem
        if problems:
            first = next(iter(problems))
            raise ValidationError(
                f"Invalid constructor argument '{first}': {problems[first]}",
                details={"step_id": node.id, "errors": problems},
                hint="Corrija os argumentos do construtor no Step de deploy",
            )
        return format_constructor_args(params, values)

    async def run(self, node: Node, ctx: ExecutionContext) -> StepOutput:
        payload = DeployPayload.from_payload(node.payload)
        artifacts = self._artifacts(node, ctx)

        network = ctx.network
        if network is None:
            raise ValidationError(
                "No network selected. Please select a network from the top bar.",
                details={"step_id": node.id},
                hint="Informe `network` ao criar o Engine",
            )

        # Nenhuma chamada à wallet antes dos argumentos estarem válidos.
        args = self._constructor_args(node, payload, artifacts["abi"])

        wallet = require_service(ctx.services.wallet, "wallet", node)
        connection = await wallet.connect()
        if connection is None:
            raise ExternalServiceError(
                "Failed to connect wallet. Please connect your wallet.",
                details={"step_id": node.id},
            )

        if connection.chain_id != network.chain_id:
            ctx.log(
                step_id=node.id,
                level="info",
                message="switching wallet network",
                from_chain_id=connection.chain_id,
                to_chain_id=network.chain_id,
            )
            await wallet.switch_network(network.chain_id)

        ctx.log(step_id=node.id, level="info", message="deploying contract", constructor_args=len(args))

        result = await wallet.deploy(artifacts["abi"], artifacts["bytecode"], args, connection)
        if not result.success:
            raise ExternalServiceError(
                result.error or "Deployment failed",
                details={"step_id": node.id, "network": network.id},
            )

        data: Dict[str, Any] = {
            "contract_address": result.contract_address,
            "transaction_hash": result.transaction_hash,
            "network": network.name,
            "network_id": network.id,
            "chain_id": network.chain_id,
            "explorer_url": explorer_url(network, str(result.contract_address), kind="address"),
        }
        return StepOutput(
            data=data,
            message="Contract deployed successfully",
            display={
                "deployed_address": result.contract_address,
                "transaction_hash": result.transaction_hash,
            },
        )
