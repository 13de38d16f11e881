# tests/_fakes.py
"""
Serviços delegados falsos e dados Solidity de referência para os testes.

Os fakes satisfazem os Protocols de `contractflow.services.base` por
duck typing, devolvem respostas configuráveis e registram as chamadas
recebidas.
"""

from typing import Any, Dict, List, Optional, Tuple

from contractflow.services.base import (
    AnalysisResult,
    CompilationResult,
    DeploymentResult,
    WalletConnection,
)


TOKEN_SOURCE = """\
// SPDX-License-Identifier: MIT
pragma solidity ^0.8.20;

contract SimpleToken {
    string public name;
    uint256 public totalSupply;

    constructor(string memory _name, uint256 _supply) {
        name = _name;
        totalSupply = _supply;
    }
}
"""

TOKEN_ABI: List[Dict[str, Any]] = [
    {
        "type": "constructor",
        "inputs": [
            {"name": "_name", "type": "string"},
            {"name": "_supply", "type": "uint256"},
        ],
    },
    {"type": "function", "name": "name", "inputs": [], "outputs": [{"type": "string"}]},
]

TOKEN_BYTECODE = "0x" + "60" * 128

CONTRACT_ADDRESS = "0x" + "ab" * 20
TX_HASH = "0x" + "cd" * 32


class FakeCompiler:
    def __init__(self, result: Optional[CompilationResult] = None):
        self.result = result or CompilationResult(abi=TOKEN_ABI, bytecode=TOKEN_BYTECODE)
        self.calls: List[Tuple[str, str, str]] = []

    async def compile(self, source: str, name: str, version: str) -> CompilationResult:
        self.calls.append((source, name, version))
        return self.result


class FakeWallet:
    def __init__(self, chain_id: int = 11155111, connect_ok: bool = True, error: Optional[str] = None):
        self.chain_id = chain_id
        self.connect_ok = connect_ok
        self.error = error
        self.switched: List[int] = []
        self.deploys: List[Dict[str, Any]] = []

    async def connect(self) -> Optional[WalletConnection]:
        if not self.connect_ok:
            return None
        return WalletConnection(address="0x" + "11" * 20, chain_id=self.chain_id)

    async def switch_network(self, chain_id: int) -> None:
        self.switched.append(chain_id)
        self.chain_id = chain_id

    async def deploy(self, abi, bytecode, constructor_args, connection) -> DeploymentResult:
        self.deploys.append({"abi": abi, "bytecode": bytecode, "args": list(constructor_args)})
        if self.error:
            return DeploymentResult(error=self.error)
        return DeploymentResult(contract_address=CONTRACT_ADDRESS, transaction_hash=TX_HASH)


class FakeAI:
    def __init__(self, text: str = "No critical issues found.", error: Optional[str] = None):
        self.text = text
        self.error = error
        self.prompts: List[str] = []

    async def analyze(self, source: str, prompt: str) -> AnalysisResult:
        self.prompts.append(prompt)
        if self.error:
            return AnalysisResult(error=self.error)
        return AnalysisResult(analysis_text=self.text)


class RecordingReporter:
    """Grava cada callback como tupla, na ordem em que chegou."""

    def __init__(self):
        self.calls: List[Tuple[Any, ...]] = []

    def on_step_status(self, step_id, status):
        self.calls.append(("status", step_id, status))

    def on_step_output(self, step_id, payload):
        self.calls.append(("output", step_id, payload))

    def on_connection_status(self, connection_id, source_status, target_status):
        self.calls.append(("connection", connection_id, source_status, target_status))

    def statuses_of(self, step_id):
        return [c[2] for c in self.calls if c[0] == "status" and c[1] == step_id]


