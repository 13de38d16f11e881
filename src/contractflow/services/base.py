"""
Contratos dos serviços delegados consumidos pelos handlers.

O Engine trata compilação, deploy e análise por IA como chamadas
estreitas com request/response tipados. As implementações concretas
(serviço remoto de compilação, wallet do usuário, provedor de IA)
vivem fora deste pacote e só precisam satisfazer estes protocolos.

Convenções:
- Falhas reportadas pelo serviço voltam no próprio resultado
  (`errors` / `error`); o handler as converte em ExternalServiceError.
- Exceções levantadas pelo serviço são tratadas pelo Engine como
  falha inesperada do Step.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class CompilationResult:
    abi: Optional[List[Any]] = None
    bytecode: Optional[str] = None
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class WalletConnection:
    address: str
    chain_id: int
    signer: Any = None


@dataclass(frozen=True)
class DeploymentResult:
    contract_address: Optional[str] = None
    transaction_hash: Optional[str] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None and bool(self.contract_address)


@dataclass(frozen=True)
class AnalysisResult:
    analysis_text: Optional[str] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


@runtime_checkable
class CompilerService(Protocol):
    async def compile(self, source: str, name: str, version: str) -> CompilationResult:
        ...


@runtime_checkable
class WalletService(Protocol):
    async def connect(self) -> Optional[WalletConnection]:
        ...

    async def switch_network(self, chain_id: int) -> None:
        ...

    async def deploy(
        self,
        abi: List[Any],
        bytecode: str,
        constructor_args: List[Any],
        connection: WalletConnection,
    ) -> DeploymentResult:
        ...


@runtime_checkable
class AIService(Protocol):
    async def analyze(self, source: str, prompt: str) -> AnalysisResult:
        ...


@dataclass
class ServiceBundle:
    """Serviços delegados disponíveis para um run; ausentes ficam como None."""

    compiler: Optional[CompilerService] = None
    wallet: Optional[WalletService] = None
    ai: Optional[AIService] = None
