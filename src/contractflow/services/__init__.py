"""Contratos dos serviços delegados e registro de redes."""

from .base import (
    AIService,
    AnalysisResult,
    CompilationResult,
    CompilerService,
    DeploymentResult,
    ServiceBundle,
    WalletConnection,
    WalletService,
)
from .networks import Network, explorer_url, find_network, networks_from_config

__all__ = [
    "AIService",
    "AnalysisResult",
    "CompilationResult",
    "CompilerService",
    "DeploymentResult",
    "Network",
    "ServiceBundle",
    "WalletConnection",
    "WalletService",
    "explorer_url",
    "find_network",
    "networks_from_config",
]
