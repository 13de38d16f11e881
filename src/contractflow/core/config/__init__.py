# src/contractflow/core/config/__init__.py

"""
Camada de configuração do ContractFlow.

A configuração efetiva de um run é resolvida a partir do arquivo
`defaults.yaml` empacotado com a biblioteca e de um override local
opcional (YAML ou JSON), combinados por deep-merge estrito.

Chaves reconhecidas:
    - engine.*      → atraso entre Steps, política de lookup, diretório do manifest
    - compile.*     → versão padrão do compilador
    - audit.*       → prompt padrão da análise por IA
    - bytecode.*    → limites de tamanho do bytecode
    - networks      → registro de redes alvo de deploy

Princípios fundamentais:
    - Configuração não contém lógica de domínio
    - Overrides são sempre explícitos
    - A mesma entrada sempre produz a mesma configuração final
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash, compute_graph_hash
from .loader import DEFAULTS_PATH, load_config
from .merge import deep_merge

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "DEFAULTS_PATH",
    "compute_config_hash",
    "compute_graph_hash",
    "deep_merge",
    "load_config",
]
