# src/contractflow/core/config/loader.py
"""
Loader canônico de configuração do ContractFlow.

A configuração efetiva é resolvida a partir de:
    - um arquivo de defaults (obrigatório; por padrão o `defaults.yaml`
      empacotado junto a este módulo)
    - um arquivo local de overrides (opcional; ignorado se não existir)

Invariantes:
    - O resultado é sempre um dicionário puro (`dict`)
    - Overrides nunca mutam os defaults
    - Erros estruturais são falhas fatais (ConfigError)

Limites explícitos:
    - Não valida semântica de domínio (ex.: redes são validadas no uso)
    - Não persiste configuração nem hash
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml  # PyYAML

from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge

DEFAULTS_PATH = Path(__file__).with_name("defaults.yaml")

PathLike = Union[str, Path]


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Lê um arquivo YAML/JSON e valida que a raiz é um dicionário.

    Arquivos vazios são interpretados como dicionários vazios.

    Raises:
        DefaultsNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        InvalidConfigRootTypeError: Se a raiz não for um dicionário.
    """
    if not path.exists():
        raise DefaultsNotFoundError(f"Arquivo de defaults não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_config(
    *,
    defaults_path: Optional[PathLike] = None,
    local_path: Optional[PathLike] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve a configuração efetiva de um run.

    Args:
        defaults_path: Arquivo base; usa o `defaults.yaml` empacotado quando omitido.
        local_path: Overrides locais opcionais; ignorado se o arquivo não existir.

    Returns:
        Dict[str, Any]: Configuração final resolvida.

    Raises:
        DefaultsNotFoundError: Se o arquivo de defaults não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural durante o merge.
    """
    defaults = _load_file(Path(defaults_path) if defaults_path is not None else DEFAULTS_PATH)

    if local_path is None:
        return defaults

    local_file = Path(local_path)
    if not local_file.exists():
        return defaults

    return deep_merge(defaults, _load_file(local_file))
