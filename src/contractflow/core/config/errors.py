# src/contractflow/core/config/errors.py
"""
Exceções canônicas da camada de configuração do ContractFlow.

Estas exceções representam falhas estruturais de configuração,
detectadas antes de qualquer run, e não falhas de Step.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma delas é convertida em ErrorPayload pelo Engine
"""


class ConfigError(Exception):
    """Base para erros de carregamento e resolução de configuração."""


class DefaultsNotFoundError(ConfigError):
    """
    O arquivo de defaults não foi encontrado.

    O arquivo de defaults é obrigatório: sem ele não existe
    configuração efetiva válida.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Extensão de arquivo de configuração não suportada.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz do arquivo não é um mapa chave-valor."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"engine": {"upstream_lookup": "nearest_ancestor"}}
        - override: {"engine": "first_recorded"}
    """
