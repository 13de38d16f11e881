# tests/core/config/test_loader.py
"""
Testes do carregador de configuração (load_config).

Este módulo valida o comportamento do loader responsável por:
- carregar o `defaults.yaml` empacotado com o ContractFlow
- carregar arquivos de configuração local (override)
- rejeitar formatos e estados inválidos

Os testes asseguram que:
- os defaults empacotados declaram engine, compilação e redes
- o arquivo de defaults informado explicitamente é obrigatório
- o arquivo local é opcional
- formatos não suportados são rejeitados
- overrides locais substituem apenas as chaves declaradas

Invariantes:
    - A configuração final é sempre um dicionário
    - Nenhuma configuração parcial é retornada em caso de erro

Limites explícitos:
    - Não valida hashing de configuração
    - Não valida semântica de redes (coberta em tests/services)
"""

from pathlib import Path

import pytest

try:
    from contractflow.core.config.errors import (
        DefaultsNotFoundError,
        InvalidConfigRootTypeError,
        UnsupportedConfigFormatError,
    )
    from contractflow.core.config.loader import DEFAULTS_PATH, load_config
except Exception as e:  # noqa: BLE001
    load_config = None
    DEFAULTS_PATH = None
    DefaultsNotFoundError = None
    InvalidConfigRootTypeError = None
    UnsupportedConfigFormatError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o loader de configuração e suas exceções tipadas estejam disponíveis.

    Falha imediatamente, com a lista de módulos esperados, quando o
    loader ou as exceções canônicas não podem ser importados.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing loader/errors modules. Implement:\n"
            "- src/contractflow/core/config/loader.py (load_config)\n"
            "- src/contractflow/core/config/errors.py (typed exceptions)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_packaged_defaults_are_complete():
    """
    Verifica que os defaults empacotados cobrem todas as seções usadas no run.

    Invariantes:
        - `engine` declara versão, atraso entre Steps e política de lookup
        - `networks` traz as cinco redes conhecidas, com Sepolia como testnet
    """
    _require_imports()
    cfg = load_config()

    assert DEFAULTS_PATH.exists()
    assert cfg["engine"]["version"] == "0.1.0"
    assert cfg["engine"]["step_delay_seconds"] == 0
    assert cfg["engine"]["upstream_lookup"] == "nearest_ancestor"
    assert cfg["compile"]["default_compiler_version"] == "0.8.20"
    assert cfg["bytecode"] == {"warn_size_kb": 20, "max_size_kb": 24}
    assert [n["id"] for n in cfg["networks"]] == ["ethereum", "polygon", "bsc", "avalanche", "sepolia"]


def test_missing_defaults_raises(tmp_path: Path):
    """A ausência do arquivo de defaults informado é erro fatal."""
    _require_imports()
    with pytest.raises(DefaultsNotFoundError):
        load_config(defaults_path=tmp_path / "missing.yaml")


def test_missing_local_is_ignored(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text("engine:\n  version: '9.9.9'\n", encoding="utf-8")

    cfg = load_config(defaults_path=defaults, local_path=tmp_path / "local.yaml")

    assert cfg == {"engine": {"version": "9.9.9"}}


def test_local_overrides_packaged_defaults(tmp_path: Path):
    """
    Verifica que o override local altera apenas as chaves declaradas.

    Invariantes:
        - Chaves ausentes no override preservam o valor padrão
        - Listas (ex.: `networks`) são substituídas por inteiro
        - Inteiros podem sobrescrever floats (`step_delay_seconds: 1`)
    """
    _require_imports()
    local = tmp_path / "local.yaml"
    local.write_text(
        "engine:\n"
        "  step_delay_seconds: 1\n"
        "networks:\n"
        "  - {id: devnet, name: Devnet, rpc_url: 'http://127.0.0.1:8545', chain_id: 31337, symbol: ETH}\n",
        encoding="utf-8",
    )

    cfg = load_config(local_path=local)

    assert cfg["engine"]["step_delay_seconds"] == 1
    assert cfg["engine"]["upstream_lookup"] == "nearest_ancestor"
    assert [n["id"] for n in cfg["networks"]] == ["devnet"]


def test_json_local_is_supported(tmp_path: Path):
    _require_imports()
    local = tmp_path / "local.json"
    local.write_text('{"compile": {"default_compiler_version": "0.8.24"}}', encoding="utf-8")
    assert load_config(local_path=local)["compile"]["default_compiler_version"] == "0.8.24"


def test_empty_local_file_is_empty_override(tmp_path: Path):
    _require_imports()
    local = tmp_path / "local.yaml"
    local.write_text("", encoding="utf-8")
    assert load_config(local_path=local) == load_config()


def test_unsupported_format_raises(tmp_path: Path):
    _require_imports()
    local = tmp_path / "local.toml"
    local.write_text("[engine]\n", encoding="utf-8")
    with pytest.raises(UnsupportedConfigFormatError):
        load_config(local_path=local)


def test_non_mapping_root_raises(tmp_path: Path):
    _require_imports()
    local = tmp_path / "local.yaml"
    local.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(InvalidConfigRootTypeError):
        load_config(local_path=local)
