# src/contractflow/core/config/hashing.py
"""
Hashing canônico das entradas de um run.

Os hashes identificam estruturalmente a configuração efetiva e o grafo
submetido e são gravados em `inputs` do Manifest.

Política de hashing (v1):
    - Serialização JSON canônica (sort_keys, separadores compactos)
    - Codificação UTF-8
    - SHA-256 em hexadecimal (64 caracteres)
"""

import hashlib
import json
from typing import Any, Dict


def _canonical_sha256(data: Dict[str, Any]) -> str:
    canonical_json = json.dumps(
        data,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )
    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera o hash determinístico da configuração efetiva.

    Configurações estruturalmente equivalentes produzem o mesmo hash,
    independentemente da ordem original das chaves.

    Raises:
        TypeError: Se `config` não for um dicionário.
    """
    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )
    return _canonical_sha256(config)


def compute_graph_hash(graph: Dict[str, Any]) -> str:
    """Hash do grafo serializado (`WorkflowGraph.to_dict()`)."""
    if not isinstance(graph, dict):
        raise TypeError(
            f"Grafo para hashing deve ser dict, recebido: {type(graph).__name__}"
        )
    return _canonical_sha256(graph)
