# tests/core/config/test_hashing.py
"""
Testes do hashing canônico de configuração e grafo.

Os hashes gravados em `inputs` do Manifest precisam ser estáveis:
a mesma estrutura produz o mesmo hash, independentemente da ordem
de inserção das chaves.
"""

from contractflow.core.config.hashing import compute_config_hash, compute_graph_hash


def test_hash_is_sha256_hex():
    h = compute_config_hash({"engine": {"version": "0.1.0"}})
    assert len(h) == 64
    int(h, 16)


def test_hash_ignores_key_order():
    a = {"engine": {"version": "0.1.0", "step_delay_seconds": 0}, "compile": {}}
    b = {"compile": {}, "engine": {"step_delay_seconds": 0, "version": "0.1.0"}}
    assert compute_config_hash(a) == compute_config_hash(b)


def test_hash_changes_with_values():
    assert compute_config_hash({"x": 1}) != compute_config_hash({"x": 2})


def test_graph_hash_reflects_payload(token_workflow):
    before = compute_graph_hash(token_workflow.to_dict())
    assert compute_graph_hash(token_workflow.to_dict()) == before

    token_workflow.get("compile-t").payload["compiler_version"] = "0.8.24"
    assert compute_graph_hash(token_workflow.to_dict()) != before
