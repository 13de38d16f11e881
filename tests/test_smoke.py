# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do ContractFlow.

Este módulo contém testes mínimos cujo único objetivo é garantir que:
- o pacote é importável e expõe sua API pública
- o ambiente de testes (pytest + pytest-asyncio) está funcional

Limites explícitos:
    - Não testar lógica de negócio
    - Não testar fluxo de execução
"""

import pytest


def test_smoke():
    """Sentinela mínima de integridade do ambiente de testes."""
    assert True


def test_public_api_is_importable():
    import contractflow

    assert contractflow.__version__ == "0.1.0"
    for name in ("Engine", "RunResult", "WorkflowGraph", "Node", "Connection", "StepKind", "StepStatus", "ServiceBundle"):
        assert hasattr(contractflow, name)


@pytest.mark.asyncio
async def test_async_tests_run():
    assert True
