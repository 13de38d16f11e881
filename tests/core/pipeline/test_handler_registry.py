# tests/core/pipeline/test_handler_registry.py
"""
Testes do HandlerRegistry (tabela de dispatch kind → handler).

Os testes asseguram que:
- o registry padrão cobre todos os StepKind
- registrar dois handlers do mesmo kind é erro
- um registry incompleto falha em ensure_complete
- tags desconhecidas falham no dispatch com UnknownKindError
"""

import pytest

from contractflow.core.exceptions import UnknownKindError
from contractflow.core.pipeline.graph import Node
from contractflow.core.pipeline.registry import (
    DuplicateHandlerError,
    HandlerRegistry,
    IncompleteRegistryError,
)
from contractflow.core.pipeline.step import StepHandler
from contractflow.core.pipeline.types import StepKind
from contractflow.steps import CompileHandler, default_registry


def test_default_registry_is_complete():
    registry = default_registry()
    assert registry.missing_kinds() == []
    assert set(registry.kinds()) == set(StepKind)
    for kind in StepKind:
        assert isinstance(registry.get(kind), StepHandler)


def test_duplicate_handler_is_rejected():
    registry = HandlerRegistry()
    registry.add(CompileHandler())
    with pytest.raises(DuplicateHandlerError):
        registry.add(CompileHandler())


def test_incomplete_registry_names_missing_kinds():
    registry = HandlerRegistry()
    registry.add(CompileHandler())
    with pytest.raises(IncompleteRegistryError) as exc:
        registry.ensure_complete()
    assert "deploy" in str(exc.value)
    assert StepKind.COMPILE not in registry.missing_kinds()


def test_handler_without_valid_kind_is_rejected():
    class NoKind:
        kind = "not-a-kind"

        async def run(self, node, ctx):
            return None

    with pytest.raises(ValueError):
        HandlerRegistry().add(NoKind())


def test_resolve_unknown_tag_raises_unknown_kind():
    registry = default_registry()
    with pytest.raises(UnknownKindError) as exc:
        registry.resolve(Node(id="w", kind="webhook"))
    assert exc.value.details == {"step_id": "w", "kind": "webhook"}


def test_resolve_known_kind_missing_from_registry():
    with pytest.raises(UnknownKindError):
        HandlerRegistry().resolve(Node(id="c", kind="compile"))
