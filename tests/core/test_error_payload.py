# tests/core/test_error_payload.py
"""
Testes do mapeamento de exceções para ErrorPayload.

Os testes asseguram que:
- exceções tipadas preservam mensagem, details e hint
- o nome da classe é o código estável do erro
- exceções inesperadas viram ENGINE_EXECUTION_ERROR sem stack trace
"""

from contractflow.core.errors import (
    ENGINE_EXECUTION_ERROR,
    ENGINE_STOPPED,
    engine_stopped,
    from_exception,
)
from contractflow.core.exceptions import CycleError, ServiceUnavailableError, ValidationError


def test_typed_exception_maps_verbatim():
    exc = ValidationError("Project title is required", details={"field": "title"}, hint="fill it")

    payload = from_exception(exc, step_id="p")

    assert payload.to_dict() == {
        "type": "ValidationError",
        "message": "Project title is required",
        "details": {"field": "title"},
        "hint": "fill it",
        "step_id": "p",
    }


def test_subclass_name_is_the_code():
    assert from_exception(ServiceUnavailableError("No wallet service configured")).type == "ServiceUnavailableError"
    assert from_exception(CycleError("cycle")).step_id is None


def test_unexpected_exception_is_wrapped():
    payload = from_exception(KeyError("abi"), step_id="d")

    assert payload.type == ENGINE_EXECUTION_ERROR
    assert payload.step_id == "d"
    assert payload.details == {"exception_class": "KeyError"}
    assert payload.hint


def test_exception_without_message_gets_default():
    assert from_exception(RuntimeError()).message == "Step execution failed"


def test_engine_stopped_payload():
    payload = engine_stopped()
    assert payload.type == ENGINE_STOPPED
    assert payload.message == "Workflow execution stopped by user"


def test_workflow_exception_str_is_message():
    assert str(ValidationError("bad input")) == "bad input"
