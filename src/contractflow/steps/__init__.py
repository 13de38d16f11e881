"""
Handlers canônicos dos 8 kinds de Step do ContractFlow.

`default_registry()` monta a tabela de dispatch completa e falha
imediatamente se algum `StepKind` ficar sem handler.
"""

from contractflow.core.pipeline.registry import HandlerRegistry

from .ai_audit import AiAuditHandler
from .compile import CompileHandler
from .completion import CompletionHandler
from .deploy import DeployHandler
from .extract_abi import ExtractAbiHandler
from .extract_bytecode import ExtractBytecodeHandler
from .project_init import ProjectInitHandler
from .source_input import SourceInputHandler


def default_registry() -> HandlerRegistry:
    registry = HandlerRegistry()
    for handler in (
        ProjectInitHandler(),
        SourceInputHandler(),
        CompileHandler(),
        ExtractAbiHandler(),
        ExtractBytecodeHandler(),
        DeployHandler(),
        AiAuditHandler(),
        CompletionHandler(),
    ):
        registry.add(handler)
    return registry.ensure_complete()


__all__ = [
    "AiAuditHandler",
    "CompileHandler",
    "CompletionHandler",
    "DeployHandler",
    "ExtractAbiHandler",
    "ExtractBytecodeHandler",
    "ProjectInitHandler",
    "SourceInputHandler",
    "default_registry",
]
