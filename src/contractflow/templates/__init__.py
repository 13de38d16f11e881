"""Construtores de grafos de workflow prontos para uso."""

from .workflow import DEFAULT_LABELS, build_contract_workflow

__all__ = ["DEFAULT_LABELS", "build_contract_workflow"]
