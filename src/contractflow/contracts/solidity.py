"""
Pré-validação e inspeção textual de código Solidity.

Nada aqui compila código: são verificações baratas feitas antes de
delegar ao serviço de compilação, e utilitários de formatação dos
resultados que ele devolve.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional

_DEFINITION_RE = re.compile(r"(?:contract|interface|library)\s+(\w+)")
_MAIN_CONTRACT_RE = re.compile(r"contract\s+(\w+)(?:\s+is\s+|\s*\{)")
_PRAGMA_RE = re.compile(r"pragma\s+solidity\s+[\^~]?([\d.]+)")
_LINE_COL_RE = re.compile(r"(\d+):(\d+):")

MAINNET_SIZE_LIMIT_KB = 24
SIZE_WARNING_KB = 20


@dataclass(frozen=True)
class SourceCheck:
    valid: bool
    message: Optional[str] = None


def validate_source(source: str) -> SourceCheck:
    """Checagem mínima: texto não vazio, diretiva `pragma solidity` e uma definição."""
    if not source or not source.strip():
        return SourceCheck(False, "Source code is empty")
    if "pragma solidity" not in source:
        return SourceCheck(
            False,
            'Missing "pragma solidity" directive. Please specify Solidity version.',
        )
    if not _DEFINITION_RE.search(source):
        return SourceCheck(False, "No contract, interface, or library definition found")
    return SourceCheck(True)


def extract_contract_name(source: str) -> Optional[str]:
    """Nome do contrato principal; cai para qualquer contract/interface/library."""
    match = _MAIN_CONTRACT_RE.search(source or "")
    if match:
        return match.group(1)
    match = _DEFINITION_RE.search(source or "")
    return match.group(1) if match else None


def extract_solidity_version(source: str) -> Optional[str]:
    match = _PRAGMA_RE.search(source or "")
    return match.group(1) if match else None


def format_compilation_errors(errors: Iterable[str]) -> str:
    """Prefixa cada erro com `Line l:c` quando a posição estiver presente."""
    parts = []
    for error in errors or []:
        match = _LINE_COL_RE.search(error)
        if match:
            parts.append(f"Line {match.group(1)}:{match.group(2)}\n{error}")
        else:
            parts.append(error)
    if not parts:
        return "Unknown compilation error"
    return "\n\n".join(parts)


@dataclass(frozen=True)
class BytecodeSize:
    size_bytes: int
    size_kb: float
    warning: Optional[str] = None


def analyze_bytecode_size(
    bytecode: str,
    *,
    warn_kb: float = SIZE_WARNING_KB,
    max_kb: float = MAINNET_SIZE_LIMIT_KB,
) -> BytecodeSize:
    """Tamanho do bytecode (hex, com ou sem `0x`) e aviso frente ao limite de 24KB."""
    clean = bytecode[2:] if bytecode.startswith("0x") else bytecode
    size_bytes = len(clean) // 2
    size_kb = size_bytes / 1024

    warning = None
    if size_kb > max_kb:
        warning = (
            f"Contract size ({size_kb:.2f}KB) exceeds Ethereum's {max_kb:g}KB limit. "
            "Deployment will fail on mainnet."
        )
    elif size_kb > warn_kb:
        warning = (
            f"Contract size ({size_kb:.2f}KB) is close to Ethereum's {max_kb:g}KB limit. "
            "Consider optimization."
        )

    return BytecodeSize(size_bytes=size_bytes, size_kb=round(size_kb, 2), warning=warning)
