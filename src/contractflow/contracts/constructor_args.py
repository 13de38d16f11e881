"""
Argumentos de construtor: leitura a partir do ABI, validação e formatação.

Os valores chegam do editor como texto (um campo por parâmetro) e são
convertidos para os tipos esperados pela wallet antes do deploy.
Números são mantidos como string para evitar perda de precisão.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")
_UNSIGNED_RE = re.compile(r"^\d+$")


@dataclass(frozen=True)
class ConstructorParam:
    name: str
    type: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "type": self.type}


def _is_integer_type(type_: str) -> bool:
    return type_.startswith("uint") or type_.startswith("int")


def extract_constructor_params(abi: Sequence[Any]) -> List[ConstructorParam]:
    """Parâmetros do construtor declarados no ABI; `paramN` quando sem nome."""
    for item in abi or []:
        if isinstance(item, dict) and item.get("type") == "constructor":
            inputs = item.get("inputs") or []
            return [
                ConstructorParam(name=inp.get("name") or f"param{i}", type=str(inp.get("type", "")))
                for i, inp in enumerate(inputs)
            ]
    return []


def validate_constructor_arg(value: str, type_: str) -> Optional[str]:
    """Retorna a mensagem de erro do valor, ou None se ele for aceitável para `type_`."""
    if not value and type_ != "string":
        return "Value is required"

    if type_ == "address":
        if not _ADDRESS_RE.match(value):
            return "Invalid Ethereum address"
    elif _is_integer_type(type_) and not type_.endswith("[]"):
        if not _UNSIGNED_RE.match(value):
            return "Must be a number"
    elif type_ == "bool":
        if value not in ("true", "false"):
            return "Must be true or false"
    elif type_.endswith("[]"):
        try:
            parsed = json.loads(value)
        except ValueError:
            return "Must be valid JSON array"
        if not isinstance(parsed, list):
            return "Must be valid JSON array"
    return None


def _format_one(param: ConstructorParam, value: str) -> Any:
    type_ = param.type
    if type_.endswith("[]"):
        parsed = json.loads(value or "[]")
        if _is_integer_type(type_):
            return [str(v) for v in parsed]
        return parsed
    if type_ == "bool":
        return value == "true"
    if type_.startswith("bytes"):
        return value if value.startswith("0x") else f"0x{value}"
    if _is_integer_type(type_):
        return value or "0"
    return value


def format_constructor_args(params: Sequence[ConstructorParam], values: Sequence[str]) -> List[Any]:
    """Converte os valores textuais do formulário nos argumentos do deploy, na ordem do ABI."""
    out: List[Any] = []
    for index, param in enumerate(params):
        value = values[index] if index < len(values) else ""
        out.append(_format_one(param, value if value is not None else ""))
    return out


def coerce_constructor_args(raw: Any) -> List[Any]:
    """Lista já pronta é mantida; texto JSON vira lista; qualquer outra coisa vira `[]`."""
    if isinstance(raw, list):
        return raw
    if isinstance(raw, str) and raw.strip():
        try:
            parsed = json.loads(raw)
        except ValueError:
            return []
        return parsed if isinstance(parsed, list) else []
    return []
