"""Registro de redes alvo de deploy, carregado da configuração (`networks`)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from contractflow.core.exceptions import ValidationError


@dataclass(frozen=True)
class Network:
    id: str
    name: str
    rpc_url: str
    chain_id: int
    symbol: str
    explorer: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Network":
        try:
            return cls(
                id=str(data["id"]),
                name=str(data["name"]),
                rpc_url=str(data["rpc_url"]),
                chain_id=int(data["chain_id"]),
                symbol=str(data["symbol"]),
                explorer=data.get("explorer") or None,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(
                "Invalid network definition",
                details={"network": dict(data), "exception_class": e.__class__.__name__},
                hint="Cada rede precisa de id, name, rpc_url, chain_id e symbol",
            ) from e

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "rpc_url": self.rpc_url,
            "chain_id": self.chain_id,
            "symbol": self.symbol,
            "explorer": self.explorer,
        }


def networks_from_config(config: Mapping[str, Any]) -> List[Network]:
    raw = (config or {}).get("networks") or []
    if not isinstance(raw, list):
        raise ValidationError(
            "Config key 'networks' must be a list",
            details={"received": type(raw).__name__},
        )
    return [Network.from_dict(item) for item in raw]


def find_network(config: Mapping[str, Any], network_id: str) -> Network:
    for network in networks_from_config(config):
        if network.id == network_id:
            return network
    raise ValidationError(
        f"Unknown network: {network_id}",
        details={"network_id": network_id},
        hint="Declare a rede em `networks` na configuração local",
    )


def explorer_url(network: Network, value: str, kind: str = "address") -> Optional[str]:
    if not network.explorer:
        return None
    base = network.explorer.rstrip("/")
    if kind == "tx":
        return f"{base}/tx/{value}"
    return f"{base}/address/{value}"
