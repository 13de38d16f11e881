# tests/services/test_networks.py
"""
Testes do registro de redes carregado da configuração.
"""

import pytest

from contractflow.core.exceptions import ValidationError
from contractflow.services.networks import Network, explorer_url, find_network, networks_from_config


def test_known_networks(config):
    networks = {n.id: n for n in networks_from_config(config)}
    assert networks["ethereum"].chain_id == 1
    assert networks["polygon"].symbol == "MATIC"
    assert networks["sepolia"].name == "Sepolia Testnet"


def test_find_unknown_network(config):
    with pytest.raises(ValidationError) as exc:
        find_network(config, "solana")
    assert exc.value.message == "Unknown network: solana"


def test_invalid_definition_is_rejected():
    with pytest.raises(ValidationError):
        Network.from_dict({"id": "x", "name": "X", "chain_id": "not-a-number"})


def test_networks_must_be_a_list():
    with pytest.raises(ValidationError):
        networks_from_config({"networks": {"id": "x"}})


def test_round_trip(sepolia):
    assert Network.from_dict(sepolia.to_dict()) == sepolia


def test_explorer_urls(sepolia):
    assert explorer_url(sepolia, "0xabc") == "https://sepolia.etherscan.io/address/0xabc"
    assert explorer_url(sepolia, "0xdef", kind="tx") == "https://sepolia.etherscan.io/tx/0xdef"


def test_explorer_url_without_explorer():
    devnet = Network(id="dev", name="Devnet", rpc_url="http://127.0.0.1:8545", chain_id=31337, symbol="ETH")
    assert explorer_url(devnet, "0xabc") is None
