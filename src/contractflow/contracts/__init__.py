"""Helpers de domínio Solidity usados pelos handlers (validação, nomes, argumentos)."""
