# src/contractflow/core/engine/cancellation.py
"""
Controle de cancelamento cooperativo do run.

O sinal de parada é apenas uma flag consultada pelo Engine antes de
iniciar cada Step. Um handler em andamento nunca é interrompido: o run
termina na próxima fronteira segura.
"""

from __future__ import annotations


class StopFlag:
    """Flag de parada de um Engine; zerada no início de cada run."""

    def __init__(self) -> None:
        self._requested = False

    def request(self) -> None:
        self._requested = True

    @property
    def requested(self) -> bool:
        return self._requested

    def reset(self) -> None:
        self._requested = False
