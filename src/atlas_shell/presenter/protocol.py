# src/atlas_shell/presenter/protocol.py
"""
Protocolo do Presenter.

Operações obrigatórias (fire-and-forget, síncronas do ponto de vista do
chamador):
    - render_line(content, location_label)
    - render_error(content)
    - render_markup(content, location_label)  → conteúdo com marcadores
    - render_status(content)                  → avisos (ex.: Watchdog)
    - open_prompt()                           → nova linha de entrada

Opcional:
    - clear() → limpa a superfície (usado pelo comando `clear`)
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Presenter(Protocol):
    def render_line(self, content: str, location_label: str) -> None: ...

    def render_error(self, content: str) -> None: ...

    def render_markup(self, content: str, location_label: str) -> None: ...

    def render_status(self, content: str) -> None: ...

    def open_prompt(self) -> None: ...
