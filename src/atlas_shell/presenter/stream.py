# src/atlas_shell/presenter/stream.py
"""
Presenter textual mínimo.

Escreve cada linha como `<rótulo> <conteúdo>` em um stream de texto
(padrão: `sys.stdout`). Erros usam o rótulo `ERROR` e avisos de status o
rótulo `STATUS`. Não é uma interface gráfica nem captura teclado.
"""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from .markup import render_markup_text


class StreamPresenter:
    ERROR_LABEL = "ERROR"
    STATUS_LABEL = "STATUS"

    def __init__(self, stream: Optional[TextIO] = None, prompt_label: str = ">") -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.prompt_label = prompt_label
        self.prompts_opened = 0

    def _write(self, label: str, content: str) -> None:
        prefix = f"{label} " if label else ""
        self.stream.write(f"{prefix}{content}\n")
        self.stream.flush()

    def render_line(self, content: str, location_label: str = "") -> None:
        self._write(location_label, content)

    def render_error(self, content: str) -> None:
        self._write(self.ERROR_LABEL, content)

    def render_status(self, content: str) -> None:
        self._write(self.STATUS_LABEL, content)

    def render_markup(self, content: str, location_label: str = "") -> None:
        self._write(location_label, render_markup_text(content))

    def open_prompt(self) -> None:
        self.prompts_opened += 1
        self.stream.write(f"{self.prompt_label} ")
        self.stream.flush()

    def clear(self) -> None:
        """Streams não podem ser apagados; registra um separador."""
        self.stream.write("\n")
        self.stream.flush()
