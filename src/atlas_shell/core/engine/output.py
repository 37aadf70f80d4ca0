# src/atlas_shell/core/engine/output.py
"""
Buffer de saída do Atlas Shell (serviço `output`).

O Engine nunca escreve diretamente no Presenter: o Pipe Value final de cada
cadeia é acumulado aqui e despachado por `flush(sink)`, normalmente pelo
comando oculto `obuffer`.

Decisões arquiteturais:
    - Despacho por tipo de linha (line/error/status/markup)
    - Todas as operações são no-op com o serviço desabilitado

Invariantes:
    - `flush` preserva a ordem de inserção e esvazia o buffer
    - `is_empty()` é True quando desabilitado
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Optional, Protocol, Tuple, runtime_checkable

from ..pipeline.types import OutputKind, OutputLine
from ..services import Service

if TYPE_CHECKING:  # pragma: no cover
    from ..diagnostics.log import DiagnosticsLog


@runtime_checkable
class OutputSink(Protocol):
    def render_line(self, content: str, location_label: str) -> None: ...

    def render_error(self, content: str) -> None: ...

    def render_status(self, content: str) -> None: ...

    def render_markup(self, content: str, location_label: str) -> None: ...


class OutputBuffer(Service):
    service_name = "output"
    diagnostic_name = "OutputBuffer"

    def __init__(self, *, diagnostics: Optional["DiagnosticsLog"] = None) -> None:
        super().__init__(diagnostics=diagnostics)
        self._buffer: List[OutputLine] = []

    def _on_init(self) -> None:
        self._buffer = []

    def add(self, line: OutputLine) -> None:
        if not self.enabled:
            return
        self._record(f"{self.diagnostic_name}_add")
        self._buffer.append(line)

    def add_all(self, lines: Iterable[OutputLine]) -> None:
        for line in lines:
            self.add(line)

    def flush(self, sink: OutputSink) -> None:
        if not self.enabled:
            return
        lines, self._buffer = self._buffer, []
        for line in lines:
            if line.kind is OutputKind.LINE:
                sink.render_line(line.content, line.location_label)
            elif line.kind is OutputKind.ERROR:
                sink.render_error(line.content)
            elif line.kind is OutputKind.STATUS:
                sink.render_status(line.content)
            elif line.kind is OutputKind.MARKUP:
                sink.render_markup(line.content, line.location_label)
        self._record(f"{self.diagnostic_name}_flush")

    def clear(self) -> None:
        if not self.enabled:
            return
        self._record(f"{self.diagnostic_name}_clear")
        self._buffer.clear()

    def is_empty(self) -> bool:
        if not self.enabled:
            return True
        return not self._buffer

    def lines(self) -> Tuple[OutputLine, ...]:
        return tuple(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)
