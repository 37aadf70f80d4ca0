# src/atlas_shell/core/diagnostics/log.py
"""
Log de diagnóstico append-only (serviço `diagnostic`).

Decisões arquiteturais:
    - `record()` é no-op enquanto o serviço está desabilitado (estado
      inicial); `init` o habilita
    - A compressão para exibição é uma transformação pura: o log subjacente
      só é truncado por `clear()`
    - O relógio é injetável (milissegundos desde a época) para testes

Compressão (`dump`):
    1. cada evento vira `[<timestamp>] <ação>`
    2. linhas consecutivas idênticas colapsam em uma, com sufixo ` (xN)`
    3. um timestamp igual ao último mantido é substituído por espaços de
       mesma largura
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from ..services import Service

DEFAULT_TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M:%S"

_STAMP = re.compile(r"^\[([^\]]*)\]")

Clock = Callable[[], int]


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class DiagnosticEvent:
    action: str
    timestamp: int


def format_timestamp(ms: int, fmt: str = DEFAULT_TIMESTAMP_FORMAT) -> str:
    """Formata `ms` em horário local com `strftime`, acrescido de `.mmm`."""
    dt = datetime.fromtimestamp(ms / 1000)
    return f"{dt.strftime(fmt)}.{ms % 1000:03d}"


def compress_lines(lines: Iterable[str]) -> List[str]:
    """Colapsa execuções de linhas idênticas consecutivas em `linha (xN)`."""
    out: List[str] = []
    previous: Optional[str] = None
    count = 0

    for line in lines:
        if count and line == previous:
            count += 1
            continue
        if count > 1:
            out[-1] = f"{out[-1]} (x{count})"
        out.append(line)
        previous = line
        count = 1

    if count > 1:
        out[-1] = f"{out[-1]} (x{count})"
    return out


def blank_repeated_stamps(lines: Iterable[str]) -> List[str]:
    """Mantém apenas a primeira ocorrência de cada timestamp consecutivo."""
    out: List[str] = []
    last_stamp: Optional[str] = None

    for line in lines:
        m = _STAMP.match(line)
        if m is None:
            out.append(line)
            continue
        stamp = m.group(1)
        if stamp == last_stamp:
            line = f"[{' ' * len(stamp)}]{line[m.end():]}"
        else:
            last_stamp = stamp
        out.append(line)

    return out


class DiagnosticsLog(Service):
    service_name = "diagnostic"
    diagnostic_name = "DiagnosticsLog"

    def __init__(self, *, clock: Optional[Clock] = None) -> None:
        super().__init__(diagnostics=None)
        self._clock: Clock = clock or _now_ms
        self._events: List[DiagnosticEvent] = []

    def _record(self, action: str) -> None:
        self.record(action)

    def record(self, action: str) -> None:
        if not self.enabled:
            return
        self._events.append(DiagnosticEvent(action=action, timestamp=self._clock()))

    def entries(self) -> List[DiagnosticEvent]:
        return list(self._events)

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)

    def lines(self, timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT) -> List[str]:
        return [
            f"[{format_timestamp(e.timestamp, timestamp_format)}] {e.action}"
            for e in self._events
        ]

    def dump(self, timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT) -> List[str]:
        return blank_repeated_stamps(compress_lines(self.lines(timestamp_format)))
