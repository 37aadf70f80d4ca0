# src/atlas_shell/core/watchdog/watchdog.py
"""
Watchdog auto-reparador (serviço `watchdog`).

A cada `interval_ms`, verifica se algum serviço da lista de críticos está
desabilitado. Para cada um encontrado:
    1. reabilita o serviço
    2. descarta a saída bufferizada ainda não despachada
    3. exibe um aviso de status pelo Shell
    4. registra `Watchdog_recover <nome>` no diagnóstico
    5. solicita um novo prompt (o Shell evita prompts concorrentes)

Decisões arquiteturais:
    - A recuperação é incondicional: não distingue desabilitação
      intencional de acidental
    - É um backstop de liveness, não um mecanismo de correção
    - Falhas de uma verificação são registradas no canal técnico e o timer
      continua

Limites explícitos:
    - Não supervisiona a si mesmo
    - Não reinicia cadeias abortadas
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Sequence

from ..errors import engine_execution_error
from ..services import Service

if TYPE_CHECKING:  # pragma: no cover
    from ..diagnostics.log import DiagnosticsLog
    from ..engine.output import OutputBuffer
    from ..pipeline.context import ShellContext


def recovery_message(name: str) -> str:
    return f"Enabling {name} service to prevent bricking."


class Watchdog(Service):
    service_name = "watchdog"
    diagnostic_name = "Watchdog"

    def __init__(
        self,
        *,
        services: Mapping[str, Service],
        output: "OutputBuffer",
        ctx: Optional["ShellContext"] = None,
        diagnostics: Optional["DiagnosticsLog"] = None,
        interval_ms: float = 100,
        critical_services: Sequence[str] = ("commandexec",),
    ) -> None:
        super().__init__(diagnostics=diagnostics)
        self._services = services
        self._output = output
        self.ctx = ctx
        self.interval_ms = interval_ms
        self.critical_services = tuple(critical_services)
        self._task: Optional["asyncio.Task[None]"] = None

    # -----------------------------
    # Timer
    # -----------------------------
    @property
    def started(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.started:
            return
        self._task = asyncio.get_running_loop().create_task(self._loop())

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        await asyncio.wait({task})

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval_ms / 1000)
            try:
                self.check()
            except Exception as exc:
                self._log(
                    "ERROR",
                    "watchdog check failed",
                    error=engine_execution_error(
                        exc_type=exc.__class__.__name__,
                        exc_message=str(exc),
                    ).to_dict(),
                )

    # -----------------------------
    # Verificação
    # -----------------------------
    def check(self) -> List[str]:
        """Reabilita serviços críticos desabilitados; retorna os recuperados."""
        if not self.enabled:
            return []

        shell: Any = self.owner
        recovered: List[str] = []

        for name in self.critical_services:
            service = self._services.get(name)
            if service is None or service.enabled:
                continue

            service.enable()
            self._output.clear()
            if shell is not None:
                shell.render_status(recovery_message(name))
            self._record(f"{self.diagnostic_name}_recover {name}")
            self._log("WARNING", "critical service re-enabled", service=name)
            recovered.append(name)

        if recovered and shell is not None:
            shell.request_prompt()

        return recovered

    def _log(self, level: str, message: str, **extra: Any) -> None:
        if self.ctx is not None:
            self.ctx.log(source=self.service_name, level=level, message=message, **extra)
