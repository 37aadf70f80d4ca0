# src/atlas_shell/shell.py
"""
Façade do Atlas Shell.

O `Shell` constrói e conecta os serviços de uma sessão e expõe a interface
usada pela fonte de entrada (`submit`) e pelos comandos (render, prompt,
transcrição).

Ordem de construção:
    1. configuração efetiva (defaults empacotados quando `config=None`)
    2. `ShellContext` com `config_hash` em `meta`
    3. serviços: diagnostic → output → commands → commandexec → watchdog
    4. definição dos built-ins e registro de `commands.registered`
    5. `validate_schema` em cada comando registrado

Decisões arquiteturais:
    - Cada serviço é instanciado uma única vez e compartilhado por referência
    - `init()` é idempotente em todos os níveis
    - O Shell nunca escreve direto no Presenter a partir de uma cadeia: a
      saída passa pelo OutputBuffer e é despachada por `obuffer`
    - No máximo um prompt aberto por vez

Invariantes:
    - `submit` sempre enfileira `obuffer` e `commandline` após a linha
    - Toda linha exibida é registrada na transcrição

Limites explícitos:
    - Não captura teclado
    - Não persiste histórico
"""

from __future__ import annotations

import asyncio
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .commands import define_builtins
from .core.config.hashing import compute_config_hash
from .core.config.loader import load_config
from .core.diagnostics.log import Clock, DiagnosticsLog
from .core.engine.engine import ExecutionEngine, FaultLog
from .core.engine.output import OutputBuffer
from .core.exceptions import DefinitionError
from .core.parsing.parser import parse_chain
from .core.pipeline.command import CommandDefinition
from .core.pipeline.context import ShellContext
from .core.pipeline.registry import CommandRegistry
from .core.pipeline.types import CommandChain, OutputKind, OutputLine, PipeValue
from .core.watchdog.watchdog import Watchdog
from .presenter.protocol import Presenter

DEFAULT_REGISTERED = (
    "print",
    "obuffer",
    "commandline",
    "linecount",
    "help",
    "clear",
    "service",
    "findtext",
)


class Shell:
    """Façade que conecta Parser, Registry, Engine, Diagnostics e Watchdog."""

    def __init__(
        self,
        presenter: Presenter,
        *,
        config: Optional[Dict[str, Any]] = None,
        session_id: Optional[str] = None,
        clock: Optional[Clock] = None,
        fault_log: Optional[FaultLog] = None,
    ) -> None:
        self.presenter = presenter
        self.config: Dict[str, Any] = config if config is not None else load_config()

        self.ctx = ShellContext(
            session_id=session_id or uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc),
            config=self.config,
            meta={"config_hash": compute_config_hash(self.config)},
            shell=self,
            event_limit=int((self.config.get("shell") or {}).get("event_limit", 0) or 0),
        )

        self.diagnostics = DiagnosticsLog(clock=clock)
        self.output = OutputBuffer(diagnostics=self.diagnostics)
        self.registry = CommandRegistry(diagnostics=self.diagnostics)
        self.engine = ExecutionEngine(
            registry=self.registry,
            output=self.output,
            ctx=self.ctx,
            diagnostics=self.diagnostics,
            step_delay_ms=self.ctx.setting("engine", "step_delay_ms", 50),
            history_limit=int(self.ctx.setting("engine", "history_limit", 0) or 0),
            fault_log=fault_log,
        )
        self.watchdog = Watchdog(
            services=self.ctx.services,
            output=self.output,
            ctx=self.ctx,
            diagnostics=self.diagnostics,
            interval_ms=self.ctx.setting("watchdog", "interval_ms", 100),
            critical_services=self.ctx.setting(
                "watchdog", "critical_services", ["commandexec", "commands"]
            ),
        )

        self.ctx.services.update(
            {
                "output": self.output,
                "commandexec": self.engine,
                "commands": self.registry,
                "diagnostic": self.diagnostics,
                "watchdog": self.watchdog,
            }
        )

        self.transcript: List[OutputLine] = []
        self._transcript_limit = int(self.ctx.setting("shell", "transcript_limit", 0) or 0)
        self._prompt_open = False
        self._initialized = False
        self.init()

    # ------------------------------------------------------------------
    # Ciclo de vida
    # ------------------------------------------------------------------

    @property
    def services(self) -> Dict[str, Any]:
        return self.ctx.services

    @property
    def prompt_open(self) -> bool:
        return self._prompt_open

    def init(self) -> "Shell":
        if self._initialized:
            return self
        self._initialized = True

        self.diagnostics.init(self)
        if not self.ctx.setting("diagnostics", "enabled", True):
            self.diagnostics.disable()
        self.output.init(self)
        self.registry.init(self)
        self.engine.init(self)
        self.watchdog.init(self)
        if not self.ctx.setting("watchdog", "enabled", True):
            self.watchdog.disable()

        define_builtins(self.registry)
        registered = list(self.ctx.setting("commands", "registered", DEFAULT_REGISTERED))
        self.registry.bulk_register(registered)
        for name in registered:
            self._validate(name)
        return self

    def define_command(self, definition: CommandDefinition, *, register: bool = True) -> None:
        """Define um comando adicional e, opcionalmente, registra e valida."""
        self.registry.define(definition)
        if register:
            self.registry.register(definition.name)
            self._validate(definition.name)

    def _validate(self, name: str) -> None:
        try:
            self.registry.validate_schema(name)
        except DefinitionError as exc:
            self.render_error(str(exc))
            self.ctx.add_warning(source=self.registry.service_name, message=str(exc))
            self.ctx.log(
                source=self.registry.service_name,
                level="WARNING",
                message=str(exc),
                command=name,
            )

    def start(self) -> None:
        """Inicia o timer do Watchdog e abre o primeiro prompt."""
        self.watchdog.start()
        self.request_prompt()

    async def stop(self) -> None:
        await self.watchdog.stop()

    async def __aenter__(self) -> "Shell":
        self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.stop()

    # ------------------------------------------------------------------
    # Entrada
    # ------------------------------------------------------------------

    def _enqueue_line(self, text: str) -> "Optional[asyncio.Future[PipeValue]]":
        self._prompt_open = False
        chain = parse_chain(text)
        pending = self.engine.enqueue(chain) if chain is not None else None
        self.engine.enqueue(CommandChain.single("obuffer"))
        self.engine.enqueue(CommandChain.single("commandline"))
        return pending

    def submit(self, text: str) -> None:
        """
        Enfileira a linha, seguida de `obuffer` e `commandline`.

        Deve ser chamado com um event loop em execução; o resultado aparece
        de forma assíncrona pelo Presenter.
        """
        self._enqueue_line(text)

    async def execute(self, text: str) -> PipeValue:
        """Como `submit`, mas aguarda a fila esvaziar e devolve o pipe final."""
        pending = self._enqueue_line(text)
        result = await pending if pending is not None else None
        await self.engine.join()
        return result

    async def interrupt(self, reason: Optional[str] = None) -> None:
        """
        Cancela a cadeia em execução e esvazia a fila.

        Aguarda a cadeia cancelada terminar, despacha a saída pendente
        (inclusive o aviso de interrupção), retoma a fila e reabre o prompt.
        """
        self.engine.interrupt(reason)
        await self.engine.wait_idle()
        self.output.flush(self)
        self.engine.resume()
        self.request_prompt()

    # ------------------------------------------------------------------
    # Saída (OutputSink)
    # ------------------------------------------------------------------

    def render(self, line: OutputLine) -> None:
        self.transcript.append(line)
        if self._transcript_limit > 0 and len(self.transcript) > self._transcript_limit:
            del self.transcript[: len(self.transcript) - self._transcript_limit]

        if line.kind is OutputKind.ERROR:
            self.presenter.render_error(line.content)
        elif line.kind is OutputKind.STATUS:
            self.presenter.render_status(line.content)
        elif line.kind is OutputKind.MARKUP:
            self.presenter.render_markup(line.content, line.location_label)
        else:
            self.presenter.render_line(line.content, line.location_label)

    def render_line(self, content: str, location_label: str = "") -> None:
        self.render(OutputLine.line(content, location_label))

    def render_error(self, content: str) -> None:
        self.render(OutputLine.error(content))

    def render_status(self, content: str) -> None:
        self.render(OutputLine.status(content))

    def render_markup(self, content: str, location_label: str = "") -> None:
        self.render(OutputLine.markup(content, location_label))

    # ------------------------------------------------------------------
    # Superfície
    # ------------------------------------------------------------------

    def request_prompt(self) -> None:
        if self._prompt_open:
            return
        self._prompt_open = True
        self.presenter.open_prompt()

    def clear_surface(self) -> None:
        self.transcript.clear()
        clear = getattr(self.presenter, "clear", None)
        if callable(clear):
            clear()
