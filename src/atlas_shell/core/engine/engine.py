# src/atlas_shell/core/engine/engine.py
"""
Engine de execução do Atlas Shell (serviço `commandexec`).

Fila serial single-flight: no máximo uma cadeia está em execução; as demais
aguardam em ordem FIFO. Cada cadeia passa por
QUEUED → RUNNING → {COMPLETED | ABORTED | FAILED}.

Guardrails:
- Nada levantado por handlers (inclusive hooks de interrupção) ou pela
  verificação escapa do Engine.
- O Engine é o único ponto que classifica falhas e as converte em linhas:
    - ExecutionInterrupted → status "Execution interrupted"
    - ShellException       → linha de erro com a mensagem de domínio
    - qualquer outra       → linha genérica + ShellErrorPayload no canal de
                             falhas (ctx.log nível ERROR, com traceback)
- Futures devolvidas por `enqueue` sempre resolvem (None em qualquer falha).
- Uma execução cancelada não avança a fila: quem cancelou decide retomar.
"""

from __future__ import annotations

import asyncio
import inspect
import traceback
from collections import deque
from dataclasses import dataclass
from types import MappingProxyType
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Deque,
    Optional,
    Tuple,
)

from ..errors import (
    INTERRUPTED_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
    ShellErrorPayload,
    command_handler_error,
    command_unknown,
    engine_configuration_error,
    engine_execution_error,
)
from ..exceptions import (
    CommandError,
    DefinitionError,
    EngineConfigurationError,
    ExecutionInterrupted,
    ShellException,
)
from ..pipeline.command import CommandInvocation
from ..pipeline.registry import CommandRegistry
from ..pipeline.types import (
    ChainStatus,
    CommandChain,
    CommandFragment,
    Empty,
    ErrorResult,
    MultiLine,
    OutputLine,
    PipeValue,
    SingleLine,
)
from ..services import Service
from .cancellation import CancellationToken
from .output import OutputBuffer

if TYPE_CHECKING:  # pragma: no cover
    from ..diagnostics.log import DiagnosticsLog
    from ..pipeline.context import ShellContext

FaultLog = Callable[[ShellErrorPayload, BaseException], None]

class _InvalidHandlerResult(Exception):
    """Handler devolveu algo fora das variantes de CommandResult."""

    def __init__(self, command: str, received: str) -> None:
        super().__init__(f"Command handler must return CommandResult, got {received}")
        self.command = command
        self.received = received


@dataclass
class _QueuedChain:
    chain: CommandChain
    future: "asyncio.Future[PipeValue]"
    status: ChainStatus = ChainStatus.QUEUED


def _resolve(future: "asyncio.Future[PipeValue]", value: PipeValue) -> None:
    if not future.done():
        future.set_result(value)


class ExecutionEngine(Service):
    """Fila serial de cadeias com pipes, cancelamento e contenção de falhas."""

    service_name = "commandexec"
    diagnostic_name = "ExecutionEngine"

    def __init__(
        self,
        *,
        registry: CommandRegistry,
        output: OutputBuffer,
        ctx: Optional["ShellContext"] = None,
        diagnostics: Optional["DiagnosticsLog"] = None,
        step_delay_ms: float = 50,
        history_limit: int = 0,
        fault_log: Optional[FaultLog] = None,
    ) -> None:
        super().__init__(diagnostics=diagnostics)
        self.registry = registry
        self.output = output
        self.ctx = ctx
        self.step_delay_ms = step_delay_ms
        self._fault_log = fault_log

        self._queue: Deque[_QueuedChain] = deque()
        self._current: Optional[_QueuedChain] = None
        self._token: Optional[CancellationToken] = None
        self._task: Optional["asyncio.Task[None]"] = None
        self.history: Deque[Tuple[str, ChainStatus]] = deque(maxlen=history_limit or None)

    def _on_init(self) -> None:
        self._queue.clear()
        self._current = None

    # ------------------------------------------------------------------
    # Estado
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._current is not None

    @property
    def pending_count(self) -> int:
        return len(self._queue)

    # ------------------------------------------------------------------
    # Fila
    # ------------------------------------------------------------------

    def enqueue(self, chain: CommandChain) -> "asyncio.Future[PipeValue]":
        """
        Enfileira `chain` e tenta avançar a fila.

        Deve ser chamado com um event loop em execução. Com o serviço
        desabilitado, devolve uma future já resolvida com None.
        """
        if not self.initialized:
            raise EngineConfigurationError.from_payload(
                engine_configuration_error(
                    message="ExecutionEngine usado antes de init()",
                    details={"chain": chain.simplify()},
                )
            )
        future: "asyncio.Future[PipeValue]" = asyncio.get_running_loop().create_future()
        if not self.enabled:
            future.set_result(None)
            return future

        self._record(f"{self.diagnostic_name}_enqueue {chain.simplify()}")
        self._queue.append(_QueuedChain(chain=chain, future=future))
        self.advance()
        return future

    def advance(self) -> None:
        if not self.enabled or self._current is not None or not self._queue:
            return

        entry = self._queue.popleft()
        entry.status = ChainStatus.RUNNING
        label = entry.chain.simplify()
        token = CancellationToken(
            on_hook_error=lambda exc: self._report_fault(label, exc, phase="interrupt_hook")
        )
        self._current = entry
        self._token = token
        self._task = asyncio.get_running_loop().create_task(self._run(entry, token))

    def resume(self) -> None:
        """Retoma a fila após um cancelamento (decisão de quem cancelou)."""
        self.advance()

    def enable(self) -> None:
        super().enable()
        if self.initialized:
            self.advance()

    # ------------------------------------------------------------------
    # Execução
    # ------------------------------------------------------------------

    async def _run(self, entry: _QueuedChain, token: CancellationToken) -> None:
        label = entry.chain.simplify()
        result: PipeValue = None
        self._log("INFO", "chain started", chain=label)

        try:
            result = await self.run_chain(entry.chain, token)
            entry.status = ChainStatus.COMPLETED
            self._log("INFO", "chain completed", chain=label)
            if self.step_delay_ms > 0:
                await asyncio.sleep(self.step_delay_ms / 1000)

        except ExecutionInterrupted as exc:
            entry.status = ChainStatus.ABORTED
            self._record(f"{self.diagnostic_name}_interrupted {label}")
            self.output.add(OutputLine.status(INTERRUPTED_MESSAGE))
            self._log("INFO", "chain aborted", chain=label, reason=exc.details.get("reason"))

        except ShellException as exc:
            entry.status = ChainStatus.FAILED
            self._record(f"{self.diagnostic_name}_commandError {label}")
            self.output.add(OutputLine.error(str(exc)))
            self._log(
                "WARNING",
                str(exc),
                chain=label,
                error=self._exception_to_error(exc).to_dict(),
            )

        except asyncio.CancelledError:
            entry.status = ChainStatus.ABORTED
            token.cancel("task cancelled")
            raise

        except Exception as exc:
            entry.status = ChainStatus.FAILED
            self._record(f"{self.diagnostic_name}_unexpectedError {label}")
            self.output.add(OutputLine.error(UNEXPECTED_ERROR_MESSAGE))
            self._report_fault(label, exc)

        finally:
            _resolve(entry.future, result if entry.status is ChainStatus.COMPLETED else None)
            self.history.append((label, entry.status))
            self._current = None
            self._token = None
            self._task = None
            if not token.cancelled:
                self.advance()

    async def run_chain(self, chain: CommandChain, token: CancellationToken) -> PipeValue:
        """
        Executa os fragmentos em ordem, encadeando o Pipe Value.

        O pipe final é entregue ao OutputBuffer. Em cancelamento, o pipe do
        último estágio concluído ainda é entregue antes de propagar.
        """
        pipe: PipeValue = None
        try:
            for fragment in chain:
                if token.cancelled:
                    self._record(f"{self.diagnostic_name}_chainAborted {chain.simplify()}")
                    token.raise_if_cancelled()
                pipe = await self._run_fragment(fragment, token, pipe)
            # cancelamento que chegou durante o último handler
            token.raise_if_cancelled()
        except ExecutionInterrupted:
            if pipe:
                self.output.add_all(pipe)
            raise

        if pipe is not None:
            self.output.add_all(pipe)
        return pipe

    async def _run_fragment(
        self,
        fragment: CommandFragment,
        token: CancellationToken,
        pipe: PipeValue,
    ) -> PipeValue:
        name = fragment.name
        definition = self.registry.lookup(name)
        if definition is None:
            raise CommandError.from_payload(command_unknown(command=name))

        verification = self.registry.verify(name, fragment.args, fragment.flags)
        if not verification.valid:
            exc_cls = (
                DefinitionError
                if self.registry.is_definition_failure(verification)
                else CommandError
            )
            raise exc_cls(
                message=verification.error or "",
                details={"command": name},
                error_type=verification.error_type,
            )

        flags = self.registry.normalize_flags(name, verification.flags)

        if token.cancelled:
            self._record(f"{self.diagnostic_name}_fragmentAborted {name}")
            token.raise_if_cancelled()

        self._record(f"{self.diagnostic_name}_run {name}")
        invocation = CommandInvocation(
            name=name,
            args=fragment.args,
            flags=MappingProxyType(flags),
            pipe=pipe,
            token=token,
            ctx=self.ctx,
        )

        outcome: Any = definition.handler(invocation)
        if inspect.isawaitable(outcome):
            outcome = await outcome

        return self._to_pipe(name, outcome)

    @staticmethod
    def _to_pipe(name: str, outcome: Any) -> PipeValue:
        if isinstance(outcome, SingleLine):
            return (outcome.line,)
        if isinstance(outcome, MultiLine):
            return outcome.lines
        if isinstance(outcome, Empty):
            return None
        if isinstance(outcome, ErrorResult):
            raise CommandError.from_payload(
                command_handler_error(command=name, message=outcome.message)
            )
        raise _InvalidHandlerResult(name, type(outcome).__name__)

    # ------------------------------------------------------------------
    # Cancelamento
    # ------------------------------------------------------------------

    def interrupt(self, reason: Optional[str] = None) -> None:
        """
        Esvazia a fila e cancela a cadeia em execução.

        Futures descartadas e a future em execução resolvem com None. A
        próxima cadeia não é iniciada automaticamente.
        """
        dropped = list(self._queue)
        self._queue.clear()
        for entry in dropped:
            entry.status = ChainStatus.ABORTED
            _resolve(entry.future, None)

        self._record(f"{self.diagnostic_name}_interrupt")

        if self._current is not None:
            _resolve(self._current.future, None)
        if self._token is not None:
            self._token.cancel(reason)

    async def wait_idle(self) -> None:
        """Aguarda a cadeia em execução (se houver) terminar."""
        task = self._task
        if task is not None:
            await asyncio.wait({task})

    async def join(self) -> None:
        """Aguarda até não haver cadeia em execução nem avanço pendente."""
        while self._task is not None:
            await asyncio.wait({self._task})

    # ------------------------------------------------------------------
    # Guardrails: exceção -> ShellErrorPayload
    # ------------------------------------------------------------------

    @staticmethod
    def _exception_to_error(exc: BaseException) -> ShellErrorPayload:
        if isinstance(exc, ShellException):
            return ShellErrorPayload(
                type=exc.error_type or exc.__class__.__name__,
                message=str(exc),
                details=dict(exc.details or {}),
                hint=exc.hint,
            )
        return engine_execution_error(
            exc_type=exc.__class__.__name__,
            exc_message=str(exc),
        )

    def _report_fault(self, label: str, exc: Exception, *, phase: str = "handler") -> None:
        if isinstance(exc, _InvalidHandlerResult):
            payload = engine_configuration_error(
                message="Handler retornou tipo inválido",
                details={
                    "chain": label,
                    "expected": "CommandResult",
                    "command": exc.command,
                    "received": exc.received,
                },
                hint="Ajuste o handler para retornar SingleLine, MultiLine, ErrorResult ou Empty",
            )
        else:
            payload = engine_execution_error(
                chain=label,
                exc_type=exc.__class__.__name__,
                exc_message=str(exc),
            )

        if self._fault_log is not None:
            self._fault_log(payload, exc)

        self._log(
            "ERROR",
            payload.message,
            chain=label,
            phase=phase,
            error=payload.to_dict(),
            traceback="".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        )

    def _log(self, level: str, message: str, **extra: Any) -> None:
        if self.ctx is not None:
            self.ctx.log(source=self.service_name, level=level, message=message, **extra)
