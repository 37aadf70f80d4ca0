# src/atlas_shell/core/engine/cancellation.py
"""
Token de cancelamento cooperativo.

Cada cadeia em execução recebe um token novo. O Engine verifica o token nas
fronteiras de fragmento; handlers longos podem verificá-lo por conta própria
(`raise_if_cancelled`) ou registrar hooks para reagir ao `interrupt`.

Hooks são código de handler: uma falha em um hook não interrompe os demais.
Com `on_hook_error`, cada falha é entregue ao reporter (o Engine a envia ao
canal de falhas); sem reporter, a primeira falha é relançada depois que todos
os hooks rodaram.

Invariantes:
    - Um token cancelado nunca volta ao estado não cancelado
    - Cada hook é chamado exatamente uma vez com o `ExecutionInterrupted`
"""

from __future__ import annotations

from typing import Callable, List, Optional

from ..errors import execution_interrupted
from ..exceptions import ExecutionInterrupted

InterruptHook = Callable[[ExecutionInterrupted], None]
HookErrorReporter = Callable[[Exception], None]


class CancellationToken:
    def __init__(self, *, on_hook_error: Optional[HookErrorReporter] = None) -> None:
        self._error: Optional[ExecutionInterrupted] = None
        self._hooks: List[InterruptHook] = []
        self._on_hook_error = on_hook_error

    @property
    def cancelled(self) -> bool:
        return self._error is not None

    @property
    def error(self) -> Optional[ExecutionInterrupted]:
        return self._error

    def cancel(self, reason: Optional[str] = None) -> None:
        if self._error is not None:
            return
        self._error = ExecutionInterrupted.from_payload(execution_interrupted(reason=reason))
        hooks, self._hooks = self._hooks, []
        self._run_hooks(hooks, self._error)

    def add_interrupt_hook(self, hook: InterruptHook) -> None:
        """Registra `hook`; se o token já foi cancelado, chama imediatamente."""
        if self._error is not None:
            self._run_hooks([hook], self._error)
            return
        self._hooks.append(hook)

    def raise_if_cancelled(self) -> None:
        if self._error is not None:
            raise self._error

    def _run_hooks(self, hooks: List[InterruptHook], error: ExecutionInterrupted) -> None:
        failures: List[Exception] = []
        for hook in hooks:
            try:
                hook(error)
            except Exception as exc:
                if self._on_hook_error is None:
                    failures.append(exc)
                else:
                    self._on_hook_error(exc)
        if failures:
            raise failures[0]
