# src/atlas_shell/core/services.py
"""
Base comum dos serviços do Atlas Shell.

Registry, Engine, OutputBuffer, DiagnosticsLog e Watchdog são serviços:
objetos de instância única, construídos uma vez pelo Shell e compartilhados
por referência. Cada serviço carrega seu próprio flag `enabled`.

Decisões arquiteturais:
    - Não existe estado global de módulo; o Shell é o dono das instâncias
    - `init(owner)` é idempotente: a segunda chamada devolve a mesma
      instância sem efeito colateral
    - Transições de `enable()`/`disable()` só registram diagnóstico quando
      o estado efetivamente muda

Invariantes:
    - Um serviço recém-construído está desabilitado até `init`
    - Toda transição registrada usa o prefixo `diagnostic_name`

Limites explícitos:
    - Não agenda trabalho assíncrono
    - Não conhece o Presenter
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .diagnostics.log import DiagnosticsLog


class Service:
    """Serviço com flag `enabled` e ciclo de vida init → enable/disable."""

    service_name: str = "service"
    diagnostic_name: str = "Service"

    def __init__(self, *, diagnostics: Optional["DiagnosticsLog"] = None) -> None:
        self._diagnostics = diagnostics
        self._owner: Any = None
        self._initialized = False
        self.enabled = False

    # -----------------------------
    # Ciclo de vida
    # -----------------------------
    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def owner(self) -> Any:
        return self._owner

    def init(self, owner: Any = None) -> "Service":
        if self._initialized:
            return self
        self._owner = owner
        self._initialized = True
        self.enabled = True
        self._on_init()
        self._record(f"{self.diagnostic_name}_init")
        return self

    def _on_init(self) -> None:
        """Gancho para subclasses; executa uma única vez."""

    def enable(self) -> None:
        if self.enabled:
            return
        self.enabled = True
        self._record(f"{self.diagnostic_name}_enable")

    def disable(self) -> None:
        if not self.enabled:
            return
        self.enabled = False
        self._record(f"{self.diagnostic_name}_disable")

    # -----------------------------
    # Diagnóstico
    # -----------------------------
    def _record(self, action: str) -> None:
        if self._diagnostics is not None:
            self._diagnostics.record(action)

    def __repr__(self) -> str:
        state = "enabled" if self.enabled else "disabled"
        return f"<{type(self).__name__} {self.service_name} {state}>"
