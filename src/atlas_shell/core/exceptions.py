"""
Atlas Shell — Canonical Exceptions (v1)

Este módulo define exceções tipadas internas do Atlas Shell.

Objetivo:
- Permitir que Registry/Engine/handlers levantem exceções semânticas tipadas
- Facilitar a classificação determinística no limite de execução da cadeia
- Evitar ValueError/RuntimeError genéricos nos caminhos de domínio

Regras:
- Exceções carregam apenas dados estruturados (serializáveis).
- A mensagem é exatamente a linha exibida ao operador.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .errors import ShellErrorPayload


@dataclass(frozen=True, eq=False)
class ShellException(Exception):
    """Base class para exceções de domínio do Shell.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None
    error_type: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message

    @classmethod
    def from_payload(cls, payload: ShellErrorPayload) -> "ShellException":
        return cls(
            message=payload.message,
            details=dict(payload.details),
            hint=payload.hint,
            error_type=payload.type,
        )


# ---------------------------------------------------------------------------
# Domínio
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class CommandError(ShellException):
    """Comando desconhecido, argumento/flag inválido ou falha sinalizada pelo handler."""


@dataclass(frozen=True, eq=False)
class DefinitionError(ShellException):
    """Schema do comando está defeituoso; o comando já foi desregistrado."""


# ---------------------------------------------------------------------------
# Cancelamento
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class ExecutionInterrupted(ShellException):
    """Cancelamento cooperativo da cadeia em execução (não é erro)."""


# ---------------------------------------------------------------------------
# Engine / Configuração
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class EngineConfigurationError(ShellException):
    """Engine usado antes de inicializado ou com colaboradores inconsistentes."""
