"""
Atlas Shell — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do Atlas Shell.
Erros de verificação, de definição de comando e de execução são artefatos
de domínio e devem ser:

- explícitos
- serializáveis
- classificáveis por código estável
- apresentáveis ao operador sem stack trace

As mensagens (`message`) são exatamente as linhas exibidas ao usuário.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Sequence


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ShellErrorPayload:
    """
    Payload canônico de erro do Atlas Shell.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta exibida ao operador
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador
    - decision_required: indica que a operação exige confirmação explícita
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None
    decision_required: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Verificação de invocação
COMMAND_UNKNOWN = "COMMAND_UNKNOWN"
COMMAND_MISSING_ARGUMENT = "COMMAND_MISSING_ARGUMENT"
COMMAND_INVALID_ARGUMENT = "COMMAND_INVALID_ARGUMENT"
COMMAND_MISSING_FLAG = "COMMAND_MISSING_FLAG"
COMMAND_INVALID_FLAG = "COMMAND_INVALID_FLAG"

# Definição de comando (auto-defeito de schema)
COMMAND_DEFINITION_ERROR = "COMMAND_DEFINITION_ERROR"

# Falha sinalizada pelo próprio handler
COMMAND_HANDLER_ERROR = "COMMAND_HANDLER_ERROR"

# Engine / Execução
EXECUTION_INTERRUPTED = "EXECUTION_INTERRUPTED"
ENGINE_EXECUTION_ERROR = "ENGINE_EXECUTION_ERROR"
ENGINE_CONFIGURATION_ERROR = "ENGINE_CONFIGURATION_ERROR"

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred while executing command"
INTERRUPTED_MESSAGE = "Execution interrupted"


def _quoted_list(values: Sequence[Any]) -> str:
    return '"' + '", "'.join(str(v) for v in values) + '"'


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def command_unknown(*, command: str) -> ShellErrorPayload:
    return ShellErrorPayload(
        type=COMMAND_UNKNOWN,
        message=f'Unknown command: "{command}"',
        details={"command": command},
        hint='Use "help" para listar os comandos disponíveis.',
    )


def command_missing_argument(*, command: str, parameter: str, position: int) -> ShellErrorPayload:
    return ShellErrorPayload(
        type=COMMAND_MISSING_ARGUMENT,
        message=f'Missing required argument: "{parameter}"',
        details={"command": command, "parameter": parameter, "position": position},
        hint=f'Use "help {command}" para ver a sintaxe do comando.',
    )


def command_invalid_argument(
    *,
    command: str,
    parameter: str,
    allowed_values: Sequence[str],
    received: str,
) -> ShellErrorPayload:
    return ShellErrorPayload(
        type=COMMAND_INVALID_ARGUMENT,
        message=(
            f'Invalid value for argument "{parameter}": '
            f'expected one of {_quoted_list(allowed_values)}, got "{received}"'
        ),
        details={
            "command": command,
            "parameter": parameter,
            "allowed_values": list(allowed_values),
            "received": received,
        },
    )


def command_missing_flag(*, command: str, flag: str) -> ShellErrorPayload:
    return ShellErrorPayload(
        type=COMMAND_MISSING_FLAG,
        message=f'Missing required flag: "--{flag}"',
        details={"command": command, "flag": flag},
    )


def command_invalid_flag(*, command: str, flag: str, expected: str, actual: str) -> ShellErrorPayload:
    return ShellErrorPayload(
        type=COMMAND_INVALID_FLAG,
        message=f'Invalid value for flag "--{flag}": expected {expected}, got {actual}',
        details={"command": command, "flag": flag, "expected": expected, "actual": actual},
    )


def command_definition_error(
    *,
    command: str,
    message: str,
    flag: Optional[str] = None,
) -> ShellErrorPayload:
    return ShellErrorPayload(
        type=COMMAND_DEFINITION_ERROR,
        message=message,
        details={"command": command, "flag": flag, "unregistered": True},
        hint="Corrija a definição do comando e registre-o novamente.",
    )


def command_handler_error(*, command: str, message: str) -> ShellErrorPayload:
    return ShellErrorPayload(
        type=COMMAND_HANDLER_ERROR,
        message=message,
        details={"command": command},
    )


def execution_interrupted(*, reason: Optional[str] = None) -> ShellErrorPayload:
    return ShellErrorPayload(
        type=EXECUTION_INTERRUPTED,
        message=INTERRUPTED_MESSAGE,
        details={"reason": reason},
    )


def engine_execution_error(
    *,
    chain: Optional[str] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Verifique o log técnico (ShellContext.events). Nenhum fallback é aplicado automaticamente.",
) -> ShellErrorPayload:
    return ShellErrorPayload(
        type=ENGINE_EXECUTION_ERROR,
        message=UNEXPECTED_ERROR_MESSAGE,
        details={
            "chain": chain,
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
        decision_required=False,
    )


def engine_configuration_error(
    *,
    message: str = "Configuração inválida para execução de comandos",
    details: Optional[Dict[str, Any]] = None,
    hint: str = "Revise a definição do comando ou a inicialização do Shell antes de reexecutar.",
) -> ShellErrorPayload:
    return ShellErrorPayload(
        type=ENGINE_CONFIGURATION_ERROR,
        message=message,
        details=details or {},
        hint=hint,
        decision_required=False,
    )
