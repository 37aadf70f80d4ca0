# src/atlas_shell/commands/service.py
"""
Comando `service`: inspeção e controle dos serviços do Shell.

Ações:
    - list              → estado de cada serviço
    - enable <nome>     → habilita o serviço
    - disable <nome>    → desabilita; serviços críticos exigem `--confirm`
    - logs [-c]         → trilha de diagnóstico comprimida (`-c` limpa antes)

Desabilitar `commandexec` ou `commands` é recuperado pelo Watchdog; o
`--confirm` existe para que isso nunca aconteça por engano.
"""

from __future__ import annotations

from typing import Dict

from ..core.diagnostics.log import DEFAULT_TIMESTAMP_FORMAT
from ..core.pipeline.command import CommandDefinition, CommandInvocation
from ..core.pipeline.schema import SchemaParameter
from ..core.pipeline.types import CommandResult, ErrorResult, MultiLine, OutputLine, SingleLine
from ..core.services import Service

CRITICAL_SERVICES = ("commandexec", "commands", "watchdog")

ACTIONS = ("list", "enable", "disable", "logs")


def _services(inv: CommandInvocation) -> Dict[str, Service]:
    return dict(inv.ctx.services)


def _logs(inv: CommandInvocation) -> CommandResult:
    diagnostics = inv.ctx.service("diagnostic")
    if inv.flag("clear"):
        diagnostics.clear()
    fmt = inv.ctx.setting("diagnostics", "timestamp_format", DEFAULT_TIMESTAMP_FORMAT)
    return MultiLine(tuple(OutputLine.line(line) for line in diagnostics.dump(fmt)))


def _list(inv: CommandInvocation) -> CommandResult:
    return MultiLine(
        tuple(
            OutputLine.line(f"{name}: {'enabled' if service.enabled else 'disabled'}")
            for name, service in _services(inv).items()
        )
    )


def _toggle(inv: CommandInvocation, action: str) -> CommandResult:
    requested = inv.arg(1)
    if not requested:
        return ErrorResult("Service name is required for enable/disable action")

    services = _services(inv)
    key = requested.lower()
    service = services.get(key)
    if service is None:
        return ErrorResult(
            f'Unknown service: "{requested}". Valid services are: {", ".join(services)}'
        )

    if action == "enable":
        service.enable()
        return SingleLine(OutputLine.line(f"Enabled {requested} service"))

    if key in CRITICAL_SERVICES and not inv.flag("confirm"):
        return ErrorResult(
            f'The "{requested}" service is critical for the operation of the shell. '
            f"Use --confirm flag to confirm that you want to disable it."
        )
    service.disable()
    return SingleLine(OutputLine.line(f"Disabled {requested} service"))


def service_command(inv: CommandInvocation) -> CommandResult:
    action = inv.arg(0)
    if action == "logs":
        return _logs(inv)
    if action == "list":
        return _list(inv)
    return _toggle(inv, action)


SERVICE = CommandDefinition(
    name="service",
    description="Lists all available services and their status",
    handler=service_command,
    schema=(
        SchemaParameter.positional(
            "action",
            required=True,
            allowed_values=ACTIONS,
            description="The action to perform",
        ),
        SchemaParameter.positional(
            "service",
            description="The service to enable/disable (required for enable/disable action)",
        ),
        SchemaParameter.flag(
            "confirm",
            "boolean",
            description=(
                "Some services are critical for the operation of the shell. "
                "Use this flag to confirm that you want to disable such services"
            ),
        ),
        SchemaParameter.flag(
            "clear",
            "boolean",
            short_name="c",
            description="Clear the log before doing anything.",
        ),
    ),
)
