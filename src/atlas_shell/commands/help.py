# src/atlas_shell/commands/help.py
"""
Comando `help`.

Sem argumento, lista os comandos registrados (sem aliases e ocultos), em
ordem lexicográfica; com `--aliases`, cada nome vem acompanhado de seus
aliases (`clear (cls)`). Com um nome de comando, exibe a linha de uso e a
descrição; `--verbose` detalha cada parâmetro.
"""

from __future__ import annotations

from typing import List

from ..core.pipeline.command import CommandDefinition, CommandInvocation
from ..core.pipeline.registry import CommandRegistry
from ..core.pipeline.schema import SchemaParameter
from ..core.pipeline.types import CommandResult, ErrorResult, MultiLine, OutputLine

NO_DESCRIPTION = "No description available"


def _flag_label(param: SchemaParameter, *, long_form: bool) -> str:
    if param.short_name and long_form:
        return f"-{param.short_name}|--{param.name}"
    if param.short_name:
        return f"-{param.short_name}"
    return f"--{param.name}"


def _positional_usage(definition: CommandDefinition) -> str:
    parts = []
    for param in definition.positional_parameters():
        parts.append(f" <{param.name}>" if param.required else f" [{param.name}]")
    return "".join(parts)


def _usage(name: str, definition: CommandDefinition) -> str:
    usage = f"Usage: {name}{_positional_usage(definition)}"
    for param in definition.flag_parameters():
        label = _flag_label(param, long_form=False)
        usage += f" {label}" if param.required else f" [{label}]"
    return usage


def _verbose_usage(name: str, definition: CommandDefinition) -> str:
    usage = f"Usage: {name}{_positional_usage(definition)}"
    for param in definition.flag_parameters():
        datatype = param.datatype.value if param.datatype is not None else "?"
        label = f"{_flag_label(param, long_form=True)}=<{datatype}>"
        usage += f" {label}" if param.required else f" [{label}]"
    return usage


def _describe(name: str, definition: CommandDefinition) -> List[OutputLine]:
    lines = [OutputLine.line(_verbose_usage(name, definition))]
    lines.append(OutputLine.line(definition.description or NO_DESCRIPTION))

    if definition.alias_of:
        lines.append(OutputLine.line(f"Alias of: {definition.alias_of}"))
    elif definition.alias:
        lines.append(OutputLine.line(f"Alias: {definition.alias}"))
    lines.append(OutputLine.line(""))

    for param in definition.positional_parameters():
        lines.append(OutputLine.line(f"{param.name}: {param.description or NO_DESCRIPTION}"))
        lines.append(OutputLine.line("    Type: positional"))
        lines.append(OutputLine.line(f"    Required: {'Yes' if param.required else 'No'}"))
        if param.allowed_values:
            lines.append(OutputLine.line(f"    Options: {', '.join(param.allowed_values)}"))
        lines.append(OutputLine.line(""))

    for param in definition.flag_parameters():
        label = _flag_label(param, long_form=True)
        datatype = param.datatype.value if param.datatype is not None else "?"
        lines.append(OutputLine.line(f"{label}: {param.description or NO_DESCRIPTION}"))
        lines.append(OutputLine.line("    Type: flag"))
        lines.append(OutputLine.line(f"    Datatype: {datatype}"))
        lines.append(OutputLine.line(f"    Required: {'Yes' if param.required else 'No'}"))
        lines.append(OutputLine.line(""))

    return lines


def list_commands(registry: CommandRegistry, *, with_aliases: bool) -> List[str]:
    names = []
    for name in registry.registered_names():
        definition = registry.get_definition(name)
        if definition is None or definition.alias_of or definition.hidden:
            continue
        aliases = registry.aliases_of(name) if with_aliases else []
        names.append(f"{name} ({', '.join(aliases)})" if aliases else name)
    return sorted(names, key=lambda s: (s.lower(), s))


def help_command(inv: CommandInvocation) -> CommandResult:
    registry: CommandRegistry = inv.ctx.service("commands")
    requested = inv.arg(0)

    if requested:
        definition = registry.lookup(requested)
        if definition is None:
            return ErrorResult(f'Unknown command: "{requested}"')

        name = definition.alias_of or requested
        if inv.flag("verbose"):
            return MultiLine(_describe(name, definition))
        return MultiLine(
            (
                OutputLine.line(_usage(name, definition)),
                OutputLine.line(definition.description or NO_DESCRIPTION),
            )
        )

    names = list_commands(registry, with_aliases=bool(inv.flag("aliases")))
    return MultiLine(
        (
            OutputLine.line("Available commands:"),
            OutputLine.line(", ".join(names)),
        )
    )


HELP = CommandDefinition(
    name="help",
    description='Lists all available commands. To get help with a specific command, use "help commandname"',
    handler=help_command,
    schema=(
        SchemaParameter.flag(
            "aliases",
            "boolean",
            short_name="a",
            description="Show command aliases in list",
        ),
        SchemaParameter.positional(
            "command",
            description="The command to get help for",
        ),
        SchemaParameter.flag(
            "verbose",
            "boolean",
            short_name="v",
            description="Show detailed help information for each command",
        ),
    ),
)
