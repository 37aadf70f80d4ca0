# src/atlas_shell/commands/text.py
"""Comandos de texto e superfície: `print`, `linecount` e `clear`."""

from __future__ import annotations

from ..core.pipeline.command import CommandDefinition, CommandInvocation
from ..core.pipeline.schema import SchemaParameter
from ..core.pipeline.types import Empty, OutputLine, SingleLine


def print_text(inv: CommandInvocation) -> SingleLine:
    return SingleLine(OutputLine.line(inv.arg(0, ""), inv.arg(1, "") or ""))


def linecount(inv: CommandInvocation) -> SingleLine:
    # sem pipe, conta as linhas já exibidas pelo Presenter
    if inv.pipe is not None:
        count = len(inv.pipe)
    else:
        count = len(inv.ctx.shell.transcript)
    return SingleLine(OutputLine.line(count))


def clear(inv: CommandInvocation) -> Empty:
    inv.ctx.service("output").clear()
    inv.ctx.shell.clear_surface()
    return Empty()


PRINT = CommandDefinition(
    name="print",
    description="Prints the provided arguments to the console",
    handler=print_text,
    schema=(
        SchemaParameter.positional(
            "text",
            required=True,
            pipeable_from="text",
            description="The text to print",
        ),
        SchemaParameter.positional(
            "loc_label",
            description="The text to show in the location part of the line",
        ),
    ),
)

LINECOUNT = CommandDefinition(
    name="linecount",
    description="Outputs the number of lines",
    handler=linecount,
    alias="lc",
)

CLEAR = CommandDefinition(
    name="clear",
    description="Clears the output buffer and the console",
    handler=clear,
    alias="cls",
)
