# src/atlas_shell/commands/plumbing.py
"""
Comandos ocultos de encanamento.

`Shell.submit` enfileira, após cada linha do usuário, `obuffer` (despacha o
buffer de saída para o Presenter) e `commandline` (reabre o prompt). Por
passarem pela mesma fila, ambos respeitam a ordem FIFO da linha que os
precedeu.
"""

from __future__ import annotations

from ..core.pipeline.command import CommandDefinition, CommandInvocation
from ..core.pipeline.types import Empty


def obuffer(inv: CommandInvocation) -> Empty:
    inv.ctx.service("output").flush(inv.ctx.shell)
    return Empty()


def commandline(inv: CommandInvocation) -> Empty:
    inv.ctx.shell.request_prompt()
    return Empty()


OBUFFER = CommandDefinition(
    name="obuffer",
    description="Outputs the current output buffer",
    handler=obuffer,
    hidden=True,
)

COMMANDLINE = CommandDefinition(
    name="commandline",
    description="Outputs a new command line for input",
    handler=commandline,
    hidden=True,
)
