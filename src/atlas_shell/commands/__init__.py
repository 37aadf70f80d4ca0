# src/atlas_shell/commands/__init__.py
"""
Comandos built-in do Atlas Shell.

Cada módulo expõe uma ou mais `CommandDefinition`. `define_builtins`
apenas *define* os comandos no registry; quais ficam registrados
(invocáveis) é decidido pela configuração `commands.registered`.

| Comando       | Alias  | Oculto |
|---------------|--------|--------|
| print         |        |        |
| clear         | cls    |        |
| help          |        |        |
| linecount     | lc     |        |
| service       |        |        |
| findtext      | find   |        |
| obuffer       |        | sim    |
| commandline   |        | sim    |
"""

from __future__ import annotations

from typing import Tuple

from ..core.pipeline.command import CommandDefinition
from ..core.pipeline.registry import CommandRegistry, define_all
from .findtext import FINDTEXT
from .help import HELP
from .plumbing import COMMANDLINE, OBUFFER
from .service import SERVICE
from .text import CLEAR, LINECOUNT, PRINT

BUILTIN_COMMANDS: Tuple[CommandDefinition, ...] = (
    PRINT,
    OBUFFER,
    COMMANDLINE,
    LINECOUNT,
    HELP,
    CLEAR,
    SERVICE,
    FINDTEXT,
)


def define_builtins(registry: CommandRegistry) -> None:
    define_all(registry, BUILTIN_COMMANDS)


__all__ = ["BUILTIN_COMMANDS", "define_builtins"]
