# src/atlas_shell/core/pipeline/__init__.py
"""
Pipeline de comandos do Atlas Shell.

Este pacote define os contratos centrais entre Parser, Registry, Engine e
comandos:

- **types**
  - `OutputLine`, `CommandFragment`, `CommandChain`, `ChainStatus`
  - variantes de `CommandResult`: `SingleLine`, `MultiLine`, `ErrorResult`, `Empty`

- **schema**
  - `SchemaParameter`, `Datatype`, `ParamKind`, `VerificationResult`

- **command**
  - `CommandDefinition`, `CommandInvocation`, protocolo `CommandHandler`

- **context**
  - `ShellContext`: configuração, serviços, logs estruturados e warnings

- **registry**
  - `CommandRegistry`: definição, grupos de alias, registro e verificação

## Princípios Fundamentais

- Handlers **não conhecem** a fila nem o Presenter
- Toda invocação é verificada antes de executar
- Comunicação com o resto do Shell ocorre **apenas via ShellContext**
"""

from .command import CommandDefinition, CommandHandler, CommandInvocation
from .context import ShellContext
from .registry import CommandRegistry, DuplicateCommandError, UnknownCommandError
from .schema import Datatype, ParamKind, SchemaParameter, VerificationResult
from .types import (
    ChainStatus,
    CommandChain,
    CommandFragment,
    CommandResult,
    Empty,
    ErrorResult,
    MultiLine,
    OutputKind,
    OutputLine,
    PipeValue,
    SingleLine,
)

__all__ = [
    "CommandDefinition",
    "CommandHandler",
    "CommandInvocation",
    "ShellContext",
    "CommandRegistry",
    "DuplicateCommandError",
    "UnknownCommandError",
    "Datatype",
    "ParamKind",
    "SchemaParameter",
    "VerificationResult",
    "ChainStatus",
    "CommandChain",
    "CommandFragment",
    "CommandResult",
    "Empty",
    "ErrorResult",
    "MultiLine",
    "OutputKind",
    "OutputLine",
    "PipeValue",
    "SingleLine",
]
