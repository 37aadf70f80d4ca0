# src/atlas_shell/core/pipeline/command.py
"""
Contrato de comandos do Atlas Shell.

Este módulo define:
    - CommandInvocation  → tudo o que um handler recebe em uma execução
    - CommandHandler     → protocolo estrutural de handler
    - CommandDefinition  → definição imutável (nome, schema, handler, alias)

Decisões arquiteturais:
    - Handlers recebem um único objeto de invocação, não argumentos soltos
    - Handlers podem ser síncronos ou corrotinas; o Engine aguarda o
      resultado quando ele é awaitable
    - Um alias é uma segunda `CommandDefinition` com `alias_of` preenchido,
      compartilhando handler e schema com o comando canônico

Invariantes:
    - O retorno de um handler é sempre uma variante de `CommandResult`
    - Definições são imutáveis após criadas

Limites explícitos:
    - Não registra nem executa comandos
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING,
    Awaitable,
    Mapping,
    Optional,
    Protocol,
    Tuple,
    Union,
    runtime_checkable,
)

from .schema import SchemaParameter
from .types import CommandResult, FlagValue, PipeValue

if TYPE_CHECKING:  # pragma: no cover
    from ..engine.cancellation import CancellationToken
    from .context import ShellContext


@dataclass(frozen=True)
class CommandInvocation:
    """
    Dados de uma execução de comando.

    Campos:
        - name: nome usado na linha (pode ser o alias)
        - args: posicionais verificados
        - flags: flags verificadas, coeridas e normalizadas (nomes canônicos)
        - pipe: Pipe Value do estágio anterior (None no primeiro estágio)
        - token: token de cancelamento da cadeia em execução
        - ctx: contexto compartilhado da sessão
    """

    name: str
    args: Tuple[str, ...]
    flags: Mapping[str, FlagValue]
    pipe: PipeValue
    token: "CancellationToken"
    ctx: "ShellContext"

    def arg(self, index: int, default: Optional[str] = None) -> Optional[str]:
        return self.args[index] if index < len(self.args) else default

    def flag(self, name: str, default: Optional[FlagValue] = None) -> Optional[FlagValue]:
        return self.flags.get(name, default)


@runtime_checkable
class CommandHandler(Protocol):
    """Handler de comando (síncrono ou corrotina)."""

    def __call__(
        self, invocation: CommandInvocation
    ) -> Union[CommandResult, Awaitable[CommandResult]]:
        ...


@dataclass(frozen=True)
class CommandDefinition:
    """
    Definição imutável de um comando.

    Campos:
        - name: nome sob o qual a definição é armazenada
        - description: texto exibido pelo `help`
        - handler: função chamada pelo Engine
        - schema: parâmetros posicionais e flags, em ordem
        - hidden: omitido da listagem do `help`
        - alias: nome alternativo declarado (apenas na definição canônica)
        - alias_of: nome canônico (apenas na cópia de alias)
    """

    name: str
    handler: CommandHandler
    description: str = ""
    schema: Tuple[SchemaParameter, ...] = field(default_factory=tuple)
    hidden: bool = False
    alias: Optional[str] = None
    alias_of: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "schema", tuple(self.schema))

    @property
    def canonical_name(self) -> str:
        return self.alias_of or self.name

    def positional_parameters(self) -> Tuple[SchemaParameter, ...]:
        return tuple(p for p in self.schema if not p.is_flag)

    def flag_parameters(self) -> Tuple[SchemaParameter, ...]:
        return tuple(p for p in self.schema if p.is_flag)

    def find_flag(self, key: str) -> Optional[SchemaParameter]:
        for param in self.flag_parameters():
            if param.matches(key):
                return param
        return None
