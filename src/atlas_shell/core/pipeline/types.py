# src/atlas_shell/core/pipeline/types.py
"""
Tipos canônicos do pipeline do Atlas Shell.

Este módulo define as estruturas e enums que padronizam a comunicação entre
Parser, Registry, Engine, comandos e Presenter.

Componentes principais:
    - OutputKind / OutputLine  → unidade de saída acumulada e despachada
    - CommandFragment          → uma invocação (nome, posicionais, flags)
    - CommandChain             → sequência não vazia de fragmentos (`a | b`)
    - ChainStatus              → estados de uma cadeia na fila
    - CommandResult            → variantes fechadas de retorno de handler

Princípios fundamentais:
    - Tipos são imutáveis e seguros contra mutação acidental
    - Handlers retornam uma variante explícita; não há inspeção de formato
      em tempo de execução

Invariantes:
    - `CommandFragment.flags` é somente leitura após a criação
    - `CommandChain` nunca é vazia

Limites explícitos:
    - Não executa comandos
    - Não valida schema
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple, Union


class OutputKind(str, Enum):
    """Classificação de uma linha de saída (define o método do Presenter)."""
    LINE = "line"
    ERROR = "error"
    STATUS = "status"
    MARKUP = "markup"


class ChainStatus(str, Enum):
    """
    Estados de uma cadeia no Engine.

    QUEUED → RUNNING → {COMPLETED | ABORTED | FAILED}. Os três últimos são
    terminais.
    """
    QUEUED = "queued"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"
    FAILED = "failed"


@dataclass(frozen=True)
class OutputLine:
    """
    Linha de saída acumulada pelo Engine e despachada ao Presenter.

    Campos:
        - kind: line | error | status | markup
        - content: texto da linha (markup: texto escapado com marcadores)
        - location_label: rótulo de localização (apenas line/markup)
    """

    kind: OutputKind
    content: str
    location_label: str = ""

    @classmethod
    def line(cls, content: object, location_label: str = "") -> "OutputLine":
        return cls(OutputKind.LINE, str(content), location_label)

    @classmethod
    def error(cls, content: str) -> "OutputLine":
        return cls(OutputKind.ERROR, content)

    @classmethod
    def status(cls, content: str) -> "OutputLine":
        return cls(OutputKind.STATUS, content)

    @classmethod
    def markup(cls, content: str, location_label: str = "") -> "OutputLine":
        return cls(OutputKind.MARKUP, content, location_label)


FlagValue = Union[str, int, float, bool]

# None ou sequência ordenada de linhas produzidas pelo estágio anterior
PipeValue = Optional[Tuple[OutputLine, ...]]


@dataclass(frozen=True)
class CommandFragment:
    """Uma invocação de comando dentro de uma cadeia."""

    name: str
    args: Tuple[str, ...] = ()
    flags: Mapping[str, FlagValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))
        object.__setattr__(self, "flags", MappingProxyType(dict(self.flags)))


@dataclass(frozen=True)
class CommandChain:
    """Sequência ordenada e não vazia de fragmentos (uma linha com pipes)."""

    fragments: Tuple[CommandFragment, ...]

    def __post_init__(self) -> None:
        fragments = tuple(self.fragments)
        if not fragments:
            raise ValueError("CommandChain requer ao menos um fragmento")
        object.__setattr__(self, "fragments", fragments)

    @classmethod
    def single(cls, name: str) -> "CommandChain":
        return cls((CommandFragment(name=name),))

    def simplify(self) -> str:
        """Nomes dos fragmentos unidos por `_` (usado em ações de diagnóstico)."""
        return "_".join(f.name for f in self.fragments)

    def __iter__(self) -> Iterator[CommandFragment]:
        return iter(self.fragments)

    def __len__(self) -> int:
        return len(self.fragments)


# ---------------------------------------------------------------------------
# Variantes de resultado de handler
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SingleLine:
    line: OutputLine


@dataclass(frozen=True)
class MultiLine:
    lines: Tuple[OutputLine, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "lines", tuple(self.lines))


@dataclass(frozen=True)
class ErrorResult:
    """Falha sinalizada pelo handler; o Engine a converte em `CommandError`."""
    message: str


@dataclass(frozen=True)
class Empty:
    pass


CommandResult = Union[SingleLine, MultiLine, ErrorResult, Empty]
