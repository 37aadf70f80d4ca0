# src/atlas_shell/core/pipeline/schema.py
"""
Schema declarativo de parâmetros de comandos.

Cada comando declara uma sequência ordenada de `SchemaParameter`, que
descreve um posicional ou uma flag. O Registry usa o schema para verificar
cada invocação antes da execução.

Decisões arquiteturais:
    - Toda flag deve declarar `datatype`; a ausência é um defeito de
      definição detectado pelo Registry (o comando é desregistrado)
    - `pipeable_from` é informativo: não isenta o posicional da verificação
      de obrigatoriedade; apenas o handler decide substituir pelo pipe
    - `allowed_values` só se aplica a posicionais

Limites explícitos:
    - Não verifica invocações (ver `CommandRegistry.verify`)
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from .types import FlagValue


class ParamKind(str, Enum):
    POSITIONAL = "positional"
    FLAG = "flag"


class Datatype(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


INTEGER_PATTERN = re.compile(r"^-?\d+$")


def runtime_type(value: Any) -> str:
    """Nome do tipo de runtime de um valor de flag (`string|number|boolean`)."""
    if isinstance(value, bool):
        return Datatype.BOOLEAN.value
    if isinstance(value, (int, float)):
        return Datatype.NUMBER.value
    if isinstance(value, str):
        return Datatype.STRING.value
    return type(value).__name__


@dataclass(frozen=True)
class SchemaParameter:
    """
    Descrição de um parâmetro posicional ou flag.

    Campos:
        - kind: positional | flag
        - name: nome canônico (flags: `--name`)
        - short_name: nome curto opcional (flags: `-x`)
        - required: obrigatoriedade
        - datatype: string | number | boolean (obrigatório para flags)
        - allowed_values: valores aceitos (posicionais)
        - pipeable_from: indica que o pipe pode substituir o valor
        - default: valor padrão declarado (deve respeitar `datatype`)
        - description: texto exibido pelo `help`
    """

    kind: ParamKind
    name: str
    short_name: Optional[str] = None
    required: bool = False
    datatype: Optional[Datatype] = None
    allowed_values: Optional[Tuple[str, ...]] = None
    pipeable_from: Optional[str] = None
    default: Any = None
    description: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", ParamKind(self.kind))
        if self.datatype is not None:
            object.__setattr__(self, "datatype", Datatype(self.datatype))
        if self.allowed_values is not None:
            object.__setattr__(self, "allowed_values", tuple(self.allowed_values))

    @classmethod
    def positional(cls, name: str, **kwargs: Any) -> "SchemaParameter":
        return cls(kind=ParamKind.POSITIONAL, name=name, **kwargs)

    @classmethod
    def flag(
        cls,
        name: str,
        datatype: Union[Datatype, str, None] = None,
        **kwargs: Any,
    ) -> "SchemaParameter":
        return cls(kind=ParamKind.FLAG, name=name, datatype=datatype, **kwargs)

    @property
    def is_flag(self) -> bool:
        return self.kind is ParamKind.FLAG

    def flag_keys(self) -> Tuple[str, ...]:
        """Chaves pelas quais a flag pode aparecer na linha de comando."""
        if self.short_name:
            return (self.name, self.short_name)
        return (self.name,)

    def matches(self, key: str) -> bool:
        return key == self.name or (self.short_name is not None and key == self.short_name)


@dataclass(frozen=True)
class VerificationResult:
    """
    Resultado de `CommandRegistry.verify`.

    Em sucesso, `flags` contém a cópia (possivelmente coerida) das flags
    recebidas. Em falha, `error` é a mensagem exibida e `error_type` o código
    estável do catálogo de erros.
    """

    valid: bool
    error: Optional[str] = None
    error_type: Optional[str] = None
    flags: Dict[str, FlagValue] = field(default_factory=dict)
