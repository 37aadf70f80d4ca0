# src/atlas_shell/core/pipeline/registry.py
"""
Registro canônico de comandos do Atlas Shell.

Este módulo define o `CommandRegistry`, serviço responsável por:
    - armazenar definições de comandos (e suas cópias de alias)
    - manter o conjunto de registro (comandos atualmente invocáveis)
    - verificar invocações contra o schema declarado
    - normalizar flags curtas para nomes canônicos

Decisões arquiteturais:
    - Nome canônico e alias formam um *grupo*; cada nome aponta para o id
      do grupo (o nome canônico) e register/unregister operam no grupo
    - Um comando definido mas não registrado é inerte: lookup, verificação
      e listagem o tratam como inexistente
    - Defeitos de definição (flag sem `datatype`, default com tipo errado)
      desregistram o comando imediatamente
    - Erros estruturais de uso do registry (nome duplicado ou desconhecido)
      são `ValueError`; falhas de verificação são resultados, não exceções

Invariantes:
    - Registrar duas vezes deixa exatamente um grupo registrado
    - `verify` nunca muta o mapeamento recebido
    - Com o serviço desabilitado nenhum comando é visível

Limites explícitos:
    - Não executa handlers
    - Não renderiza erros (o Engine converte falhas em linhas de saída)
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Dict, Iterable, List, Mapping, Optional, Sequence, Set

from ..errors import (
    COMMAND_DEFINITION_ERROR,
    ShellErrorPayload,
    command_definition_error,
    command_invalid_argument,
    command_invalid_flag,
    command_missing_argument,
    command_missing_flag,
    command_unknown,
)
from ..exceptions import DefinitionError
from ..services import Service
from .command import CommandDefinition
from .schema import INTEGER_PATTERN, VerificationResult, runtime_type
from .types import FlagValue

if TYPE_CHECKING:  # pragma: no cover
    from ..diagnostics.log import DiagnosticsLog


class DuplicateCommandError(ValueError):
    """Tentativa de definir um nome (canônico ou alias) já definido."""


class UnknownCommandError(ValueError):
    """Operação de registro sobre um nome nunca definido."""


class CommandRegistry(Service):
    """
    Serviço de definição, registro e verificação de comandos.

    O registry mantém três estruturas:
        - `_definitions`: nome → definição (ordem de definição preservada)
        - `_groups`: nome → id do grupo (nome canônico)
        - `_registered`: ids de grupos atualmente registrados
    """

    service_name = "commands"
    diagnostic_name = "CommandRegistry"

    def __init__(self, *, diagnostics: Optional["DiagnosticsLog"] = None) -> None:
        super().__init__(diagnostics=diagnostics)
        self._definitions: Dict[str, CommandDefinition] = {}
        self._groups: Dict[str, str] = {}
        self._registered: Set[str] = set()

    # -----------------------------
    # Definição
    # -----------------------------
    def define(self, definition: CommandDefinition) -> None:
        name = definition.name
        if not isinstance(name, str) or not name.strip():
            raise ValueError("command name must be a non-empty string")

        names = [name] + ([definition.alias] if definition.alias else [])
        for n in names:
            if n in self._definitions:
                raise DuplicateCommandError(f'Duplicate command name: "{n}"')

        self._definitions[name] = definition
        self._groups[name] = name

        if definition.alias:
            alias_copy = replace(
                definition, name=definition.alias, alias=None, alias_of=name
            )
            self._definitions[definition.alias] = alias_copy
            self._groups[definition.alias] = name

    def get_definition(self, name: str) -> Optional[CommandDefinition]:
        """Definição bruta, mesmo quando o grupo não está registrado."""
        return self._definitions.get(name)

    def aliases_of(self, name: str) -> List[str]:
        group = self._groups.get(name)
        if group is None:
            return []
        return [n for n, d in self._definitions.items() if d.alias_of == group]

    # -----------------------------
    # Conjunto de registro
    # -----------------------------
    def _group_of(self, name: str, verb: str) -> str:
        group = self._groups.get(name)
        if group is None:
            raise UnknownCommandError(f'Cannot {verb} unknown command: "{name}"')
        return group

    def register(self, name: str) -> None:
        group = self._group_of(name, "register")
        if group in self._registered:
            return
        self._registered.add(group)
        self._record(f"{self.diagnostic_name}_register {name}")

    def unregister(self, name: str) -> None:
        group = self._group_of(name, "unregister")
        if group not in self._registered:
            return
        self._registered.discard(group)
        self._record(f"{self.diagnostic_name}_unregister {name}")

    def bulk_register(self, names: Sequence[str]) -> None:
        for name in names:
            self.register(name)
        self._record(f"{self.diagnostic_name}_bulkRegister {'_'.join(names)}")

    def bulk_unregister(self, names: Sequence[str]) -> None:
        for name in names:
            self.unregister(name)
        self._record(f"{self.diagnostic_name}_bulkUnregister {'_'.join(names)}")

    def is_registered(self, name: str) -> bool:
        if not self.enabled:
            return False
        group = self._groups.get(name)
        return group is not None and group in self._registered

    def registered_names(self) -> List[str]:
        """Nomes canônicos e aliases de grupos registrados, em ordem de definição."""
        return [n for n in self._definitions if self.is_registered(n)]

    def registered_groups(self) -> List[str]:
        return [n for n in self._definitions if n in self._registered]

    def lookup(self, name: str) -> Optional[CommandDefinition]:
        if not self.is_registered(name):
            return None
        self._record(f"{self.diagnostic_name}_get {name}")
        return self._definitions[name]

    # -----------------------------
    # Validação de definição
    # -----------------------------
    def validate_schema(self, name: str) -> None:
        """
        Auto-verificação de definição, executada uma vez por comando.

        Raises:
            UnknownCommandError: Se `name` nunca foi definido.
            DefinitionError: Se alguma flag não declara `datatype`; o comando
                é desregistrado antes do raise.
        """
        definition = self._definitions.get(name)
        if definition is None:
            raise UnknownCommandError(f'Cannot validate unknown command: "{name}"')

        for param in definition.flag_parameters():
            if param.datatype is None:
                self.unregister(name)
                raise DefinitionError.from_payload(self._missing_datatype(name, param.name))

    @staticmethod
    def _missing_datatype(name: str, flag: str) -> ShellErrorPayload:
        return command_definition_error(
            command=name,
            flag=flag,
            message=(
                f'Flag definition for "--{flag}" is missing datatype '
                f"(string, number, boolean)"
            ),
        )

    # -----------------------------
    # Verificação por invocação
    # -----------------------------
    @staticmethod
    def _fail(payload: ShellErrorPayload) -> VerificationResult:
        return VerificationResult(valid=False, error=payload.message, error_type=payload.type)

    def verify(
        self,
        name: str,
        args: Sequence[str],
        flags: Mapping[str, FlagValue],
    ) -> VerificationResult:
        """
        Verifica uma invocação contra o schema do comando.

        Ordem de verificação:
            1. comando desconhecido ou não registrado
            2. posicionais obrigatórios ausentes (em ordem de schema)
            3. posicional fora de `allowed_values`
            4. flags obrigatórias ausentes (nem nome longo nem curto)
            5. flag reconhecida sem `datatype` → defeito de definição
            6. coerção de valores inteiros (`^-?\\d+$`)
            7. tipo de runtime diferente do `datatype` declarado
            8. default com tipo diferente do `datatype` → defeito de definição

        Flags não declaradas passam adiante sem verificação.
        """
        self._record(f"{self.diagnostic_name}_verify {name}")

        definition = self._definitions.get(name)
        if definition is None or not self.is_registered(name):
            return self._fail(command_unknown(command=name))

        for index, param in enumerate(definition.positional_parameters()):
            supplied = index < len(args)
            if param.required and not supplied:
                return self._fail(
                    command_missing_argument(command=name, parameter=param.name, position=index)
                )
            if param.allowed_values is not None and supplied:
                value = args[index]
                if value not in param.allowed_values:
                    return self._fail(
                        command_invalid_argument(
                            command=name,
                            parameter=param.name,
                            allowed_values=param.allowed_values,
                            received=value,
                        )
                    )

        for param in definition.flag_parameters():
            if param.required and not any(k in flags for k in param.flag_keys()):
                return self._fail(command_missing_flag(command=name, flag=param.name))

        coerced: Dict[str, FlagValue] = dict(flags)

        for key, value in flags.items():
            param = definition.find_flag(key)
            if param is None:
                continue

            if param.datatype is None:
                self.unregister(name)
                return self._fail(self._missing_datatype(name, param.name))

            if isinstance(value, str) and INTEGER_PATTERN.match(value):
                value = int(value)
                coerced[key] = value

            expected = param.datatype.value
            actual = runtime_type(value)
            if actual != expected:
                return self._fail(
                    command_invalid_flag(
                        command=name, flag=param.name, expected=expected, actual=actual
                    )
                )

            if param.default is not None and runtime_type(param.default) != expected:
                self.unregister(name)
                return self._fail(
                    command_definition_error(
                        command=name,
                        flag=param.name,
                        message=f'Invalid default value for flag "--{param.name}"',
                    )
                )

        return VerificationResult(valid=True, flags=coerced)

    def normalize_flags(
        self, name: str, flags: Mapping[str, FlagValue]
    ) -> Dict[str, FlagValue]:
        """Mapeia nomes curtos para o nome canônico da flag."""
        definition = self._definitions.get(name)
        if definition is None:
            return dict(flags)

        normalized: Dict[str, FlagValue] = {}
        for key, value in flags.items():
            param = definition.find_flag(key)
            normalized[param.name if param is not None else key] = value
        return normalized

    @staticmethod
    def is_definition_failure(result: VerificationResult) -> bool:
        return result.error_type == COMMAND_DEFINITION_ERROR


def define_all(registry: CommandRegistry, definitions: Iterable[CommandDefinition]) -> None:
    for definition in definitions:
        registry.define(definition)
