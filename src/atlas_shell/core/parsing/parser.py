# src/atlas_shell/core/parsing/parser.py
"""
Tokenizer e divisor de pipeline do Atlas Shell.

Este módulo implementa a conversão texto → `CommandChain` em duas etapas
puramente funcionais (sem estado compartilhado):

1. Divisão de pipeline
    - varredura caractere a caractere com estado de aspas simples, aspas
      duplas e escape por barra invertida
    - `|` só separa estágios fora de ambas as aspas
    - a barra invertida é mantida junto do caractere seguinte, para que a
      segunda etapa ainda enxergue o escape
    - estágios vazios (após trim) são descartados

2. Parse de fragmento
    - tokenização por espaço em branco, respeitando `"…"` e `'…'`
    - `\\` antes de espaço, aspas ou outra barra produz o caractere escapado;
      qualquer outra barra é literal (inclusive uma barra final)
    - um token é *quoted* quando uma aspa abre antes de qualquer caractere
      do token; tokens quoted são sempre posicionais
    - tokens não quoted iniciados por `--`, ou por `-` com tamanho > 1, são
      flags; `nome=valor` divide no primeiro `=`, sem `=` o valor é `True`

Invariantes:
    - Nenhuma entrada levanta exceção
    - A saída é imutável (`CommandFragment`/`CommandChain` congelados)

Limites explícitos:
    - Não expande variáveis, globs ou subshells
    - Não valida nomes de comandos (responsabilidade do Registry)
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple, Union

from ..pipeline.types import CommandChain, CommandFragment

_ESCAPABLE = {" ", '"', "'", "\\"}


# ---------------------------------------------------------------------------
# Etapa 1: divisão de pipeline
# ---------------------------------------------------------------------------

def split_pipeline(text: str) -> List[str]:
    """Divide `text` em estágios separados por `|` fora de aspas."""
    stages: List[str] = []
    current: List[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in text:
        if escape:
            current.append(ch)
            escape = False
            continue

        if ch == "\\":
            escape = True
            current.append(ch)
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == "|" and not in_single and not in_double:
            stage = "".join(current).strip()
            if stage:
                stages.append(stage)
            current = []
            continue

        current.append(ch)

    stage = "".join(current).strip()
    if stage:
        stages.append(stage)

    return stages


# ---------------------------------------------------------------------------
# Etapa 2: parse de fragmento
# ---------------------------------------------------------------------------

def tokenize(stage: str) -> List[Tuple[str, bool]]:
    """
    Tokeniza um estágio em pares `(token, quoted)`.

    Aspas são consumidas (não fazem parte do token); o flag `quoted` indica
    que o token começou por uma aspa.
    """
    tokens: List[Tuple[str, bool]] = []
    current: List[str] = []
    in_single = False
    in_double = False
    started_quoted = False
    i = 0
    n = len(stage)

    while i < n:
        c = stage[i]

        if c == "\\":
            nxt = stage[i + 1] if i + 1 < n else None
            if nxt in _ESCAPABLE:
                current.append(nxt)
                i += 2
                continue
            current.append("\\")
            i += 1
            continue

        if c == '"' and not in_single:
            if not in_double and not current:
                started_quoted = True
            in_double = not in_double
        elif c == "'" and not in_double:
            if not in_single and not current:
                started_quoted = True
            in_single = not in_single
        elif c.isspace() and not in_single and not in_double:
            if current:
                tokens.append(("".join(current), started_quoted))
                current = []
                started_quoted = False
        else:
            current.append(c)

        i += 1

    if current:
        tokens.append(("".join(current), started_quoted))

    return tokens


def _split_flag(body: str) -> Tuple[str, Union[str, bool]]:
    name, sep, value = body.partition("=")
    if sep:
        return name, value
    return body, True


def parse_fragment(stage: str) -> CommandFragment:
    """Converte um estágio em `CommandFragment` (nome, posicionais, flags)."""
    tokens = tokenize(stage)
    if not tokens:
        return CommandFragment(name="", args=(), flags={})

    name = tokens[0][0]
    args: List[str] = []
    flags: Dict[str, Union[str, bool]] = {}

    for token, quoted in tokens[1:]:
        if quoted:
            args.append(token)
        elif token.startswith("--"):
            key, value = _split_flag(token[2:])
            flags[key] = value
        elif token.startswith("-") and len(token) > 1:
            key, value = _split_flag(token[1:])
            flags[key] = value
        else:
            args.append(token)

    return CommandFragment(name=name, args=tuple(args), flags=flags)


def parse_chain(text: str) -> Optional[CommandChain]:
    """
    Compõe as duas etapas.

    Returns:
        `CommandChain` com ao menos um fragmento, ou `None` quando a linha
        não contém nenhum estágio (linha vazia ou só `|`/espaços).
    """
    fragments = [parse_fragment(stage) for stage in split_pipeline(text)]
    fragments = [f for f in fragments if f.name]
    if not fragments:
        return None
    return CommandChain(tuple(fragments))
