# src/atlas_shell/commands/findtext.py
"""
Comando `findtext` (alias `find`).

Filtra as linhas do pipe (ou, sem pipe, a transcrição já exibida) que
contêm o texto procurado e as devolve como linhas `markup`, com cada
ocorrência envolvida em `<mark>…</mark>`. Nenhuma correspondência produz
um resultado vazio, não um erro.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Pattern

from ..core.pipeline.command import CommandDefinition, CommandInvocation
from ..core.pipeline.schema import SchemaParameter
from ..core.pipeline.types import (
    CommandResult,
    ErrorResult,
    MultiLine,
    OutputKind,
    OutputLine,
)
from ..presenter.markup import highlight, strip_markup


def _plain(line: OutputLine) -> str:
    if line.kind is OutputKind.MARKUP:
        return strip_markup(line.content)
    return line.content


def find_lines(lines: Iterable[OutputLine], pattern: Pattern[str]) -> List[OutputLine]:
    found = []
    for line in lines:
        text = _plain(line)
        if pattern.search(text) is not None:
            found.append(OutputLine.markup(highlight(text, pattern), line.location_label))
    return found


def findtext(inv: CommandInvocation) -> CommandResult:
    needle = inv.arg(0, "") or ""
    options = re.IGNORECASE if inv.flag("ignorecase") else 0

    if inv.flag("regex"):
        try:
            pattern = re.compile(needle, options)
        except re.error:
            return ErrorResult(f'Invalid regular expression: "{needle}"')
    else:
        pattern = re.compile(re.escape(needle), options)

    source = inv.pipe if inv.pipe is not None else tuple(inv.ctx.shell.transcript)
    return MultiLine(tuple(find_lines(source, pattern)))


FINDTEXT = CommandDefinition(
    name="findtext",
    description="Finds lines containing the given text and highlights the matches",
    handler=findtext,
    alias="find",
    schema=(
        SchemaParameter.positional(
            "text",
            required=True,
            pipeable_from="text",
            description="The text (or regular expression) to search for",
        ),
        SchemaParameter.flag(
            "ignorecase",
            "boolean",
            short_name="i",
            description="Case-insensitive search",
        ),
        SchemaParameter.flag(
            "regex",
            "boolean",
            short_name="r",
            description="Treat the text as a regular expression",
        ),
    ),
)
