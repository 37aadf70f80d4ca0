# src/atlas_shell/presenter/markup.py
"""
Markup de destaque das linhas `markup`.

Formato: texto escapado como HTML (`html.escape`) com trechos destacados
entre `<mark>` e `</mark>`. O conteúdo nunca carrega outras tags.

Objetivo:
- Produzir destaque sem acoplar o core a um renderizador específico.
- Permitir que adapters textuais troquem os marcadores por delimitadores.
"""

from __future__ import annotations

import html
import re
from typing import Pattern

MARK_OPEN = "<mark>"
MARK_CLOSE = "</mark>"

_MARKER = re.compile(re.escape(MARK_OPEN) + "|" + re.escape(MARK_CLOSE))


def highlight(text: str, pattern: Pattern[str]) -> str:
    """Escapa `text` e envolve cada ocorrência não vazia de `pattern` em `<mark>`."""
    parts = []
    last = 0
    for m in pattern.finditer(text):
        if m.start() == m.end():
            continue
        parts.append(html.escape(text[last:m.start()]))
        parts.append(MARK_OPEN + html.escape(m.group(0)) + MARK_CLOSE)
        last = m.end()
    parts.append(html.escape(text[last:]))
    return "".join(parts)


def strip_markup(content: str) -> str:
    """Remove os marcadores e desfaz o escape HTML."""
    return html.unescape(_MARKER.sub("", content))


def render_markup_text(content: str, open_mark: str = "[", close_mark: str = "]") -> str:
    """Troca os marcadores por delimitadores textuais e desfaz o escape."""
    replaced = _MARKER.sub(lambda m: open_mark if m.group(0) == MARK_OPEN else close_mark, content)
    return html.unescape(replaced)
