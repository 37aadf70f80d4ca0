# src/atlas_shell/presenter/__init__.py
"""
Presenter Adapter (v1)

O Presenter é o colaborador externo que exibe linhas e abre prompts. O core
só conhece o protocolo `Presenter`; este pacote oferece ainda helpers de
markup e um adapter textual mínimo (`StreamPresenter`).
"""

from .markup import MARK_CLOSE, MARK_OPEN, highlight, render_markup_text, strip_markup
from .protocol import Presenter
from .stream import StreamPresenter

__all__ = [
    "MARK_CLOSE",
    "MARK_OPEN",
    "highlight",
    "render_markup_text",
    "strip_markup",
    "Presenter",
    "StreamPresenter",
]
