# src/atlas_shell/core/watchdog/__init__.py
"""
Supervisão de liveness do Atlas Shell.

O `Watchdog` reabilita serviços críticos desabilitados, evitando que o
operador desabilite o próprio serviço necessário para reabilitar qualquer
coisa (ex.: o Engine).
"""

from .watchdog import Watchdog, recovery_message

__all__ = ["Watchdog", "recovery_message"]
