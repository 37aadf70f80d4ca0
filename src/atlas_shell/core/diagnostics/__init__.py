# src/atlas_shell/core/diagnostics/__init__.py
"""
Trilha de diagnóstico do Atlas Shell.

O `DiagnosticsLog` registra ações de ciclo de vida emitidas pelos serviços
(`ExecutionEngine_enqueue print`, `CommandRegistry_register help`, ...) e as
exibe, comprimidas, pelo comando `service logs`.

Diferente de `ShellContext.events` (canal técnico estruturado), esta trilha é
voltada à inspeção pelo operador.
"""

from .log import (
    DEFAULT_TIMESTAMP_FORMAT,
    DiagnosticEvent,
    DiagnosticsLog,
    blank_repeated_stamps,
    compress_lines,
    format_timestamp,
)

__all__ = [
    "DEFAULT_TIMESTAMP_FORMAT",
    "DiagnosticEvent",
    "DiagnosticsLog",
    "blank_repeated_stamps",
    "compress_lines",
    "format_timestamp",
]
