# src/atlas_shell/core/engine/__init__.py
"""
Execução de cadeias do Atlas Shell.

- `ExecutionEngine`   → fila serial single-flight com pipes e contenção de falhas
- `CancellationToken` → cancelamento cooperativo por cadeia
- `OutputBuffer`      → acumulação e flush de linhas de saída
"""

from .cancellation import CancellationToken
from .engine import ExecutionEngine
from .output import OutputBuffer, OutputSink

__all__ = ["CancellationToken", "ExecutionEngine", "OutputBuffer", "OutputSink"]
