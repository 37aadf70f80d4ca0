# src/atlas_shell/__init__.py
"""
Atlas Shell — shell de comandos in-process orientado a pipeline.

Este pacote raiz define o namespace público do Atlas Shell, um motor de
comandos que transforma uma linha de texto em invocações validadas,
executadas por uma fila serial com suporte a pipes, cancelamento e
supervisão auto-reparadora.

Princípios centrais:
    - Cada linha é uma cadeia explícita de fragmentos (`a | b | c`)
    - Toda invocação é validada contra o schema do comando antes de executar
    - No máximo uma cadeia executa por vez (fila single-flight)
    - Falhas são classificadas e convertidas em linhas de saída em um único ponto

Arquitetura em alto nível:
    - core.config      → carregamento, merge e hashing de configuração
    - core.parsing     → texto → cadeia de fragmentos
    - core.pipeline    → tipos, contexto, registry e verificação de schema
    - core.engine      → fila serial, execução de cadeias e buffer de saída
    - core.diagnostics → trilha de eventos de diagnóstico
    - core.watchdog    → verificação periódica e auto-recuperação de serviços
    - commands         → comandos built-in
    - presenter        → protocolo de apresentação e adapter textual mínimo

Limites explícitos:
    - Não é um shell POSIX (sem subshells, job control, globbing)
    - Não persiste histórico nem acessa o filesystem a partir de comandos
    - Não captura teclado nem renderiza interfaces gráficas
"""

from .shell import Shell
from .presenter import Presenter, StreamPresenter

__all__ = ["Shell", "Presenter", "StreamPresenter"]
