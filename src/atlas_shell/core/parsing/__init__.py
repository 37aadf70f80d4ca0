# src/atlas_shell/core/parsing/__init__.py
"""
Parser do Atlas Shell.

Transforma uma linha de texto em uma `CommandChain` em dois estágios puros:

    - split_pipeline  → divide a linha em estágios pelo `|` fora de aspas
    - parse_fragment  → tokeniza um estágio em nome, posicionais e flags

O parser é permissivo: aspas não terminadas seguem até o fim do estágio e
nenhuma exceção é levantada para entrada malformada.
"""

from .parser import parse_chain, parse_fragment, split_pipeline, tokenize

__all__ = ["parse_chain", "parse_fragment", "split_pipeline", "tokenize"]
