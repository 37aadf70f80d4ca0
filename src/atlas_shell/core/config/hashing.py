# src/atlas_shell/core/config/hashing.py
"""
Hashing canônico da configuração do Atlas Shell.

O hash identifica estruturalmente a configuração efetiva de uma sessão e é
registrado em `ShellContext.meta["config_hash"]`, permitindo correlacionar
eventos técnicos com a configuração que os produziu.

Política (v1):
    - JSON canônico (chaves ordenadas, separadores compactos, UTF-8)
    - SHA-256, hexadecimal de 64 caracteres
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Dict


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera o hash determinístico da configuração efetiva.

    Invariantes:
        - Configurações estruturalmente equivalentes produzem o mesmo hash
        - A ordem original das chaves não afeta o resultado
        - Nenhuma mutação ocorre sobre o input

    Raises:
        TypeError: Se `config` não for um dicionário.
    """
    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
