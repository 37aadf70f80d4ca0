# src/atlas_shell/core/pipeline/context.py
"""
Contexto compartilhado de uma sessão do Shell.

Este módulo define o `ShellContext`, a estrutura canônica passada a todos
os handlers e serviços durante a vida de uma sessão.

O ShellContext atua como o único meio permitido de:
    - acesso à configuração efetiva e seus metadados (ex.: `config_hash`)
    - acesso aos serviços por nome (`output`, `commandexec`, ...)
    - registro de logs estruturados (canal técnico de falhas)
    - coleta de warnings não fatais por origem

Princípios fundamentais:
    - Isolamento por sessão (cada Shell possui seu próprio contexto)
    - Ausência de estado global compartilhado
    - Logs estruturados, nunca exibidos diretamente ao operador

Invariantes:
    - Todo evento de log inclui `session_id`, `source`, `level`, `message`
      e `timestamp` ISO-8601 em UTC
    - Warnings são agrupados por `source`
    - `events` retém no máximo `event_limit` eventos quando o limite é positivo

Limites explícitos:
    - Não executa comandos
    - Não renderiza saída
    - Não persiste eventos
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List, Optional


@dataclass
class ShellContext:
    """
    Contexto de uma sessão do Shell.

    Campos:
        - session_id: identificador da sessão
        - created_at: instante de criação (UTC)
        - config: configuração efetiva resolvida
        - meta: metadados livres (ex.: `config_hash`)
        - services: serviços por nome canônico
        - shell: façade dono do contexto (None em testes isolados)
        - event_limit: máximo de eventos retidos (0 = sem limite); os mais
          antigos são descartados primeiro
    """

    session_id: str
    created_at: datetime
    config: Dict[str, Any]
    meta: Dict[str, Any] = field(default_factory=dict)
    services: Dict[str, Any] = field(default_factory=dict)
    shell: Any = None
    event_limit: int = 0

    events: Deque[Dict[str, Any]] = field(default_factory=deque, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    def __post_init__(self) -> None:
        self.events = deque(maxlen=self.event_limit or None)

    # -----------------------------
    # Serviços
    # -----------------------------
    def service(self, name: str) -> Any:
        if name not in self.services:
            raise KeyError(name)
        return self.services[name]

    def setting(self, section: str, key: str, default: Any = None) -> Any:
        """Valor `config[section][key]`, ou `default` quando ausente."""
        block = self.config.get(section) or {}
        if not isinstance(block, dict):
            return default
        return block.get(key, default)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, source: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "session_id": self.session_id,
            "source": source,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, source: str, message: str) -> None:
        if source not in self.warnings:
            self.warnings[source] = []
        self.warnings[source].append(message)

    def events_at(self, level: str, source: Optional[str] = None) -> List[Dict[str, Any]]:
        return [
            e for e in self.events
            if e["level"] == level and (source is None or e["source"] == source)
        ]
