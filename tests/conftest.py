# tests/conftest.py
"""
Fixtures compartilhados para testes do Atlas Shell.

Este módulo define fixtures reutilizáveis que fornecem:
- um Presenter que apenas grava as chamadas recebidas
- configuração determinística (sem pausa entre cadeias)
- relógio falso para o log de diagnóstico
- fábrica de Shell pronta para uso dentro de `asyncio.run`
- ShellContext isolado para testes de logging

Decisões arquiteturais:
    - Imports do core são realizados de forma lazy dentro dos fixtures
      para melhorar a clareza de erros durante falhas de import
    - O Presenter de teste usa duck typing (não herda do protocolo)
    - Nenhum fixture inicia timers; testes do Watchdog o fazem
      explicitamente

Invariantes:
    - Nenhum fixture realiza I/O além da leitura dos defaults empacotados
    - Nenhum fixture cria event loop

Limites explícitos:
    - Não substituir testes de integração
    - Não conter lógica condicional complexa
"""

from datetime import datetime, timezone
from typing import List, Tuple

import pytest


class RecordingPresenter:
    """
    Presenter de teste que grava cada chamada como tupla.

    Formato das entradas:
        ("line", content, location_label)
        ("error", content)
        ("status", content)
        ("markup", content, location_label)
        ("prompt",)
        ("clear",)
    """

    def __init__(self) -> None:
        self.calls: List[Tuple] = []

    def render_line(self, content, location_label=""):
        self.calls.append(("line", content, location_label))

    def render_error(self, content):
        self.calls.append(("error", content))

    def render_status(self, content):
        self.calls.append(("status", content))

    def render_markup(self, content, location_label=""):
        self.calls.append(("markup", content, location_label))

    def open_prompt(self):
        self.calls.append(("prompt",))

    def clear(self):
        self.calls.append(("clear",))

    # -----------------------------
    # Helpers de inspeção
    # -----------------------------
    def of_kind(self, kind: str) -> List[Tuple]:
        return [c for c in self.calls if c[0] == kind]

    def contents(self, kind: str = "line") -> List[str]:
        return [c[1] for c in self.of_kind(kind)]

    @property
    def prompts(self) -> int:
        return len(self.of_kind("prompt"))


class FakeClock:
    """Relógio em milissegundos que avança `step` a cada leitura."""

    def __init__(self, start: int = 1_700_000_000_000, step: int = 0) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> int:
        value = self.now
        self.now += self.step
        return value


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def shell_config() -> dict:
    """
    Configuração efetiva para testes: defaults empacotados com pausa zero.

    Decisões arquiteturais:
        - Partir dos defaults reais evita divergência entre testes e produção
        - `step_delay_ms = 0` mantém os testes rápidos e determinísticos
        - `interval_ms` curto permite testar o timer do Watchdog
    """
    from atlas_shell.core.config import deep_merge, load_config

    return deep_merge(
        load_config(),
        {
            "engine": {"step_delay_ms": 0},
            "watchdog": {"interval_ms": 5},
        },
    )


@pytest.fixture
def make_shell(presenter, shell_config, fake_clock):
    """
    Fábrica de Shell com o Presenter de gravação.

    Aceita overrides de configuração via deep-merge:

        shell = make_shell({"shell": {"transcript_limit": 3}})
    """
    from atlas_shell import Shell
    from atlas_shell.core.config import deep_merge

    def _factory(overrides=None, **kwargs):
        config = deep_merge(shell_config, overrides or {})
        return Shell(presenter, config=config, clock=fake_clock, **kwargs)

    return _factory


@pytest.fixture
def shell_ctx():
    """ShellContext mínimo, sem serviços, para testes de logging estruturado."""
    from atlas_shell.core.pipeline.context import ShellContext

    return ShellContext(
        session_id="test-session",
        created_at=datetime.now(timezone.utc),
        config={"engine": {"step_delay_ms": 0}},
    )


@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """
    YAML de defaults semelhante ao arquivo empacotado.

    Fornecido como string para que os testes do loader controlem o
    arquivo temporário.
    """
    return (
        "engine:\n"
        "  step_delay_ms: 50\n"
        "watchdog:\n"
        "  enabled: true\n"
        "  interval_ms: 100\n"
        "  critical_services: [commandexec, commands]\n"
        "commands:\n"
        "  registered: [print, help]\n"
    )


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """Override local: desliga o watchdog e troca a lista de comandos."""
    return (
        "watchdog:\n"
        "  enabled: false\n"
        "commands:\n"
        "  registered: [print]\n"
    )
