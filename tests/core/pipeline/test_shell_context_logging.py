# tests/core/pipeline/test_shell_context_logging.py
"""
Testes de logging estruturado e coleta de warnings no ShellContext.

Os testes asseguram que:
- eventos de log são registrados de forma estruturada
- cada evento contém metadados mínimos de rastreabilidade
- warnings são agrupados por origem
- serviços e configuração são acessados pelo contexto

Decisões arquiteturais:
    - Logs não são strings livres, mas eventos estruturados
    - Warnings são sinais não fatais e não interrompem a execução

Invariantes:
    - `session_id` está presente em todos os eventos
    - `timestamp` é ISO-8601 em UTC

Limites explícitos:
    - Não valida persistência dos eventos
    - Não valida integração com o Engine
"""

from datetime import datetime

import pytest

try:
    from atlas_shell.core.pipeline.context import ShellContext
except Exception as e:  # noqa: BLE001
    ShellContext = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """Falha explicitamente quando a API de logging do ShellContext está ausente."""
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing ShellContext logging/warnings API. Implement:\n"
            "- src/atlas_shell/core/pipeline/context.py (log, add_warning, events, warnings)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_structured_log_event(shell_ctx):
    """
    Cada chamada a `log` adiciona um evento com `session_id`, `source`,
    `level`, `message`, `timestamp` e os campos extras recebidos.
    """
    _require_imports()
    shell_ctx.log(source="commandexec", level="INFO", message="hello", chain="print")

    ev = shell_ctx.events[-1]
    assert ev["session_id"] == "test-session"
    assert ev["source"] == "commandexec"
    assert ev["level"] == "INFO"
    assert ev["message"] == "hello"
    assert ev["chain"] == "print"

    stamp = datetime.fromisoformat(ev["timestamp"])
    assert stamp.utcoffset() is not None
    assert stamp.utcoffset().total_seconds() == 0


def test_warnings_grouped_by_source(shell_ctx):
    _require_imports()
    shell_ctx.add_warning(source="commands", message="w1")
    shell_ctx.add_warning(source="commands", message="w2")
    shell_ctx.add_warning(source="watchdog", message="w3")

    assert shell_ctx.warnings == {"commands": ["w1", "w2"], "watchdog": ["w3"]}


def test_events_at_filters_by_level_and_source(shell_ctx):
    _require_imports()
    shell_ctx.log(source="commandexec", level="ERROR", message="a")
    shell_ctx.log(source="watchdog", level="ERROR", message="b")
    shell_ctx.log(source="commandexec", level="INFO", message="c")

    assert [e["message"] for e in shell_ctx.events_at("ERROR")] == ["a", "b"]
    assert [e["message"] for e in shell_ctx.events_at("ERROR", "watchdog")] == ["b"]


def test_setting_and_service_lookup(shell_ctx):
    _require_imports()
    assert shell_ctx.setting("engine", "step_delay_ms") == 0
    assert shell_ctx.setting("engine", "missing", 7) == 7
    assert shell_ctx.setting("nope", "x", "d") == "d"

    shell_ctx.services["output"] = object()
    assert shell_ctx.service("output") is shell_ctx.services["output"]
    with pytest.raises(KeyError):
        shell_ctx.service("missing")


def test_event_limit_keeps_latest_events():
    """Com `event_limit` positivo, os eventos mais antigos são descartados."""
    _require_imports()
    ctx = ShellContext(
        session_id="bounded",
        created_at=datetime.now(),
        config={},
        event_limit=3,
    )
    for i in range(5):
        ctx.log(source="commandexec", level="INFO", message=f"m{i}")

    assert [e["message"] for e in ctx.events] == ["m2", "m3", "m4"]
    assert len(ctx.events_at("INFO")) == 3


def test_shell_reads_event_limit_from_config(make_shell):
    _require_imports()
    shell = make_shell({"shell": {"event_limit": 2}})
    for i in range(4):
        shell.ctx.log(source="test", level="INFO", message=str(i))

    assert [e["message"] for e in shell.ctx.events] == ["2", "3"]
