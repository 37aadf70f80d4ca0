# tests/core/watchdog/test_watchdog.py
"""
Testes do Watchdog auto-reparador.

Os testes asseguram que:
- serviços críticos desabilitados são reabilitados a cada verificação
- a saída pendente é descartada e um aviso de status é exibido
- um único prompt é solicitado por verificação com recuperação
- cadeias que ficaram na fila voltam a executar após a recuperação
- o timer roda em background e falhas de verificação não o derrubam

Decisões arquiteturais:
    - `check()` é exercitado diretamente para testes determinísticos
    - O timer é testado com `interval_ms` curto (fixture `shell_config`)

Invariantes:
    - A recuperação é incondicional
    - O Watchdog desabilitado não verifica nada
"""

import asyncio

import pytest

try:
    from atlas_shell.core.pipeline.types import OutputLine
    from atlas_shell.core.watchdog.watchdog import recovery_message
except Exception as e:  # noqa: BLE001
    recovery_message = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing Watchdog. Implement:\n"
            "- src/atlas_shell/core/watchdog/watchdog.py (Watchdog, recovery_message)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_check_recovers_disabled_critical_service(make_shell, presenter):
    _require_imports()

    async def scenario():
        shell = make_shell()
        shell.engine.disable()
        shell.output.add(OutputLine.line("stale"))
        return shell, shell.watchdog.check()

    shell, recovered = asyncio.run(scenario())

    assert recovered == ["commandexec"]
    assert shell.engine.enabled
    assert shell.output.is_empty()
    assert presenter.calls == [
        ("status", "Enabling commandexec service to prevent bricking."),
        ("prompt",),
    ]
    actions = [e.action for e in shell.diagnostics.entries()]
    assert "Watchdog_recover commandexec" in actions
    assert shell.ctx.events_at("WARNING", "watchdog")[-1]["service"] == "commandexec"


def test_check_recovers_several_services_with_one_prompt(make_shell, presenter):
    _require_imports()

    async def scenario():
        shell = make_shell()
        shell.engine.disable()
        shell.registry.disable()
        return shell.watchdog.check()

    assert asyncio.run(scenario()) == ["commandexec", "commands"]
    assert presenter.contents("status") == [
        recovery_message("commandexec"),
        recovery_message("commands"),
    ]
    assert presenter.prompts == 1


def test_non_critical_services_are_left_alone(make_shell):
    _require_imports()
    shell = make_shell()
    shell.output.disable()
    shell.diagnostics.disable()

    assert shell.watchdog.check() == []
    assert not shell.output.enabled


def test_disabled_watchdog_does_not_check(make_shell):
    _require_imports()
    shell = make_shell({"watchdog": {"enabled": False}})
    shell.engine.disable()

    assert shell.watchdog.check() == []
    assert not shell.engine.enabled


def test_recovery_resumes_queued_chains(make_shell, presenter):
    """
    Desabilitar `commandexec` deixa `obuffer` e `commandline` na fila; a
    recuperação reabilita o Engine, descarta a saída pendente e a fila volta
    a andar sem abrir um segundo prompt.
    """
    _require_imports()

    async def scenario():
        shell = make_shell()
        await shell.execute("service disable commandexec --confirm")
        assert not shell.engine.enabled
        assert shell.engine.pending_count == 2
        assert presenter.calls == []

        shell.watchdog.check()
        await shell.engine.join()
        return shell

    shell = asyncio.run(scenario())

    assert presenter.calls == [
        ("status", recovery_message("commandexec")),
        ("prompt",),
    ]
    assert shell.engine.pending_count == 0


def test_timer_recovers_in_background(make_shell):
    _require_imports()

    async def scenario():
        shell = make_shell()
        shell.start()
        assert shell.watchdog.started
        shell.engine.disable()
        for _ in range(200):
            if shell.engine.enabled:
                break
            await asyncio.sleep(0.005)
        await shell.stop()
        return shell

    shell = asyncio.run(scenario())

    assert shell.engine.enabled
    assert not shell.watchdog.started


def test_failing_check_is_logged_and_timer_keeps_running(make_shell):
    _require_imports()

    class Flaky:
        enabled = False

        def enable(self):
            raise RuntimeError("cannot enable")

    async def scenario():
        shell = make_shell({"watchdog": {"critical_services": ["flaky", "commandexec"]}})
        shell.services["flaky"] = Flaky()
        shell.start()
        for _ in range(200):
            if len(shell.ctx.events_at("ERROR", "watchdog")) >= 2:
                break
            await asyncio.sleep(0.005)
        await shell.stop()
        return shell

    shell = asyncio.run(scenario())

    errors = shell.ctx.events_at("ERROR", "watchdog")
    assert len(errors) >= 2
    assert errors[0]["error"]["details"]["exc_message"] == "cannot enable"
