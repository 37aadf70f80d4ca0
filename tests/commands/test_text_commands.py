# tests/commands/test_text_commands.py
"""
Testes dos comandos `print`, `linecount`/`lc` e `clear`/`cls`, além dos
comandos ocultos `obuffer` e `commandline`.
"""

import asyncio

import pytest

try:
    from atlas_shell.commands import BUILTIN_COMMANDS
    from atlas_shell.core.pipeline.types import OutputLine
except Exception as e:  # noqa: BLE001
    BUILTIN_COMMANDS = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing built-in commands. Implement:\n"
            "- src/atlas_shell/commands/text.py, plumbing.py\n"
            f"Import error: {_IMPORT_ERR}"
        )


def _session(make_shell, *lines, overrides=None):
    async def scenario():
        shell = make_shell(overrides)
        results = [await shell.execute(line) for line in lines]
        return shell, results

    return asyncio.run(scenario())


def test_builtins_are_defined_once():
    _require_imports()
    names = [d.name for d in BUILTIN_COMMANDS]
    assert len(names) == len(set(names)) == 8
    hidden = {d.name for d in BUILTIN_COMMANDS if d.hidden}
    assert hidden == {"obuffer", "commandline"}


def test_print_requires_text(make_shell, presenter):
    _require_imports()
    _session(make_shell, "print")
    assert presenter.contents("error") == ['Missing required argument: "text"']


def test_linecount_counts_pipe_or_transcript(make_shell):
    _require_imports()
    _, results = _session(make_shell, "print a", "print b", "linecount", "print x | lc")

    assert results[2] == (OutputLine.line("2"),)
    assert results[3] == (OutputLine.line("1"),)


def test_clear_empties_transcript_and_surface(make_shell, presenter):
    _require_imports()
    shell, results = _session(make_shell, "print a", "cls", "lc")

    assert ("clear",) in presenter.calls
    assert results[1] is None
    assert results[2] == (OutputLine.line("0"),)
    assert [l.content for l in shell.transcript] == ["0"]


def test_transcript_limit_keeps_latest_lines(make_shell):
    _require_imports()
    shell, _ = _session(
        make_shell,
        "print a",
        "print b",
        "print c",
        overrides={"shell": {"transcript_limit": 2}},
    )
    assert [l.content for l in shell.transcript] == ["b", "c"]


def test_hidden_plumbing_commands_are_invocable(make_shell, presenter):
    """`obuffer` e `commandline` podem ser chamados diretamente."""
    _require_imports()

    async def scenario():
        shell = make_shell()
        shell.output.add(OutputLine.line("pending"))
        await shell.execute("obuffer")

    asyncio.run(scenario())

    assert presenter.calls == [("line", "pending", ""), ("prompt",)]
