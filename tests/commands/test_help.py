# tests/commands/test_help.py
"""
Testes do comando `help`.

Cobertura:
- listagem ordenada dos comandos registrados (sem aliases e ocultos)
- `--aliases` / `-a` anexa os aliases de cada comando
- uso resumido e detalhado (`--verbose`) de um comando específico
- comandos desconhecidos ou não registrados
"""

import asyncio

import pytest

try:
    from atlas_shell.commands.help import list_commands
except Exception as e:  # noqa: BLE001
    list_commands = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing help command. Implement:\n"
            "- src/atlas_shell/commands/help.py\n"
            f"Import error: {_IMPORT_ERR}"
        )


def _run(make_shell, line, overrides=None):
    async def scenario():
        shell = make_shell(overrides)
        return await shell.execute(line)

    result = asyncio.run(scenario())
    return [l.content for l in result] if result is not None else None


def test_help_lists_visible_commands(make_shell):
    _require_imports()
    assert _run(make_shell, "help") == [
        "Available commands:",
        "clear, findtext, help, linecount, print, service",
    ]


def test_help_with_aliases(make_shell):
    _require_imports()
    expected = [
        "Available commands:",
        "clear (cls), findtext (find), help, linecount (lc), print, service",
    ]
    assert _run(make_shell, "help --aliases") == expected
    assert _run(make_shell, "help -a") == expected


def test_help_skips_unregistered_commands(make_shell):
    _require_imports()
    overrides = {"commands": {"registered": ["print", "help", "obuffer", "commandline"]}}
    assert _run(make_shell, "help", overrides)[1] == "help, print"


def test_help_for_single_command(make_shell):
    _require_imports()
    assert _run(make_shell, "help print") == [
        "Usage: print <text> [loc_label]",
        "Prints the provided arguments to the console",
    ]
    assert _run(make_shell, "help service") == [
        "Usage: service <action> [service] [--confirm] [-c]",
        "Lists all available services and their status",
    ]


def test_verbose_help_details_parameters(make_shell):
    """
    `--verbose` exibe o uso com datatypes, o alias e um bloco por parâmetro,
    cada bloco terminado por uma linha vazia.
    """
    _require_imports()
    assert _run(make_shell, "help findtext --verbose") == [
        "Usage: findtext <text> [-i|--ignorecase=<boolean>] [-r|--regex=<boolean>]",
        "Finds lines containing the given text and highlights the matches",
        "Alias: find",
        "",
        "text: The text (or regular expression) to search for",
        "    Type: positional",
        "    Required: Yes",
        "",
        "-i|--ignorecase: Case-insensitive search",
        "    Type: flag",
        "    Datatype: boolean",
        "    Required: No",
        "",
        "-r|--regex: Treat the text as a regular expression",
        "    Type: flag",
        "    Datatype: boolean",
        "    Required: No",
        "",
    ]


def test_verbose_help_lists_allowed_values(make_shell):
    _require_imports()
    lines = _run(make_shell, "help service -v")
    assert "    Options: list, enable, disable, logs" in lines


def test_help_for_alias_uses_canonical_name(make_shell):
    _require_imports()
    assert _run(make_shell, "help lc -v") == [
        "Usage: linecount",
        "Outputs the number of lines",
        "Alias of: linecount",
        "",
    ]


def test_help_for_unknown_command(make_shell, presenter):
    _require_imports()
    assert _run(make_shell, "help nope") is None
    assert presenter.contents("error") == ['Unknown command: "nope"']


def test_list_commands_helper(make_shell):
    _require_imports()
    shell = make_shell()
    assert list_commands(shell.registry, with_aliases=False) == [
        "clear",
        "findtext",
        "help",
        "linecount",
        "print",
        "service",
    ]
