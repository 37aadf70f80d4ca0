# tests/commands/test_findtext.py
"""
Testes do comando `findtext` (alias `find`).

Cobertura:
- filtro de linhas do pipe com destaque `<mark>`
- busca sem distinção de maiúsculas e por expressão regular
- escape HTML do texto fora e dentro do destaque
- busca na transcrição quando não há pipe
- expressões regulares inválidas
"""

import asyncio
import re

import pytest

try:
    from atlas_shell.commands.findtext import find_lines
    from atlas_shell.core.pipeline.types import OutputKind, OutputLine
except Exception as e:  # noqa: BLE001
    find_lines = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing findtext command. Implement:\n"
            "- src/atlas_shell/commands/findtext.py\n"
            f"Import error: {_IMPORT_ERR}"
        )


def _session(make_shell, *lines):
    async def scenario():
        shell = make_shell()
        results = [await shell.execute(line) for line in lines]
        return shell, results

    return asyncio.run(scenario())


def test_matches_are_highlighted_as_markup(make_shell, presenter):
    _require_imports()
    _, results = _session(make_shell, 'print "Hello World" | findtext World')

    assert results[0] == (OutputLine.markup("Hello <mark>World</mark>"),)
    assert presenter.of_kind("markup") == [("markup", "Hello <mark>World</mark>", "")]


def test_case_is_respected_unless_ignorecase(make_shell):
    _require_imports()
    _, results = _session(
        make_shell,
        'print "Hello World" | findtext world',
        'print "Hello World" | find world -i',
    )

    assert results[0] == ()
    assert results[1][0].content == "Hello <mark>World</mark>"


def test_every_occurrence_is_marked(make_shell):
    _require_imports()
    _, results = _session(make_shell, "print abab | findtext ab")
    assert results[0][0].content == "<mark>ab</mark><mark>ab</mark>"


def test_regex_search(make_shell):
    _require_imports()
    _, results = _session(make_shell, 'print abc123def45 | findtext "\\d+" --regex')
    assert results[0][0].content == "abc<mark>123</mark>def<mark>45</mark>"


def test_plain_search_escapes_regex_metacharacters(make_shell):
    _require_imports()
    _, results = _session(make_shell, "print a.c | findtext .", "print abc | findtext .")
    assert results[0][0].content == "a<mark>.</mark>c"
    assert results[1] == ()


def test_text_is_html_escaped(make_shell):
    _require_imports()
    _, results = _session(make_shell, 'print "<b>&</b>" | findtext b')
    assert results[0][0].content == "&lt;<mark>b</mark>&gt;&amp;&lt;/<mark>b</mark>&gt;"


def test_invalid_regex_is_an_error(make_shell, presenter):
    _require_imports()
    _, results = _session(make_shell, 'print x | findtext "(" -r')

    assert results == [None]
    assert presenter.contents("error") == ['Invalid regular expression: "("']


def test_without_pipe_searches_transcript(make_shell, presenter):
    """
    Sem pipe, o comando busca nas linhas já exibidas; linhas de markup são
    comparadas pelo texto visível.
    """
    _require_imports()
    _, results = _session(
        make_shell,
        "print alpha",
        "print beta",
        "findtext alp",
        "findtext alp",
    )

    assert results[2] == (OutputLine.markup("<mark>alp</mark>ha"),)
    assert [l.content for l in results[3]] == ["<mark>alp</mark>ha", "<mark>alp</mark>ha"]


def test_find_lines_keeps_location_label():
    _require_imports()
    found = find_lines(
        [OutputLine.line("x1", "main.py"), OutputLine.line("y", "other.py")],
        re.compile("x"),
    )
    assert found == [OutputLine(OutputKind.MARKUP, "<mark>x</mark>1", "main.py")]
