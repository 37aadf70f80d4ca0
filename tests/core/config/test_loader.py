# tests/core/config/test_loader.py
"""
Testes do carregador de configuração (load_config).

Os testes asseguram que:
- os defaults empacotados são carregados quando nenhum caminho é informado
- o override local é opcional e tem precedência sobre os defaults
- erros estruturais (arquivo ausente, raiz inválida, extensão) são explícitos

Limites explícitos:
    - Não valida semântica dos nomes de comandos ou serviços
    - Não valida a construção do Shell
"""

import json
from pathlib import Path

import pytest

try:
    from atlas_shell.core.config.errors import (
        DefaultsNotFoundError,
        InvalidConfigRootTypeError,
        UnsupportedConfigFormatError,
    )
    from atlas_shell.core.config.loader import DEFAULT_CONFIG_PATH, load_config
except Exception as e:  # noqa: BLE001
    load_config = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """Falha explicitamente quando o loader de configuração não está disponível."""
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing config loader. Implement:\n"
            "- src/atlas_shell/core/config/loader.py (load_config)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_packaged_defaults_are_loaded_without_paths():
    """
    Sem caminhos, `load_config` usa o `shell.defaults.yaml` empacotado.

    Invariantes:
        - Todas as seções conhecidas estão presentes
        - Os valores padrão documentados são preservados
    """
    _require_imports()
    assert DEFAULT_CONFIG_PATH.exists()

    out = load_config()

    assert out["engine"]["step_delay_ms"] == 50
    assert out["watchdog"]["enabled"] is True
    assert out["watchdog"]["interval_ms"] == 100
    assert out["watchdog"]["critical_services"] == ["commandexec", "commands"]
    assert out["diagnostics"]["enabled"] is True
    assert out["shell"]["transcript_limit"] == 0
    assert "findtext" in out["commands"]["registered"]


def test_missing_defaults_raises(tmp_path: Path):
    _require_imports()
    missing = tmp_path / "defaults.yaml"
    with pytest.raises(DefaultsNotFoundError):
        load_config(defaults_path=str(missing), local_path=None)


def test_missing_local_is_ok(tmp_path: Path, project_like_config_defaults_yaml):
    """Um override local ausente do disco é ignorado sem erro."""
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text(project_like_config_defaults_yaml, encoding="utf-8")

    out = load_config(defaults_path=str(defaults), local_path=str(tmp_path / "local.yaml"))

    assert out["watchdog"]["enabled"] is True
    assert out["commands"]["registered"] == ["print", "help"]


def test_load_defaults_and_local(
    tmp_path: Path, project_like_config_defaults_yaml, project_like_config_local_yaml
):
    """
    O override local tem precedência; chaves não sobrescritas são preservadas
    e listas são substituídas por inteiro.
    """
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    local = tmp_path / "local.yaml"
    defaults.write_text(project_like_config_defaults_yaml, encoding="utf-8")
    local.write_text(project_like_config_local_yaml, encoding="utf-8")

    out = load_config(defaults_path=defaults, local_path=local)

    assert out["watchdog"]["enabled"] is False
    assert out["watchdog"]["interval_ms"] == 100
    assert out["commands"]["registered"] == ["print"]
    assert out["engine"]["step_delay_ms"] == 50


def test_json_override_is_supported(tmp_path: Path, project_like_config_defaults_yaml):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text(project_like_config_defaults_yaml, encoding="utf-8")
    local = tmp_path / "local.json"
    local.write_text(json.dumps({"engine": {"step_delay_ms": 0}}), encoding="utf-8")

    out = load_config(defaults_path=defaults, local_path=local)

    assert out["engine"]["step_delay_ms"] == 0


def test_empty_file_is_empty_dict(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text("", encoding="utf-8")
    assert load_config(defaults_path=defaults) == {}


def test_invalid_root_type_raises(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text("- just\n- a\n- list\n", encoding="utf-8")
    with pytest.raises(InvalidConfigRootTypeError):
        load_config(defaults_path=str(defaults), local_path=None)


def test_unsupported_extension_raises(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.toml"
    defaults.write_text("engine = { step_delay_ms = 0 }\n", encoding="utf-8")
    with pytest.raises(UnsupportedConfigFormatError):
        load_config(defaults_path=str(defaults), local_path=None)
