# src/atlas_shell/core/config/loader.py
"""
Loader canônico de configuração do Atlas Shell.

A configuração efetiva é resolvida a partir de:
    - um arquivo de defaults (por padrão, `shell.defaults.yaml` empacotado)
    - um arquivo local de overrides (opcional)

Responsabilidades do módulo:
    - Carregar arquivos YAML (PyYAML, `safe_load`) ou JSON
    - Validar o tipo raiz (dict)
    - Resolver a configuração final via `deep_merge`

Invariantes:
    - Os defaults são obrigatórios
    - Overrides nunca mutam os defaults
    - O resultado é sempre um `dict` puro

Limites explícitos:
    - Não valida semântica (nomes de comandos, serviços)
    - Não instancia serviços nem o Shell
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml  # PyYAML

from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .merge import deep_merge

DEFAULT_CONFIG_PATH = Path(__file__).with_name("shell.defaults.yaml")

PathLike = Union[str, Path]


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo de configuração e valida sua estrutura básica.

    Arquivos vazios são interpretados como dicionários vazios.

    Raises:
        DefaultsNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    if not path.exists():
        raise DefaultsNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_config(
    *,
    defaults_path: Optional[PathLike] = None,
    local_path: Optional[PathLike] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve a configuração efetiva do Shell.

    Política de resolução:
        - `defaults_path=None` usa os defaults empacotados
        - `local_path` ausente do disco é ignorado (override opcional)
        - quando presente, o local tem prioridade sobre os defaults

    Args:
        defaults_path: Caminho para o arquivo base.
        local_path: Caminho opcional para overrides locais.

    Returns:
        Dict[str, Any]: Configuração final resolvida.

    Raises:
        DefaultsNotFoundError: Se o arquivo de defaults não existir.
        UnsupportedConfigFormatError: Se o formato não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural no merge.
    """
    defaults_file = Path(defaults_path) if defaults_path is not None else DEFAULT_CONFIG_PATH
    effective = _load_file(defaults_file)

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _load_file(local_file))

    # falha cedo se a configuração não for serializável em JSON canônico
    compute_config_hash(effective)
    return effective
