# src/atlas_shell/core/config/__init__.py

"""
Camada de configuração do Atlas Shell.

Este pacote carrega, mescla e identifica a configuração efetiva do Shell:
atraso entre cadeias do Engine, intervalo e serviços críticos do Watchdog,
formato de timestamp do diagnóstico e conjunto de comandos registrados.

Responsabilidades do pacote:
    - Carregamento de defaults empacotados + overrides locais (YAML ou JSON)
    - Resolução via deep-merge determinístico
    - Hash canônico da configuração efetiva (registrado em ShellContext.meta)

Limites explícitos:
    - Não valida semântica de comandos
    - Não instancia serviços
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import DEFAULT_CONFIG_PATH, load_config
from .merge import deep_merge

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "DEFAULT_CONFIG_PATH",
    "load_config",
    "deep_merge",
]
