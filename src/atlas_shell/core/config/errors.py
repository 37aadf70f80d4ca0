# src/atlas_shell/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Atlas Shell.

Todas as falhas de carregamento e merge herdam de `ConfigError`, o que
permite ao chamador distinguir configuração inválida de falhas de execução
de comandos (estas nunca escapam do Engine).

Invariantes:
    - Nenhuma exceção aqui representa erro de comando ou de handler
    - Falhas de configuração impedem a construção do Shell
"""


class ConfigError(Exception):
    """Exceção base para erros de configuração do Shell."""


class DefaultsNotFoundError(ConfigError):
    """
    Arquivo de configuração (defaults ou override explícito) não encontrado.

    Decisões arquiteturais:
        - Os defaults empacotados são obrigatórios
        - Não há criação implícita de defaults
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Extensão de arquivo não suportada.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """Conteúdo raiz do arquivo não é um mapa chave-valor."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"watchdog": {"interval_ms": 100}}
        - override: {"watchdog": "off"}

    Nenhum merge parcial é produzido em caso de conflito.
    """
