# src/atlas_shell/core/__init__.py
"""
Core do Atlas Shell.

Este pacote contém a implementação canônica e independente de adapters
do Atlas Shell, reunindo as responsabilidades essenciais para interpretar,
validar, enfileirar e executar comandos.

O core é projetado para ser:
    - determinístico na ordem de execução
    - testável de forma isolada
    - livre de dependências de UI, terminal ou captura de teclado
    - orientado a contratos explícitos (schema de comandos)

Componentes principais:
    - config      → resolução de configuração (merge, validação estrutural, hashing)
    - parsing     → tokenização e divisão de pipeline
    - pipeline    → tipos canônicos, ShellContext e CommandRegistry
    - engine      → fila single-flight, execução com pipes e cancelamento
    - diagnostics → trilha de ações para inspeção do operador
    - watchdog    → liveness backstop para serviços críticos

Princípios fundamentais:
    - Nenhuma exceção de handler escapa do Engine
    - Estado mutável pertence ao seu serviço e só muda via operações documentadas
    - Toda execução é cooperativa, em um único event loop

Este pacote existe como a fonte de verdade operacional do Atlas Shell.
"""
