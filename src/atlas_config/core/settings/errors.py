# src/atlas_config/core/settings/errors.py
"""
Exceções canônicas da camada de settings do Atlas Config.

Settings são a configuração do **próprio motor** (quais arquivos procurar,
em quais raízes, em que ordem). Diferente das fontes de configuração da
aplicação, erros aqui são sempre fatais: um motor mal configurado não tem
comportamento previsível.

Invariantes:
    - Todas as exceções de settings herdam de `SettingsError`
    - Nenhuma exceção representa falha de acesso a chaves da aplicação

Limites explícitos:
    - Não realiza fallback ou recovery
"""


class SettingsError(Exception):
    """
    Exceção base para erros de settings do motor.

    Todas as exceções levantadas durante carregamento, merge e validação
    dos settings devem herdar desta classe.
    """


class SettingsNotFoundError(SettingsError):
    """
    Arquivo de settings declarado explicitamente não existe.

    Decisões arquiteturais:
        - Um `defaults_path` informado é obrigatório
        - O arquivo local (`local_path`) continua opcional
    """


class UnsupportedSettingsFormatError(SettingsError):
    """
    Formato de arquivo de settings não suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidSettingsRootTypeError(SettingsError):
    """
    Conteúdo raiz do arquivo de settings não é um dicionário (`dict`).
    """


class SettingsTypeConflictError(SettingsError):
    """
    Conflito de tipos durante o deep-merge de settings.

    Exemplo de conflito:
        - base:     {"search": {"directories": ["."]}}
        - override: {"search": "/etc/app"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class InvalidSettingsValueError(SettingsError):
    """Valor de settings com tipo ou formato inválido após o merge."""
