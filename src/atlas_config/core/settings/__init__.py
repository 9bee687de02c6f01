# src/atlas_config/core/settings/__init__.py

"""
Camada de settings do motor do Atlas Config.

Este pacote contém as estruturas e utilitários responsáveis por carregar,
mesclar e validar os settings do **próprio motor**: nomes de fontes,
raízes de recurso, diretórios de busca e modo estrito.

Responsabilidades do pacote:
    - Carregamento de arquivos de settings (defaults + overrides locais)
    - Overrides por variáveis de ambiente com prefixo
    - Resolução final via deep-merge determinístico
    - Hash canônico dos settings resolvidos

Invariantes:
    - Os settings finais são um `EngineSettings` imutável
    - A mesma entrada sempre produz os mesmos settings
    - Conflitos estruturais são tratados como erro

Limites explícitos:
    - Não carrega a configuração da aplicação
    - Não mantém estado global
"""

from .errors import (  # noqa: F401
    InvalidSettingsRootTypeError,
    InvalidSettingsValueError,
    SettingsError,
    SettingsNotFoundError,
    SettingsTypeConflictError,
    UnsupportedSettingsFormatError,
)
from .loader import DEFAULT_ENV_PREFIX, env_overrides, load_settings  # noqa: F401
from .merge import deep_merge  # noqa: F401
from .model import DEFAULT_SETTINGS, EngineSettings  # noqa: F401
