# src/atlas_config/core/handle/__init__.py
"""
Superfície de acesso do Atlas Config.

Componentes:
    - `InitOnce`       → guarda de inicialização única
    - `ConfigHandle`   → accessors tipados sobre o snapshot corrente
    - `HandleRegistry` → um handle por identidade de configuração
    - `get_config` / `get_properties` → atalhos sobre o registro padrão
"""

from .handle import ConfigHandle  # noqa: F401
from .once import InitOnce  # noqa: F401
from .registry import (  # noqa: F401
    HandleRegistry,
    SourceIdentity,
    configure_default_registry,
    default_registry,
    get_config,
    get_properties,
)
