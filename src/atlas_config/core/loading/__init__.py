# src/atlas_config/core/loading/__init__.py
"""
Carregamento de fontes em Documents.

Componentes:
    - funções `load_properties`, `load_json`, `load_external`
    - loaders `PropertiesLoader`, `JsonLoader`, `ExternalFileLoader`
    - `Loader` (Protocol): contrato consumido pelo Reload Controller

Invariantes:
    - Fonte ausente degrada para Document vazio
    - Fonte malformada aborta o carregamento inteiro
"""

from .loader import (  # noqa: F401
    SUFFIX_KINDS,
    ExternalFileLoader,
    JsonLoader,
    Loader,
    PropertiesLoader,
    load_external,
    load_json,
    load_properties,
)
