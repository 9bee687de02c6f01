# src/atlas_config/__init__.py
"""
Atlas Config: motor de resolução de configuração em camadas.

Este pacote raiz define o namespace público do Atlas Config: leitura de
configuração a partir de arquivos `.properties` empacotados, de um
documento JSON empacotado ou de um arquivo externo observado, com acesso
tipado por caminho pontuado e hot-reload.

Princípios centrais:
    - Acesso tipado sempre devolve um valor (o default em caso de ausência
      ou falha de conversão), exceto em modo estrito
    - O snapshot de configuração é imutável e trocado atomicamente
    - Inicialização acontece uma única vez, no primeiro acesso
    - Toda degradação é registrada em log

Arquitetura em alto nível:
    - core.sources  → onde procurar
    - core.loading  → como ler e mesclar
    - core.resolution → como navegar e converter
    - core.reload   → quando recarregar
    - core.handle   → como o chamador acessa

Limites explícitos:
    - Não define schema de configuração
    - Não observa o diretório por eventos do sistema operacional

Exemplo:
    >>> from atlas_config import get_config
    >>> get_config().get_int("database.pool.maxSize", 5)
"""

import logging

from .core.document import Document, DocumentKind
from .core.exceptions import (
    AtlasConfigException,
    ConfigInitializationError,
    ConversionError,
    InvalidKeyError,
    SourceParseError,
    SourceReadError,
    UnsupportedSourceFormatError,
)
from .core.handle import (
    ConfigHandle,
    HandleRegistry,
    configure_default_registry,
    default_registry,
    get_config,
    get_properties,
)
from .core.loading import ExternalFileLoader, JsonLoader, PropertiesLoader
from .core.settings import EngineSettings, load_settings
from .core.sources import ResourceRoot, SourceLocator

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AtlasConfigException",
    "ConfigHandle",
    "ConfigInitializationError",
    "ConversionError",
    "Document",
    "DocumentKind",
    "EngineSettings",
    "ExternalFileLoader",
    "HandleRegistry",
    "InvalidKeyError",
    "JsonLoader",
    "PropertiesLoader",
    "ResourceRoot",
    "SourceLocator",
    "SourceParseError",
    "SourceReadError",
    "UnsupportedSourceFormatError",
    "configure_default_registry",
    "default_registry",
    "get_config",
    "get_properties",
    "load_settings",
]
