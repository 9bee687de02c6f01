# src/atlas_config/core/document/__init__.py
"""
Modelo de documento do Atlas Config.

Este pacote contém a representação imutável de uma configuração carregada
e os utilitários puros associados a ela.

Componentes:
    - model      → `Document`, `DocumentKind`, congelamento/descongelamento
    - properties → parser de arquivos `.properties` (chave=valor)
    - hashing    → hash canônico (SHA-256) de estruturas de configuração

Invariantes:
    - Documents são imutáveis após a construção
    - Nenhum componente deste pacote realiza I/O

Limites explícitos:
    - Não localiza fontes
    - Não resolve caminhos nem converte tipos
"""

from .hashing import compute_config_hash  # noqa: F401
from .model import (  # noqa: F401
    Document,
    DocumentKind,
    freeze,
    is_container,
    is_list,
    is_object,
    thaw,
)
from .properties import PropertiesSyntaxError, parse_properties  # noqa: F401
