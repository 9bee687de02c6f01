# src/atlas_config/core/resolution/__init__.py
"""
Resolução de chaves e conversão tipada.

Componentes:
    - resolver  → caminho pontuado → nó ou `ABSENT`
    - accessors → nó → str/int/long/double/bool com default

Ambos são puros em relação ao Document: não há I/O nem reload aqui.
"""

from .accessors import (  # noqa: F401
    INT32_RANGE,
    INT64_RANGE,
    contains_key,
    get_bool,
    get_double,
    get_int,
    get_long,
    get_node,
    get_string,
    text_of,
)
from .resolver import ABSENT, contains, resolve, split_path, validate_key  # noqa: F401
