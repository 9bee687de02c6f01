# src/atlas_config/core/sources/__init__.py
"""
Descoberta de fontes de configuração.

Componentes:
    - `ResourceRoot`   → raiz de recursos empacotados + prefixos
    - `SourceLocator`  → busca ordenada (recursos, depois filesystem)
    - `SourceLocation` → resultado de uma busca bem-sucedida

Nenhuma fonte encontrada é reportado como `None` ("fonte vazia"),
nunca como exceção.
"""

from .locator import ResourceRoot, SourceLocation, SourceLocator  # noqa: F401
