# src/atlas_config/core/resolution/resolver.py
"""
Resolvedor de caminhos pontuados do Atlas Config.

Dado um `Document` e um caminho como `database.pool.maxSize`, percorre a
árvore segmento a segmento até a folha, ou determina ausência.

Política de resolução (v1):
    - Document TREE → o caminho é dividido em `.` e percorrido; se o nó
      corrente não for objeto, ou o segmento não existir, o resultado é
      `ABSENT`
    - Document FLAT → não há aninhamento: o caminho inteiro é a única chave
      (ex.: `app.name` é procurado literalmente)

Princípios fundamentais:
    - Ausência nunca é erro
    - A resolução é pura: não há I/O, log ou reload

Limites explícitos:
    - Não há escape para `.` literal em chaves de Documents TREE
    - Não valida a chave (ver `validate_key`)
"""

from __future__ import annotations

from typing import Any, List

from ..document import Document, is_object
from ..errors import invalid_key
from ..exceptions import InvalidKeyError


class _Absent:
    """Sentinela de valor ausente (distinto de `None`, que é null presente)."""

    _instance = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


def validate_key(path: Any) -> str:
    """Rejeita imediatamente caminhos nulos ou vazios."""
    if not isinstance(path, str) or not path.strip():
        raise InvalidKeyError.from_payload(invalid_key(key=path))
    return path


def split_path(path: str) -> List[str]:
    return validate_key(path).split(".")


def resolve(document: Document, path: str) -> Any:
    """
    Resolve `path` em `document`.

    Returns:
        Any: O nó encontrado (folha, objeto congelado, tupla ou `None` para
        null presente) ou `ABSENT`.
    """
    validate_key(path)

    if document.is_flat:
        return document.root.get(path, ABSENT)

    current: Any = document.root
    for segment in path.split("."):
        if not is_object(current) or segment not in current:
            return ABSENT
        current = current[segment]
    return current


def contains(document: Document, path: str) -> bool:
    """Presente e não-nulo."""
    value = resolve(document, path)
    return value is not ABSENT and value is not None
