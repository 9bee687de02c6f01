# src/atlas_config/core/resolution/accessors.py
"""
Accessors tipados do Atlas Config.

Convertem a folha resolvida por `resolver.resolve` para str/int/long/float/bool,
usando o default do chamador sempre que a folha estiver ausente, for null
ou falhar na conversão.

Política de conversão (v1):
    - ausente ou null       → default, sem log
    - representação textual → strings como estão; bool como `true`/`false`;
      inteiros em decimal; floats via `repr`
    - objetos e listas      → não possuem forma textual (falha de conversão)
    - int                   → sinal opcional + dígitos, faixa de 32 bits
    - long                  → sinal opcional + dígitos, faixa de 64 bits
    - double                → sintaxe float do Python, sem separador `_`
    - bool                  → `true` (sem diferenciar caixa) ou `1`; o resto é False

Decisões arquiteturais:
    - Falha de conversão nunca é fatal: é registrada em WARNING com chave e
      valor bruto, e o default é devolvido
    - Modo estrito (`strict=True`) levanta `ConversionError` em vez do default
    - Chave nula/vazia é erro de uso e sempre levanta `InvalidKeyError`

Limites explícitos:
    - Não dispara reload (responsabilidade do handle)
    - Não altera o Document
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

from ..document import Document, is_container, thaw
from ..errors import conversion_failure
from ..exceptions import ConversionError
from .resolver import ABSENT, contains, resolve

logger = logging.getLogger(__name__)

INT32_RANGE = (-(2 ** 31), 2 ** 31 - 1)
INT64_RANGE = (-(2 ** 63), 2 ** 63 - 1)

_INTEGER = re.compile(r"[+-]?[0-9]+")


class _NoTextForm(Exception):
    pass


def text_of(value: Any) -> str:
    """Representação textual de uma folha (equivalente a `asText`)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        return repr(value)
    if is_container(value):
        raise _NoTextForm()
    return str(value)


def _fallback(path: str, raw: Any, target: str, default: Any, strict: bool) -> Any:
    payload = conversion_failure(key=path, raw_value=thaw(raw), target_type=target)
    if strict:
        raise ConversionError.from_payload(payload)

    logger.warning(
        "Valor inválido para a chave '%s' (esperado %s): %r",
        path,
        target,
        payload.details["raw_value"],
        extra={"atlas_error": payload.to_dict()},
    )
    return default


def _text(document: Document, path: str, target: str, default: Any, strict: bool):
    """Retorna (texto, None) ou (None, valor_de_retorno)."""
    value = resolve(document, path)
    if value is ABSENT or value is None:
        return None, default
    try:
        return text_of(value), None
    except _NoTextForm:
        return None, _fallback(path, value, target, default, strict)


def get_string(document: Document, path: str, default: Optional[str] = None, *, strict: bool = False) -> Optional[str]:
    text, fallback = _text(document, path, "str", default, strict)
    return fallback if text is None else text


def _get_integer(document, path, default, strict, target, bounds):
    text, fallback = _text(document, path, target, default, strict)
    if text is None:
        return fallback

    candidate = text.strip()
    if not _INTEGER.fullmatch(candidate):
        return _fallback(path, text, target, default, strict)

    number = int(candidate)
    low, high = bounds
    if not low <= number <= high:
        return _fallback(path, text, target, default, strict)
    return number


def get_int(document: Document, path: str, default: int = 0, *, strict: bool = False) -> int:
    return _get_integer(document, path, default, strict, "int", INT32_RANGE)


def get_long(document: Document, path: str, default: int = 0, *, strict: bool = False) -> int:
    return _get_integer(document, path, default, strict, "long", INT64_RANGE)


def get_double(document: Document, path: str, default: float = 0.0, *, strict: bool = False) -> float:
    text, fallback = _text(document, path, "double", default, strict)
    if text is None:
        return fallback

    candidate = text.strip()
    if "_" in candidate:
        return _fallback(path, text, "double", default, strict)
    try:
        return float(candidate)
    except ValueError:
        return _fallback(path, text, "double", default, strict)


def get_bool(document: Document, path: str, default: bool = False, *, strict: bool = False) -> bool:
    text, fallback = _text(document, path, "bool", default, strict)
    if text is None:
        return fallback

    candidate = text.strip()
    return candidate.lower() == "true" or candidate == "1"


def get_node(document: Document, path: str) -> Any:
    """Cópia independente (dict/list/escalar) do nó em `path`, ou None."""
    value = resolve(document, path)
    if value is ABSENT:
        return None
    return thaw(value)


def contains_key(document: Document, path: str) -> bool:
    return contains(document, path)
