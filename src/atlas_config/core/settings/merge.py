# src/atlas_config/core/settings/merge.py
"""
Deep-merge de settings do Atlas Config.

Política de merge (v1):
    - dict → merge recursivo por chave
    - list → sobrescrita total (sem merge elemento a elemento)
    - escalar → sobrescrita direta
    - None no override → sobrescreve (desliga o valor explicitamente)
    - conflito de tipos → erro estrutural explícito, com o caminho pontuado

Invariantes:
    - Nenhum input é mutado
    - A mesma entrada sempre produz a mesma saída
    - Conflitos estruturais interrompem o merge

Limites explícitos:
    - Usado apenas para settings do motor; Documents FLAT usam merge chave a
      chave no loader e Documents JSON não possuem merge definido
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import SettingsTypeConflictError


def _kind(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    return type(value).__name__


def deep_merge(base: Dict[str, Any], override: Dict[str, Any], *, _path: str = "") -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico entre dois dicionários de settings.

    Args:
        base (Dict[str, Any]): Settings base (ex.: defaults embutidos).
        override (Dict[str, Any]): Overrides explícitos.

    Returns:
        Dict[str, Any]: Novo dicionário resultante.

    Raises:
        SettingsTypeConflictError: Se a mesma chave tiver tipos incompatíveis.
    """

    if not isinstance(base, dict) or not isinstance(override, dict):
        raise SettingsTypeConflictError(
            f"Deep-merge requer dicts em '{_path or '<raiz>'}', recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        key_path = f"{_path}.{key}" if _path else str(key)

        if key not in result or result[key] is None or override_value is None:
            result[key] = deepcopy(override_value)
            continue

        base_value = result[key]

        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value, _path=key_path)
            continue

        if _kind(base_value) != _kind(override_value):
            raise SettingsTypeConflictError(
                f"Conflito de tipo na chave '{key_path}': "
                f"{_kind(base_value)} vs {_kind(override_value)}"
            )

        # list ou escalar -> sobrescrita total
        result[key] = deepcopy(override_value)

    return result
