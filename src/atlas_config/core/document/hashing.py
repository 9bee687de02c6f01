# src/atlas_config/core/document/hashing.py
"""
Hashing canônico de configuração do Atlas Config.

Este módulo implementa a geração de hash determinístico de estruturas de
configuração: tanto o conteúdo de um Document carregado quanto as
configurações do próprio motor (`EngineSettings`).

O hash gerado representa a **identidade estrutural** da configuração e é
utilizado para:
    - identificar snapshots publicados pelo Reload Controller
    - registrar em log qual conteúdo está efetivamente ativo
    - comparar execuções de reload sem comparar árvores inteiras

Princípios fundamentais:
    - Hashing determinístico e reprodutível
    - Independente da ordem original das chaves
    - Baseado em serialização JSON canônica
    - Algoritmo criptográfico estável (SHA-256)

Invariantes:
    - Configurações estruturalmente equivalentes produzem o mesmo hash
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres

Limites explícitos:
    - Não carrega nem resolve configuração
    - Não persiste o hash
"""

import hashlib
import json
from typing import Any, Mapping


def compute_config_hash(config: Mapping[str, Any]) -> str:
    """
    Gera um hash determinístico de uma configuração.

    Política de hashing (v1):
        - Serialização JSON canônica
        - Ordenação estável de chaves
        - Separadores compactos (sem espaços supérfluos)
        - Codificação UTF-8
        - Algoritmo SHA-256
        - Valores não-JSON (ex.: datas vindas de YAML) usam `str()`

    Args:
        config (Mapping[str, Any]): Configuração em forma de mapeamento puro.

    Returns:
        str: Hash SHA-256 hexadecimal da configuração.

    Raises:
        TypeError: Se o objeto fornecido não for um mapeamento.
    """

    if not isinstance(config, Mapping):
        raise TypeError(
            f"Config para hashing deve ser mapping, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        dict(config),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
