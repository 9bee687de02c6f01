# src/atlas_config/core/document/model.py
"""
Modelo de Document do Atlas Config.

Um `Document` é a representação imutável, em memória, de uma configuração
carregada. Ele é o único tipo que circula entre Loader, Path Resolver,
Typed Accessors e Reload Controller.

Tipos de Document:
    - FLAT → mapa de um nível, somente valores string (arquivos .properties)
    - TREE → árvore de profundidade arbitrária (JSON/YAML), folhas heterogêneas

Decisões arquiteturais:
    - A árvore é congelada na construção: mapas viram `MappingProxyType`,
      listas viram tuplas
    - Reload nunca edita um Document existente; produz outro
    - `to_dict()` devolve sempre uma cópia mutável e independente

Invariantes:
    - Um Document entregue a um leitor nunca é mutado
    - A raiz é sempre um mapeamento (objeto), mesmo quando vazia
    - Em Documents FLAT todas as chaves e valores são strings

Limites explícitos:
    - Não faz parsing de texto (ver `loading` e `properties`)
    - Não resolve caminhos (ver `resolution.resolver`)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from .hashing import compute_config_hash


class DocumentKind(str, Enum):
    """Forma estrutural de um Document."""
    FLAT = "flat"
    TREE = "tree"


def freeze(value: Any) -> Any:
    """
    Converte recursivamente dict/list em estruturas somente leitura.

    Árvores vindas dos loaders já chegam só com chaves str; o `str(k)` cobre
    mapas montados à mão (ex.: `Document.tree` em testes).
    """
    if isinstance(value, Mapping):
        return MappingProxyType({str(k): freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    return value


def thaw(value: Any) -> Any:
    """Inverso de `freeze`: devolve dict/list puros e independentes."""
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [thaw(v) for v in value]
    return value


def is_object(node: Any) -> bool:
    return isinstance(node, Mapping)


def is_list(node: Any) -> bool:
    return isinstance(node, (tuple, list))


def is_container(node: Any) -> bool:
    return is_object(node) or is_list(node)


@dataclass(frozen=True)
class Document:
    """
    Snapshot imutável de uma configuração carregada.

    Campos:
    - kind: FLAT (properties) ou TREE (JSON/YAML)
    - root: raiz congelada (sempre um mapeamento)
    - sources: descrição das fontes que efetivamente contribuíram, na ordem
      em que foram aplicadas

    Use os construtores `flat`, `tree` e `empty` em vez do construtor direto;
    eles garantem o congelamento da árvore.
    """

    kind: DocumentKind
    root: Mapping[str, Any]
    sources: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def flat(cls, entries: Mapping[str, str], sources: Iterable[str] = ()) -> "Document":
        for key, value in entries.items():
            if not isinstance(key, str) or not isinstance(value, str):
                raise TypeError(
                    f"Document FLAT aceita apenas str -> str, recebido: "
                    f"{type(key).__name__} -> {type(value).__name__}"
                )
        return cls(
            kind=DocumentKind.FLAT,
            root=MappingProxyType(dict(entries)),
            sources=tuple(sources),
        )

    @classmethod
    def tree(cls, data: Mapping[str, Any], sources: Iterable[str] = ()) -> "Document":
        if not isinstance(data, Mapping):
            raise TypeError(
                f"Raiz de Document TREE deve ser mapping, recebido: {type(data).__name__}"
            )
        return cls(kind=DocumentKind.TREE, root=freeze(data), sources=tuple(sources))

    @classmethod
    def empty(cls, kind: DocumentKind = DocumentKind.TREE, sources: Iterable[str] = ()) -> "Document":
        return cls(kind=kind, root=MappingProxyType({}), sources=tuple(sources))

    @property
    def is_flat(self) -> bool:
        return self.kind is DocumentKind.FLAT

    @property
    def is_empty(self) -> bool:
        return len(self.root) == 0

    def keys(self) -> List[str]:
        return list(self.root.keys())

    def to_dict(self) -> Dict[str, Any]:
        return thaw(self.root)

    @cached_property
    def fingerprint(self) -> str:
        return compute_config_hash(self.to_dict())
