# src/atlas_config/core/sources/locator.py
"""
Localizador de fontes de configuração do Atlas Config.

Este módulo implementa a busca multi-raiz por um recurso de configuração
nomeado (ex.: `app.properties`, `config.json`).

Ordem de busca (fixa e significativa):
    1. Raízes de recurso (`ResourceRoot`), na ordem declarada, da mais
       específica para a mais genérica. Para cada raiz, todos os prefixos
       declarados são tentados antes de passar à próxima raiz.
    2. Diretórios do filesystem, na ordem declarada.

A primeira localização existente **e legível** vence.

Decisões arquiteturais:
    - Raízes de recurso são pacotes importáveis, resolvidos via
      `importlib.resources.files`
    - Recurso inexistente em uma localização é registrado em DEBUG
    - Recurso existente mas ilegível é registrado em WARNING, como condição
      distinta, e a busca continua
    - Nenhum recurso encontrado não é erro nesta camada: retorna `None`

Invariantes:
    - A ordem de candidatos é determinística para a mesma configuração
    - O localizador não lê nem interpreta o conteúdo da fonte

Limites explícitos:
    - Não faz parsing
    - Não faz merge entre fontes
    - Não observa modificações em disco
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from ..errors import source_unreadable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceRoot:
    """
    Raiz de recursos empacotados (equivalente a um class loader).

    Campos:
    - anchor: nome de pacote importável (ex.: "myapp.resources")
    - prefixes: subdiretórios dentro do pacote, tentados em ordem;
      "" representa a raiz do próprio pacote
    """

    anchor: str
    prefixes: Tuple[str, ...] = ("",)

    def candidates(self, name: str) -> Iterator[Tuple[str, Any]]:
        try:
            base = resources.files(self.anchor)
        except (ModuleNotFoundError, TypeError) as e:
            logger.debug("Raiz de recurso indisponível: %s (%s)", self.anchor, e)
            return

        for prefix in self.prefixes:
            node = base
            for part in [p for p in prefix.split("/") if p]:
                node = node / part
            folder = prefix.strip("/")
            display = f"resource:{self.anchor}/{folder + '/' if folder else ''}{name}"
            yield display, node / name


@dataclass(frozen=True)
class SourceLocation:
    """Localização concreta de uma fonte encontrada pelo `SourceLocator`."""

    name: str
    origin: str
    display: str
    target: Any = field(repr=False, compare=False)

    @property
    def path(self) -> Optional[Path]:
        """Caminho em disco, quando a fonte é um arquivo real."""
        if isinstance(self.target, Path):
            return self.target
        return None

    def read_text(self) -> str:
        return self.target.read_text(encoding="utf-8")


def _probe(target: Any) -> None:
    """Abre e fecha o alvo para confirmar que é legível."""
    with target.open("rb"):
        pass


class SourceLocator:
    """
    Busca ordenada de fontes de configuração em raízes de recurso e
    diretórios do filesystem.

    Exemplo:
        >>> locator = SourceLocator(
        ...     resource_roots=[ResourceRoot("myapp", ("config", ""))],
        ...     search_dirs=["/etc/myapp", "."],
        ... )
        >>> location = locator.locate("app.properties")
    """

    def __init__(
        self,
        resource_roots: Sequence[Union[ResourceRoot, str]] = (),
        search_dirs: Sequence[Union[str, Path]] = (),
    ) -> None:
        self.resource_roots: Tuple[ResourceRoot, ...] = tuple(
            r if isinstance(r, ResourceRoot) else ResourceRoot(r) for r in resource_roots
        )
        self.search_dirs: Tuple[Path, ...] = tuple(Path(d) for d in search_dirs)

    def _candidates(self, name: str) -> Iterator[Tuple[str, str, Any]]:
        for root in self.resource_roots:
            for display, target in root.candidates(name):
                yield "resource", display, target
        for directory in self.search_dirs:
            target = directory / name
            yield "filesystem", str(target), target

    def locate(self, name: str) -> Optional[SourceLocation]:
        """Retorna a primeira localização existente e legível, ou `None`."""
        for origin, display, target in self._candidates(name):
            try:
                exists = target.is_file()
            except OSError as e:
                exists = False
                logger.debug("Falha ao inspecionar %s: %s", display, e)

            if not exists:
                logger.debug("Fonte '%s' não encontrada em %s", name, display)
                continue

            try:
                _probe(target)
            except OSError as e:
                payload = source_unreadable(source=name, location=display, reason=str(e))
                logger.warning(
                    "Fonte '%s' encontrada mas ilegível em %s: %s",
                    name,
                    display,
                    e,
                    extra={"atlas_error": payload.to_dict()},
                )
                continue

            logger.debug("Fonte '%s' localizada em %s", name, display)
            return SourceLocation(name=name, origin=origin, display=display, target=target)

        return None

    def can_find(self, name: str) -> bool:
        return self.locate(name) is not None

    def describe(self) -> Dict[str, List[Any]]:
        """Ordem de busca efetiva, para diagnóstico."""
        return {
            "resource_roots": [
                {"anchor": r.anchor, "prefixes": list(r.prefixes)} for r in self.resource_roots
            ],
            "search_dirs": [str(d) for d in self.search_dirs],
        }
