# src/atlas_config/core/handle/registry.py
"""
Registro de handles do Atlas Config (composition root).

O `HandleRegistry` mantém no máximo um `ConfigHandle` vivo por identidade
de configuração:
    - ("json", nome)       → documento JSON buscado nas raízes
    - ("external", caminho) → arquivo externo em caminho absoluto
    - ("properties", nomes) → arquivos `.properties` mesclados

O registro padrão do processo (`default_registry`) é criado uma única vez,
sob demanda, a partir de `load_settings()`. Testes constroem registros e
handles isolados e não dependem dele.

Limites explícitos:
    - Handles nunca são removidos individualmente; `clear()` descarta todos
    - A troca de settings não afeta handles já criados
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..loading import ExternalFileLoader, JsonLoader, Loader, PropertiesLoader
from ..settings import EngineSettings, load_settings
from ..sources import SourceLocator
from .handle import ConfigHandle
from .once import InitOnce

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceIdentity:
    """Identidade de uma configuração: tipo de fonte + alvo."""

    kind: str
    target: Tuple[str, ...]

    def __str__(self) -> str:
        return f"{self.kind}:{','.join(self.target)}"


class HandleRegistry:
    """Fábrica e cache de `ConfigHandle`, um por `SourceIdentity`."""

    def __init__(self, settings: Optional[EngineSettings] = None) -> None:
        self.settings = settings or EngineSettings()
        self._handles: Dict[SourceIdentity, ConfigHandle] = {}
        self._lock = threading.Lock()
        self._locator: Optional[SourceLocator] = None

    @property
    def locator(self) -> SourceLocator:
        locator = self._locator
        if locator is None:
            with self._lock:
                if self._locator is None:
                    self._locator = self.settings.build_locator()
                locator = self._locator
        return locator

    def _get_or_create(self, identity: SourceIdentity, factory) -> ConfigHandle:
        handle = self._handles.get(identity)
        if handle is not None:
            return handle
        loader: Loader = factory()
        with self._lock:
            handle = self._handles.get(identity)
            if handle is None:
                handle = ConfigHandle(loader, identity=str(identity), strict=self.settings.strict)
                self._handles[identity] = handle
                logger.debug("Handle criado: %s", identity)
            return handle

    def json_config(self, path: Optional[Union[str, Path]] = None) -> ConfigHandle:
        """
        Handle para configuração JSON.

        Sem `path`, o documento `settings.json_file` é buscado nas raízes.
        Com `path`, o arquivo externo (resolvido para caminho absoluto) é a
        identidade fixa do handle e é observado para hot-reload.
        """
        if path is None:
            name = self.settings.json_file
            identity = SourceIdentity("json", (name,))
            return self._get_or_create(identity, lambda: JsonLoader(name, self.locator))

        loader = ExternalFileLoader(path)
        identity = SourceIdentity("external", (str(loader.path),))
        return self._get_or_create(identity, lambda: loader)

    def properties(self) -> ConfigHandle:
        """Handle para os arquivos `.properties` declarados nos settings."""
        names = self.settings.property_files
        identity = SourceIdentity("properties", tuple(names))
        return self._get_or_create(identity, lambda: PropertiesLoader(names, self.locator))

    def handles(self) -> List[ConfigHandle]:
        return list(self._handles.values())

    def clear(self) -> None:
        with self._lock:
            self._handles.clear()
            self._locator = None


# ---------------------------------------------------------------------------
# Registro padrão do processo
# ---------------------------------------------------------------------------

_default_once = InitOnce()
_default: Optional[HandleRegistry] = None


def _create_default() -> None:
    global _default
    _default = HandleRegistry(load_settings())


def default_registry() -> HandleRegistry:
    """Registro do processo, criado uma vez a partir de `load_settings()`."""
    _default_once.run(_create_default)
    return _default


def configure_default_registry(registry: HandleRegistry) -> None:
    """Substitui o registro padrão (ex.: na inicialização da aplicação)."""
    global _default
    _default_once.run(lambda: None)
    _default = registry


def get_config(path: Optional[Union[str, Path]] = None) -> ConfigHandle:
    return default_registry().json_config(path)


def get_properties() -> ConfigHandle:
    return default_registry().properties()
