# src/atlas_config/core/handle/handle.py
"""
ConfigHandle: ponto de acesso tipado a uma configuração.

O handle é o objeto de longa duração que os chamadores usam para ler
configuração. Ele combina:
    - a guarda `InitOnce` (carregamento preguiçoso, uma única vez)
    - o `ReloadController` (staleness e publicação atômica)
    - os accessors tipados puros de `resolution`

Fluxo de uma leitura:
    1. valida a chave (chave nula/vazia → `InvalidKeyError`, sempre)
    2. garante a inicialização (primeira falha → `ConfigInitializationError`)
    3. deixa o controller verificar staleness (apenas fontes externas)
    4. resolve e converte sobre o snapshot corrente

Decisões arquiteturais:
    - Handles são construídos explicitamente e podem ser injetados; o estado
      global fica restrito ao `HandleRegistry` padrão
    - A identidade (empacotada vs. arquivo externo) é fixa por handle
    - Cada leitura usa um único snapshot do início ao fim

Limites explícitos:
    - Não há `destroy`: o ciclo de vida é o do processo
    - Não grava configuração
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..document import Document
from ..loading import Loader
from ..reload import ReloadController, ReloadState, Snapshot
from ..resolution import accessors
from ..resolution.resolver import validate_key
from .once import InitOnce


class ConfigHandle:
    """
    Acesso tipado, thread-safe e com hot-reload a uma configuração.

    Exemplo:
        >>> handle = ConfigHandle(ExternalFileLoader("/etc/app/config.json"))
        >>> handle.get_int("database.pool.maxSize", 5)
        10
    """

    def __init__(self, loader: Loader, *, identity: Optional[str] = None, strict: bool = False) -> None:
        self._loader = loader
        self.identity = identity or loader.describe()
        self.strict = strict
        self._controller = ReloadController(loader, identity=self.identity)
        self._init = InitOnce()

    def __repr__(self) -> str:
        return f"ConfigHandle(identity={self.identity!r}, state={self.state.value})"

    # -----------------------------
    # Ciclo de vida
    # -----------------------------
    def initialize(self) -> "ConfigHandle":
        """Carrega a configuração uma única vez; chamadas seguintes são no-op."""
        self._init.run(self._controller.initialize)
        return self

    @property
    def initialized(self) -> bool:
        return self._init.done

    def _snapshot(self) -> Snapshot:
        self.initialize()
        return self._controller.ensure_fresh()

    def _document(self) -> Document:
        return self._snapshot().document

    def reload(self) -> bool:
        """Força o recarregamento. Retorna False se falhou (snapshot anterior mantido)."""
        if self._init.run(self._controller.initialize):
            return True
        return self._controller.force_reload()

    # -----------------------------
    # Accessors tipados
    # -----------------------------
    def get_string(self, path: str, default: Optional[str] = None) -> Optional[str]:
        validate_key(path)
        return accessors.get_string(self._document(), path, default, strict=self.strict)

    def get_int(self, path: str, default: int = 0) -> int:
        validate_key(path)
        return accessors.get_int(self._document(), path, default, strict=self.strict)

    def get_long(self, path: str, default: int = 0) -> int:
        validate_key(path)
        return accessors.get_long(self._document(), path, default, strict=self.strict)

    def get_double(self, path: str, default: float = 0.0) -> float:
        validate_key(path)
        return accessors.get_double(self._document(), path, default, strict=self.strict)

    def get_bool(self, path: str, default: bool = False) -> bool:
        validate_key(path)
        return accessors.get_bool(self._document(), path, default, strict=self.strict)

    def contains_key(self, path: str) -> bool:
        validate_key(path)
        return accessors.contains_key(self._document(), path)

    def get_node(self, path: str) -> Any:
        """Cópia independente da subárvore em `path`, ou None."""
        validate_key(path)
        return accessors.get_node(self._document(), path)

    # -----------------------------
    # Acesso em bloco
    # -----------------------------
    def get_document(self) -> Document:
        return self._document()

    def as_dict(self) -> Dict[str, Any]:
        return self._document().to_dict()

    # -----------------------------
    # Introspecção
    # -----------------------------
    @property
    def state(self) -> ReloadState:
        return self._controller.state

    @property
    def load_count(self) -> int:
        return self._controller.load_count

    @property
    def snapshot(self) -> Optional[Snapshot]:
        return self._controller.snapshot

    @property
    def is_external(self) -> bool:
        return self._controller.watched_path is not None

    @property
    def config_file_path(self) -> Optional[str]:
        path = self._controller.watched_path
        return str(path) if path is not None else None

    @property
    def last_modified(self) -> Optional[datetime]:
        snapshot = self._controller.snapshot
        if snapshot is None or snapshot.baseline is None:
            return None
        return datetime.fromtimestamp(snapshot.baseline / 1_000_000_000, tz=timezone.utc)

    def can_find_resource(self, name: str) -> bool:
        locator = getattr(self._loader, "locator", None)
        if locator is None:
            return False
        return locator.can_find(name)

    def describe(self) -> Dict[str, Any]:
        """Resumo de diagnóstico: identidade, estado, fontes e ordem de busca."""
        snapshot = self._controller.snapshot
        locator = getattr(self._loader, "locator", None)
        last_modified = self.last_modified
        return {
            "identity": self.identity,
            "state": self.state.value,
            "external": self.is_external,
            "config_file_path": self.config_file_path,
            "last_modified": last_modified.isoformat() if last_modified else None,
            "generation": snapshot.generation if snapshot else 0,
            "loaded_at": snapshot.loaded_at if snapshot else None,
            "sources": list(snapshot.document.sources) if snapshot else [],
            "fingerprint": snapshot.document.fingerprint if snapshot else None,
            "search_order": locator.describe() if locator is not None else None,
            "strict": self.strict,
        }
