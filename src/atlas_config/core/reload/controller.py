# src/atlas_config/core/reload/controller.py
"""
Reload Controller do Atlas Config.

Este módulo mantém o snapshot corrente de uma configuração e decide quando
ele deve ser substituído.

Máquina de estados:
    UNINITIALIZED → LOADED → STALE_CHECK → (RELOADED | LOADED)

    - UNINITIALIZED → LOADED: primeiro carregamento via loader; para arquivos
      externos o `st_mtime_ns` é registrado como baseline
    - LOADED → STALE_CHECK: a cada acesso a uma configuração externa, o
      mtime atual é comparado ao baseline (sem lock)
    - STALE_CHECK → RELOADED: mtime mudou; o Document é recarregado e
      publicado junto com o novo baseline, como um único objeto
    - falha no reload: registrada em log; snapshot e baseline anteriores
      permanecem, e o próximo acesso tenta de novo

Concorrência:
    - O snapshot (`Document` + baseline) é imutável e trocado por uma única
      atribuição de referência; leitores nunca observam um par misturado
    - Apenas o passo de reload-e-publicação usa lock; threads concorrentes
      re-verificam o baseline dentro do lock e pulam o reload se outra
      thread já publicou o snapshot novo
    - Leituras em regime permanente não usam lock

Limites explícitos:
    - Configurações empacotadas (sem `watched_path`) não têm verificação de
      staleness; só mudam via `force_reload`
    - Não há thread de polling: a verificação acontece no caminho de leitura
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Optional

from ..document import Document
from ..errors import initialization_failure, reload_failure
from ..exceptions import AtlasConfigException, ConfigInitializationError
from ..loading import Loader

logger = logging.getLogger(__name__)


class ReloadState(str, Enum):
    """Estados do ciclo de vida de um snapshot de configuração."""
    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"
    STALE_CHECK = "stale_check"
    RELOADED = "reloaded"


@dataclass(frozen=True)
class Snapshot:
    """
    Unidade atômica publicada pelo controller.

    Campos:
    - document: Document corrente
    - baseline: `st_mtime_ns` observado antes do carregamento (None se o
      arquivo não existia ou a fonte não é externa)
    - generation: contador monotônico de publicações (1 no primeiro load)
    - loaded_at: timestamp UTC ISO-8601 da publicação
    """

    document: Document
    baseline: Optional[int]
    generation: int
    loaded_at: str


def _mtime_ns(path: Optional[Path]) -> Optional[int]:
    if path is None:
        return None
    try:
        return path.stat().st_mtime_ns
    except OSError:
        return None


class ReloadController:
    """
    Dono do snapshot corrente de uma identidade de configuração.

    O controller não valida chaves nem converte tipos; ele apenas garante
    que `snapshot` aponte para o Document mais recente carregado com sucesso.
    """

    def __init__(self, loader: Loader, *, identity: Optional[str] = None) -> None:
        self._loader = loader
        self.identity = identity or loader.describe()
        self._lock = threading.Lock()
        self._snapshot: Optional[Snapshot] = None
        self._state = ReloadState.UNINITIALIZED
        self._load_count = 0

    # -----------------------------
    # Introspecção
    # -----------------------------
    @property
    def state(self) -> ReloadState:
        return self._state

    @property
    def snapshot(self) -> Optional[Snapshot]:
        return self._snapshot

    @property
    def load_count(self) -> int:
        """Quantas vezes o loader foi invocado (sonda para testes e diagnóstico)."""
        return self._load_count

    @property
    def watched_path(self) -> Optional[Path]:
        return getattr(self._loader, "watched_path", None)

    # -----------------------------
    # Carregamento e publicação
    # -----------------------------
    def _load(self) -> Document:
        self._load_count += 1
        return self._loader.load()

    def _publish(self, document: Document, baseline: Optional[int]) -> Snapshot:
        previous = self._snapshot
        snapshot = Snapshot(
            document=document,
            baseline=baseline,
            generation=previous.generation + 1 if previous is not None else 1,
            loaded_at=datetime.now(timezone.utc).isoformat(),
        )
        self._snapshot = snapshot
        return snapshot

    def _initialize_locked(self) -> Snapshot:
        if self._snapshot is not None:
            return self._snapshot

        baseline = _mtime_ns(self.watched_path)
        try:
            document = self._load()
        except (AtlasConfigException, OSError) as e:
            cause = e.to_payload() if isinstance(e, AtlasConfigException) else None
            payload = initialization_failure(
                identity=self.identity,
                cause=cause,
                exc_type=type(e).__name__,
                exc_message=str(e),
            )
            logger.error(
                "Falha ao inicializar configuração %s: %s",
                self.identity,
                e,
                extra={"atlas_error": payload.to_dict()},
            )
            raise ConfigInitializationError.from_payload(payload) from e

        snapshot = self._publish(document, baseline)
        self._state = ReloadState.LOADED
        logger.info(
            "Configuração carregada: %s (fontes=%s, fingerprint=%s)",
            self.identity,
            list(document.sources),
            document.fingerprint[:12],
        )
        return snapshot

    def initialize(self) -> Snapshot:
        """UNINITIALIZED → LOADED. Idempotente; falha levanta `ConfigInitializationError`."""
        snapshot = self._snapshot
        if snapshot is not None:
            return snapshot
        with self._lock:
            return self._initialize_locked()

    def _reload_locked(self, baseline: Optional[int], *, reason: str) -> bool:
        try:
            document = self._load()
        except (AtlasConfigException, OSError) as e:
            cause = e.to_payload() if isinstance(e, AtlasConfigException) else None
            payload = reload_failure(
                identity=self.identity,
                cause=cause,
                exc_type=type(e).__name__,
                exc_message=str(e),
            )
            logger.warning(
                "Falha ao recarregar configuração %s (%s): %s",
                self.identity,
                reason,
                e,
                extra={"atlas_error": payload.to_dict()},
            )
            self._state = ReloadState.LOADED
            return False

        self._state = ReloadState.RELOADED
        snapshot = self._publish(document, baseline)
        logger.info(
            "Configuração recarregada (%s): %s (geração=%d, fingerprint=%s)",
            reason,
            self.identity,
            snapshot.generation,
            document.fingerprint[:12],
        )
        self._state = ReloadState.LOADED
        return True

    # -----------------------------
    # Transições públicas
    # -----------------------------
    def ensure_fresh(self) -> Snapshot:
        """
        Verifica staleness do arquivo externo e recarrega se necessário.

        O stat é feito sem lock. Só o reload-e-publicação é serializado.
        """
        snapshot = self._snapshot
        if snapshot is None:
            return self.initialize()

        path = self.watched_path
        if path is None:
            return snapshot

        current = _mtime_ns(path)
        if current == snapshot.baseline:
            return snapshot
        if current is None:
            logger.debug("Arquivo observado ausente, mantendo snapshot anterior: %s", path)
            return snapshot

        with self._lock:
            snapshot = self._snapshot
            current = _mtime_ns(path)
            if current is None or current == snapshot.baseline:
                return snapshot
            self._state = ReloadState.STALE_CHECK
            try:
                self._reload_locked(current, reason="arquivo modificado")
            finally:
                self._state = ReloadState.LOADED
            return self._snapshot

    def force_reload(self) -> bool:
        """
        Recarrega imediatamente, independente do mtime.

        Returns:
            bool: True se um novo snapshot foi publicado; False se o reload
            falhou e o snapshot anterior foi mantido.

        Raises:
            ConfigInitializationError: Se ainda não havia snapshot e o
            primeiro carregamento falhar.
        """
        with self._lock:
            if self._snapshot is None:
                self._initialize_locked()
                return True
            try:
                return self._reload_locked(_mtime_ns(self.watched_path), reason="reload explícito")
            finally:
                self._state = ReloadState.LOADED
