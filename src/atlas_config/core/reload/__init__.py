# src/atlas_config/core/reload/__init__.py
"""
Detecção de staleness e publicação atômica de snapshots.

Componentes:
    - `ReloadState`      → estados do ciclo de vida
    - `Snapshot`         → par imutável (Document, baseline de mtime)
    - `ReloadController` → dono do snapshot corrente de uma identidade
"""

from .controller import ReloadController, ReloadState, Snapshot  # noqa: F401
