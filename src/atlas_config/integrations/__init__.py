"""Integrações que consomem o `ConfigHandle` (sem dependências externas)."""
