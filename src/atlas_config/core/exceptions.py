"""
Atlas Config: Canonical Exceptions (v1)

Este módulo define exceções tipadas internas do Atlas Config.

Objetivo:
- Permitir que loader, handle e accessors levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para ConfigErrorPayload
- Evitar ValueError/RuntimeError genéricos nas fronteiras do motor

Regras:
- Exceções devem carregar apenas dados estruturados (serializáveis).
- Apenas falhas de inicialização e chaves inválidas chegam ao chamador;
  as demais são recuperadas localmente e registradas em log.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import ConfigErrorPayload


@dataclass(frozen=True, eq=False)
class AtlasConfigException(Exception):
    """Base class para exceções internas do Atlas Config.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - `type` é o código estável do catálogo em `core.errors`
    - Mensagem deve ser curta e humana
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message

    @classmethod
    def from_payload(cls, payload: ConfigErrorPayload) -> "AtlasConfigException":
        return cls(
            type=payload.type,
            message=payload.message,
            details=dict(payload.details),
            hint=payload.hint,
        )

    def to_payload(self) -> ConfigErrorPayload:
        return ConfigErrorPayload(
            type=self.type,
            message=self.message,
            details=dict(self.details),
            hint=self.hint,
        )


# ---------------------------------------------------------------------------
# Fontes
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class SourceParseError(AtlasConfigException):
    """Fonte encontrada e legível, mas com conteúdo malformado."""

    @property
    def source(self) -> Optional[str]:
        return self.details.get("source")


@dataclass(frozen=True, eq=False)
class SourceReadError(AtlasConfigException):
    """Fonte localizada deixou de ser legível durante o carregamento."""

    @property
    def source(self) -> Optional[str]:
        return self.details.get("source")


@dataclass(frozen=True, eq=False)
class UnsupportedSourceFormatError(AtlasConfigException):
    """Extensão de arquivo externo não suportada (v1: JSON/YAML/properties)."""


# ---------------------------------------------------------------------------
# Handle / Acesso
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class ConfigInitializationError(AtlasConfigException):
    """Primeiro carregamento do handle falhou (nenhum snapshot publicado)."""


@dataclass(frozen=True, eq=False)
class InvalidKeyError(AtlasConfigException, ValueError):
    """Caminho de chave nulo ou vazio (erro de uso, nunca silenciado)."""


@dataclass(frozen=True, eq=False)
class ConversionError(AtlasConfigException, ValueError):
    """Valor presente não converte para o tipo pedido (apenas em modo estrito)."""
