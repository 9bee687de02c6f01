"""
Atlas Config: Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do Atlas Config.
Erros são considerados artefatos de diagnóstico e fazem parte do contrato
operacional do motor de configuração, devendo ser:

- explícitos
- serializáveis
- rastreáveis
- acionáveis

Os payloads aqui definidos são usados tanto pelas exceções tipadas
(`atlas_config.core.exceptions`) quanto pelas linhas de log emitidas quando
uma falha é recuperada localmente (ex.: conversão de tipo, reload).
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConfigErrorPayload:
    """
    Payload canônico de erro do Atlas Config.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Fontes
SOURCE_UNREADABLE = "SOURCE_UNREADABLE"
SOURCE_PARSE_FAILURE = "SOURCE_PARSE_FAILURE"
UNSUPPORTED_SOURCE_FORMAT = "UNSUPPORTED_SOURCE_FORMAT"

# Acesso
CONVERSION_FAILURE = "CONVERSION_FAILURE"
INVALID_KEY = "INVALID_KEY"

# Ciclo de vida do handle
INITIALIZATION_FAILURE = "INITIALIZATION_FAILURE"
RELOAD_FAILURE = "RELOAD_FAILURE"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def source_unreadable(
    *,
    source: str,
    location: str,
    reason: Optional[str] = None,
    hint: str = "Verifique as permissões de leitura do arquivo ou remova-o do caminho de busca.",
) -> ConfigErrorPayload:
    return ConfigErrorPayload(
        type=SOURCE_UNREADABLE,
        message="Fonte de configuração encontrada, mas ilegível",
        details={
            "source": source,
            "location": location,
            "reason": reason,
        },
        hint=hint,
    )


def source_parse_failure(
    *,
    source: str,
    reason: str,
    line: Optional[int] = None,
    hint: str = "Corrija a sintaxe da fonte indicada; nenhuma configuração parcial é publicada.",
) -> ConfigErrorPayload:
    return ConfigErrorPayload(
        type=SOURCE_PARSE_FAILURE,
        message="Falha ao interpretar fonte de configuração",
        details={
            "source": source,
            "reason": reason,
            "line": line,
        },
        hint=hint,
    )


def unsupported_source_format(
    *,
    source: str,
    suffix: str,
    supported: tuple = (".json", ".yaml", ".yml", ".properties"),
    hint: str = "Use um arquivo .json, .yaml/.yml ou .properties.",
) -> ConfigErrorPayload:
    return ConfigErrorPayload(
        type=UNSUPPORTED_SOURCE_FORMAT,
        message="Formato de fonte de configuração não suportado",
        details={
            "source": source,
            "suffix": suffix,
            "supported": list(supported),
        },
        hint=hint,
    )


def conversion_failure(
    *,
    key: str,
    raw_value: Any,
    target_type: str,
    hint: str = "Ajuste o valor na fonte de configuração ou trate o default retornado.",
) -> ConfigErrorPayload:
    return ConfigErrorPayload(
        type=CONVERSION_FAILURE,
        message="Valor de configuração não pôde ser convertido para o tipo solicitado",
        details={
            "key": key,
            "raw_value": raw_value,
            "target_type": target_type,
        },
        hint=hint,
    )


def invalid_key(
    *,
    key: Any,
    hint: str = "Informe um caminho de chave não vazio (ex.: 'database.pool.maxSize').",
) -> ConfigErrorPayload:
    return ConfigErrorPayload(
        type=INVALID_KEY,
        message="Chave de configuração nula ou vazia",
        details={"key": key},
        hint=hint,
    )


def initialization_failure(
    *,
    identity: str,
    cause: Optional[ConfigErrorPayload] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Corrija a fonte indicada em 'cause' antes de acessar a configuração novamente.",
) -> ConfigErrorPayload:
    return ConfigErrorPayload(
        type=INITIALIZATION_FAILURE,
        message="Falha ao inicializar o handle de configuração",
        details={
            "identity": identity,
            "cause": cause.to_dict() if cause is not None else None,
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
    )


def reload_failure(
    *,
    identity: str,
    cause: Optional[ConfigErrorPayload] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "O snapshot anterior permanece ativo; o reload será tentado novamente no próximo acesso.",
) -> ConfigErrorPayload:
    return ConfigErrorPayload(
        type=RELOAD_FAILURE,
        message="Falha ao recarregar configuração; snapshot anterior mantido",
        details={
            "identity": identity,
            "cause": cause.to_dict() if cause is not None else None,
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
    )
