# src/atlas_config/core/loading/loader.py
"""
Loader canônico de fontes de configuração do Atlas Config.

Este módulo transforma fontes descobertas pelo `SourceLocator` (ou um arquivo
externo explícito) em um `Document` imutável.

Modos de carregamento:
    - properties → várias fontes nomeadas, mescladas chave a chave na ordem
      de declaração (a fonte declarada por último vence)
    - JSON       → exatamente uma fonte; ausência produz Document vazio
    - externo    → um único arquivo em caminho absoluto; formato pela
      extensão (.json, .yaml/.yml, .properties)

Princípios fundamentais:
    - Fonte ausente não é erro: degrada para Document vazio
    - Fonte malformada é erro fatal para o carregamento em curso
    - Nenhum Document parcial é devolvido

Invariantes:
    - A precedência segue a ordem de declaração dos nomes, nunca a ordem
      de descoberta no disco
    - O resultado é sempre um Document com raiz de objeto

Limites explícitos:
    - Não define merge entre múltiplos documentos JSON
    - Não observa modificações em disco (ver `reload`)
    - Não converte tipos (ver `resolution.accessors`)
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence, Union

import yaml  # PyYAML

from ..document import Document, DocumentKind, PropertiesSyntaxError, parse_properties
from ..errors import source_parse_failure, source_unreadable, unsupported_source_format
from ..exceptions import SourceParseError, SourceReadError, UnsupportedSourceFormatError
from ..sources import SourceLocation, SourceLocator

logger = logging.getLogger(__name__)


SUFFIX_KINDS = {
    ".json": DocumentKind.TREE,
    ".yaml": DocumentKind.TREE,
    ".yml": DocumentKind.TREE,
    ".properties": DocumentKind.FLAT,
}


class Loader(Protocol):
    """
    Contrato mínimo de um loader consumido pelo Reload Controller.

    - `load()` produz um Document novo a cada chamada
    - `watched_path` é o arquivo externo observado, ou None para fontes
      empacotadas (sem verificação de staleness)
    """

    watched_path: Optional[Path]

    def load(self) -> Document:
        ...

    def describe(self) -> str:
        ...


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _read(location: Union[SourceLocation, Path], source: str) -> str:
    display = location.display if isinstance(location, SourceLocation) else str(location)
    try:
        if isinstance(location, Path):
            return location.read_text(encoding="utf-8")
        return location.read_text()
    except UnicodeDecodeError as e:
        # conteúdo existe mas não é texto UTF-8: tratado como fonte malformada
        raise SourceParseError.from_payload(
            source_parse_failure(
                source=display,
                reason=f"conteúdo não é UTF-8 válido (byte {e.start}: {e.reason})",
            )
        ) from e
    except OSError as e:
        raise SourceReadError.from_payload(
            source_unreadable(source=source, location=display, reason=str(e))
        ) from e


def _check_keys(node: Any, *, source: str, path: str = "") -> None:
    """Rejeita chaves não-string (ex.: `true:` ou `1:` em YAML)."""
    if isinstance(node, dict):
        for key, value in node.items():
            if not isinstance(key, str):
                where = f"{path}.{key!r}" if path else repr(key)
                raise SourceParseError.from_payload(
                    source_parse_failure(
                        source=source,
                        reason=f"chave não-string {where} ({type(key).__name__})",
                    )
                )
            _check_keys(value, source=source, path=f"{path}.{key}" if path else key)
    elif isinstance(node, list):
        for item in node:
            _check_keys(item, source=source, path=path)


def _parse_tree(text: str, *, source: str, suffix: str) -> Dict[str, Any]:
    try:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(text)
        elif text.strip():
            data = json.loads(text)
        else:
            data = None
    except json.JSONDecodeError as e:
        raise SourceParseError.from_payload(
            source_parse_failure(source=source, reason=e.msg, line=e.lineno)
        ) from e
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        raise SourceParseError.from_payload(
            source_parse_failure(
                source=source,
                reason=str(e),
                line=mark.line + 1 if mark is not None else None,
            )
        ) from e

    # documento vazio -> objeto vazio
    if data is None:
        return {}

    if not isinstance(data, dict):
        raise SourceParseError.from_payload(
            source_parse_failure(
                source=source,
                reason=f"raiz deve ser objeto, recebido: {type(data).__name__}",
            )
        )
    _check_keys(data, source=source)
    return data


def _parse_flat(text: str, *, source: str) -> Dict[str, str]:
    try:
        return parse_properties(text, source=source)
    except PropertiesSyntaxError as e:
        raise SourceParseError.from_payload(
            source_parse_failure(source=source, reason=e.reason, line=e.line)
        ) from e


# ---------------------------------------------------------------------------
# Carregamento funcional
# ---------------------------------------------------------------------------

def load_properties(names: Sequence[str], locator: SourceLocator) -> Document:
    """
    Carrega e mescla fontes `.properties` na ordem de declaração.

    Política de merge:
        - cada fonte encontrada vira um mapa plano
        - mapas são aplicados na ordem em que `names` foi declarado
        - chave repetida: o valor da fonte declarada por último vence
        - fonte não encontrada é ignorada (registrada em log)

    Args:
        names (Sequence[str]): Nomes das fontes, em ordem de precedência crescente.
        locator (SourceLocator): Localizador usado para cada nome.

    Returns:
        Document: Document FLAT resultante (vazio se nada foi encontrado).

    Raises:
        SourceParseError: Se alguma fonte encontrada estiver malformada.
        SourceReadError: Se alguma fonte encontrada deixar de ser legível.
    """
    merged: Dict[str, str] = {}
    applied: List[str] = []

    for name in names:
        location = locator.locate(name)
        if location is None:
            logger.info("Arquivo de properties não encontrado: %s", name)
            continue

        entries = _parse_flat(_read(location, name), source=location.display)
        merged.update(entries)
        applied.append(location.display)
        logger.debug("Properties carregadas de %s (%d chaves)", location.display, len(entries))

    return Document.flat(merged, sources=applied)


def load_json(name: str, locator: SourceLocator) -> Document:
    """Carrega um único documento JSON empacotado; ausente -> objeto vazio."""
    location = locator.locate(name)
    if location is None:
        logger.warning("Arquivo JSON de configuração não encontrado: %s, usando configuração vazia", name)
        return Document.empty(DocumentKind.TREE)

    data = _parse_tree(_read(location, name), source=location.display, suffix=".json")
    return Document.tree(data, sources=[location.display])


def _suffix_kind(path: Path) -> DocumentKind:
    suffix = path.suffix.lower()
    if suffix not in SUFFIX_KINDS:
        raise UnsupportedSourceFormatError.from_payload(
            unsupported_source_format(source=str(path), suffix=suffix, supported=tuple(SUFFIX_KINDS))
        )
    return SUFFIX_KINDS[suffix]


def load_external(path: Union[str, Path]) -> Document:
    """Carrega um arquivo externo; ausente -> Document vazio do tipo correspondente."""
    file_path = Path(path)
    kind = _suffix_kind(file_path)

    if not file_path.exists():
        logger.warning("Arquivo de configuração externo não encontrado: %s, usando configuração vazia", file_path)
        return Document.empty(kind)

    text = _read(file_path, str(file_path))
    if kind is DocumentKind.FLAT:
        return Document.flat(_parse_flat(text, source=str(file_path)), sources=[str(file_path)])

    data = _parse_tree(text, source=str(file_path), suffix=file_path.suffix.lower())
    return Document.tree(data, sources=[str(file_path)])


# ---------------------------------------------------------------------------
# Loaders (objetos consumidos pelo handle)
# ---------------------------------------------------------------------------

class PropertiesLoader:
    """Fontes `.properties` empacotadas, mescladas por ordem de declaração."""

    watched_path: Optional[Path] = None

    def __init__(self, names: Sequence[str], locator: SourceLocator) -> None:
        self.names = tuple(names)
        self.locator = locator

    def load(self) -> Document:
        return load_properties(self.names, self.locator)

    def describe(self) -> str:
        return "properties:" + ",".join(self.names)


class JsonLoader:
    """Documento JSON único encontrado pelas raízes de busca."""

    watched_path: Optional[Path] = None

    def __init__(self, name: str, locator: SourceLocator) -> None:
        self.name = name
        self.locator = locator

    def load(self) -> Document:
        return load_json(self.name, self.locator)

    def describe(self) -> str:
        return f"json:{self.name}"


class ExternalFileLoader:
    """Arquivo externo em caminho absoluto, observado pelo Reload Controller."""

    locator: Optional[SourceLocator] = None

    def __init__(self, path: Union[str, Path]) -> None:
        # normpath colapsa `..` sem seguir links: a identidade é o caminho declarado
        self.path = Path(os.path.normpath(Path(path).expanduser().absolute()))
        _suffix_kind(self.path)
        self.watched_path: Optional[Path] = self.path

    def load(self) -> Document:
        return load_external(self.path)

    def describe(self) -> str:
        return f"external:{self.path}"
