# src/atlas_config/core/settings/model.py
"""
Settings efetivos do motor do Atlas Config.

`EngineSettings` descreve **onde** e **o quê** procurar:
    - nomes dos arquivos `.properties`, em ordem de precedência crescente
    - nome do documento JSON empacotado
    - raízes de recurso (pacote + prefixos), da mais específica para a mais genérica
    - diretórios do filesystem, em ordem
    - modo estrito dos accessors

Os defaults embutidos reproduzem o comportamento histórico: `db.properties`
seguido de `app.properties`, `config.json`, diretório corrente.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple

from ..sources import ResourceRoot, SourceLocator
from .errors import InvalidSettingsValueError


DEFAULT_SETTINGS: Dict[str, Any] = {
    "sources": {
        "property_files": ["db.properties", "app.properties"],
        "json_file": "config.json",
    },
    "search": {
        "resource_roots": [],
        "directories": ["."],
    },
    "access": {
        "strict": False,
    },
}


def _str_list(value: Any, where: str) -> Tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
        raise InvalidSettingsValueError(f"'{where}' deve ser uma lista de strings não vazias")
    return tuple(value)


def _resource_root(value: Any, where: str) -> ResourceRoot:
    if isinstance(value, str) and value:
        return ResourceRoot(value)
    if isinstance(value, Mapping) and isinstance(value.get("anchor"), str) and value["anchor"]:
        prefixes = value.get("prefixes", [""])
        if not isinstance(prefixes, list) or not all(isinstance(p, str) for p in prefixes):
            raise InvalidSettingsValueError(f"'{where}.prefixes' deve ser uma lista de strings")
        return ResourceRoot(value["anchor"], tuple(prefixes) or ("",))
    raise InvalidSettingsValueError(
        f"'{where}' deve ser um nome de pacote ou {{anchor, prefixes}}"
    )


@dataclass(frozen=True)
class EngineSettings:
    """
    Settings imutáveis e validados do motor.

    Campos:
    - property_files: arquivos `.properties` (o último declarado vence)
    - json_file: documento JSON único buscado nas raízes
    - resource_roots: raízes de recurso em ordem de busca
    - search_dirs: diretórios do filesystem em ordem de busca
    - strict: accessors levantam `ConversionError` em vez de usar o default
    - settings_hash: hash canônico do mapeamento que originou estes settings
    """

    property_files: Tuple[str, ...] = ("db.properties", "app.properties")
    json_file: str = "config.json"
    resource_roots: Tuple[ResourceRoot, ...] = ()
    search_dirs: Tuple[str, ...] = (".",)
    strict: bool = False
    settings_hash: str = field(default="", compare=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, settings_hash: str = "") -> "EngineSettings":
        sources = data.get("sources") or {}
        search = data.get("search") or {}
        access = data.get("access") or {}

        json_file = sources.get("json_file", "config.json")
        if not isinstance(json_file, str) or not json_file:
            raise InvalidSettingsValueError("'sources.json_file' deve ser uma string não vazia")

        strict = access.get("strict", False)
        if not isinstance(strict, bool):
            raise InvalidSettingsValueError("'access.strict' deve ser booleano")

        roots = search.get("resource_roots", [])
        if not isinstance(roots, list):
            raise InvalidSettingsValueError("'search.resource_roots' deve ser uma lista")

        return cls(
            property_files=_str_list(sources.get("property_files", []), "sources.property_files"),
            json_file=json_file,
            resource_roots=tuple(
                _resource_root(r, f"search.resource_roots[{i}]") for i, r in enumerate(roots)
            ),
            search_dirs=_str_list(search.get("directories", []), "search.directories"),
            strict=strict,
            settings_hash=settings_hash,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sources": {
                "property_files": list(self.property_files),
                "json_file": self.json_file,
            },
            "search": {
                "resource_roots": [
                    {"anchor": r.anchor, "prefixes": list(r.prefixes)} for r in self.resource_roots
                ],
                "directories": list(self.search_dirs),
            },
            "access": {"strict": self.strict},
        }

    def build_locator(self) -> SourceLocator:
        return SourceLocator(resource_roots=self.resource_roots, search_dirs=self.search_dirs)
