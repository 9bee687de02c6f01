# src/atlas_config/core/settings/loader.py
"""
Loader de settings do motor do Atlas Config.

Os settings efetivos são resolvidos em camadas, da menor para a maior
precedência:
    1. defaults embutidos (`DEFAULT_SETTINGS`)
    2. arquivo de defaults do projeto (opcional; obrigatório se informado)
    3. arquivo local de overrides (opcional; ignorado se não existir)
    4. variáveis de ambiente com prefixo (`ATLAS_CONFIG_` por padrão)

Variáveis de ambiente reconhecidas (prefixo omitido):
    - SEARCH_PATH     → `search.directories`, separado por `os.pathsep`
    - RESOURCE_ROOTS  → `search.resource_roots`, separado por vírgula;
      cada item é `pacote` ou `pacote/prefixo`
    - PROPERTY_FILES  → `sources.property_files`, separado por vírgula
    - JSON_FILE       → `sources.json_file`
    - STRICT          → `access.strict` (`1`, `true`, `yes`, `on`)

Princípios fundamentais:
    - A resolução é determinística para a mesma entrada
    - Erros estruturais são fatais
    - O hash canônico do resultado acompanha os settings

Limites explícitos:
    - Não carrega configuração da aplicação (ver `loading`)
    - Não observa mudanças nos arquivos de settings
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml  # PyYAML

from ..document import compute_config_hash
from .errors import (
    InvalidSettingsRootTypeError,
    SettingsNotFoundError,
    UnsupportedSettingsFormatError,
)
from .merge import deep_merge
from .model import DEFAULT_SETTINGS, EngineSettings

logger = logging.getLogger(__name__)

DEFAULT_ENV_PREFIX = "ATLAS_CONFIG_"

_TRUTHY = {"1", "true", "yes", "on", "y"}


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo de settings e valida sua estrutura básica.

    Decisões arquiteturais:
        - O arquivo deve existir no momento do carregamento
        - O conteúdo raiz deve ser um dicionário (`dict`)
        - Arquivos vazios são interpretados como dicionários vazios

    Raises:
        SettingsNotFoundError: Se o arquivo não existir.
        UnsupportedSettingsFormatError: Se o formato não for suportado.
        InvalidSettingsRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    if not path.exists():
        raise SettingsNotFoundError(f"Arquivo de settings não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedSettingsFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidSettingsRootTypeError(
            f"Settings root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def _split(raw: str, sep: str) -> list:
    return [part.strip() for part in raw.split(sep) if part.strip()]


def env_overrides(environ: Mapping[str, str], prefix: str = DEFAULT_ENV_PREFIX) -> Dict[str, Any]:
    """Traduz variáveis de ambiente com prefixo para um dict de overrides."""
    overrides: Dict[str, Any] = {}

    def section(name: str) -> Dict[str, Any]:
        return overrides.setdefault(name, {})

    if f"{prefix}SEARCH_PATH" in environ:
        section("search")["directories"] = _split(environ[f"{prefix}SEARCH_PATH"], os.pathsep)

    if f"{prefix}RESOURCE_ROOTS" in environ:
        roots = []
        for item in _split(environ[f"{prefix}RESOURCE_ROOTS"], ","):
            anchor, _, prefix_dir = item.partition("/")
            roots.append({"anchor": anchor, "prefixes": [prefix_dir]})
        section("search")["resource_roots"] = roots

    if f"{prefix}PROPERTY_FILES" in environ:
        section("sources")["property_files"] = _split(environ[f"{prefix}PROPERTY_FILES"], ",")

    if f"{prefix}JSON_FILE" in environ:
        section("sources")["json_file"] = environ[f"{prefix}JSON_FILE"].strip()

    if f"{prefix}STRICT" in environ:
        section("access")["strict"] = environ[f"{prefix}STRICT"].strip().lower() in _TRUTHY

    return overrides


def load_settings(
    *,
    defaults_path: Optional[str] = None,
    local_path: Optional[str] = None,
    env_prefix: Optional[str] = DEFAULT_ENV_PREFIX,
    environ: Optional[Mapping[str, str]] = None,
) -> EngineSettings:
    """
    Carrega e resolve os settings efetivos do motor.

    Política de resolução:
        - defaults embutidos sempre formam a base
        - `defaults_path`, quando informado, deve existir
        - `local_path`, quando informado e existente, sobrescreve
        - variáveis de ambiente têm a maior precedência
        - `env_prefix=None` desliga a leitura do ambiente

    Args:
        defaults_path (Optional[str]): Arquivo de defaults do projeto.
        local_path (Optional[str]): Arquivo opcional de overrides locais.
        env_prefix (Optional[str]): Prefixo das variáveis de ambiente.
        environ (Optional[Mapping[str, str]]): Ambiente a usar (padrão: `os.environ`).

    Returns:
        EngineSettings: Settings validados, com `settings_hash` preenchido.

    Raises:
        SettingsNotFoundError: Se `defaults_path` não existir.
        UnsupportedSettingsFormatError: Se o formato do arquivo não for suportado.
        InvalidSettingsRootTypeError: Se o conteúdo não for um dicionário.
        SettingsTypeConflictError: Se ocorrer conflito estrutural durante o merge.
        InvalidSettingsValueError: Se o resultado final tiver valores inválidos.
    """

    effective: Dict[str, Any] = deep_merge({}, DEFAULT_SETTINGS)

    if defaults_path is not None:
        effective = deep_merge(effective, _load_file(Path(defaults_path)))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _load_file(local_file))
        else:
            logger.debug("Settings locais ausentes, ignorados: %s", local_file)

    if env_prefix is not None:
        overrides = env_overrides(os.environ if environ is None else environ, env_prefix)
        if overrides:
            effective = deep_merge(effective, overrides)

    settings = EngineSettings.from_mapping(effective, settings_hash=compute_config_hash(effective))
    logger.debug("Settings do motor resolvidos (hash=%s)", settings.settings_hash[:12])
    return settings
