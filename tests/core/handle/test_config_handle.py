# tests/core/handle/test_config_handle.py
"""
Testes do ConfigHandle.

Este módulo valida a superfície de acesso usada pelos chamadores:
inicialização preguiçosa, accessors tipados, hot-reload no caminho de
leitura e introspecção.

Os testes asseguram que:
- a configuração só é carregada no primeiro acesso, e uma única vez
- chave inválida é rejeitada antes de qualquer carregamento
- leituras de arquivo externo observam mudanças após o mtime avançar
- reload explícito é idempotente em relação ao conteúdo
- `get_node` não vaza estado mutável
- modo estrito do handle propaga `ConversionError`

Decisões arquiteturais:
    - Handles são construídos diretamente, sem o registro padrão
"""

import logging
import os
from datetime import datetime
from pathlib import Path

import pytest

try:
    from atlas_config.core.exceptions import (
        ConfigInitializationError,
        ConversionError,
        InvalidKeyError,
    )
    from atlas_config.core.handle import ConfigHandle
    from atlas_config.core.loading import ExternalFileLoader, JsonLoader, PropertiesLoader
    from atlas_config.core.reload import ReloadState
    from atlas_config.core.sources import SourceLocator
except Exception as e:  # noqa: BLE001
    ConfigHandle = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o ConfigHandle esteja disponível para os testes.

    Falha de forma explícita quando `atlas_config.core.handle` não pode ser
    importado, em vez de gerar NameError nos testes seguintes.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing config handle. Implement:\n"
            "- src/atlas_config/core/handle/handle.py (ConfigHandle)\n"
            f"Import error: {_IMPORT_ERR}"
        )


@pytest.fixture
def external_handle(write_file, pool_config_json):
    path = write_file("ext/config.json", pool_config_json)
    return ConfigHandle(ExternalFileLoader(path)), path


def test_lazy_single_initialization(DummyLoader):
    _require_imports()
    loader = DummyLoader({"a": {"b": "1"}})
    handle = ConfigHandle(loader)
    assert not handle.initialized
    assert handle.state is ReloadState.UNINITIALIZED
    assert loader.calls == 0

    assert handle.get_int("a.b", 0) == 1
    assert handle.get_string("a.b") == "1"
    assert handle.contains_key("a")
    assert loader.calls == 1
    assert handle.initialized


def test_pool_scenario_through_handle(external_handle):
    """
    Verifica o cenário canônico de leitura pelo handle externo.

    - `database.pool.maxSize` → 10
    - `database.pool.minSize` ausente → default 5
    - `database.pool` contido; `database.cache` não
    """
    _require_imports()
    handle, _ = external_handle
    assert handle.get_int("database.pool.maxSize", 5) == 10
    assert handle.get_int("database.pool.minSize", 5) == 5
    assert handle.contains_key("database.pool") is True
    assert handle.contains_key("database.cache") is False
    assert handle.get_long("database.pool.timeoutMs", 0) == 30000
    assert handle.get_double("app.ratio") == 0.75
    assert handle.get_bool("app.debug") is True


@pytest.mark.parametrize("bad", [None, "", "  "])
def test_invalid_key_rejected_before_loading(DummyLoader, bad):
    _require_imports()
    loader = DummyLoader({"a": 1})
    handle = ConfigHandle(loader)

    for accessor in (
        handle.get_string,
        handle.get_int,
        handle.get_long,
        handle.get_double,
        handle.get_bool,
        handle.contains_key,
        handle.get_node,
    ):
        with pytest.raises(InvalidKeyError):
            accessor(bad)

    assert loader.calls == 0


def test_hot_reload_on_read(external_handle, bump_mtime):
    """
    Verifica que uma leitura após mudança de mtime observa o novo conteúdo.

    A contagem de carregamentos prova que o reload acontece exatamente uma
    vez por mudança e nunca em leituras sem mudança.
    """
    _require_imports()
    handle, path = external_handle
    assert handle.get_int("database.pool.maxSize", 5) == 10
    assert handle.load_count == 1

    path.write_text('{"database": {"pool": {"maxSize": 25}}}', encoding="utf-8")
    bump_mtime(path)

    assert handle.get_int("database.pool.maxSize", 5) == 25
    assert handle.load_count == 2
    assert handle.get_int("database.pool.maxSize", 5) == 25
    assert handle.load_count == 2


def test_explicit_reload_is_idempotent(external_handle):
    _require_imports()
    handle, _ = external_handle
    before = handle.as_dict()
    fingerprint = handle.get_document().fingerprint

    assert handle.reload() is True
    assert handle.reload() is True
    assert handle.as_dict() == before
    assert handle.get_document().fingerprint == fingerprint
    assert handle.snapshot.generation == 3
    assert handle.describe()["generation"] == 3


def test_reload_before_first_access_initializes(DummyLoader):
    _require_imports()
    loader = DummyLoader({"a": 1})
    handle = ConfigHandle(loader)
    assert handle.reload() is True
    assert handle.initialized
    assert loader.calls == 1


def test_get_node_roundtrip_does_not_leak(external_handle):
    _require_imports()
    handle, _ = external_handle
    pool = handle.get_node("database.pool")
    assert pool == {"maxSize": 10, "timeoutMs": "30000"}

    pool["maxSize"] = 1
    assert handle.get_int("database.pool.maxSize", 5) == 10
    assert handle.get_node("database.missing") is None

    data = handle.as_dict()
    data["database"]["pool"]["maxSize"] = 2
    assert handle.get_node("database.pool")["maxSize"] == 10


def test_initialization_error_propagates(write_file):
    _require_imports()
    path = write_file("ext/broken.json", '{"a": ')
    handle = ConfigHandle(ExternalFileLoader(path))

    with pytest.raises(ConfigInitializationError) as exc:
        handle.get_string("a")
    assert exc.value.details["cause"]["type"] == "SOURCE_PARSE_FAILURE"
    assert not handle.initialized

    path.write_text('{"a": "ok"}', encoding="utf-8")
    assert handle.get_string("a") == "ok"


def test_strict_handle_raises_conversion_error(DummyLoader):
    _require_imports()
    handle = ConfigHandle(DummyLoader({"n": "abc"}), strict=True)
    with pytest.raises(ConversionError):
        handle.get_int("n", 0)


def test_lenient_handle_logs_conversion_failure(DummyLoader, caplog):
    _require_imports()
    handle = ConfigHandle(DummyLoader({"n": "abc"}))
    with caplog.at_level(logging.WARNING, logger="atlas_config.core.resolution.accessors"):
        assert handle.get_int("n", 4) == 4
    assert caplog.records[0].atlas_error["details"]["key"] == "n"


def test_properties_handle(write_file, tmp_path: Path):
    """
    Verifica o handle de properties com dois arquivos em ordem de declaração.

    `app.name` aparece nos dois; o arquivo declarado por último vence.
    """
    _require_imports()
    write_file("app.properties", "app.name=Alpha\napp.port=8080\n")
    write_file("override.properties", "app.name=Beta\n")
    locator = SourceLocator(search_dirs=[tmp_path])
    handle = ConfigHandle(PropertiesLoader(["app.properties", "override.properties"], locator))

    assert handle.get_string("app.name") == "Beta"
    assert handle.get_int("app.port", 0) == 8080
    assert handle.is_external is False
    assert handle.config_file_path is None
    assert handle.last_modified is None
    assert handle.can_find_resource("app.properties")
    assert not handle.can_find_resource("missing.properties")


def test_introspection_of_external_handle(external_handle):
    _require_imports()
    handle, path = external_handle
    handle.initialize()

    assert handle.is_external is True
    assert handle.config_file_path == str(path)
    assert isinstance(handle.last_modified, datetime)
    assert handle.can_find_resource("config.json") is False

    info = handle.describe()
    assert info["identity"] == f"external:{path}"
    assert info["state"] == "loaded"
    assert info["sources"] == [str(path)]
    assert info["search_order"] is None
    assert len(info["fingerprint"]) == 64


def test_json_handle_with_missing_resource_is_empty(tmp_path: Path):
    _require_imports()
    handle = ConfigHandle(JsonLoader("config.json", SourceLocator(search_dirs=[tmp_path])))
    assert handle.get_string("anything", "d") == "d"
    assert handle.as_dict() == {}
    assert handle.describe()["search_order"]["search_dirs"] == [str(tmp_path)]


def test_invalid_utf8_rewrite_keeps_serving_previous_values(external_handle, bump_mtime):
    """
    Verifica que uma reescrita com bytes fora de UTF-8 não chega ao chamador.

    O accessor continua devolvendo o valor do snapshot anterior; quando o
    arquivo volta a ser válido, o próximo acesso recarrega.
    """
    _require_imports()
    handle, path = external_handle
    assert handle.get_int("database.pool.maxSize", 5) == 10

    path.write_bytes(b'{"database": {"pool": {"maxSize": "\xe9"}}}')
    bump_mtime(path)
    assert handle.get_int("database.pool.maxSize", 5) == 10
    assert handle.state is ReloadState.LOADED

    path.write_text('{"database": {"pool": {"maxSize": 30}}}', encoding="utf-8")
    bump_mtime(path)
    assert handle.get_int("database.pool.maxSize", 5) == 30


def test_invalid_utf8_at_first_access_is_initialization_error(tmp_path: Path):
    _require_imports()
    path = tmp_path / "config.json"
    path.write_bytes(b'{"a": {"b": "\xe9"}}')
    handle = ConfigHandle(ExternalFileLoader(path))

    with pytest.raises(ConfigInitializationError) as exc:
        handle.get_int("a.b", 5)
    assert exc.value.details["cause"]["type"] == "SOURCE_PARSE_FAILURE"


@pytest.mark.skipif(
    not hasattr(os, "geteuid") or os.geteuid() == 0,
    reason="permissões de arquivo não restringem leitura para root/non-POSIX",
)
def test_unreadable_external_file_at_first_access(write_file):
    _require_imports()
    path = write_file("ext/config.json", '{"a": 1}')
    handle = ConfigHandle(ExternalFileLoader(path))
    path.chmod(0)
    try:
        with pytest.raises(ConfigInitializationError) as exc:
            handle.get_int("a", 0)
    finally:
        path.chmod(0o644)

    assert exc.value.details["cause"]["type"] == "SOURCE_UNREADABLE"
    assert handle.get_int("a", 0) == 1
