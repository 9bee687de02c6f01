# tests/conftest.py
"""
Fixtures compartilhados para testes do Atlas Config.

Este módulo define fixtures reutilizáveis que fornecem:
- conteúdos de configuração mínimos e determinísticos (JSON, YAML, properties)
- escrita de arquivos de configuração em diretório temporário
- avanço controlado de mtime para testes de hot-reload
- um Loader dummy, com contagem de chamadas, para testes do Reload Controller
- isolamento do registro padrão do processo

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Todo I/O acontece sob `tmp_path`
    - O Loader dummy utiliza duck typing em vez de herança
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture lê arquivos fora de `tmp_path`
    - Nenhuma fixture depende de variáveis de ambiente reais
    - O registro padrão é restaurado ao fim de cada teste que o usa

Limites explícitos:
    - Não substituir testes de integração
    - Não conter lógica condicional complexa
"""

import os
from pathlib import Path

import pytest


# =====================================================
# Conteúdos de configuração
# =====================================================

@pytest.fixture
def pool_config_json() -> str:
    """
    Fixture que fornece um JSON de configuração com pool de banco de dados.

    Representa o cenário canônico de acesso tipado:
    - `database.pool.maxSize` presente (10)
    - `database.pool.minSize` ausente (default do chamador)
    - `database.cache` ausente

    Returns:
        str: Conteúdo JSON.
    """
    return """\
{
  "app": {"name": "atlas", "debug": true, "ratio": 0.75},
  "database": {
    "url": "jdbc:postgresql://localhost:5432/atlas",
    "pool": {"maxSize": 10, "timeoutMs": "30000"}
  },
  "features": ["a", "b"],
  "nothing": null
}
"""


@pytest.fixture
def settings_defaults_yaml() -> str:
    """Settings de projeto (defaults) do motor em YAML."""
    return """\
sources:
  property_files: [db.properties, app.properties]
  json_file: config.json
search:
  directories: [conf, .]
access:
  strict: false
"""


@pytest.fixture
def settings_local_yaml() -> str:
    """Overrides locais dos settings do motor."""
    return """\
sources:
  json_file: local.json
access:
  strict: true
"""


# =====================================================
# Filesystem
# =====================================================

@pytest.fixture
def write_file(tmp_path: Path):
    """
    Fixture factory que escreve arquivos de configuração sob `tmp_path`.

    Uso:
        path = write_file("conf/app.properties", "app.name=Alpha\\n")

    Returns:
        Callable[[str, str], Path]: função que cria diretórios intermediários,
        escreve o conteúdo em UTF-8 e devolve o caminho absoluto.
    """

    def _write(relative: str, content: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def bump_mtime():
    """
    Fixture que avança o mtime de um arquivo de forma determinística.

    Sistemas de arquivos com resolução grosseira de mtime podem manter o
    mesmo valor após uma reescrita rápida; os testes de hot-reload usam
    esta função para garantir que o mtime observado mude.

    Returns:
        Callable[[Path, int], int]: recebe o caminho e os segundos a avançar,
        devolve o novo `st_mtime_ns`.
    """

    def _bump(path: Path, seconds: int = 5) -> int:
        current = path.stat().st_mtime_ns
        new = current + seconds * 1_000_000_000
        os.utime(path, ns=(new, new))
        return new

    return _bump


# =====================================================
# Loader dummy (Reload Controller)
# =====================================================

@pytest.fixture
def DummyLoader():
    """
    Fixture factory que fornece uma implementação mínima e duck-typed de Loader.

    A classe retornada:
    - devolve, a cada `load()`, o próximo item da sequência recebida
    - itens que são exceções são levantados em vez de devolvidos
    - o último item é repetido quando a sequência se esgota
    - conta as chamadas em `calls`

    Decisões arquiteturais:
        - Nenhum I/O: o Document é construído em memória
        - `watched_path` é opcional, permitindo simular arquivo externo

    Returns:
        type: Classe _DummyLoader que pode ser instanciada pelos testes.
    """
    from atlas_config.core.document import Document

    class _DummyLoader:
        def __init__(self, *items, watched_path=None):
            self._items = [
                Document.tree(item) if isinstance(item, dict) else item for item in items
            ] or [Document.empty()]
            self.watched_path = watched_path
            self.calls = 0

        def load(self):
            item = self._items[min(self.calls, len(self._items) - 1)]
            self.calls += 1
            if isinstance(item, BaseException):
                raise item
            return item

        def describe(self):
            return "dummy"

    return _DummyLoader


# =====================================================
# Registro padrão
# =====================================================

@pytest.fixture
def isolated_default_registry(monkeypatch):
    """
    Isola o registro padrão do processo durante o teste.

    Substitui a guarda init-once e a instância global do módulo de
    registro por valores novos; `monkeypatch` restaura os originais ao
    fim do teste.
    """
    from atlas_config.core.handle import registry
    from atlas_config.core.handle.once import InitOnce

    monkeypatch.setattr(registry, "_default_once", InitOnce())
    monkeypatch.setattr(registry, "_default", None)
    return registry
