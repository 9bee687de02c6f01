# tests/integrations/test_pool_settings.py
"""
Testes dos parâmetros de pool de conexões.

Os testes asseguram que:
- chaves presentes são lidas com o tipo correto
- chaves ausentes ou inválidas usam os defaults do pool
- identidade da conexão (url, usuário, senha, driver) não tem default
- a senha não aparece em `repr` nem em `to_dict()` por padrão
"""

import pytest

try:
    from atlas_config.core.document import Document
    from atlas_config.core.handle import ConfigHandle
    from atlas_config.integrations.pool import PoolSettings
except Exception as e:  # noqa: BLE001
    PoolSettings = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing pool integration. Implement:\n"
            "- src/atlas_config/integrations/pool.py (PoolSettings)\n"
            f"Import error: {_IMPORT_ERR}"
        )


class _StaticLoader:
    watched_path = None

    def __init__(self, document):
        self._document = document

    def load(self):
        return self._document

    def describe(self):
        return "static"


def test_defaults_when_nothing_configured():
    _require_imports()
    handle = ConfigHandle(_StaticLoader(Document.flat({})))
    pool = PoolSettings.from_handle(handle)

    assert pool.url is None
    assert pool.max_size == 10
    assert pool.min_idle == 2
    assert pool.connection_timeout_ms == 30_000
    assert pool.idle_timeout_ms == 600_000
    assert pool.max_lifetime_ms == 1_800_000
    assert pool.leak_detection_threshold_ms == 60_000
    assert pool.pool_name == "atlas-pool"


def test_reads_flat_properties():
    _require_imports()
    doc = Document.flat(
        {
            "db.url": "jdbc:postgresql://db:5432/app",
            "db.username": "app",
            "db.password": "s3cret",
            "db.driver": "org.postgresql.Driver",
            "db.pool.maxSize": "20",
            "db.pool.minIdle": "not-a-number",
            "db.pool.maxLifetime": "3600000",
            "db.pool.leakDetectionThreshold": "15000",
            "db.pool.name": "orders",
        }
    )
    pool = PoolSettings.from_handle(ConfigHandle(_StaticLoader(doc)))

    assert pool.url == "jdbc:postgresql://db:5432/app"
    assert pool.username == "app"
    assert pool.driver == "org.postgresql.Driver"
    assert pool.max_size == 20
    assert pool.min_idle == 2
    assert pool.max_lifetime_ms == 3_600_000
    assert pool.leak_detection_threshold_ms == 15_000
    assert pool.pool_name == "orders"

    assert "s3cret" not in repr(pool)
    assert pool.to_dict()["password"] == "***"
    assert pool.to_dict(mask_password=False)["password"] == "s3cret"


def test_reads_tree_with_custom_prefix():
    _require_imports()
    doc = Document.tree({"database": {"url": "jdbc:h2:mem", "pool": {"maxSize": 4}}})
    pool = PoolSettings.from_handle(ConfigHandle(_StaticLoader(doc)), prefix="database")
    assert pool.url == "jdbc:h2:mem"
    assert pool.max_size == 4


def test_connection_identity_has_no_default():
    _require_imports()
    pool = PoolSettings.from_handle(ConfigHandle(_StaticLoader(Document.tree({}))))
    assert (pool.url, pool.username, pool.password, pool.driver) == (None, None, None, None)
    assert pool.to_dict()["password"] is None
