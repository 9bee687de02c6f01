# src/atlas_config/integrations/pool.py
"""
Parâmetros de pool de conexões lidos do Atlas Config.

`PoolSettings.from_handle` traduz chaves `<prefixo>.*` em parâmetros de
pool, usando os accessors tipados (ausência ou valor inválido → default).

Chaves reconhecidas (prefixo `db` por padrão):
    - url, username, password, driver
    - pool.maxSize, pool.minIdle
    - pool.connectionTimeout, pool.idleTimeout, pool.maxLifetime,
      pool.leakDetectionThreshold (ms)
    - pool.name

Decisões arquiteturais:
    - Os parâmetros numéricos seguem os defaults históricos do pool
      (10 / 2 / 30000 / 600000 / 1800000 / 60000)
    - Identidade da conexão (url, username, password, driver) não tem
      default: credenciais embutidas no código não são fornecidas, e o
      chamador decide o que fazer com `None`

Limites explícitos:
    - Não abre conexões nem cria o pool
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from ..core.handle import ConfigHandle


@dataclass(frozen=True)
class PoolSettings:
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)
    driver: Optional[str] = None
    max_size: int = 10
    min_idle: int = 2
    connection_timeout_ms: int = 30_000
    idle_timeout_ms: int = 600_000
    max_lifetime_ms: int = 1_800_000
    leak_detection_threshold_ms: int = 60_000
    pool_name: str = "atlas-pool"

    @classmethod
    def from_handle(cls, handle: ConfigHandle, prefix: str = "db") -> "PoolSettings":
        defaults = cls()

        def key(name: str) -> str:
            return f"{prefix}.{name}"

        return cls(
            url=handle.get_string(key("url")),
            username=handle.get_string(key("username")),
            password=handle.get_string(key("password")),
            driver=handle.get_string(key("driver")),
            max_size=handle.get_int(key("pool.maxSize"), defaults.max_size),
            min_idle=handle.get_int(key("pool.minIdle"), defaults.min_idle),
            connection_timeout_ms=handle.get_long(key("pool.connectionTimeout"), defaults.connection_timeout_ms),
            idle_timeout_ms=handle.get_long(key("pool.idleTimeout"), defaults.idle_timeout_ms),
            max_lifetime_ms=handle.get_long(key("pool.maxLifetime"), defaults.max_lifetime_ms),
            leak_detection_threshold_ms=handle.get_long(
                key("pool.leakDetectionThreshold"), defaults.leak_detection_threshold_ms
            ),
            pool_name=handle.get_string(key("pool.name"), defaults.pool_name),
        )

    def to_dict(self, *, mask_password: bool = True) -> Dict[str, Any]:
        data = asdict(self)
        if mask_password and data["password"] is not None:
            data["password"] = "***"
        return data
