"""
Builtin service kinds, keyed by their identifier.
"""
from typing import Dict, Type
from .base import ServiceBuilder
from .apache import ApacheService
from .nginx import NginxService
from .php import PhpService
from .database import MysqlService, MariadbService, PostgresService
from .cache import RedisService, MemcacheService

SERVICE_BUILDERS: Dict[str, Type[ServiceBuilder]] = {
    builder.KIND: builder
    for builder in (
        ApacheService,
        NginxService,
        PhpService,
        MysqlService,
        MariadbService,
        PostgresService,
        RedisService,
        MemcacheService,
    )
}
