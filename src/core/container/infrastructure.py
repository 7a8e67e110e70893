"""Infrastructure dependency factories.

- Logging (structlog console adapter): application-scoped singleton
- Database (SQLAlchemy async) and Redis clients: built per engine, owned
  and closed by the AuthorizationEngine that uses them
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import Settings, settings
from src.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from redis.asyncio import Redis

    from src.domain.protocols.logger_protocol import LoggerProtocol


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    )


def build_database(config: Settings) -> Database:
    """Create a Database for the SQL policy store.

    Raises:
        ValueError: If no database_url is configured.
    """
    if not config.database_url:
        raise ValueError("DATABASE_URL is required for the sql policy store")
    return Database(database_url=config.database_url, echo=config.db_echo)


def build_redis(config: Settings) -> "Redis | None":
    """Create a Redis client for change notification, or None if disabled."""
    if not config.redis_url:
        return None

    from redis.asyncio import ConnectionPool, Redis

    pool = ConnectionPool.from_url(
        config.redis_url,
        max_connections=10,
        decode_responses=False,
        socket_connect_timeout=5,
        retry_on_timeout=True,
        socket_keepalive=True,
    )
    return Redis(connection_pool=pool)
