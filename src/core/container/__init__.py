"""Container module - Centralized dependency injection.

Composition root for the authorization service:
- infrastructure: logger singleton, database and Redis builders
- events: event bus with policy change subscriptions
- authorization: engine assembly, seeding, request-path dependencies
- handlers: command/query handler factories bound to the engine
"""

from src.core.container.authorization import (
    build_authorization_engine,
    get_access_guard,
    get_authorization_engine,
    get_caller_extractor,
    seed_authorization_engine,
)
from src.core.container.events import build_event_bus
from src.core.container.infrastructure import build_database, build_redis, get_logger

__all__ = [
    "build_authorization_engine",
    "build_database",
    "build_event_bus",
    "build_redis",
    "get_access_guard",
    "get_authorization_engine",
    "get_caller_extractor",
    "get_logger",
    "seed_authorization_engine",
]
