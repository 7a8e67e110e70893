"""Authorization engine factories and FastAPI dependencies.

The engine is built once by the application lifespan and stored on
app.state.authorization. Request-path dependencies read it from there;
nothing here keeps a module-level engine.

Usage:
    # Lifespan
    engine = build_authorization_engine(settings)
    await seed_authorization_engine(engine, settings)
    await engine.start()
    app.state.authorization = engine

    # Endpoint
    async def list_rules(
        handler: ListPolicyRulesHandler = Depends(get_list_policy_rules_handler),
    ): ...
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from fastapi import Depends, Request

from src.core.config import Settings, get_settings
from src.core.container.events import build_event_bus
from src.core.container.infrastructure import build_database, build_redis, get_logger

if TYPE_CHECKING:
    from redis.asyncio import Redis

    from src.application.services.access_guard import AccessGuard
    from src.domain.protocols.logger_protocol import LoggerProtocol
    from src.domain.protocols.policy_store_protocol import PolicyStoreProtocol
    from src.infrastructure.authorization.engine import AuthorizationEngine
    from src.infrastructure.authorization.stores.casbin_seed import SeedResult
    from src.infrastructure.security.jwt_caller_extractor import JWTCallerExtractor


def build_authorization_engine(
    config: Settings | None = None,
    *,
    store: "PolicyStoreProtocol | None" = None,
    logger: "LoggerProtocol | None" = None,
    redis_client: "Redis | None" = None,
) -> "AuthorizationEngine":
    """Assemble an authorization engine from settings.

    Container owns the adapter choice: POLICY_STORE_BACKEND selects the
    store, REDIS_URL enables the notifier and a positive
    POLICY_REFRESH_INTERVAL_SECONDS enables polling.

    Args:
        config: Settings (default: get_settings()).
        store: Pre-built store, overriding the configured backend.
        logger: Logger (default: get_logger()).
        redis_client: Pre-built Redis client, overriding REDIS_URL.

    Returns:
        Engine, not yet started.
    """
    from src.infrastructure.authorization.enforcer import Enforcer
    from src.infrastructure.authorization.engine import AuthorizationEngine
    from src.infrastructure.authorization.policy_cache import PolicyCache
    from src.infrastructure.authorization.policy_refresher import PolicyRefresher
    from src.infrastructure.authorization.redis_notifier import (
        RedisPolicyChangeNotifier,
    )

    config = config or get_settings()
    logger = logger or get_logger()

    database = None
    if store is None:
        if config.policy_store_backend == "sql":
            from src.infrastructure.authorization.stores.sql_store import (
                SqlPolicyStore,
            )

            database = build_database(config)
            store = SqlPolicyStore(database)
        else:
            from src.infrastructure.authorization.stores.memory_store import (
                InMemoryPolicyStore,
            )

            store = InMemoryPolicyStore()

    cache = PolicyCache(
        store,
        logger,
        max_attempts=config.policy_refresh_max_attempts,
        backoff_seconds=config.policy_refresh_backoff_seconds,
    )

    redis_client = redis_client or build_redis(config)
    notifier = None
    if redis_client is not None:
        notifier = RedisPolicyChangeNotifier(
            redis_client, logger, channel=config.policy_change_channel
        )

    refresher = None
    if config.policy_refresh_interval_seconds > 0:
        refresher = PolicyRefresher(
            cache, logger, interval_seconds=config.policy_refresh_interval_seconds
        )

    return AuthorizationEngine(
        store=store,
        cache=cache,
        enforcer=Enforcer(cache),
        event_bus=build_event_bus(logger, notifier),
        logger=logger,
        notifier=notifier,
        refresher=refresher,
        database=database,
    )


async def seed_authorization_engine(
    engine: "AuthorizationEngine", config: Settings | None = None
) -> "SeedResult | None":
    """Prepare the store before the first refresh.

    Creates the schema outside production (SQL backend) and loads
    POLICY_SEED_FILE when configured.
    """
    from src.infrastructure.authorization.stores.casbin_seed import (
        load_casbin_policy_csv,
        seed_policy_store,
    )

    config = config or get_settings()
    if engine.database is not None and not config.is_production:
        await engine.database.create_all()

    if not config.policy_seed_file:
        return None

    result = await seed_policy_store(
        engine.store, load_casbin_policy_csv(config.policy_seed_file)
    )
    engine.logger.info(
        "policy_store_seeded",
        seed_file=config.policy_seed_file,
        rules_added=result.rules_added,
        assignments_added=result.assignments_added,
        edges_added=result.edges_added,
    )
    return result


# ============================================================================
# Request-Scoped Dependencies
# ============================================================================


def get_authorization_engine(request: Request) -> "AuthorizationEngine":
    """Return the engine owned by the running application.

    Raises:
        RuntimeError: If the lifespan has not started the engine.
    """
    engine: "AuthorizationEngine | None" = getattr(
        request.app.state, "authorization", None
    )
    if engine is None:
        raise RuntimeError(
            "Authorization engine not initialized. Start the app lifespan first."
        )
    return engine


@lru_cache()
def get_caller_extractor() -> "JWTCallerExtractor":
    """Get the JWT caller extractor singleton (app-scoped)."""
    from src.infrastructure.security.jwt_caller_extractor import JWTCallerExtractor

    config = get_settings()
    return JWTCallerExtractor(
        secret_key=config.jwt_secret_key,
        algorithm=config.jwt_algorithm,
        domain_claim=config.jwt_domain_claim,
    )


def get_access_guard(
    engine: "AuthorizationEngine" = Depends(get_authorization_engine),
) -> "AccessGuard":
    """Get AccessGuard bound to the application's engine.

    Permission metadata comes from the route registry, resolved once at
    import time.
    """
    from src.application.services.access_guard import AccessGuard
    from src.presentation.routers.api.v1.routes.permissions import (
        get_permission_metadata,
    )

    return AccessGuard(
        extractor=get_caller_extractor(),
        metadata=get_permission_metadata(),
        authz=engine.enforcer,
        logger=engine.logger,
    )
