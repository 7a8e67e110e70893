"""Infrastructure layer - Adapters implementing domain protocols.

Structure:
- authorization/: Policy cache, enforcer, engine, stores, propagation
- persistence/: SQLAlchemy database and the casbin_rule model
- events/: In-memory event bus and policy change handlers
- logging/: structlog console adapter
- security/: JWT caller extraction

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
