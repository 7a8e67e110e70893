"""Application layer - Use cases and orchestration.

Structure:
- commands/: Administrative commands and handlers (policy mutations)
- queries/: Listing and decision queries and handlers
- services/: AccessGuard (per-operation permission checks)

Depends only on domain protocols and core types; the authorization engine
is injected by the container.
"""
