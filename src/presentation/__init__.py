"""Presentation layer - HTTP surface of the authorization service.

Routes are generated from the v1 route registry; each one carries the
permissions its operation requires, checked by the access guard before
the endpoint runs. Endpoints dispatch commands/queries and translate
Results into responses or RFC 9457 problems.

Structure:
- routers/system.py: Unversioned root, health and config routes
- routers/api/v1/: Domain-scoped policy administration and decisions
- routers/api/middleware/: Trace IDs and the permission dependency
"""
