"""Application environment types.

Used by Settings to determine environment-specific behavior (log rendering,
OpenAPI exposure).

Environments:
- DEVELOPMENT: Local development with human-readable logs
- TESTING: Automated test execution with in-memory policy store
- CI: Continuous integration environment
- PRODUCTION: Production deployment
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
