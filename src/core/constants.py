"""Centralized constants for internal implementation details.

This module contains constants that are internal implementation details,
NOT environment-specific configuration. For environment-specific settings,
use `src/core/config.py` instead.

Categories:
- Policy markers: Reserved values with matching semantics
- Prefixes: Standard protocol prefixes

Example:
    >>> from src.core.constants import WILDCARD, GLOBAL_DOMAIN
    >>> rule.resource == WILDCARD
"""

# =============================================================================
# Policy Markers
# =============================================================================

WILDCARD: str = "*"
"""Resource/action marker matching any literal value during rule matching."""

GLOBAL_DOMAIN: str = ""
"""Reserved domain consulted when a domain defines no rules of its own."""

GLOBAL_DOMAIN_SEGMENT: str = "_global"
"""URL path segment addressing the global domain (an empty segment cannot)."""

RESERVED_DOMAIN_CHARACTERS: frozenset[str] = frozenset({",", "\n", "\r"})
"""Characters that cannot appear in identifiers (Casbin CSV separators)."""


# =============================================================================
# Protocol Prefixes
# =============================================================================

BEARER_PREFIX: str = "Bearer "
"""HTTP Authorization header prefix for bearer tokens."""
