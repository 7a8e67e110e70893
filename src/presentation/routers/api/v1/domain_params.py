"""Shared path parameters for domain-scoped routes."""

from typing import Annotated

from fastapi import Path

from src.core.constants import GLOBAL_DOMAIN, GLOBAL_DOMAIN_SEGMENT

DomainPath = Annotated[
    str,
    Path(description=f"Domain (tenant); '{GLOBAL_DOMAIN_SEGMENT}' addresses the global domain"),
]


def resolve_domain(segment: str) -> str:
    """Map a path segment to a domain name."""
    return GLOBAL_DOMAIN if segment == GLOBAL_DOMAIN_SEGMENT else segment
