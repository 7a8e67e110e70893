"""Application services."""

from src.application.services.access_guard import AccessGuard

__all__ = ["AccessGuard"]
