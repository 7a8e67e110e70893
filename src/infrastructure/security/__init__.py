"""Security infrastructure adapters.

- JWTCallerExtractor: Bearer token (PyJWT, HS256) -> Caller identity
"""

from src.infrastructure.security.jwt_caller_extractor import JWTCallerExtractor

__all__ = ["JWTCallerExtractor"]
