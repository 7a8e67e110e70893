"""Application layer errors.

Handlers return domain errors; ApplicationError classifies them into the
outcome categories the presentation layer maps to HTTP statuses.
"""

from src.application.errors.application_error import (
    ApplicationError,
    ApplicationErrorCode,
)

__all__ = ["ApplicationError", "ApplicationErrorCode"]
