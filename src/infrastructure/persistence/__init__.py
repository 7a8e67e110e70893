"""SQL persistence for the policy store.

- BaseModel: declarative base (id, created_at)
- Database: async engine and transactional sessions
"""

from src.infrastructure.persistence.base import BaseModel
from src.infrastructure.persistence.database import Database

__all__ = ["BaseModel", "Database"]
