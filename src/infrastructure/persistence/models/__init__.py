"""Database models for persistence layer.

Models Organization:
    - casbin_rule.py: Casbin-shaped policy rows (rules, assignments, hierarchy)
"""

from src.infrastructure.persistence.models.casbin_rule import CasbinRule

__all__ = ["CasbinRule"]
