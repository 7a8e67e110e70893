"""Domain enums for policy storage and change events.

Usage:
    from src.domain.enums import PolicyType, PolicyChangeType
"""

from src.domain.enums.policy_type import PolicyChangeType, PolicyType

__all__ = ["PolicyChangeType", "PolicyType"]
