"""Caller identity value object."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class Caller:
    """Authenticated caller as seen by the access guard.

    Attributes:
        subject_id: Caller identity used for role lookups.
        domain: Active domain (tenant) for this request.
    """

    subject_id: str
    domain: str
