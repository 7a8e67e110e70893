"""Casbin rule database model for domain RBAC policy storage.

Rows keep Casbin's (ptype, v0..v5) shape so policies stay readable by
Casbin tooling.

Policy Types (ptype):
    - 'p':  v0=role,    v1=resource, v2=action, v3=domain
    - 'g':  v0=subject, v1=role,     v2=domain
    - 'g2': v0=child,   v1=parent,   v2=domain

The global domain is stored as the empty string. Unused value columns are
stored as the empty string so the unique index covers every row.
"""

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseModel


class CasbinRule(BaseModel):
    """Casbin rule model for domain RBAC policy storage.

    Policy Examples:
        ptype='p', v0='viewer', v1='doc', v2='read', v3='acme'
            viewer may read doc in acme
        ptype='g', v0='alice', v1='editor', v2='acme'
            alice holds editor in acme
        ptype='g2', v0='editor', v1='viewer', v2='acme'
            editor inherits viewer in acme
    """

    __tablename__ = "casbin_rule"

    ptype: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Policy type: 'p' (rule), 'g' (assignment), 'g2' (hierarchy)",
    )

    v0: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Role for 'p', subject for 'g', child role for 'g2'",
    )

    v1: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Resource for 'p', role for 'g', parent role for 'g2'",
    )

    v2: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Action for 'p', domain for 'g' and 'g2'",
    )

    v3: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Domain for 'p'",
    )

    v4: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Unused (Casbin compatibility)",
    )

    v5: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Unused (Casbin compatibility)",
    )

    __table_args__ = (
        Index("idx_casbin_rule_ptype", "ptype"),
        Index(
            "uq_casbin_rule_policy",
            "ptype",
            "v0",
            "v1",
            "v2",
            "v3",
            unique=True,
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<CasbinRule(ptype={self.ptype}, "
            f"v0={self.v0}, v1={self.v1}, v2={self.v2}, v3={self.v3})>"
        )
