"""Decision and engine status schemas.

RESTful Endpoints:
    POST /api/v1/authorization/checks     - Explain one decision
    POST /api/v1/authorization/refreshes  - Rebuild snapshots
    GET  /api/v1/authorization/status     - Per-domain cache status
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.schemas.policy_schemas import PolicyRuleResponse


class AccessCheckRequest(BaseModel):
    """Decision request."""

    subject: str
    domain: str = Field(..., description="Domain to evaluate in ('' is global)")
    resource: str
    action: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "subject": "alice",
                "domain": "acme",
                "resource": "doc",
                "action": "read",
            }
        }
    )


class AccessCheckResponse(BaseModel):
    """Decision with explanation."""

    allowed: bool
    roles: list[str] = Field(..., description="Expanded roles of the subject")
    matched_rule: PolicyRuleResponse | None = None
    rule_domain: str | None = Field(
        None, description="Domain whose rules were consulted ('' on fallback)"
    )


class PolicyRefreshRequest(BaseModel):
    domain: str | None = Field(
        None, description="Domain to rebuild; omit to rebuild every domain"
    )


class PolicyRefreshResponse(BaseModel):
    results: dict[str, bool] = Field(
        ..., description="Domain -> whether the new snapshot went live"
    )


class DomainStatusResponse(BaseModel):
    domain: str
    rule_count: int
    refreshed_at: datetime | None
    consecutive_failures: int
    last_error: str | None
    is_stale: bool


class EngineStatusResponse(BaseModel):
    status: str = Field(..., description="'healthy' or 'degraded'")
    domains: list[DomainStatusResponse]
