"""RFC 9457 Problem Details for HTTP APIs.

RFC 9457: https://www.rfc-editor.org/rfc/rfc9457

Exports:
    ErrorDetail: Individual field-specific error
    ProblemDetails: RFC 9457 compliant error response schema
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Individual field-specific error.

    Examples:
        >>> ErrorDetail(
        ...     field="role",
        ...     code="invalid_policy_rule",
        ...     message="role must not be empty",
        ... )
    """

    field: str = Field(..., description="Field name")
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


class ProblemDetails(BaseModel):
    """RFC 9457 Problem Details for HTTP APIs.

    Attributes:
        type: URI reference identifying the problem type
        title: Short, human-readable summary of the problem type
        status: HTTP status code for this occurrence
        detail: Human-readable explanation specific to this occurrence
        instance: URI reference identifying the specific occurrence
        errors: Optional list of field-specific errors (for validation failures)
        trace_id: Optional request trace ID for debugging

    Examples:
        >>> ProblemDetails(
        ...     type="https://authz.example.com/errors/forbidden",
        ...     title="Access Denied",
        ...     status=403,
        ...     detail="Permission denied: policies:write",
        ...     instance="/api/v1/domains/acme/policies",
        ... )
    """

    type: str = Field(
        ...,
        description="URI reference identifying the problem type",
        examples=["https://authz.example.com/errors/forbidden"],
    )
    title: str = Field(..., description="Short, human-readable summary", examples=["Access Denied"])
    status: int = Field(..., description="HTTP status code", examples=[403])
    detail: str = Field(
        ...,
        description="Human-readable explanation",
        examples=["Permission denied: policies:write"],
    )
    instance: str = Field(
        ...,
        description="URI reference identifying this occurrence",
        examples=["/api/v1/domains/acme/policies"],
    )
    errors: list[ErrorDetail] | None = Field(None, description="List of field-specific errors")
    trace_id: str | None = Field(None, description="Request trace ID for debugging")
