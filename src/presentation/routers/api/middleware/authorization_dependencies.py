"""Authorization dependencies.

FastAPI dependency that runs the AccessGuard for a registered operation.
The route generator attaches one to every route; endpoints read the
resulting caller with get_current_caller().

Architecture:
    - Identity: JWTCallerExtractor (Bearer token, active domain)
    - Permissions: route registry metadata, resolved at import time
    - Decision: Enforcer over the engine's published snapshots

Responses:
    - No/invalid identity -> 401 with WWW-Authenticate: Bearer
    - Any required permission denied -> 403
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from src.application.services.access_guard import AccessGuard
from src.core.container import get_access_guard
from src.core.errors import AuthenticationError
from src.core.result import Failure, Success
from src.domain.value_objects import Caller


def require_permissions(
    operation_id: str,
) -> Callable[..., Awaitable[Caller | None]]:
    """Create a dependency enforcing an operation's required permissions.

    Args:
        operation_id: Registered operation handle.

    Returns:
        Dependency returning the Caller (None for public operations).

    Raises:
        HTTPException 401: No valid identity on a protected operation.
        HTTPException 403: A required permission was denied.
    """

    async def permission_checker(
        request: Request,
        guard: Annotated[AccessGuard, Depends(get_access_guard)],
    ) -> Caller | None:
        match guard.check_operation(request, operation_id):
            case Success(value=caller):
                request.state.caller = caller
                return caller
            case Failure(error=AuthenticationError() as error):
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail=error.message,
                    headers={"WWW-Authenticate": "Bearer"},
                )
            case Failure(error=error):
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail=error.message,
                )

    return permission_checker


def get_current_caller(request: Request) -> Caller | None:
    """Caller admitted by require_permissions (None on public routes)."""
    return getattr(request.state, "caller", None)


CurrentCaller = Annotated[Caller | None, Depends(get_current_caller)]
