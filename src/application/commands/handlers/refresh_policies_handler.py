"""RefreshPolicies command handler.

Forces snapshot rebuilds without changing the store. Useful after editing
the store out of band when no notifier is configured.
"""

from src.application.commands.policy_commands import RefreshPolicies
from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.protocols.policy_cache_protocol import PolicyCacheProtocol
from src.domain.value_objects import validate_domain


class RefreshPoliciesHandler:
    """Handler for RefreshPolicies.

    Returns:
        Success(dict) mapping each refreshed domain to whether its new
        snapshot went live (False means the last good one was kept).
    """

    def __init__(self, cache: PolicyCacheProtocol) -> None:
        self._cache = cache

    async def handle(self, cmd: RefreshPolicies) -> Result[dict[str, bool], DomainError]:
        if cmd.domain is None:
            return Success(value=await self._cache.refresh_all())

        try:
            validate_domain(cmd.domain)
        except ValueError as e:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_DOMAIN, message=str(e), field="domain"
                )
            )
        return Success(value={cmd.domain: await self._cache.refresh_domain(cmd.domain)})
