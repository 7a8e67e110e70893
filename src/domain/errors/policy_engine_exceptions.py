"""Authorization engine exceptions.

Part of the policy store and snapshot contract: raised by store adapters and
snapshot builders, caught by the policy cache (which keeps serving the last
good snapshot) and by administrative handlers (which return them as data).
They never reach enforce() callers.

Hierarchy:
    PolicyEngineError
    ├── ConfigurationError
    │   ├── HierarchyCycleError
    │   └── MalformedRuleError
    └── PolicyStoreUnavailableError
"""


class PolicyEngineError(Exception):
    """Base class for authorization engine failures."""


class ConfigurationError(PolicyEngineError):
    """A domain's stored policy cannot be turned into a valid snapshot.

    Attributes:
        domain: Offending domain.
    """

    def __init__(self, domain: str, message: str) -> None:
        self.domain = domain
        super().__init__(f"domain {domain!r}: {message}")


class HierarchyCycleError(ConfigurationError):
    """Role hierarchy of a domain contains a cycle.

    Attributes:
        domain: Offending domain.
        path: Roles along the cycle, first role repeated at the end.
    """

    def __init__(self, domain: str, path: list[str]) -> None:
        self.path = path
        super().__init__(domain, f"role hierarchy cycle {' -> '.join(path)}")


class MalformedRuleError(ConfigurationError):
    """Stored tuple cannot be mapped to a valid rule, assignment or edge."""

    def __init__(self, domain: str, detail: str) -> None:
        self.detail = detail
        super().__init__(domain, f"malformed policy entry: {detail}")


class PolicyStoreUnavailableError(PolicyEngineError):
    """Policy store could not be reached.

    Attributes:
        operation: Store operation that failed.
    """

    def __init__(self, operation: str, cause: BaseException | None = None) -> None:
        self.operation = operation
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"policy store unavailable during {operation}{detail}")
