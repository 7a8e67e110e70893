"""LoggerProtocol definition for structured logging.

Every log call is an event name plus key-value context. Implementations
decide rendering (console, JSON) but never drop the context.

Log Levels:
    - DEBUG: Detailed diagnostic info (dev only)
    - INFO: Normal operational events (denials, refreshes)
    - WARNING: Degraded service (stale snapshot kept after a failed refresh)
    - ERROR: Operation failed, system continues
    - CRITICAL: System-wide failure

Security:
    - NEVER log bearer tokens or signing secrets

Usage:
    from src.core.container import get_logger

    logger = get_logger()
    logger.info("policy_domain_refreshed", domain="acme", rule_count=12)

    scoped = logger.bind(domain="acme")
    scoped.warning("policy_refresh_failed", error_type="HierarchyCycleError")
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event name (avoid f-strings; use context).
            error: Optional exception; implementations add error_type and
                error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message for failures needing intervention."""
        ...

    def bind(self, **context: Any) -> "LoggerProtocol":
        """Return new logger with permanently bound context.

        The original logger is unchanged.

        Example:
            domain_logger = logger.bind(domain=domain)
            domain_logger.info("policy_domain_refreshed")
        """
        ...

    def with_context(self, **context: Any) -> "LoggerProtocol":
        """Alias for bind()."""
        ...
