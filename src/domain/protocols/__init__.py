"""Domain protocols (ports).

Structural interfaces implemented by infrastructure adapters.
"""

from src.domain.protocols.authorization_protocol import AuthorizationProtocol
from src.domain.protocols.caller_extractor_protocol import CallerExtractorProtocol
from src.domain.protocols.event_bus_protocol import EventBusProtocol, EventHandler
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.permission_metadata_protocol import (
    PermissionMetadataProtocol,
)
from src.domain.protocols.policy_cache_protocol import PolicyCacheProtocol
from src.domain.protocols.policy_change_notifier_protocol import (
    PolicyChangeNotifierProtocol,
)
from src.domain.protocols.policy_store_protocol import PolicyStoreProtocol

__all__ = [
    "AuthorizationProtocol",
    "CallerExtractorProtocol",
    "EventBusProtocol",
    "EventHandler",
    "LoggerProtocol",
    "PermissionMetadataProtocol",
    "PolicyCacheProtocol",
    "PolicyChangeNotifierProtocol",
    "PolicyStoreProtocol",
]
