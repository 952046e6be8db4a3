"""Infrastructure modules for the ChatOps bot.

Centralized infrastructure components:
- configuration: Settings management (settings)
- logging: Structured logging (get_module_logger, bind_request_context)
- bindings: Bindings configuration model and validation
- events: Cluster event model
- interactions: Interaction payloads and command resolution
- notifications: Channel registry, routing and delivery
- operations: Operation results returned by platform adapters
- platforms: Chat platform clients
"""

# Configuration
from infrastructure.configuration import settings

# Operations
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "settings",
    "OperationResult",
    "OperationStatus",
]
