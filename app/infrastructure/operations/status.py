"""Operation status enumeration.

Classifies the outcome of calls made to chat platforms so the delivery
layer can tell retryable failures from permanent ones.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Call completed successfully
        TRANSIENT_ERROR: Retryable error (network, timeout, rate limit)
        PERMANENT_ERROR: Non-retryable error (bad channel, invalid payload)
        UNAUTHORIZED: Token rejected or missing scope
        NOT_FOUND: Channel, user or message not found
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
