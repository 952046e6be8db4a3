"""Bindings configuration model and validation."""

from infrastructure.bindings.models import (
    ALL_NAMESPACE_INDICATOR,
    BindingError,
    BotConfig,
    ChannelBindings,
    ValidationTag,
    load_config,
)
from infrastructure.bindings.validator import ValidationResult, validate_config

__all__ = [
    "ALL_NAMESPACE_INDICATOR",
    "BindingError",
    "BotConfig",
    "ChannelBindings",
    "ValidationResult",
    "ValidationTag",
    "load_config",
    "validate_config",
]
