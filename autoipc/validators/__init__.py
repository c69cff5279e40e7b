"""Validation package for configuration and channel declarations."""

from .base import ValidationError, ValidationIssue
from .channels import validate_channel_specs
from .config import validate_config

__all__ = [
    "ValidationError",
    "ValidationIssue",
    "validate_channel_specs",
    "validate_config",
]
