"""
Validation settings models.

Pydantic models for the few knobs the binder and the call wrapper expose.

Example:
    >>> settings = parse_settings({"key_order": "declared"})
    >>> settings.key_order
    <KeyOrder.DECLARED: 'declared'>
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class KeyOrder(str, Enum):
    """Ordering of keys in bound results."""

    INPUT = "input"  # Input order, then defaulted keys in declared order
    DECLARED = "declared"  # Collection declaration order


class ValidationSettings(BaseModel):
    """
    Binder and call-wrapper settings.

    Attributes:
        key_order: Ordering of keys in bound results
        validate_return: Whether ``validated`` checks the returned value
    """

    key_order: KeyOrder = Field(
        KeyOrder.INPUT, description="Ordering of keys in bound results"
    )
    validate_return: bool = Field(
        True, description="Validate the value returned by a validated call"
    )

    model_config = {"extra": "forbid", "frozen": True}


DEFAULT_SETTINGS = ValidationSettings()


def parse_settings(config: Optional[Dict[str, Any]] = None) -> ValidationSettings:
    """
    Build settings from a plain dict.

    Args:
        config: Settings mapping, ``None`` for defaults

    Returns:
        ValidationSettings instance

    Raises:
        pydantic.ValidationError: On unknown keys or invalid values
    """
    if not config:
        return DEFAULT_SETTINGS
    return ValidationSettings(**config)
