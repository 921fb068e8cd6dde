"""Game specification schema - stat tables and card validation."""

from .game_spec import GameSpec, StatDefinition
from .validation import (
    validate_spec,
    validate_card,
    validate_deck,
    SpecValidationError,
    ValidationResult,
)

__all__ = [
    "GameSpec",
    "StatDefinition",
    "validate_spec",
    "validate_card",
    "validate_deck",
    "SpecValidationError",
    "ValidationResult",
]
