"""
Spec Validation - Schema validation for game specs and generated cards.

Validates that:
1. Required fields are present
2. Stat names are unique and ranges are non-empty
3. Every card carries every stat of the schema
4. Deck card IDs are unique
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from .game_spec import GameSpec

if TYPE_CHECKING:
    from ..engine_core.state import Card


class SpecValidationError(Exception):
    """Raised when spec validation fails."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Spec validation failed with {len(errors)} error(s)")


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str]
    warnings: list[str]


def validate_spec(spec: GameSpec, raise_on_error: bool = False) -> ValidationResult:
    """
    Validate a game specification.

    Returns ValidationResult with errors and warnings.
    Raises SpecValidationError if raise_on_error=True and errors exist.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not spec.game_id:
        errors.append("game_id is required")
    if not spec.game_name:
        errors.append("game_name is required")
    if spec.num_players < 2:
        errors.append("num_players must be >= 2")
    if spec.cards_per_player < 1:
        errors.append("cards_per_player must be >= 1")

    seen: set[str] = set()
    for stat in spec.stats:
        if not stat.name:
            errors.append("Stat has empty name")
        if stat.name in seen:
            errors.append(f"Duplicate stat '{stat.name}'")
        seen.add(stat.name)
        if stat.maximum <= stat.minimum:
            errors.append(
                f"Stat '{stat.name}' has empty range [{stat.minimum}, {stat.maximum})"
            )

    if not spec.stats:
        errors.append("No stats defined")
    elif all(s.higher_is_better for s in spec.stats):
        warnings.append("No lower-is-better stats defined")

    if raise_on_error and errors:
        raise SpecValidationError(errors)

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def validate_card(spec: GameSpec, card: Card) -> list[str]:
    """Validate a single card against the stat schema."""
    errors = []
    if not card.card_id:
        errors.append("Card has empty ID")
    if not card.name:
        errors.append(f"Card '{card.card_id}' has empty name")

    for stat in spec.stats:
        entry = card.stats.get(stat.name)
        if entry is None:
            errors.append(f"Card '{card.card_id}' is missing stat '{stat.name}'")
        elif not stat.in_range(entry.value):
            errors.append(
                f"Card '{card.card_id}' stat '{stat.name}'={entry.value} "
                f"outside [{stat.minimum}, {stat.maximum})"
            )

    return errors


def validate_deck(spec: GameSpec, deck: Iterable[Card]) -> ValidationResult:
    """Validate every card of a deck and the uniqueness of IDs."""
    errors: list[str] = []
    ids: set[str] = set()

    for card in deck:
        if card.card_id in ids:
            errors.append(f"Duplicate card id '{card.card_id}'")
        ids.add(card.card_id)
        errors.extend(validate_card(spec, card))

    return ValidationResult(valid=len(errors) == 0, errors=errors, warnings=[])
