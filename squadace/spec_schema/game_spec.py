"""
Game Spec - Declarative description of a stat-battle game.

The spec defines:
- The stat schema every card carries
- Per-stat direction (higher wins / lower wins)
- Documented value ranges used by the deck generator
- Table size (players, cards per player)

The reducer consults the spec generically; no stat name is
special-cased anywhere in the engine.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
import random


@dataclass(frozen=True)
class StatDefinition:
    """
    A single stat in the card schema.

    Values are integers in [minimum, maximum).
    """
    name: str
    label: str
    minimum: int
    maximum: int  # Exclusive
    higher_is_better: bool = True
    description: str = ""

    def draw(self, rng: random.Random) -> int:
        """Draw a value from the documented range."""
        return rng.randrange(self.minimum, self.maximum)

    def in_range(self, value: int) -> bool:
        return self.minimum <= value < self.maximum


@dataclass
class GameSpec:
    """
    Complete game specification.

    Stats are kept in declaration order; that order is the
    order cards present their stats.
    """
    game_id: str
    game_name: str
    version: str = "1.0.0"
    stats: list[StatDefinition] = field(default_factory=list)

    num_players: int = 2
    cards_per_player: int = 5

    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def stat_names(self) -> list[str]:
        return [s.name for s in self.stats]

    @property
    def deck_size(self) -> int:
        return self.num_players * self.cards_per_player

    def get_stat(self, name: str) -> StatDefinition | None:
        """Get a stat definition by name."""
        for stat in self.stats:
            if stat.name == name:
                return stat
        return None

    def has_stat(self, name: str) -> bool:
        return self.get_stat(name) is not None

    def compare(self, stat_name: str, a: int, b: int) -> int:
        """
        Compare two raw values of a stat.

        Returns 1 if a wins, -1 if b wins, 0 on a tie.
        Ties are exact equality regardless of direction.
        """
        stat = self.get_stat(stat_name)
        if stat is None:
            raise KeyError(f"Unknown stat: {stat_name}")

        if a == b:
            return 0
        a_wins = a > b if stat.higher_is_better else a < b
        return 1 if a_wins else -1
