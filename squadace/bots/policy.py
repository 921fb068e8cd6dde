"""
Bot Policy - Interface for the AI opponent's decisions.

Under the top-card rule the only real decision is which stat to
challenge with. The same interface drives the timeout auto-play
on behalf of the local user.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import random
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..engine_core.state import MatchState, Card
    from ..spec_schema import GameSpec


@dataclass
class BotDecision:
    """
    A stat decision made by a bot.

    Contains:
    - The chosen stat
    - Explanation (for UI/debugging)
    - Per-stat scores when the policy evaluated them
    """
    stat_name: str
    explanation: str = ""
    confidence: float = 1.0
    scores: dict[str, float] = field(default_factory=dict)


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    A policy picks the challenge stat for a card.
    """

    @abstractmethod
    def choose_stat(
        self,
        state: MatchState,
        spec: GameSpec,
        card: Card,
    ) -> BotDecision:
        """
        Select the stat to challenge with.

        Args:
            state: Current match state
            spec: Game specification
            card: The card being played

        Returns:
            BotDecision with the selected stat
        """
        pass

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomStatPolicy(BotPolicy):
    """
    Random policy - picks a stat of the schema uniformly at random.

    Used for:
    - The default opponent
    - Timeout auto-play
    - Testing with a seed
    """

    def __init__(self, seed: int | None = None, rng: random.Random | None = None):
        self.rng = rng or random.Random(seed)

    def choose_stat(self, state: MatchState, spec: GameSpec, card: Card) -> BotDecision:
        names = spec.stat_names
        if not names:
            raise ValueError("No stats available")

        return BotDecision(
            stat_name=self.rng.choice(names),
            explanation="Selected randomly",
            confidence=1.0 / len(names),
        )


class StrongestStatPolicy(BotPolicy):
    """
    Picks the stat where the card sits highest within the stat's range.

    Lower-is-better stats are scored from the top of the range down.
    Ties are broken by schema order.
    """

    def choose_stat(self, state: MatchState, spec: GameSpec, card: Card) -> BotDecision:
        scores: dict[str, float] = {}
        for stat in spec.stats:
            value = card.stat_value(stat.name)
            if value is None:
                continue
            span = max(stat.maximum - 1 - stat.minimum, 1)
            position = (value - stat.minimum) / span
            scores[stat.name] = position if stat.higher_is_better else 1.0 - position

        if not scores:
            raise ValueError(f"Card {card.card_id} has no known stats")

        best = max(scores, key=scores.get)
        return BotDecision(
            stat_name=best,
            explanation=f"Strongest relative stat ({scores[best]:.2f})",
            confidence=scores[best],
            scores=scores,
        )
