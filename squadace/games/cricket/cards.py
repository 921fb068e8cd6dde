"""
Cricket Cards - Deck generation.

Card names cycle through a pool of flavor names; the cycle number is
appended so names stay unique in decks larger than the pool. Stat values
are drawn at random from the documented range of each stat, so two decks
never need to match, but the schema and the ranges are fixed.
"""

from __future__ import annotations
import random

from ...engine_core.state import Card, Stat
from ...spec_schema import GameSpec
from .spec import create_cricket_spec


PLAYER_NAMES = [
    "Virat K.", "Rohit S.", "Jasprit B.", "Kane W.", "Steve S.",
    "Pat C.", "Babar A.", "Shaheen A.", "Joe R.", "Ben S.",
    "Rashid K.", "Hardik P.", "Shubman G.", "Suryakumar Y.", "Ravindra J.",
    "Mohammed S.", "Kuldeep Y.", "Glenn M.", "David W.", "Mitchell S.",
]

IMAGE_HINTS = [
    "cricket player", "batsman action", "bowler action", "cricket stadium", "cricket celebration",
    "wicketkeeper action", "cricket match", "team huddle", "cricket pitch", "sports athlete",
    "cricket bat", "cricket ball", "cricket game", "action shot", "sports crowd",
    "player portrait", "cricket equipment", "fielding action", "umpire signal", "victory moment",
]

HINT_IMAGES = {
    "sports athlete": "https://images.unsplash.com/photo-1479741789870-7e3f31a2ed07?fit=max&w=1080",
    "wicketkeeper action": "https://images.unsplash.com/photo-1490775696818-7832285c7240?fit=max&w=1080",
    "cricket pitch": "https://images.unsplash.com/photo-1531415074968-036ba1b575da?fit=max&w=1080",
    "team huddle": "https://images.unsplash.com/photo-1600880292089-90a7e086ee0c?fit=max&w=1080",
    "cricket celebration": "https://images.unsplash.com/photo-1527529482837-4698179dc6ce?fit=max&w=1080",
}

PLACEHOLDER_IMAGE = "https://placehold.co/300x400.png"


def card_name(index: int) -> str:
    """Flavor name for the card at a zero-based deck position."""
    base = PLAYER_NAMES[index % len(PLAYER_NAMES)]
    return f"{base} #{index // len(PLAYER_NAMES) + 1}"


def generate_deck(
    count: int = 20,
    spec: GameSpec | None = None,
    rng: random.Random | None = None,
) -> list[Card]:
    """
    Generate count cards with sequential IDs card-1 .. card-N.

    Args:
        count: Number of cards, must be a positive integer
        spec: Game spec providing the stat schema (cricket by default)
        rng: Random source (a fresh unseeded one by default)

    Returns:
        List of fully populated cards
    """
    if not isinstance(count, int) or isinstance(count, bool) or count < 1:
        raise ValueError(f"Deck size must be a positive integer, got {count!r}")

    game_spec = spec or create_cricket_spec()
    rng = rng or random.Random()

    deck = []
    for i in range(count):
        hint = IMAGE_HINTS[i % len(IMAGE_HINTS)]
        stats = {
            stat.name: Stat(label=stat.label, value=stat.draw(rng))
            for stat in game_spec.stats
        }
        deck.append(
            Card(
                card_id=f"card-{i + 1}",
                name=card_name(i),
                image=HINT_IMAGES.get(hint, PLACEHOLDER_IMAGE),
                image_hint=hint,
                stats=stats,
            )
        )
    return deck
