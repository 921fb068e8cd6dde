"""
Cricket Game Specification

The stat schema printed on every Squad Ace card. Bowling average
and bowling strike rate are lower-is-better; every other stat is
higher-is-better. Ranges are [minimum, maximum).
"""

from ...spec_schema.game_spec import GameSpec, StatDefinition


CRICKET_STATS = [
    StatDefinition(
        name="runs", label="Runs", minimum=50, maximum=1050,
        description="Career runs scored",
    ),
    StatDefinition(
        name="batting_average", label="Batting Avg", minimum=10, maximum=60,
    ),
    StatDefinition(
        name="bowling_average", label="Bowling Avg", minimum=15, maximum=45,
        higher_is_better=False,
        description="Runs conceded per wicket",
    ),
    StatDefinition(
        name="wickets", label="Wickets", minimum=10, maximum=160,
    ),
    StatDefinition(
        name="batting_strike_rate", label="Batting S/R", minimum=60, maximum=160,
    ),
    StatDefinition(
        name="bowling_strike_rate", label="Bowling S/R", minimum=15, maximum=50,
        higher_is_better=False,
        description="Balls bowled per wicket",
    ),
    StatDefinition(
        name="centuries", label="100s", minimum=0, maximum=30,
    ),
    StatDefinition(
        name="half_centuries", label="50s", minimum=0, maximum=60,
    ),
    StatDefinition(
        name="overs_bowled", label="Overs Bowled", minimum=0, maximum=1500,
    ),
]


def create_cricket_spec(cards_per_player: int = 5) -> GameSpec:
    """Create the Squad Ace game specification."""
    return GameSpec(
        game_id="squad_ace_cricket",
        game_name="Squad Ace",
        version="1.0.0",
        stats=list(CRICKET_STATS),
        num_players=2,
        cards_per_player=cards_per_player,
        metadata={
            "lower_is_better": [s.name for s in CRICKET_STATS if not s.higher_is_better],
        },
    )
