"""
MatchPulse - Constants

Event types, time-range selectors and the fixed numbers behind the
statistics heuristics.
"""

from enum import StrEnum


class EventType(StrEnum):
    """
    Match event types delivered by the live feed.

    Values are the wire strings. Events carrying any other string are still
    accepted, they just do not land in a statistics category.
    """

    GOAL = "goal"
    ASSIST = "assist"
    YELLOW_CARD = "yellow_card"
    RED_CARD = "red_card"
    CORNER = "corner"
    FOUL = "foul"
    SHOT = "shot"  # data.onTarget marks shots on target
    SAVE = "save"
    OFFSIDE = "offside"
    THROW_IN = "throw_in"
    FREE_KICK = "free_kick"
    PENALTY = "penalty"
    PASS = "pass"
    TACKLE = "tackle"
    SUBSTITUTION = "substitution"
    INJURY = "injury"
    OTHER = "other"


KNOWN_EVENT_TYPES = frozenset(e.value for e in EventType)


class TimeRange(StrEnum):
    """Half selector for event filtering."""

    ALL = "all"
    FIRST_HALF = "first_half"
    SECOND_HALF = "second_half"


# Minute boundary between the halves. Minute 45 is still first half,
# stoppage time is not modelled.
HALF_TIME_MINUTE = 45

# Cap for minutes played
FULL_TIME_MINUTE = 90

# TeamStatistics field -> event type counted into it
TEAM_COUNTERS = {
    "goals": EventType.GOAL,
    "assists": EventType.ASSIST,
    "yellow_cards": EventType.YELLOW_CARD,
    "red_cards": EventType.RED_CARD,
    "corners": EventType.CORNER,
    "fouls": EventType.FOUL,
    "shots": EventType.SHOT,
    "saves": EventType.SAVE,
    "offsides": EventType.OFFSIDE,
    "throw_ins": EventType.THROW_IN,
    "free_kicks": EventType.FREE_KICK,
    "penalties": EventType.PENALTY,
    "passes": EventType.PASS,
}

# Event type -> PlayerPerformance field
PLAYER_COUNTERS = {
    EventType.GOAL: "goals",
    EventType.ASSIST: "assists",
    EventType.YELLOW_CARD: "yellow_cards",
    EventType.RED_CARD: "red_cards",
    EventType.SHOT: "shots",
    EventType.PASS: "passes",
    EventType.TACKLE: "tackles",
    EventType.SAVE: "saves",
}

# Possession / pass accuracy display heuristics
NEUTRAL_POSSESSION = 50.0
BASE_PASS_ACCURACY = 70.0
MAX_PASS_ACCURACY = 95.0
PASS_ACCURACY_GOAL_BONUS = 5.0
PASS_ACCURACY_ASSIST_BONUS = 3.0

# Momentum
MOMENTUM_WINDOW = 5  # Only the most recent events count
MOMENTUM_MIN_EVENTS = 2  # Below this momentum is neutral
MOMENTUM_BOUND = 10

# Signed from the home team's point of view; negated for the opponent
MOMENTUM_WEIGHTS = {
    EventType.GOAL: 10,
    EventType.SHOT: 2,
    EventType.CORNER: 1,
    EventType.YELLOW_CARD: -1,
    EventType.RED_CARD: -3,
}

# Player rating weights (sum / PLAYER_RATING_SCALE, clamped to 0-10)
PLAYER_RATING_WEIGHTS = {
    "goals": 3.0,
    "assists": 2.0,
    "shots": 0.5,
    "passes": 0.1,
    "tackles": 1.0,
    "minutes_played": 0.01,
}
PLAYER_RATING_SCALE = 10.0
MAX_PLAYER_RATING = 10.0

# Placeholder name length taken from the player id
PLAYER_NAME_ID_CHARS = 6
