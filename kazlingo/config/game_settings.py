"""
Game Configuration Constants Module

This module defines the game rules and the registry of game types.
All game parameters are centralized here to enable easy modification.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Final, List, Optional


# Core Word Game Configuration Constants
MAX_ATTEMPTS: Final[int] = 6
"""
Maximum number of guess attempts allowed per word round.
Type: Final[int] - Immutable to prevent accidental modification
"""

WORD_LENGTH: Final[int] = 5
"""Number of letters in every word puzzle and every guess."""

DEFAULT_LEVEL: Final[int] = 1
"""Cursor value for a game the user has not played yet."""


class GameType(Enum):
    """Game types served by the application, valued by their storage key."""
    TALDA = "talda"
    WORD = "sozdly"
    PROVERB = "maqal"
    QUIZ = "sj"


@dataclass(frozen=True)
class GameDefinition:
    """
    Static description of one game type.

    Attributes:
        game_type: The game this definition describes
        title: Human readable name used in log and error messages
        collection: MongoDB collection holding the game's puzzles
        route_prefix: Prefix of the per-game profile routes ("sozdly" -> /profile/sozdlycurrent,
            "" -> /profile/current)
        level_key: Response key carrying the user's cursor for this game
        answer_field: Puzzle field compared against player submissions
        profile_key: Key of the cursor in the profile payload, when it differs from level_key
    """
    game_type: GameType
    title: str
    collection: str
    route_prefix: str
    level_key: str
    answer_field: str
    profile_key: Optional[str] = None

    @property
    def key(self) -> str:
        return self.game_type.value

    @property
    def profile_field(self) -> str:
        return self.profile_key or self.level_key


GAMES: Final[Dict[GameType, GameDefinition]] = {
    GameType.TALDA: GameDefinition(
        game_type=GameType.TALDA,
        title="Talda",
        collection="taldas",
        route_prefix="",
        level_key="taldaLevel",
        answer_field="answer",
    ),
    GameType.WORD: GameDefinition(
        game_type=GameType.WORD,
        title="Sozdly",
        collection="sozdly",
        route_prefix="sozdly",
        level_key="sozdlyLevel",
        answer_field="word",
    ),
    GameType.PROVERB: GameDefinition(
        game_type=GameType.PROVERB,
        title="Maqal",
        collection="maqals",
        route_prefix="maqal",
        level_key="maqalLevel",
        answer_field="proverb",
    ),
    GameType.QUIZ: GameDefinition(
        game_type=GameType.QUIZ,
        title="SuraqJauap",
        collection="suraq_jauaps",
        route_prefix="sj",
        level_key="SJLevel",
        answer_field="answer",
        profile_key="SJlevel",
    ),
}

# Games whose answers are checked as free text rather than letter by letter
ANSWER_CHECKED_GAMES: Final[List[GameType]] = [GameType.PROVERB, GameType.QUIZ]


def get_game(game_type: GameType) -> GameDefinition:
    """Return the registry entry for a game type."""
    return GAMES[game_type]


def find_game_by_key(key: str) -> GameDefinition:
    """
    Look up a game by its storage key or route prefix.

    Raises:
        KeyError: If no game uses the given key
    """
    for definition in GAMES.values():
        if key and key in (definition.key, definition.route_prefix):
            return definition
    raise KeyError(key)


def default_levels() -> Dict[str, int]:
    """Initial per-game cursors for a newly registered user."""
    return {definition.key: DEFAULT_LEVEL for definition in GAMES.values()}


def validate_word(word: str) -> str:
    """
    Normalize and validate a word puzzle answer.

    Returns:
        str: The uppercase word

    Raises:
        ValueError: If the word is not WORD_LENGTH alphabetic characters
    """
    if not isinstance(word, str):
        raise ValueError("Word must be a string")
    normalized = word.strip().upper()
    if len(normalized) != WORD_LENGTH:
        raise ValueError(f"Word '{word}' is not {WORD_LENGTH} characters long")
    if not normalized.isalpha():
        raise ValueError(f"Word '{word}' contains non-alphabetic characters")
    return normalized
