"""
Answer Check Service

Free-text answer checking for the proverb and quiz games.
"""

from typing import Any, Optional

from ..config.game_settings import ANSWER_CHECKED_GAMES, GameType, get_game
from ..exceptions import InvalidLevelError
from ..models.progress import AnswerCheckResult
from .progression_service import LevelProgressionService
from .level_store import require_level


def normalize_answer(answer: Any) -> str:
    """
    Collapse whitespace and case-fold an answer.

    A list (proverb words arranged in order) is joined with single spaces.
    """
    if isinstance(answer, (list, tuple)):
        answer = " ".join(str(part) for part in answer)
    if answer is None:
        return ""
    return " ".join(str(answer).split()).casefold()


class AnswerCheckService:
    """Compares submissions with stored answers and completes levels on success."""

    def __init__(self, progression_service: LevelProgressionService):
        self.progression_service = progression_service

    def check_answer(self, user_id: str, game_type: GameType, level: int, submission: Any) -> AnswerCheckResult:
        """
        Check an answer for an unlocked level.

        Raises:
            ValueError: If the game is not answer-checked
            InvalidLevelError: If the level is invalid or still locked
            PuzzleNotFoundError: If no puzzle is published at the level
        """
        if game_type not in ANSWER_CHECKED_GAMES:
            raise ValueError(f"{get_game(game_type).title} answers are not checked as text")

        require_level(level)
        cursor = self.progression_service.get_cursor(user_id, game_type)
        if level > cursor:
            raise InvalidLevelError(f"Level {level} is locked")

        puzzle = self.progression_service.puzzle_at(game_type, level)
        expected = normalize_answer(puzzle.get(get_game(game_type).answer_field))

        if not expected or normalize_answer(submission) != expected:
            return AnswerCheckResult(correct=False, level=cursor)

        advance = self.progression_service.advance(user_id, game_type, level)
        return AnswerCheckResult(correct=True, level=advance.level, advance=advance)


# Global service instance
_answer_service = None


def get_answer_service() -> Optional[AnswerCheckService]:
    """Get the global answer check service instance."""
    return _answer_service


def initialize_answer_service(progression_service: LevelProgressionService) -> AnswerCheckService:
    """Initialize the global answer check service instance."""
    global _answer_service
    _answer_service = AnswerCheckService(progression_service)
    return _answer_service
