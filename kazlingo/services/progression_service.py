"""
Level Progression Service

Owns the per-user, per-game level cursor. One generic service serves every
game type; the cursor only ever moves forward by one level, and only from
the exact level the user currently holds.
"""

from typing import Any, Dict, List, Optional

from bson.errors import InvalidId
from bson.objectid import ObjectId
from pymongo import ReturnDocument
from pymongo.database import Database

from ..config.game_settings import DEFAULT_LEVEL, GameDefinition, GameType, get_game
from ..exceptions import PuzzleNotFoundError, UserNotFoundError
from ..models.progress import AdvanceResult, AdvanceStatus
from .level_store import LevelStore, require_level


class LevelProgressionService:
    """
    Progression service handling:
    - Reading a user's cursor for a game
    - Serving the current, explicit and completed puzzles
    - The compare-and-increment "complete level N" protocol
    """

    def __init__(self, db: Database, level_store: LevelStore):
        self.users_collection = db.users
        self.level_store = level_store

    def _find_user(self, user_id: str) -> Dict[str, Any]:
        try:
            object_id = ObjectId(user_id)
        except (InvalidId, TypeError):
            raise UserNotFoundError()

        user = self.users_collection.find_one({"_id": object_id})
        if not user:
            raise UserNotFoundError()
        return user

    @staticmethod
    def _cursor_of(user: Dict[str, Any], definition: GameDefinition) -> int:
        return (user.get("levels") or {}).get(definition.key, DEFAULT_LEVEL)

    def get_cursor(self, user_id: str, game_type: GameType) -> int:
        """Return the user's current level for a game."""
        return self._cursor_of(self._find_user(user_id), get_game(game_type))

    def current_puzzle(self, user_id: str, game_type: GameType) -> Dict[str, Any]:
        """
        Puzzle at the user's current cursor.

        Raises:
            UserNotFoundError: If the user does not exist
            PuzzleNotFoundError: If no puzzle is published at the cursor
        """
        definition = get_game(game_type)
        cursor = self.get_cursor(user_id, game_type)
        puzzle = self.level_store.get_puzzle(game_type, cursor)
        if not puzzle:
            raise PuzzleNotFoundError(f"Current {definition.title} level not found")
        return puzzle

    def puzzle_at(self, game_type: GameType, level: int) -> Dict[str, Any]:
        """
        Puzzle at an explicit level.

        Raises:
            InvalidLevelError: If the level is not a positive integer
            PuzzleNotFoundError: If no puzzle is published at the level
        """
        puzzle = self.level_store.get_puzzle(game_type, level)
        if not puzzle:
            raise PuzzleNotFoundError('Level not found')
        return puzzle

    def completed_puzzles(self, user_id: str, game_type: GameType) -> List[Dict[str, Any]]:
        """All puzzles up to and including the user's cursor, highest first."""
        cursor = self.get_cursor(user_id, game_type)
        return self.level_store.completed(game_type, cursor)

    def advance(self, user_id: str, game_type: GameType, submitted_level: int) -> AdvanceResult:
        """
        Complete a level and unlock the next one.

        The submitted level must equal the stored cursor. The write is a single
        conditional update that re-checks the cursor, so two concurrent requests
        for the same level advance it at most once.

        Args:
            user_id: User completing the level
            game_type: Game being played
            submitted_level: Level the client claims to have completed

        Returns:
            AdvanceResult: ADVANCED with the new cursor, or BLOCKED / EXHAUSTED
            with the unchanged cursor

        Raises:
            InvalidLevelError: If the submitted level is not a positive integer
            UserNotFoundError: If the user does not exist
            pymongo.errors.PyMongoError: If the database write fails
        """
        require_level(submitted_level)
        definition = get_game(game_type)
        field = f"levels.{definition.key}"

        user = self._find_user(user_id)
        current = self._cursor_of(user, definition)

        if submitted_level != current:
            return AdvanceResult(AdvanceStatus.BLOCKED, current)

        next_level = current + 1
        if not self.level_store.exists(game_type, next_level):
            return AdvanceResult(AdvanceStatus.EXHAUSTED, current)

        expected: Dict[str, Any] = {field: current}
        if current == DEFAULT_LEVEL:
            # Users created before a game existed have no stored cursor for it
            expected = {"$or": [{field: current}, {field: {"$exists": False}}]}

        updated = self.users_collection.find_one_and_update(
            {"_id": user["_id"], **expected},
            {"$set": {field: next_level}},
            return_document=ReturnDocument.AFTER
        )

        if updated is None:
            # Another request moved the cursor between the read and the write
            return AdvanceResult(AdvanceStatus.BLOCKED, self.get_cursor(user_id, game_type))

        return AdvanceResult(AdvanceStatus.ADVANCED, self._cursor_of(updated, definition))


# Global service instance
_progression_service = None


def get_progression_service() -> Optional[LevelProgressionService]:
    """Get the global progression service instance."""
    return _progression_service


def initialize_progression_service(db: Database, level_store: LevelStore) -> LevelProgressionService:
    """Initialize the global progression service instance."""
    global _progression_service
    _progression_service = LevelProgressionService(db, level_store)
    return _progression_service
