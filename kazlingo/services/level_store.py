"""
Level Store

Persisted puzzle definitions, one MongoDB collection per game type,
keyed by integer level.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from ..config.game_settings import GAMES, GameType, get_game, find_game_by_key, validate_word
from ..exceptions import InvalidLevelError


def require_level(level: Any) -> int:
    """
    Check that a level is a positive integer.

    Raises:
        InvalidLevelError: For booleans, non-integers and values below 1
    """
    if isinstance(level, bool) or not isinstance(level, int) or level < 1:
        raise InvalidLevelError('Invalid level parameter')
    return level


class LevelStore:
    """
    Read access to published puzzles plus the seeding routine used at startup.
    """

    def __init__(self, db: Database):
        self.db = db
        for definition in GAMES.values():
            self.db[definition.collection].create_index([("level", ASCENDING)], unique=True)

    def _collection(self, game_type: GameType) -> Collection:
        return self.db[get_game(game_type).collection]

    def get_puzzle(self, game_type: GameType, level: int) -> Optional[Dict[str, Any]]:
        """Return the puzzle stored at a level, or None."""
        return self._collection(game_type).find_one({"level": require_level(level)})

    def exists(self, game_type: GameType, level: int) -> bool:
        """Check whether a puzzle is stored at a level."""
        return self._collection(game_type).find_one({"level": level}, {"_id": 1}) is not None

    def completed(self, game_type: GameType, cursor: int) -> List[Dict[str, Any]]:
        """
        All puzzles at or below the cursor, highest level first.

        Args:
            game_type: Game to list
            cursor: The user's current level for the game
        """
        cursor_docs = self._collection(game_type).find({"level": {"$lte": cursor}}).sort("level", DESCENDING)
        return list(cursor_docs)

    def max_level(self, game_type: GameType) -> int:
        """Highest published level, 0 when the game has no puzzles."""
        doc = self._collection(game_type).find_one({}, sort=[("level", DESCENDING)])
        return doc["level"] if doc else 0

    def add_puzzle(self, game_type: GameType, document: Dict[str, Any]) -> str:
        """
        Publish a new puzzle.

        Args:
            game_type: Game the puzzle belongs to
            document: Puzzle fields, must include "level" and the game's answer field

        Returns:
            str: Inserted document id

        Raises:
            InvalidLevelError: If the level is invalid or already taken
            ValueError: If the answer field is missing or malformed
        """
        puzzle = self._prepare(game_type, document)
        try:
            result = self._collection(game_type).insert_one(puzzle)
        except DuplicateKeyError:
            raise InvalidLevelError(f"Level {puzzle['level']} already exists")
        return str(result.inserted_id)

    def seed_from_file(self, path: Union[str, Path]) -> Dict[str, int]:
        """
        Upsert puzzles from a JSON file keyed by game key.

        The file looks like {"sozdly": [{"level": 1, "word": "..."}], "maqal": [...]}.
        Existing puzzles at the same level are replaced field by field.

        Returns:
            Dict[str, int]: Number of puzzles written per game key
        """
        with open(path, 'r', encoding='utf-8') as f:
            content = json.load(f)

        if not isinstance(content, dict):
            raise ValueError("Levels file must contain an object keyed by game")

        # Validate the whole file before writing anything
        prepared = []
        for key, puzzles in content.items():
            definition = find_game_by_key(key)
            if not isinstance(puzzles, list):
                raise ValueError(f"Puzzles for '{key}' must be a list")
            prepared.append((definition, [self._prepare(definition.game_type, document) for document in puzzles]))

        written = {}
        for definition, puzzles in prepared:
            for puzzle in puzzles:
                self._collection(definition.game_type).update_one(
                    {"level": puzzle["level"]},
                    {"$set": puzzle},
                    upsert=True
                )
            written[definition.key] = len(puzzles)

        return written

    def _prepare(self, game_type: GameType, document: Dict[str, Any]) -> Dict[str, Any]:
        definition = get_game(game_type)
        puzzle = dict(document)
        puzzle.pop("_id", None)
        require_level(puzzle.get("level"))

        answer = puzzle.get(definition.answer_field)
        if not answer or not isinstance(answer, str):
            raise ValueError(f"{definition.title} puzzle needs a '{definition.answer_field}' string")

        if game_type == GameType.WORD:
            validate_word(answer)

        return puzzle


# Global store instance
_level_store = None


def get_level_store() -> Optional[LevelStore]:
    """Get the global level store instance."""
    return _level_store


def initialize_level_store(db: Database) -> LevelStore:
    """Initialize the global level store instance."""
    global _level_store
    _level_store = LevelStore(db)
    return _level_store
