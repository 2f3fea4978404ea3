"""Tests for the level store."""
import json

import pytest

from kazlingo.config import GameType
from kazlingo.exceptions import InvalidLevelError
from kazlingo.services.level_store import LevelStore


def test_get_puzzle_by_level(level_store: LevelStore) -> None:
    puzzle = level_store.get_puzzle(GameType.WORD, 2)
    assert puzzle["word"] == "BRAVO"
    assert level_store.get_puzzle(GameType.WORD, 42) is None


def test_games_are_stored_separately(level_store: LevelStore) -> None:
    assert level_store.get_puzzle(GameType.QUIZ, 1)["answer"] == "Four"
    assert level_store.get_puzzle(GameType.PROVERB, 1)["proverb"] == "Білім таусылмас қазына"
    assert level_store.exists(GameType.WORD, 3)
    assert not level_store.exists(GameType.QUIZ, 3)


def test_completed_lists_levels_up_to_cursor_descending(level_store: LevelStore) -> None:
    levels = [puzzle["level"] for puzzle in level_store.completed(GameType.WORD, 2)]
    assert levels == [2, 1]


def test_max_level(level_store: LevelStore, db) -> None:
    assert level_store.max_level(GameType.WORD) == 3
    assert LevelStore(db).max_level(GameType.WORD) == 3
    db.sozdly.delete_many({})
    assert level_store.max_level(GameType.WORD) == 0


def test_duplicate_level_is_rejected(level_store: LevelStore) -> None:
    with pytest.raises(InvalidLevelError):
        level_store.add_puzzle(GameType.WORD, {"level": 1, "word": "DELTA"})


@pytest.mark.parametrize("document", [
    {"level": 4, "word": "TOOLONG"},
    {"level": 4, "word": "AB1DE"},
    {"level": 4},
])
def test_malformed_word_puzzle_is_rejected(level_store: LevelStore, document) -> None:
    with pytest.raises(ValueError):
        level_store.add_puzzle(GameType.WORD, document)


@pytest.mark.parametrize("level", [0, -1, "2", None, True])
def test_invalid_level_is_rejected(level_store: LevelStore, level) -> None:
    with pytest.raises(InvalidLevelError):
        level_store.add_puzzle(GameType.QUIZ, {"level": level, "question": "?", "answer": "x"})


def test_seed_from_file_upserts(level_store: LevelStore, tmp_path) -> None:
    levels_file = tmp_path / "levels.json"
    levels_file.write_text(json.dumps({
        "sozdly": [{"level": 1, "word": "DELTA"}, {"level": 4, "word": "EAGLE"}],
        "sj": [{"level": 3, "question": "1 + 1?", "answer": "Two"}],
    }), encoding="utf-8")

    written = level_store.seed_from_file(levels_file)

    assert written == {"sozdly": 2, "sj": 1}
    assert level_store.get_puzzle(GameType.WORD, 1)["word"] == "DELTA"
    assert level_store.max_level(GameType.WORD) == 4
    assert level_store.get_puzzle(GameType.QUIZ, 3)["answer"] == "Two"


def test_seed_validates_every_puzzle_before_writing(level_store: LevelStore, tmp_path) -> None:
    levels_file = tmp_path / "levels.json"
    levels_file.write_text(json.dumps({
        "sozdly": [{"level": 1, "word": "DELTA"}, {"level": 2, "word": "TOOLONG"}],
        "sj": [{"level": 5, "question": "1 + 1?", "answer": "Two"}],
    }), encoding="utf-8")

    with pytest.raises(ValueError):
        level_store.seed_from_file(levels_file)

    assert level_store.get_puzzle(GameType.WORD, 1)["word"] == "ALPHA"
    assert level_store.get_puzzle(GameType.QUIZ, 5) is None


def test_seed_rejects_unknown_game(level_store: LevelStore, tmp_path) -> None:
    levels_file = tmp_path / "levels.json"
    levels_file.write_text(json.dumps({"tanda": []}), encoding="utf-8")
    with pytest.raises(KeyError):
        level_store.seed_from_file(levels_file)


def test_bundled_levels_file_is_valid(level_store: LevelStore) -> None:
    from kazlingo.config import Config

    written = level_store.seed_from_file(Config.LEVELS_FILE)
    assert written == {"talda": 3, "sozdly": 5, "maqal": 3, "sj": 3}
    assert level_store.get_puzzle(GameType.WORD, 1)["word"] == "кітап"
