"""Test configuration."""
import os
import tempfile
from pathlib import Path

import mongomock
from bson.objectid import ObjectId
import pytest

# Keep activity logs out of the working tree before any imports
os.environ.setdefault("LOG_DIR", str(Path(tempfile.gettempdir()) / "kazlingo-test-logs"))

# Import after environment setup
from kazlingo import create_app
from kazlingo.config import GameType, TestingConfig
from kazlingo.services import (
    get_answer_service,
    get_auth_service,
    get_level_store,
    get_profile_service,
    get_progression_service,
    get_word_service,
    initialize_services,
)


@pytest.fixture
def test_config(tmp_path):
    """Testing configuration writing uploads to a temporary directory."""
    return type("TmpTestingConfig", (TestingConfig,), {"UPLOAD_DIR": str(tmp_path / "uploads")})


@pytest.fixture
def db():
    """Fresh in-memory database for each test."""
    return mongomock.MongoClient()[TestingConfig.MONGO_DB_NAME]


@pytest.fixture
def services(db, test_config):
    """Initialize all services and publish a few puzzles per game."""
    initialize_services(db, test_config)
    store = get_level_store()

    for level, (sentence, answer) in enumerate([("Мен кітап оқимын", "оқимын"), ("Ол үйге барды", "барды")], start=1):
        store.add_puzzle(GameType.TALDA, {"level": level, "sentence": sentence, "answer": answer})
    for level, word in enumerate(["ALPHA", "BRAVO", "CHARM"], start=1):
        store.add_puzzle(GameType.WORD, {"level": level, "word": word})
    for level, proverb in enumerate(["Білім таусылмас қазына", "Отан оттан да ыстық"], start=1):
        store.add_puzzle(GameType.PROVERB, {"level": level, "proverb": proverb})
    for level, (question, answer) in enumerate([("2 + 2?", "Four"), ("Capital?", "Astana")], start=1):
        store.add_puzzle(GameType.QUIZ, {"level": level, "question": question, "answer": answer})

    return {
        "auth": get_auth_service(),
        "levels": store,
        "progression": get_progression_service(),
        "words": get_word_service(),
        "answers": get_answer_service(),
        "profile": get_profile_service(),
    }


@pytest.fixture
def level_store(services):
    return services["levels"]


@pytest.fixture
def progression(services):
    return services["progression"]


@pytest.fixture
def word_service(services):
    return services["words"]


@pytest.fixture
def user_id(services) -> str:
    """Registered user with every game at level 1."""
    result = services["auth"].register_user("aigerim", "aigerim@example.kz", "secret123")
    assert result["success"]
    return result["user_id"]


@pytest.fixture
def app(services, test_config):
    return create_app(test_config)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(services, user_id):
    """Bearer token headers for the registered user."""
    result = services["auth"].login_user("aigerim", "secret123")
    assert result["success"]
    return {"Authorization": f"Bearer {result['token']}"}


@pytest.fixture
def set_level(db):
    """Move a user's cursor directly, bypassing the progression protocol."""
    def _set_level(user_id: str, game: GameType, level: int) -> None:
        db.users.update_one({"_id": ObjectId(user_id)}, {"$set": {f"levels.{game.value}": level}})
    return _set_level
