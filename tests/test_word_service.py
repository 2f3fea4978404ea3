"""Tests for word rounds."""
from unittest.mock import patch

import pytest

from kazlingo.config import GameType, MAX_ATTEMPTS
from kazlingo.exceptions import (
    InvalidGuessError, InvalidLevelError, PuzzleNotFoundError, RoundNotFoundError, RoundOverError
)
from kazlingo.models.game import RoundStatus
from kazlingo.services.word_service import WordRoundService

WRONG_GUESSES = ["BRAVO", "CHARM", "DELTA", "EAGLE", "FOCUS", "GHOST"]


def test_start_round_defaults_to_cursor(word_service: WordRoundService, user_id: str) -> None:
    state = word_service.start_round(user_id)

    assert state.level == 1
    assert state.attempt == 0
    assert state.max_attempts == MAX_ATTEMPTS
    assert state.status == RoundStatus.IN_PROGRESS.value
    assert state.answer is None


def test_locked_level_cannot_be_started(word_service: WordRoundService, user_id: str) -> None:
    with pytest.raises(InvalidLevelError):
        word_service.start_round(user_id, 2)


def test_missing_puzzle(word_service: WordRoundService, set_level, user_id: str) -> None:
    set_level(user_id, GameType.WORD, 8)
    with pytest.raises(PuzzleNotFoundError):
        word_service.start_round(user_id)


def test_winning_guess_completes_round_and_advances(word_service: WordRoundService, progression, user_id: str) -> None:
    state = word_service.start_round(user_id)

    state = word_service.submit_guess(state.round_id, user_id, "brave")
    assert state.status == RoundStatus.IN_PROGRESS.value
    assert state.guess_results[0] == [
        ("B", "absent"), ("R", "absent"), ("A", "partial"), ("V", "absent"), ("E", "absent")
    ]

    state = word_service.submit_guess(state.round_id, user_id, "alpha")
    assert state.status == RoundStatus.COMPLETED.value
    assert state.attempt == 2
    assert state.answer == "ALPHA"
    assert state.progress == {"status": "advanced", "level": 2, "message": None}
    assert progression.get_cursor(user_id, GameType.WORD) == 2


def test_replaying_an_earlier_level_does_not_advance(word_service: WordRoundService, progression, set_level, user_id: str) -> None:
    set_level(user_id, GameType.WORD, 3)
    state = word_service.start_round(user_id, 1)

    state = word_service.submit_guess(state.round_id, user_id, "ALPHA")

    assert state.status == RoundStatus.COMPLETED.value
    assert state.progress["status"] == "blocked"
    assert state.progress["level"] == 3
    assert progression.get_cursor(user_id, GameType.WORD) == 3


def test_winning_last_level_reports_no_more_levels(word_service: WordRoundService, set_level, user_id: str) -> None:
    set_level(user_id, GameType.WORD, 3)
    state = word_service.start_round(user_id)

    state = word_service.submit_guess(state.round_id, user_id, "CHARM")

    assert state.progress == {"status": "exhausted", "level": 3, "message": "No more levels"}


def test_six_misses_reveal_answer_without_advancing(word_service: WordRoundService, progression, user_id: str) -> None:
    state = word_service.start_round(user_id)

    with patch.object(progression, "advance", wraps=progression.advance) as advance:
        for i, guess in enumerate(WRONG_GUESSES, start=1):
            state = word_service.submit_guess(state.round_id, user_id, guess)
            if i < MAX_ATTEMPTS:
                assert state.status == RoundStatus.IN_PROGRESS.value
                assert state.answer is None

        advance.assert_not_called()

    assert state.status == RoundStatus.REVEALED.value
    assert state.attempt == MAX_ATTEMPTS
    assert state.answer == "ALPHA"
    assert state.progress is None
    assert progression.get_cursor(user_id, GameType.WORD) == 1


def test_guess_after_round_is_over(word_service: WordRoundService, user_id: str) -> None:
    state = word_service.start_round(user_id)
    word_service.submit_guess(state.round_id, user_id, "ALPHA")

    with pytest.raises(RoundOverError):
        word_service.submit_guess(state.round_id, user_id, "ALPHA")


def test_invalid_guess_does_not_use_an_attempt(word_service: WordRoundService, user_id: str) -> None:
    state = word_service.start_round(user_id)

    with pytest.raises(InvalidGuessError):
        word_service.submit_guess(state.round_id, user_id, "ALP")

    assert word_service.get_round_state(state.round_id, user_id).attempt == 0


def test_letter_status_only_upgrades(word_service: WordRoundService, user_id: str) -> None:
    state = word_service.start_round(user_id)

    state = word_service.submit_guess(state.round_id, user_id, "PLUMB")
    assert state.letter_status["P"] == "partial"
    assert state.letter_status["L"] == "exact"
    assert state.letter_status["U"] == "absent"

    state = word_service.submit_guess(state.round_id, user_id, "SPOIL")
    # L was exact before and is only partial here
    assert state.letter_status["L"] == "exact"
    assert state.letter_status["S"] == "absent"


def test_rounds_are_private_to_their_user(word_service: WordRoundService, services, user_id: str) -> None:
    other = services["auth"].register_user("nurlan", "nurlan@example.kz", "secret123")["user_id"]
    state = word_service.start_round(user_id)

    with pytest.raises(RoundNotFoundError):
        word_service.get_round_state(state.round_id, other)
    with pytest.raises(RoundNotFoundError):
        word_service.submit_guess(state.round_id, other, "ALPHA")


def test_new_round_discards_previous_one(word_service: WordRoundService, user_id: str) -> None:
    first = word_service.start_round(user_id)
    second = word_service.start_round(user_id)

    with pytest.raises(RoundNotFoundError):
        word_service.get_round_state(first.round_id, user_id)
    assert word_service.get_round_state(second.round_id, user_id).round_id == second.round_id
    assert word_service.active_round_count() == 1


def test_delete_round(word_service: WordRoundService, user_id: str) -> None:
    state = word_service.start_round(user_id)
    word_service.delete_round(state.round_id, user_id)

    with pytest.raises(RoundNotFoundError):
        word_service.delete_round(state.round_id, user_id)
