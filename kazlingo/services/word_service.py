"""
Word Round Service

Contains the Sozdly word game logic: guess evaluation and the attempt budget
of a round. A won round completes its level through the progression service.
"""

import threading
import uuid
from typing import Dict, List, Optional

from ..config.game_settings import MAX_ATTEMPTS, WORD_LENGTH, GameType, validate_word
from ..exceptions import (
    InvalidGuessError, InvalidLevelError, PuzzleNotFoundError, RoundNotFoundError, RoundOverError
)
from ..models.game import LetterStatus, RoundStatus, Verdict, WordRoundState
from .level_store import LevelStore, require_level
from .progression_service import LevelProgressionService


def normalize_guess(guess) -> str:
    """
    Uppercase a guess and check its shape.

    Raises:
        InvalidGuessError: If the guess is not WORD_LENGTH letters
    """
    if not guess or not isinstance(guess, str):
        raise InvalidGuessError("Guess must be a valid string")

    normalized = guess.strip().upper()

    if len(normalized) != WORD_LENGTH:
        raise InvalidGuessError(f"The word must be exactly {WORD_LENGTH} letters long.")

    if not normalized.isalpha():
        raise InvalidGuessError("Guess must contain only letters")

    return normalized


def evaluate_guess(guess: str, target: str) -> List[Verdict]:
    """
    Wordle letter evaluation with count-limited matching.

    Exact matches are claimed first; a remaining guess letter is PARTIAL only
    while the target still has an unclaimed occurrence of it, so repeated
    letters never spend the same target letter twice.

    Args:
        guess: Guess word, any case
        target: Target word, any case

    Returns:
        List[Verdict]: One verdict per position

    Raises:
        InvalidGuessError: If the guess is not WORD_LENGTH letters
    """
    guess_chars = list(normalize_guess(guess))
    target_chars: List[Optional[str]] = list(target.strip().upper())
    if len(target_chars) != WORD_LENGTH:
        raise ValueError(f"Target word must be {WORD_LENGTH} letters long")

    verdicts: List[Optional[Verdict]] = [None] * WORD_LENGTH

    # First pass: exact positions consume their target letter
    for i in range(WORD_LENGTH):
        if guess_chars[i] == target_chars[i]:
            verdicts[i] = Verdict.EXACT
            target_chars[i] = None

    # Second pass: partial matches spend whatever is left, left to right
    for i in range(WORD_LENGTH):
        if verdicts[i] is not None:
            continue
        letter = guess_chars[i]
        if letter in target_chars:
            verdicts[i] = Verdict.PARTIAL
            target_chars[target_chars.index(letter)] = None
        else:
            verdicts[i] = Verdict.ABSENT

    return verdicts  # type: ignore[return-value]


class WordRoundService:
    """
    Word round manager.

    This class handles:
    - Round creation for unlocked levels, one live round per user
    - Guess validation and evaluation
    - The attempt budget with answer reveal on loss
    - Level completion on a win
    """

    def __init__(self, level_store: LevelStore, progression_service: LevelProgressionService):
        self.level_store = level_store
        self.progression_service = progression_service
        self.rounds: Dict[str, Dict] = {}  # Active rounds by round_id
        self._lock = threading.Lock()

    def start_round(self, user_id: str, level: Optional[int] = None) -> WordRoundState:
        """
        Start a round on an unlocked level, discarding the user's earlier rounds.

        Args:
            user_id: Player
            level: Level to play, defaults to the user's cursor

        Raises:
            InvalidLevelError: If the level is invalid or still locked
            PuzzleNotFoundError: If no word is published at the level
        """
        cursor = self.progression_service.get_cursor(user_id, GameType.WORD)
        if level is None:
            level = cursor
        require_level(level)
        if level > cursor:
            raise InvalidLevelError(f"Level {level} is locked")

        puzzle = self.level_store.get_puzzle(GameType.WORD, level)
        if not puzzle:
            raise PuzzleNotFoundError('Failed to load sozdly level')

        round_id = str(uuid.uuid4())
        round_data = {
            "user_id": user_id,
            "level": level,
            "target_word": validate_word(puzzle["word"]),
            "attempt": 0,
            "status": RoundStatus.IN_PROGRESS,
            "guesses": [],
            "guess_results": [],
            "letter_status": {},
            "progress": None
        }

        with self._lock:
            stale = [rid for rid, data in self.rounds.items() if data["user_id"] == user_id]
            for rid in stale:
                del self.rounds[rid]
            self.rounds[round_id] = round_data

        return self._to_state(round_id, round_data)

    def get_round_state(self, round_id: str, user_id: str) -> WordRoundState:
        """
        Returns the current round state (without the answer while in progress).

        Raises:
            RoundNotFoundError: If the round does not exist or belongs to another user
        """
        with self._lock:
            return self._to_state(round_id, self._get_round(round_id, user_id))

    def submit_guess(self, round_id: str, user_id: str, guess: str) -> WordRoundState:
        """
        Evaluate a guess and update the round.

        A correct guess completes the round and advances the user's cursor
        (when the round's level is the cursor). The last incorrect attempt
        reveals the answer without touching progression.

        Raises:
            RoundNotFoundError: If the round does not exist or belongs to another user
            RoundOverError: If the round already ended
            InvalidGuessError: If the guess is not WORD_LENGTH letters
        """
        with self._lock:
            round_data = self._get_round(round_id, user_id)
            if round_data["status"] != RoundStatus.IN_PROGRESS:
                raise RoundOverError("Round is already over")

            normalized_guess = normalize_guess(guess)
            verdicts = evaluate_guess(normalized_guess, round_data["target_word"])

            round_data["attempt"] += 1
            round_data["guesses"].append(normalized_guess)
            round_data["guess_results"].append(
                [(letter, verdict.value) for letter, verdict in zip(normalized_guess, verdicts)]
            )
            self._update_letter_status(round_data["letter_status"], normalized_guess, verdicts)

            if normalized_guess == round_data["target_word"]:
                round_data["status"] = RoundStatus.COMPLETED
            elif round_data["attempt"] >= MAX_ATTEMPTS:
                round_data["status"] = RoundStatus.REVEALED

            won = round_data["status"] == RoundStatus.COMPLETED
            level = round_data["level"]

        if won:
            result = self.progression_service.advance(user_id, GameType.WORD, level)
            with self._lock:
                round_data["progress"] = {
                    "status": result.status.value,
                    "level": result.level,
                    "message": result.message
                }

        with self._lock:
            return self._to_state(round_id, round_data)

    def delete_round(self, round_id: str, user_id: str) -> None:
        """
        Removes a round from memory.

        Raises:
            RoundNotFoundError: If the round does not exist or belongs to another user
        """
        with self._lock:
            self._get_round(round_id, user_id)
            del self.rounds[round_id]

    def active_round_count(self) -> int:
        return len(self.rounds)

    def _get_round(self, round_id: str, user_id: str) -> Dict:
        round_data = self.rounds.get(round_id)
        if round_data is None or round_data["user_id"] != user_id:
            raise RoundNotFoundError()
        return round_data

    def _update_letter_status(self, letter_status: Dict[str, str], guess: str, verdicts: List[Verdict]) -> None:
        """
        Updates keyboard letter status based on guess results.
        Status can only progress in priority order: unused, absent, partial, exact.
        """
        priority = [LetterStatus.UNUSED, LetterStatus.ABSENT, LetterStatus.PARTIAL, LetterStatus.EXACT]
        for letter, verdict in zip(guess, verdicts):
            current = LetterStatus(letter_status.get(letter, LetterStatus.UNUSED.value))
            new = LetterStatus(verdict.value)
            if priority.index(new) > priority.index(current):
                letter_status[letter] = new.value

    def _to_state(self, round_id: str, round_data: Dict) -> WordRoundState:
        status: RoundStatus = round_data["status"]
        return WordRoundState(
            round_id=round_id,
            level=round_data["level"],
            attempt=round_data["attempt"],
            max_attempts=MAX_ATTEMPTS,
            status=status.value,
            guesses=round_data["guesses"].copy(),
            guess_results=[list(result) for result in round_data["guess_results"]],
            letter_status=round_data["letter_status"].copy(),
            answer=round_data["target_word"] if status != RoundStatus.IN_PROGRESS else None,
            progress=round_data["progress"]
        )


# Global service instance
_word_service = None


def get_word_service() -> Optional[WordRoundService]:
    """Get the global word round service instance."""
    return _word_service


def initialize_word_service(level_store: LevelStore, progression_service: LevelProgressionService) -> WordRoundService:
    """Initialize the global word round service instance."""
    global _word_service
    _word_service = WordRoundService(level_store, progression_service)
    return _word_service
