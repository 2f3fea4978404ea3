"""
Game Data Models

Contains word-round data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class Verdict(Enum):
    """Per-letter evaluation of a guess against the target word."""
    EXACT = "exact"
    PARTIAL = "partial"
    ABSENT = "absent"


class LetterStatus(Enum):
    """Keyboard status of a letter across all guesses of a round."""
    EXACT = "exact"
    PARTIAL = "partial"
    ABSENT = "absent"
    UNUSED = "unused"


class RoundStatus(Enum):
    """Lifecycle of a word round."""
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"  # guessed correctly
    REVEALED = "revealed"    # attempts exhausted, answer shown


@dataclass
class WordRoundState:
    """Client-facing word round representation."""
    round_id: str
    level: int
    attempt: int
    max_attempts: int
    status: str
    guesses: List[str]
    guess_results: List[List[Tuple[str, str]]]  # (letter, verdict) pairs for JSON serialization
    letter_status: Dict[str, str]
    answer: Optional[str] = None  # Only included once the round is over
    progress: Optional[Dict] = field(default=None)  # Advance result after a win
