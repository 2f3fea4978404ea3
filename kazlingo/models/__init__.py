"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import Verdict, LetterStatus, RoundStatus, WordRoundState
from .progress import AdvanceStatus, AdvanceResult, AnswerCheckResult
from .user import User

__all__ = [
    'Verdict', 'LetterStatus', 'RoundStatus', 'WordRoundState',
    'AdvanceStatus', 'AdvanceResult', 'AnswerCheckResult', 'User'
]
