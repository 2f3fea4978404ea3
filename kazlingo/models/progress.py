"""
Progress Data Models

Result types of the level progression protocol.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class AdvanceStatus(Enum):
    ADVANCED = "advanced"
    BLOCKED = "blocked"
    EXHAUSTED = "exhausted"


BLOCKED_MESSAGE = 'You can only advance from your current highest level'
EXHAUSTED_MESSAGE = 'No more levels'


@dataclass
class AdvanceResult:
    """Outcome of a "complete level N" request."""
    status: AdvanceStatus
    level: int

    @property
    def message(self) -> Optional[str]:
        if self.status == AdvanceStatus.BLOCKED:
            return BLOCKED_MESSAGE
        if self.status == AdvanceStatus.EXHAUSTED:
            return EXHAUSTED_MESSAGE
        return None

    def to_response(self, level_key: str) -> Dict[str, Any]:
        """
        Render the result in the wire format of the updateLevel endpoints.

        Args:
            level_key: Game-specific key for the cursor (e.g. "sozdlyLevel")
        """
        response: Dict[str, Any] = {}
        if self.message:
            response['message'] = self.message
        response[level_key] = self.level
        return response


@dataclass
class AnswerCheckResult:
    """Outcome of a free-text answer submission."""
    correct: bool
    level: int
    advance: Optional[AdvanceResult] = None

    def to_response(self, level_key: str) -> Dict[str, Any]:
        response: Dict[str, Any] = {'correct': self.correct, level_key: self.level}
        if self.advance and self.advance.message:
            response['message'] = self.advance.message
        return response
