"""
User Data Models

Contains user-related data structures.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from datetime import datetime

from ..config.game_settings import GAMES, DEFAULT_LEVEL


@dataclass
class User:
    """User profile data model."""
    id: str
    username: str
    email: Optional[str] = None
    avatar: Optional[str] = None
    is_admin: bool = False
    levels: Dict[str, int] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> 'User':
        stored_levels = doc.get("levels") or {}
        levels = {
            definition.key: stored_levels.get(definition.key, DEFAULT_LEVEL)
            for definition in GAMES.values()
        }
        return cls(
            id=str(doc["_id"]),
            username=doc["username"],
            email=doc.get("email"),
            avatar=doc.get("avatar"),
            is_admin=doc.get("is_admin", False),
            levels=levels,
            created_at=doc.get("created_at"),
            last_login=doc.get("last_login"),
        )

    def to_profile(self) -> Dict[str, Any]:
        """Profile payload: identity fields plus one level key per game."""
        profile: Dict[str, Any] = {
            "username": self.username,
            "email": self.email,
            "avatar": self.avatar,
        }
        for definition in GAMES.values():
            profile[definition.profile_field] = self.levels[definition.key]
        return profile
