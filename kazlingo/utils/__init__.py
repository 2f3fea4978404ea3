"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import require_auth, handle_errors
from .helpers import utcnow, parse_level, serialize_document
from .activity_logger import activity_logger

__all__ = ['require_auth', 'handle_errors', 'utcnow', 'parse_level', 'serialize_document', 'activity_logger']
