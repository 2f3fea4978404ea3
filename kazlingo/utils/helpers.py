"""
Helper Functions

Contains utility functions used throughout the application.
"""

import datetime
from typing import Any, Dict

from bson.objectid import ObjectId

from ..exceptions import InvalidLevelError


def utcnow() -> datetime.datetime:
    """Naive UTC timestamp, the form MongoDB hands back for stored dates."""
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


def parse_level(value: Any) -> int:
    """
    Parse a level from a query string or JSON body.

    Accepts positive integers and strings of digits.

    Raises:
        InvalidLevelError: For missing, non-numeric or non-positive values
    """
    if isinstance(value, bool) or value is None:
        raise InvalidLevelError('Invalid level parameter')

    if isinstance(value, str):
        value = value.strip()
        if not (value.isascii() and value.isdigit()):
            raise InvalidLevelError('Invalid level parameter')
        value = int(value)

    if not isinstance(value, int) or value < 1:
        raise InvalidLevelError('Invalid level parameter')

    return value


def serialize_document(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Make a MongoDB document JSON serializable."""
    serialized = {}
    for key, value in doc.items():
        if isinstance(value, ObjectId):
            serialized[key] = str(value)
        elif isinstance(value, datetime.datetime):
            serialized[key] = value.isoformat()
        elif isinstance(value, dict):
            serialized[key] = serialize_document(value)
        else:
            serialized[key] = value
    return serialized
