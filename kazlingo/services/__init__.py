"""
Services Package

Contains all business logic and service classes.
"""

from pymongo.database import Database

from .auth_service import AuthService, get_auth_service, initialize_auth_service
from .level_store import LevelStore, get_level_store, initialize_level_store
from .progression_service import LevelProgressionService, get_progression_service, initialize_progression_service
from .word_service import WordRoundService, evaluate_guess, get_word_service, initialize_word_service
from .answer_service import AnswerCheckService, get_answer_service, initialize_answer_service
from .profile_service import ProfileService, get_profile_service, initialize_profile_service


def initialize_services(db: Database, config_class) -> None:
    """
    Initialize every global service on one database.

    Args:
        db: Application database
        config_class: Configuration class providing secrets and limits
    """
    initialize_auth_service(db, config_class.JWT_SECRET, config_class.JWT_EXPIRATION_DAYS)
    level_store = initialize_level_store(db)
    progression_service = initialize_progression_service(db, level_store)
    initialize_word_service(level_store, progression_service)
    initialize_answer_service(progression_service)
    initialize_profile_service(db, config_class.UPLOAD_DIR, config_class.MAX_AVATAR_BYTES)


__all__ = [
    'AuthService', 'get_auth_service',
    'LevelStore', 'get_level_store',
    'LevelProgressionService', 'get_progression_service',
    'WordRoundService', 'evaluate_guess', 'get_word_service',
    'AnswerCheckService', 'get_answer_service',
    'ProfileService', 'get_profile_service',
    'initialize_services'
]
