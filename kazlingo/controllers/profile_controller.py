"""
Profile Controller

Handles the profile endpoints and, for every game in the registry, the
current / level / completed / updateLevel endpoints.
"""

from flask import Blueprint, request, jsonify

from ..config.game_settings import GAMES, GameDefinition
from ..models.progress import AdvanceResult, AdvanceStatus
from ..services.profile_service import get_profile_service
from ..services.progression_service import get_progression_service
from ..utils.activity_logger import activity_logger
from ..utils.decorators import require_auth, handle_errors
from ..utils.helpers import parse_level, serialize_document

profile_bp = Blueprint('profile', __name__)

ADVANCE_EVENTS = {
    AdvanceStatus.ADVANCED: 'level_advanced',
    AdvanceStatus.BLOCKED: 'level_blocked',
    AdvanceStatus.EXHAUSTED: 'levels_exhausted',
}


def progression_service():
    service = get_progression_service()
    if not service:
        raise RuntimeError('Progression service unavailable')
    return service


def log_advance_result(definition: GameDefinition, submitted_level: int, result: AdvanceResult) -> None:
    """Record the outcome of a level completion as a game event."""
    activity_logger.log_game_event(
        request, ADVANCE_EVENTS[result.status], definition.key,
        submitted_level=submitted_level, level=result.level
    )


@profile_bp.route('', methods=['GET'])
@require_auth
@handle_errors('get_profile')
def get_profile():
    """Get profile information with the level of every game."""
    profile_service = get_profile_service()
    if not profile_service:
        raise RuntimeError('Profile service unavailable')

    activity_logger.log_user_action(request, 'get_profile')

    user = profile_service.get_profile(request.user['id'])
    response_data = user.to_profile()

    activity_logger.log_server_response(request, 'get_profile', True, response_data)
    return jsonify(response_data)


@profile_bp.route('/updateProfile', methods=['POST'])
@require_auth
@handle_errors('update_profile')
def update_profile():
    """Update username, email and avatar (multipart form or JSON body)."""
    profile_service = get_profile_service()
    if not profile_service:
        raise RuntimeError('Profile service unavailable')

    data = request.form if request.form else (request.get_json(silent=True) or {})
    username = data.get('username')
    email = data.get('email')
    avatar = request.files.get('avatar')

    activity_logger.log_user_action(
        request, 'update_profile',
        username=username, email=email, avatar_uploaded=avatar is not None
    )

    user = profile_service.update_profile(request.user['id'], username=username, email=email, avatar=avatar)
    response_data = {
        'username': user.username,
        'email': user.email,
        'avatar': user.avatar,
    }

    activity_logger.log_server_response(request, 'update_profile', True, response_data)
    return jsonify(response_data)


def register_game_routes(definition: GameDefinition) -> None:
    """
    Register the four progression endpoints of one game.

    With the "sj" prefix this adds /sjcurrent, /sjlevel, /sjcompleted and
    /sjupdateLevel under the blueprint's /profile prefix. Talda has an empty
    prefix and is served at /current, /level, /completed and /updateLevel.
    """
    prefix = definition.route_prefix
    key = definition.key
    game_type = definition.game_type

    @require_auth
    @handle_errors(f'get_current_{key}_level')
    def current_level():
        action = f'get_current_{key}_level'
        activity_logger.log_user_action(request, action, game=definition.key)

        puzzle = progression_service().current_puzzle(request.user['id'], game_type)
        response_data = serialize_document(puzzle)

        activity_logger.log_server_response(request, action, True, response_data, level=puzzle['level'])
        return jsonify(response_data)

    @require_auth
    @handle_errors(f'get_{key}_level')
    def level_by_number():
        action = f'get_{key}_level'
        activity_logger.log_user_action(request, action, game=definition.key, level=request.args.get('level'))

        level = parse_level(request.args.get('level'))
        puzzle = progression_service().puzzle_at(game_type, level)
        response_data = serialize_document(puzzle)

        activity_logger.log_server_response(request, action, True, response_data, level=level)
        return jsonify(response_data)

    @require_auth
    @handle_errors(f'get_completed_{key}_levels')
    def completed_levels():
        action = f'get_completed_{key}_levels'
        activity_logger.log_user_action(request, action, game=definition.key)

        puzzles = progression_service().completed_puzzles(request.user['id'], game_type)
        response_data = [serialize_document(puzzle) for puzzle in puzzles]

        activity_logger.log_server_response(request, action, True, response_data)
        return jsonify(response_data)

    @require_auth
    @handle_errors(f'update_{key}_level')
    def update_level():
        action = f'update_{key}_level'
        data = request.get_json(silent=True) or {}
        activity_logger.log_user_action(request, action, game=definition.key, level=data.get('level'))

        level = parse_level(data.get('level'))
        result = progression_service().advance(request.user['id'], game_type, level)
        log_advance_result(definition, level, result)

        response_data = result.to_response(definition.level_key)
        activity_logger.log_server_response(request, action, True, response_data)
        return jsonify(response_data)

    profile_bp.add_url_rule(f'/{prefix}current', endpoint=f'{key}_current',
                            view_func=current_level, methods=['GET'])
    profile_bp.add_url_rule(f'/{prefix}level', endpoint=f'{key}_level',
                            view_func=level_by_number, methods=['GET'])
    profile_bp.add_url_rule(f'/{prefix}completed', endpoint=f'{key}_completed',
                            view_func=completed_levels, methods=['GET'])
    profile_bp.add_url_rule(f'/{prefix}updateLevel', endpoint=f'{key}_update_level',
                            view_func=update_level, methods=['POST'])


for _definition in GAMES.values():
    register_game_routes(_definition)
