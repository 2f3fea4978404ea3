"""
Play Controller

Handles the Sozdly word round endpoints, free-text answer checks for the
proverb and quiz games, and the health check.
"""

from dataclasses import asdict
from flask import Blueprint, request, jsonify

from ..config.game_settings import ANSWER_CHECKED_GAMES, GAMES, GameDefinition, GameType
from ..exceptions import InvalidGuessError
from ..models.game import RoundStatus
from ..models.progress import AdvanceResult, AdvanceStatus
from ..services.answer_service import get_answer_service
from ..services.auth_service import get_auth_service
from ..services.word_service import get_word_service
from ..utils.activity_logger import activity_logger
from ..utils.decorators import require_auth, handle_errors
from ..utils.helpers import parse_level
from .profile_controller import log_advance_result

play_bp = Blueprint('play', __name__)

WORD_GAME = GAMES[GameType.WORD]
ROUNDS_URL = f'/{WORD_GAME.route_prefix}/rounds'


def word_service():
    service = get_word_service()
    if not service:
        raise RuntimeError('Word service unavailable')
    return service


@play_bp.route(ROUNDS_URL, methods=['POST'])
@require_auth
@handle_errors('start_round')
def start_round():
    """Start a word round on the current or an earlier level."""
    data = request.get_json(silent=True) or {}
    activity_logger.log_user_action(request, 'start_round', level=data.get('level'))

    level = parse_level(data['level']) if data.get('level') is not None else None
    state = word_service().start_round(request.user['id'], level)

    response_data = {'state': asdict(state)}
    activity_logger.log_server_response(
        request, 'start_round', True, response_data, round_id=state.round_id, level=state.level
    )
    return jsonify(response_data), 201


@play_bp.route(f'{ROUNDS_URL}/<round_id>', methods=['GET'])
@require_auth
@handle_errors('get_round')
def get_round(round_id):
    """Get current round state."""
    activity_logger.log_user_action(request, 'get_round', round_id=round_id)

    state = word_service().get_round_state(round_id, request.user['id'])

    response_data = {'state': asdict(state)}
    activity_logger.log_server_response(request, 'get_round', True, response_data, round_id=round_id)
    return jsonify(response_data)


@play_bp.route(f'{ROUNDS_URL}/<round_id>/guess', methods=['POST'])
@require_auth
@handle_errors('submit_guess')
def submit_guess(round_id):
    """Submit a guess for evaluation."""
    data = request.get_json(silent=True) or {}
    if 'guess' not in data:
        raise InvalidGuessError('Guess is required')

    guess = data['guess']
    activity_logger.log_user_action(request, 'submit_guess', round_id=round_id, guess=guess)

    state = word_service().submit_guess(round_id, request.user['id'], guess)

    response_data = {'state': asdict(state)}
    activity_logger.log_server_response(
        request, 'submit_guess', True, response_data,
        round_id=round_id, attempt=state.attempt, status=state.status
    )

    if state.status == RoundStatus.COMPLETED.value:
        activity_logger.log_game_event(
            request, 'round_won', WORD_GAME.key,
            round_id=round_id, level=state.level, attempts_used=state.attempt
        )
        if state.progress:
            result = AdvanceResult(AdvanceStatus(state.progress['status']), state.progress['level'])
            log_advance_result(WORD_GAME, state.level, result)
    elif state.status == RoundStatus.REVEALED.value:
        activity_logger.log_game_event(
            request, 'round_lost', WORD_GAME.key,
            round_id=round_id, level=state.level, attempts_used=state.attempt
        )

    return jsonify(response_data)


@play_bp.route(f'{ROUNDS_URL}/<round_id>', methods=['DELETE'])
@require_auth
@handle_errors('delete_round')
def delete_round(round_id):
    """Discard a round."""
    activity_logger.log_user_action(request, 'delete_round', round_id=round_id)

    word_service().delete_round(round_id, request.user['id'])

    response_data = {'success': True}
    activity_logger.log_server_response(request, 'delete_round', True, response_data, round_id=round_id)
    return jsonify(response_data)


def register_check_route(definition: GameDefinition) -> None:
    """Register POST /api/<prefix>/check for an answer-checked game."""
    action = f'check_{definition.route_prefix}_answer'

    @require_auth
    @handle_errors(action)
    def check_answer():
        answer_service = get_answer_service()
        if not answer_service:
            raise RuntimeError('Answer service unavailable')

        data = request.get_json(silent=True) or {}
        activity_logger.log_user_action(request, action, game=definition.key, level=data.get('level'))

        level = parse_level(data.get('level'))
        result = answer_service.check_answer(request.user['id'], definition.game_type, level, data.get('answer'))
        if result.advance:
            log_advance_result(definition, level, result.advance)

        response_data = result.to_response(definition.level_key)
        activity_logger.log_server_response(request, action, True, response_data)
        return jsonify(response_data)

    play_bp.add_url_rule(f'/{definition.route_prefix}/check', endpoint=f'{definition.route_prefix}_check',
                         view_func=check_answer, methods=['POST'])


for _game_type in ANSWER_CHECKED_GAMES:
    register_check_route(GAMES[_game_type])


@play_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        service = get_word_service()
        auth_service = get_auth_service()

        activity_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy',
            'active_rounds': service.active_round_count() if service else 0,
            'log_stats': activity_logger.get_log_stats(),
            'auth_available': auth_service is not None,
            'active_sessions': auth_service.get_active_sessions_count() if auth_service else 0
        }

        activity_logger.log_server_response(request, 'health_check', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        activity_logger.log_error(request, e, 'health_check')
        error_response = {'status': 'error', 'message': 'Health check failed'}
        activity_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
