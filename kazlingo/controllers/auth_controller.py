"""
Authentication Controller

Handles all authentication-related HTTP endpoints.
"""

from flask import Blueprint, request, jsonify
from ..services.auth_service import get_auth_service
from ..utils.decorators import require_auth
from ..utils.activity_logger import activity_logger

auth_bp = Blueprint('auth', __name__)


def _unavailable():
    return jsonify({
        'success': False,
        'error': 'Authentication service unavailable'
    }), 500


@auth_bp.route('/register', methods=['POST'])
def register():
    """Register a new user."""
    try:
        auth_service = get_auth_service()
        if not auth_service:
            return _unavailable()

        data = request.get_json(silent=True)
        if not data:
            return jsonify({
                'success': False,
                'error': 'Request body is required'
            }), 400

        username = data.get('username')
        email = data.get('email')
        password = data.get('password')

        activity_logger.log_user_action(request, 'register', username=username, email=email)

        result = auth_service.register_user(username, email, password)

        if result['success']:
            activity_logger.log_server_response(request, 'register', True, result)
            return jsonify(result), 201
        else:
            activity_logger.log_server_response(request, 'register', False, result)
            return jsonify(result), 400

    except Exception as e:
        activity_logger.log_error(request, e, 'register')
        error_response = {
            'success': False,
            'error': 'Registration failed'
        }
        activity_logger.log_server_response(request, 'register', False, error_response)
        return jsonify(error_response), 500


@auth_bp.route('/login', methods=['POST'])
def login():
    """Login a user and return JWT token."""
    try:
        auth_service = get_auth_service()
        if not auth_service:
            return _unavailable()

        data = request.get_json(silent=True)
        if not data:
            return jsonify({
                'success': False,
                'error': 'Request body is required'
            }), 400

        username = data.get('username')
        password = data.get('password')

        activity_logger.log_user_action(request, 'login', username=username)

        result = auth_service.login_user(username, password)

        if result['success']:
            # The token is dropped by the logger's sanitizer
            activity_logger.log_server_response(request, 'login', True, result)
            return jsonify(result)
        else:
            activity_logger.log_server_response(request, 'login', False, result)
            return jsonify(result), 401

    except Exception as e:
        activity_logger.log_error(request, e, 'login')
        error_response = {
            'success': False,
            'error': 'Login failed'
        }
        activity_logger.log_server_response(request, 'login', False, error_response)
        return jsonify(error_response), 500


@auth_bp.route('/verify', methods=['GET'])
@require_auth
def verify_token():
    """Verify JWT token and return user info."""
    # User data is already in request.user from the decorator
    response_data = {
        'success': True,
        'user': request.user
    }

    activity_logger.log_server_response(request, 'verify_token', True, response_data)
    return jsonify(response_data)


@auth_bp.route('/logout', methods=['POST'])
@require_auth
def logout():
    """Logout a user and invalidate their session."""
    try:
        auth_service = get_auth_service()
        token = request.headers['Authorization'].split(' ', 1)[1]

        activity_logger.log_user_action(request, 'logout')

        result = auth_service.logout_user(token)

        if result['success']:
            activity_logger.log_server_response(request, 'logout', True, result)
            return jsonify(result)
        else:
            activity_logger.log_server_response(request, 'logout', False, result)
            return jsonify(result), 400

    except Exception as e:
        activity_logger.log_error(request, e, 'logout')
        error_response = {
            'success': False,
            'error': 'Logout failed'
        }
        activity_logger.log_server_response(request, 'logout', False, error_response)
        return jsonify(error_response), 500
