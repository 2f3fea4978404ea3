"""
Request Decorators

Contains decorators for HTTP authentication and error mapping.
"""

from functools import wraps
from flask import request, jsonify

from ..exceptions import KazLingoError
from .activity_logger import activity_logger


def require_auth(f):
    """
    Decorator to require authentication for protected HTTP endpoints.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.auth_service import get_auth_service

        auth_service = get_auth_service()
        if not auth_service:
            return jsonify({'message': 'Authentication service unavailable'}), 500

        # Get token from Authorization header
        auth_header = request.headers.get('Authorization')
        if not auth_header or not auth_header.startswith('Bearer '):
            return jsonify({'message': 'Authorization token required'}), 401

        token = auth_header.split(' ', 1)[1]

        result = auth_service.verify_token(token)
        if not result['success']:
            return jsonify({'message': result['error']}), 401

        # Add user data to request context
        request.user = result['user']
        return f(*args, **kwargs)

    return decorated_function


def handle_errors(action: str):
    """
    Decorator mapping service exceptions to JSON error responses.

    Domain errors keep their message and status code; anything else is
    logged and answered with a generic 500.

    Args:
        action: Action name used in the activity log
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except KazLingoError as e:
                error_response = {'message': e.message}
                activity_logger.log_server_response(
                    request, action, False, error_response, status_code=e.status_code
                )
                return jsonify(error_response), e.status_code
            except Exception as e:
                activity_logger.log_error(request, e, action)
                error_response = {'message': f'Error while handling {action.replace("_", " ")}'}
                activity_logger.log_server_response(request, action, False, error_response, status_code=500)
                return jsonify(error_response), 500

        return decorated_function
    return decorator
