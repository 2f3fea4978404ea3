"""
KazLingo Server Application Package

Language-learning mini-games (Sozdly word game, Maqal proverbs, Suraq-Jauap quiz)
with per-user level progression, served as a REST API.
"""

from flask import Flask, jsonify
from flask_cors import CORS
from .config import Config


def create_app(config_class=Config):
    """
    Application factory pattern for creating Flask app instances.

    Services are initialized separately (see services.initialize_services)
    so tests can run the app against any database.

    Args:
        config_class: Configuration class to use

    Returns:
        Flask application instance with all extensions initialized
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Leave room for multipart overhead; the avatar size limit itself is enforced by the profile service
    app.config['MAX_CONTENT_LENGTH'] = config_class.MAX_AVATAR_BYTES * 2

    # Initialize extensions
    CORS(app)

    # Register blueprints
    from .controllers.auth_controller import auth_bp
    from .controllers.profile_controller import profile_bp
    from .controllers.play_controller import play_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(profile_bp, url_prefix='/profile')
    app.register_blueprint(play_bp, url_prefix='/api')

    @app.errorhandler(413)
    def request_too_large(error):
        return jsonify({'message': 'Error: File too large'}), 400

    return app
