"""
Treeguessr Game Server Application Package

A browser-based tree-name guessing game. The round engine is a set of pure
state transitions; this package wraps it with a Flask HTTP API, a Socket.IO
channel and a small static client.
"""

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config


def create_app(config_class=Config):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use

    Returns:
        Tuple of (Flask application, SocketIO instance) with all extensions
        and services initialized
    """
    app = Flask(__name__, static_folder='static', static_url_path='')
    app.config.from_object(config_class)

    # Initialize extensions
    CORS(app, origins=app.config['CORS_ORIGINS'])
    socketio = SocketIO(app, cors_allowed_origins=app.config['CORS_ORIGINS'], logger=False, engineio_logger=False)

    from .utils.game_logger import game_logger
    game_logger.init_app(app)

    # Load the word list once; a failure leaves the service inert, not the app
    from .services.game_service import initialize_game_service
    game_service = initialize_game_service(app.config['WORD_LIST_PATH'], app.config['RULESET'])
    if not game_service.ready:
        game_logger.logger.warning(f"Word list unavailable at {app.config['WORD_LIST_PATH']}; no rounds can start")

    # Register blueprints
    from .controllers.game_controller import game_bp
    app.register_blueprint(game_bp, url_prefix='/api')

    @app.route('/')
    def index():
        return app.send_static_file('index.html')

    # Register WebSocket handlers
    from .websocket.handlers import register_websocket_handlers
    register_websocket_handlers(socketio)

    # Store socketio instance for use in other modules
    app.socketio = socketio

    return app, socketio
