"""
Treeguessr Game Server - Main Entry Point

Creates the application from the environment-selected configuration and
starts the Flask-SocketIO server.
"""

import os
from . import create_app
from .config import config
from .services.game_service import get_game_service
from .utils.game_logger import game_logger


def main():
    """Main function to create the application and start the server."""
    config_class = config.get(os.getenv('FLASK_ENV', 'default'), config['default'])

    try:
        app, socketio = create_app(config_class)
        game_service = get_game_service()

        game_logger.logger.info("Treeguessr Server Starting")
        print(f"Starting Treeguessr on {config_class.HOST}:{config_class.PORT}")
        print(f"Debug mode: {config_class.DEBUG}")
        print(f"Ruleset: {config_class.RULESET}")
        print(f"Word list loaded: {bool(game_service and game_service.ready)}")
        print("=" * 50)

        socketio.run(app, host=config_class.HOST, port=config_class.PORT, debug=config_class.DEBUG,
                     allow_unsafe_werkzeug=True)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Treeguessr Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
