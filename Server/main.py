"""
Color Match Game Server - Main Entry Point

This is the main entry point for the color match game server.
It initializes the game service and starts the Flask-SocketIO application.
"""

import threading
import time
from color_game import create_app
from color_game.config import Config, GameSettings
from color_game.services.game_service import initialize_game_service, get_game_service
from color_game.utils.game_logger import game_logger


def idle_cleanup_worker(interval_seconds, max_idle_seconds):
    """
    Background worker that periodically removes abandoned game sessions.
    Runs every ``interval_seconds`` and drops sessions idle for longer than
    ``max_idle_seconds``.
    """
    print("Idle session cleanup worker started")
    while True:
        try:
            game_service = get_game_service()
            if game_service:
                cleanup_result = game_service.cleanup_idle_games(max_idle_seconds)
                if cleanup_result["cleaned_count"] > 0:
                    game_logger.logger.info(
                        f"Idle cleanup: Removed {cleanup_result['cleaned_count']} sessions"
                    )
        except Exception as e:
            game_logger.logger.error(f"Error in idle cleanup worker: {e}")

        time.sleep(interval_seconds)


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")

        settings = GameSettings.from_config(Config)
        game_service = initialize_game_service(settings)
        if game_service:
            print(f"✓ Game service initialized ({settings.policy.value} policy)")
        else:
            print("✗ Failed to initialize game service")

        # Create Flask app
        print("Creating Flask application...")
        app, socketio = create_app(Config)
        print("✓ Flask application created successfully")

        cleanup_thread = threading.Thread(
            target=idle_cleanup_worker,
            args=(Config.CLEANUP_INTERVAL_SECONDS, Config.SESSION_IDLE_TIMEOUT_SECONDS),
            daemon=True
        )
        cleanup_thread.start()
        print(f"✓ Idle cleanup worker started - checking every {Config.CLEANUP_INTERVAL_SECONDS} seconds")

        game_logger.logger.info("Color Match Server Starting")

        print(f"\nStarting Color Match Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print("=" * 50)

        socketio.run(app, host=Config.HOST, port=Config.PORT, debug=Config.DEBUG,
                     allow_unsafe_werkzeug=True)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Color Match Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
