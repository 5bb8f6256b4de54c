"""
Mastermind Game Server - Main Entry Point

This is the main entry point for the Mastermind game server.
It initializes the record stores and services and starts the
Flask-SocketIO application.
"""

from mastermind import create_app
from mastermind.config import Config, validate_difficulty_settings
from mastermind.services.game_service import initialize_game_service
from mastermind.services.store import (
    InMemoryGameStore, InMemoryLeaderboardStore,
    MongoGameStore, MongoLeaderboardStore, connect_mongo,
)
from mastermind.utils.game_logger import game_logger


def build_stores(config_class=Config):
    """Pick the MongoDB stores when MONGO_URI is configured, in-memory otherwise."""
    if config_class.MONGO_URI:
        db = connect_mongo(config_class.MONGO_URI, config_class.MONGO_DB_NAME)
        print("✓ Connected to MongoDB")
        return MongoGameStore(db), MongoLeaderboardStore(db)

    print("MONGO_URI not configured, using in-memory stores")
    return InMemoryGameStore(), InMemoryLeaderboardStore()


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")
        validate_difficulty_settings()

        game_store, leaderboard_store = build_stores(Config)
        initialize_game_service(game_store, leaderboard_store, max_attempts=Config.MAX_ATTEMPTS)
        print("✓ Game service initialized successfully")

        print("Creating Flask application...")
        app, socketio = create_app(Config)
        print("✓ Flask application created successfully")

        game_logger.logger.info(
            f"Mastermind Server Starting - store={game_store.backend} max_attempts={Config.MAX_ATTEMPTS}"
        )

        print(f"\nStarting Mastermind Game Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print("=" * 50)

        socketio.run(app, host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Mastermind Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
