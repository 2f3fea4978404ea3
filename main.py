"""
KazLingo Server - Main Entry Point

This is the main entry point for the KazLingo server.
It connects to MongoDB, seeds the puzzle collections, initializes all
services and starts the Flask application.
"""

import os
import sys

from kazlingo import create_app
from kazlingo.config import config
from kazlingo.services import initialize_services, get_level_store
from kazlingo.services.database import connect_database
from kazlingo.utils.activity_logger import activity_logger


def main():
    """Main function to initialize services and start the server."""
    config_class = config[os.getenv('APP_ENV', 'default')]

    if not config_class.MONGO_URI or not config_class.JWT_SECRET:
        print("✗ MongoDB URI or JWT Secret not configured")
        sys.exit(1)

    try:
        print("Initializing services...")
        db = connect_database(config_class.MONGO_URI, config_class.MONGO_DB_NAME)
        initialize_services(db, config_class)
        print("✓ Services initialized successfully")

        if os.path.exists(config_class.LEVELS_FILE):
            written = get_level_store().seed_from_file(config_class.LEVELS_FILE)
            print(f"✓ Seeded levels: {written}")
        else:
            print(f"No levels file at {config_class.LEVELS_FILE}, skipping seeding")

        print("Creating Flask application...")
        app = create_app(config_class)
        print("✓ Flask application created successfully")

        activity_logger.logger.info("KazLingo Server Starting")

        print(f"\nStarting KazLingo Server on {config_class.HOST}:{config_class.PORT}")
        print(f"Debug mode: {config_class.DEBUG}")
        print("=" * 50)

        app.run(host=config_class.HOST, port=config_class.PORT, debug=config_class.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        activity_logger.logger.info("KazLingo Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        activity_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
