"""
Database Connection

Creates the MongoDB client shared by all services.
"""

from pymongo.database import Database
from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

from ..utils.activity_logger import activity_logger


def connect_database(mongo_uri: str, db_name: str) -> Database:
    """
    Connect to MongoDB and return the application database.

    Args:
        mongo_uri: MongoDB connection string
        db_name: Name of the application database

    Raises:
        pymongo.errors.PyMongoError: If the server does not answer a ping
    """
    client = MongoClient(mongo_uri, server_api=ServerApi('1'))

    try:
        client.admin.command('ping')
        activity_logger.logger.info(f"Connected to MongoDB database '{db_name}'")
    except Exception as e:
        activity_logger.logger.error(f"MongoDB connection error: {e}")
        client.close()
        raise

    return client[db_name]
