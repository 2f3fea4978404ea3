"""
Authentication Service

Handles user authentication including registration, login,
password hashing, and JWT token management using MongoDB for data storage.
"""

import bcrypt
import jwt
import datetime
import hashlib
from typing import Optional, Dict, Any
from bson.objectid import ObjectId
from pymongo.database import Database

from ..config.game_settings import default_levels
from ..utils.helpers import utcnow


class AuthService:
    """
    Authentication service for handling user registration, login, and token management.
    """

    def __init__(self, db: Database, jwt_secret: str, jwt_expiration_days: int = 7):
        """
        Initialize the authentication service on an open database.

        Args:
            db: MongoDB database holding the users and sessions collections
            jwt_secret: Secret key for JWT token generation
            jwt_expiration_days: Lifetime of issued tokens and their sessions
        """
        self.jwt_secret = jwt_secret
        self.jwt_expiration_days = jwt_expiration_days

        self.users_collection = db.users
        self.sessions_collection = db.active_sessions

        # Create unique index on username
        self.users_collection.create_index("username", unique=True)

        # Create indexes for sessions collection
        self.sessions_collection.create_index("token_hash", unique=True)
        self.sessions_collection.create_index("user_id")
        self.sessions_collection.create_index("expires_at", expireAfterSeconds=0)  # TTL index

    def hash_password(self, password: str) -> str:
        """
        Hash a password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Hashed password as string
        """
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
        return hashed.decode('utf-8')

    def verify_password(self, password: str, hashed_password: str) -> bool:
        """
        Verify a password against its hash.

        Args:
            password: Plain text password
            hashed_password: Stored hashed password

        Returns:
            True if password matches, False otherwise
        """
        return bcrypt.checkpw(password.encode('utf-8'), hashed_password.encode('utf-8'))

    def _hash_token(self, token: str) -> str:
        """SHA256 hash of the token, stored instead of the token itself."""
        return hashlib.sha256(token.encode('utf-8')).hexdigest()

    def _create_session(self, user_id: str, token: str) -> None:
        now = utcnow()
        token_hash = self._hash_token(token)
        session_doc = {
            "user_id": user_id,
            "token_hash": token_hash,
            "created_at": now,
            "expires_at": now + datetime.timedelta(days=self.jwt_expiration_days)
        }

        # Logins within the same second produce the same token
        self.sessions_collection.replace_one({"token_hash": token_hash}, session_doc, upsert=True)

    def _public_user(self, user: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": str(user["_id"]),
            "username": user["username"],
            "email": user.get("email"),
            "is_admin": user.get("is_admin", False)
        }

    def register_user(self, username: str, email: str, password: str) -> Dict[str, Any]:
        """
        Register a new user with every game starting at level 1.

        Args:
            username: User's chosen username
            email: User's email address
            password: User's chosen password

        Returns:
            Dictionary with success status and message or error
        """
        if not username or not password or not email:
            return {"success": False, "error": "Username, email and password are required"}

        if len(username.strip()) < 3:
            return {"success": False, "error": "Username must be at least 3 characters long"}

        if len(password) < 6:
            return {"success": False, "error": "Password must be at least 6 characters long"}

        if "@" not in email:
            return {"success": False, "error": "Invalid email address"}

        username = username.strip().lower()  # Normalize username

        # Check if user already exists
        if self.users_collection.find_one({"username": username}):
            return {"success": False, "error": "Username already exists"}

        user_doc = {
            "username": username,
            "email": email.strip().lower(),
            "password": self.hash_password(password),
            "avatar": None,
            "is_admin": False,
            "created_at": utcnow(),
            "last_login": None,
            "levels": default_levels()
        }

        result = self.users_collection.insert_one(user_doc)

        return {
            "success": True,
            "message": "User registered successfully",
            "user_id": str(result.inserted_id)
        }

    def login_user(self, username: str, password: str) -> Dict[str, Any]:
        """
        Authenticate a user and generate JWT token.

        Args:
            username: User's username
            password: User's password

        Returns:
            Dictionary with success status and JWT token or error
        """
        if not username or not password:
            return {"success": False, "error": "Username and password are required"}

        username = username.strip().lower()  # Normalize username

        user = self.users_collection.find_one({"username": username})
        if not user or not self.verify_password(password, user["password"]):
            return {"success": False, "error": "Invalid username or password"}

        user_id = str(user["_id"])

        self.users_collection.update_one(
            {"_id": user["_id"]},
            {"$set": {"last_login": utcnow()}}
        )

        token_payload = {
            "user_id": user_id,
            "username": user["username"],
            "exp": datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(days=self.jwt_expiration_days)
        }

        token = jwt.encode(token_payload, self.jwt_secret, algorithm="HS256")
        self._create_session(user_id, token)

        return {
            "success": True,
            "token": token,
            "user": self._public_user(user)
        }

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a JWT token and check if its session is still active.

        Args:
            token: JWT token string

        Returns:
            Dictionary with success status and user data or error
        """
        try:
            if not token:
                return {"success": False, "error": "Token is required"}

            payload = jwt.decode(token, self.jwt_secret, algorithms=["HS256"])
            user_id = payload.get("user_id")

            if not user_id:
                return {"success": False, "error": "Invalid token payload"}

            session = self.sessions_collection.find_one({
                "user_id": user_id,
                "token_hash": self._hash_token(token),
                "expires_at": {"$gt": utcnow()}
            })

            if not session:
                return {"success": False, "error": "Session has expired or is invalid"}

            user = self.users_collection.find_one({"_id": ObjectId(user_id)})
            if not user:
                return {"success": False, "error": "User not found"}

            return {"success": True, "user": self._public_user(user)}

        except jwt.ExpiredSignatureError:
            return {"success": False, "error": "Token has expired"}
        except jwt.InvalidTokenError:
            return {"success": False, "error": "Invalid token"}

    def logout_user(self, token: str) -> Dict[str, Any]:
        """
        Logout a user by removing the session of this token.

        Args:
            token: JWT token string

        Returns:
            Dictionary with success status
        """
        if not token:
            return {"success": False, "error": "Token is required"}

        result = self.sessions_collection.delete_one({"token_hash": self._hash_token(token)})
        if result.deleted_count > 0:
            return {"success": True, "message": "Logged out successfully"}
        return {"success": False, "error": "Session not found or already expired"}

    def get_active_sessions_count(self) -> int:
        """
        Get the count of currently active sessions.

        Returns:
            Number of active sessions
        """
        return self.sessions_collection.count_documents({
            "expires_at": {"$gt": utcnow()}
        })


# Global service instance
_auth_service = None


def get_auth_service() -> Optional[AuthService]:
    """Get the global auth service instance."""
    return _auth_service


def initialize_auth_service(db: Database, jwt_secret: str, jwt_expiration_days: int = 7) -> AuthService:
    """Initialize the global auth service instance."""
    global _auth_service
    _auth_service = AuthService(db, jwt_secret, jwt_expiration_days)
    return _auth_service
