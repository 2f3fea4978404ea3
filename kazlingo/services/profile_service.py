"""
Profile Service

Reads and updates the user profile: username, email and avatar image.
"""

import os
import re
import time
from pathlib import Path
from typing import Optional

from bson.errors import InvalidId
from bson.objectid import ObjectId
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ..exceptions import ProfileConflictError, UploadError, UserNotFoundError
from ..models.user import User

ALLOWED_AVATAR_EXTENSIONS = re.compile(r'^\.(jpe?g|png|gif)$')
ALLOWED_AVATAR_MIMETYPES = re.compile(r'^image/(jpeg|png|gif)$')


class ProfileService:
    """
    Profile service handling profile reads, field updates and avatar storage.
    """

    def __init__(self, db: Database, upload_dir: str, max_avatar_bytes: int):
        self.users_collection = db.users
        self.upload_dir = Path(upload_dir)
        self.max_avatar_bytes = max_avatar_bytes

    def _object_id(self, user_id: str) -> ObjectId:
        try:
            return ObjectId(user_id)
        except (InvalidId, TypeError):
            raise UserNotFoundError()

    def get_profile(self, user_id: str) -> User:
        """
        Load a user's profile.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        doc = self.users_collection.find_one({"_id": self._object_id(user_id)})
        if not doc:
            raise UserNotFoundError()
        return User.from_document(doc)

    def update_profile(self,
                       user_id: str,
                       username: Optional[str] = None,
                       email: Optional[str] = None,
                       avatar: Optional[FileStorage] = None) -> User:
        """
        Update profile fields. Blank values keep the stored ones.

        Args:
            user_id: User to update
            username: New username
            email: New email address
            avatar: Uploaded image file

        Raises:
            UserNotFoundError: If the user does not exist
            ProfileConflictError: If the username is taken
            UploadError: If the avatar is not an accepted image
        """
        object_id = self._object_id(user_id)
        if not self.users_collection.find_one({"_id": object_id}, {"_id": 1}):
            raise UserNotFoundError()

        changes = {}

        if username and username.strip():
            username = username.strip().lower()
            if len(username) < 3:
                raise ProfileConflictError("Username must be at least 3 characters long")
            if self.users_collection.find_one({"username": username, "_id": {"$ne": object_id}}):
                raise ProfileConflictError("Username already exists")
            changes["username"] = username

        if email and email.strip():
            email = email.strip().lower()
            if "@" not in email:
                raise ProfileConflictError("Invalid email address")
            changes["email"] = email

        if avatar is not None and avatar.filename:
            changes["avatar"] = self.save_avatar(avatar)

        if changes:
            try:
                self.users_collection.update_one({"_id": object_id}, {"$set": changes})
            except DuplicateKeyError:
                raise ProfileConflictError("Username already exists")

        return self.get_profile(user_id)

    def save_avatar(self, avatar: FileStorage) -> str:
        """
        Validate and store an avatar image.

        Returns:
            str: Relative path of the stored file

        Raises:
            UploadError: For non-image files or files over the size limit
        """
        extension = os.path.splitext(secure_filename(avatar.filename or ''))[1].lower()
        mimetype = avatar.mimetype or ''

        if not (ALLOWED_AVATAR_EXTENSIONS.match(extension) and ALLOWED_AVATAR_MIMETYPES.match(mimetype)):
            raise UploadError('Error: Incorrect media type. Images only!')

        data = avatar.read()
        if len(data) > self.max_avatar_bytes:
            raise UploadError('Error: File too large')

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        filename = f"avatar-{int(time.time() * 1000)}{extension}"
        target = self.upload_dir / filename
        target.write_bytes(data)

        return target.as_posix()


# Global service instance
_profile_service = None


def get_profile_service() -> Optional[ProfileService]:
    """Get the global profile service instance."""
    return _profile_service


def initialize_profile_service(db: Database, upload_dir: str, max_avatar_bytes: int) -> ProfileService:
    """Initialize the global profile service instance."""
    global _profile_service
    _profile_service = ProfileService(db, upload_dir, max_avatar_bytes)
    return _profile_service
